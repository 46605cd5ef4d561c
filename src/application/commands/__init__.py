"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (IssueRefreshToken, RevokeTokenFamily).

Each command has a corresponding handler in commands/handlers/.
"""

from src.application.commands.refresh_token_commands import (
    IssuedRefreshToken,
    IssueRefreshToken,
    RevokeTokenFamily,
    RotateRefreshToken,
)

__all__ = [
    "IssueRefreshToken",
    "IssuedRefreshToken",
    "RevokeTokenFamily",
    "RotateRefreshToken",
]
