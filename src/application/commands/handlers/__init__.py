"""Command handlers."""

from src.application.commands.handlers.issue_refresh_token_handler import (
    IssueRefreshTokenHandler,
)
from src.application.commands.handlers.revoke_token_family_handler import (
    RevokeTokenFamilyHandler,
)
from src.application.commands.handlers.rotate_refresh_token_handler import (
    RotateRefreshTokenHandler,
)

__all__ = [
    "IssueRefreshTokenHandler",
    "RevokeTokenFamilyHandler",
    "RotateRefreshTokenHandler",
]
