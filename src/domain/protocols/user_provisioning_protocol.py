"""Per-user provisioning collaborator protocol.

Creates users in the external identity provider. Implementations may raise;
the orchestrator isolates and counts any failure.
"""

from typing import Protocol

from src.domain.entities.migration import ProvisioningResult


class UserProvisioningProtocol(Protocol):
    """External identity provider provisioning."""

    async def provision_user(self, user_id: str) -> ProvisioningResult:
        """Provision one user and report success plus errors."""
        ...

    async def is_provisioned(self, user_id: str) -> bool:
        """Check whether the user exists in the external identity provider."""
        ...
