"""DatabaseCredential value object.

A dynamic database credential delivered out-of-band by the secret-delivery
agent. Frozen: a rotation replaces the whole object, never single fields, so
readers always see a fully old or fully new credential.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseCredential:
    """Database credential snapshot.

    Attributes:
        username: Database role name (changes on every rotation).
        password: Database role password.
        lease_id: Lease identifier issued by the secret backend.
        lease_duration: Lease duration in seconds.
        renewable: Whether the lease can be renewed.
        loaded_at: When this process read the credential (UTC).

    Example:
        >>> credential = DatabaseCredential(
        ...     username="v-identity-abc",
        ...     password="s3cret",
        ...     lease_id="database/creds/identity/xyz",
        ...     lease_duration=3600,
        ...     renewable=True,
        ... )
    """

    username: str
    password: str = field(repr=False)
    lease_id: str | None = None
    lease_duration: int = 0
    renewable: bool = False
    loaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_rotation_of(self, previous: "DatabaseCredential | None") -> bool:
        """Check whether this credential supersedes a different database role.

        Rotation is detected by username only: a renewed lease or a rewritten
        file with the same role is not a rotation.

        Args:
            previous: Credential held before this one (None on first load).

        Returns:
            True if a previous credential exists with a different username.
        """
        return previous is not None and previous.username != self.username
