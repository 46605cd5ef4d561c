"""Refresh token family records.

A family is the lineage of refresh tokens produced by successive rotations of
one initial issuance. The family itself lives in the shared store; these are
the values returned to callers.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenFamilyRegistration:
    """Result of registering a refresh token in a family.

    Attributes:
        family_id: Opaque family identifier.
        sequence: Zero-based position of the token in the family.
    """

    family_id: str
    sequence: int


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenFamilyRevocation:
    """Result of revoking a whole family.

    Attributes:
        family_id: Revoked family.
        revoked_tokens: Every token ever issued in the family, oldest first.
    """

    family_id: str
    revoked_tokens: list[str]

    @property
    def revoked_count(self) -> int:
        """Number of tokens invalidated by the revocation."""
        return len(self.revoked_tokens)
