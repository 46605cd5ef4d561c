"""Refresh token family schemas.

RESTful Endpoints (admin-only):
    POST   /api/v1/admin/token-families/revocations  - Revoke a family
"""

from pydantic import BaseModel, Field


class TokenFamilyRevocationRequest(BaseModel):
    """Request schema for revoking the family a refresh token belongs to.

    POST /api/v1/admin/token-families/revocations
    Returns: 201 Created
    """

    refresh_token: str = Field(
        ...,
        min_length=1,
        description="Any refresh token of the family",
    )


class TokenFamilyRevocationResponse(BaseModel):
    """Response schema for a family revocation (201 Created)."""

    family_id: str = Field(..., description="Revoked family")
    revoked_count: int = Field(..., description="Tokens invalidated")
