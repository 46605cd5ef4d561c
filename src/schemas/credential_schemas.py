"""Database credential schemas.

The password never appears in any schema.

RESTful Endpoints (admin-only):
    GET    /api/v1/admin/database-credentials         - Current credential
    POST   /api/v1/admin/database-credentials/drains  - Manual connection drain
"""

from datetime import datetime

from pydantic import BaseModel, Field


class DatabaseCredentialResponse(BaseModel):
    """Response schema for the current credential (200 OK)."""

    username: str = Field(..., description="Database role in use")
    lease_id: str | None = Field(None, description="Secret backend lease id")
    lease_duration: int = Field(..., description="Lease duration in seconds")
    renewable: bool = Field(..., description="Whether the lease is renewable")
    loaded_at: datetime = Field(..., description="When this process read it")
    state: str = Field(
        ...,
        description="Credential store state",
        examples=["loaded", "drain_grace"],
    )


class ConnectionDrainRequest(BaseModel):
    """Request schema for a manual drain.

    POST /api/v1/admin/database-credentials/drains
    Returns: 202 Accepted
    """

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Role whose connections should be drained",
    )


class ConnectionDrainResponse(BaseModel):
    """Response schema for a manual drain (202 Accepted)."""

    username: str = Field(..., description="Role being drained")
    grace_seconds: float = Field(..., description="Grace window before completion")
