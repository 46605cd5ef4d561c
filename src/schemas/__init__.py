"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import ProvisioningRunRequest, ProvisioningRunResponse
"""

from src.schemas.credential_schemas import (
    ConnectionDrainRequest,
    ConnectionDrainResponse,
    DatabaseCredentialResponse,
)
from src.schemas.migration_schemas import (
    BaselineResponse,
    MigrationMetricsResponse,
    ProvisioningRunRequest,
    ProvisioningRunResponse,
    SampleVerificationRequest,
    SampleVerificationResponse,
    SchemaVerificationResponse,
)
from src.schemas.token_family_schemas import (
    TokenFamilyRevocationRequest,
    TokenFamilyRevocationResponse,
)

__all__ = [
    # Database credentials
    "ConnectionDrainRequest",
    "ConnectionDrainResponse",
    "DatabaseCredentialResponse",
    # Migration
    "BaselineResponse",
    "MigrationMetricsResponse",
    "ProvisioningRunRequest",
    "ProvisioningRunResponse",
    "SampleVerificationRequest",
    "SampleVerificationResponse",
    "SchemaVerificationResponse",
    # Token families
    "TokenFamilyRevocationRequest",
    "TokenFamilyRevocationResponse",
]
