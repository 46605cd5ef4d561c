"""Migration request/response schemas.

Pydantic models for the admin migration endpoints.

RESTful Endpoints (admin-only):
    GET    /api/v1/admin/migration/schema                - Required tables check
    GET    /api/v1/admin/migration/baseline              - Pre-cutover baseline
    POST   /api/v1/admin/migration/provisioning          - Bulk provisioning run
    POST   /api/v1/admin/migration/sample-verifications  - Sampled verification
    GET    /api/v1/admin/migration/metrics               - Migration window metrics
"""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.migration import (
    BaselineMetrics,
    BulkProvisionSummary,
    MigrationMetrics,
    SampleVerification,
    SchemaVerification,
)


# =============================================================================
# Schema Verification
# =============================================================================


class SchemaVerificationResponse(BaseModel):
    """Response schema for the required-structure check (200 OK)."""

    ok: bool = Field(..., description="True when every required table exists")
    missing: list[str] = Field(
        default_factory=list,
        description="Missing tables (or the inspection error)",
    )

    @classmethod
    def from_result(cls, result: SchemaVerification) -> "SchemaVerificationResponse":
        return cls(ok=result.ok, missing=list(result.missing))


# =============================================================================
# Baseline
# =============================================================================


class BaselineResponse(BaseModel):
    """Response schema for the authentication baseline (200 OK)."""

    auth_p95_ms: float = Field(
        ...,
        description="95th percentile authentication latency (ms)",
        examples=[182.5],
    )
    success_rate: float = Field(
        ...,
        description="Authentication success rate (percent)",
        examples=[99.2],
    )

    @classmethod
    def from_result(cls, result: BaselineMetrics) -> "BaselineResponse":
        return cls(auth_p95_ms=result.auth_p95_ms, success_rate=result.success_rate)


# =============================================================================
# Bulk Provisioning
# =============================================================================


class ProvisioningRunRequest(BaseModel):
    """Request schema for a bulk provisioning run.

    POST /api/v1/admin/migration/provisioning
    Returns: 201 Created

    A non-positive batch size uses the configured default.
    """

    batch_size: int = Field(
        default=100,
        le=10_000,
        description="Users per page (<= 0 uses the default)",
    )
    dry_run: bool = Field(
        default=True,
        description="Enumerate users without provisioning them",
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"batch_size": 100, "dry_run": True}}
    )


class ProvisioningRunResponse(BaseModel):
    """Response schema for a bulk provisioning run (201 Created).

    Per-user failures are reported here, not as an error response.
    """

    provisioned: int = Field(..., description="Users provisioned")
    failed: int = Field(..., description="Users whose provisioning failed")
    scanned: int = Field(..., description="Users enumerated")
    dry_run: bool = Field(
        ...,
        description="Effective mode (forced when provisioning is unavailable)",
    )
    cancelled: bool = Field(default=False, description="Run stopped early")
    errors: list[str] = Field(
        default_factory=list,
        description="One '{user_id}: {message}' entry per failure",
    )

    @classmethod
    def from_result(cls, result: BulkProvisionSummary) -> "ProvisioningRunResponse":
        return cls(
            provisioned=result.provisioned,
            failed=result.failed,
            scanned=result.scanned,
            dry_run=result.dry_run,
            cancelled=result.cancelled,
            errors=list(result.errors),
        )


# =============================================================================
# Sample Verification
# =============================================================================


class SampleVerificationRequest(BaseModel):
    """Request schema for sampled verification.

    POST /api/v1/admin/migration/sample-verifications
    Returns: 201 Created

    Requests below the floor of 10 are raised to it.
    """

    sample_size: int = Field(
        default=10,
        ge=0,
        le=100_000,
        description="Users to sample",
    )


class SampleVerificationResponse(BaseModel):
    """Response schema for sampled verification (201 Created)."""

    sampled: int = Field(..., description="Users checked")
    matched: int = Field(..., description="Users confirmed in the external provider")
    match_rate: float = Field(..., description="Matched share in percent")
    mismatches: list[str] = Field(
        default_factory=list,
        description="User ids not confirmed",
    )

    @classmethod
    def from_result(cls, result: SampleVerification) -> "SampleVerificationResponse":
        return cls(
            sampled=result.sampled,
            matched=result.matched,
            match_rate=result.match_rate,
            mismatches=list(result.mismatches),
        )


# =============================================================================
# Metrics
# =============================================================================


class MigrationMetricsResponse(BaseModel):
    """Response schema for migration window metrics (200 OK)."""

    success_rate: float = Field(..., description="Authentication success rate (percent)")
    legacy_count: int = Field(..., description="Legacy token authentications")
    external_count: int = Field(..., description="External provider authentications")
    unknown_count: int = Field(..., description="Unclassifiable token authentications")

    @classmethod
    def from_result(cls, result: MigrationMetrics) -> "MigrationMetricsResponse":
        return cls(
            success_rate=result.success_rate,
            legacy_count=result.legacy_count,
            external_count=result.external_count,
            unknown_count=result.unknown_count,
        )
