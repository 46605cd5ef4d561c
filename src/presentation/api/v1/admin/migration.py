"""Migration admin router.

Endpoints:
    GET  /api/v1/admin/migration/schema                - Required tables check
    GET  /api/v1/admin/migration/baseline              - Pre-cutover baseline
    POST /api/v1/admin/migration/provisioning          - Bulk provisioning run
    POST /api/v1/admin/migration/sample-verifications  - Sampled verification
    GET  /api/v1/admin/migration/metrics               - Migration window metrics
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.services.migration_orchestrator import MigrationOrchestrator
from src.core.container import get_migration_orchestrator
from src.core.result import Failure, Success
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.migration_schemas import (
    BaselineResponse,
    MigrationMetricsResponse,
    ProvisioningRunRequest,
    ProvisioningRunResponse,
    SampleVerificationRequest,
    SampleVerificationResponse,
    SchemaVerificationResponse,
)

router = APIRouter(prefix="/migration", tags=["Migration"])


@router.get(
    "/schema",
    response_model=SchemaVerificationResponse,
    summary="Verify required identity tables",
)
async def get_schema_verification(
    orchestrator: MigrationOrchestrator = Depends(get_migration_orchestrator),
) -> SchemaVerificationResponse:
    """Check that the identity tables exist.

    GET /api/v1/admin/migration/schema → 200 OK

    An inspection error is reported in ``missing`` rather than as an error
    response.
    """
    return SchemaVerificationResponse.from_result(await orchestrator.verify_schema())


@router.get(
    "/baseline",
    response_model=BaselineResponse,
    summary="Capture authentication baseline",
)
async def get_baseline(
    orchestrator: MigrationOrchestrator = Depends(get_migration_orchestrator),
) -> BaselineResponse:
    return BaselineResponse.from_result(await orchestrator.capture_baseline())


@router.post(
    "/provisioning",
    status_code=status.HTTP_201_CREATED,
    response_model=ProvisioningRunResponse,
    responses={
        201: {"description": "Run finished", "model": ProvisioningRunResponse},
        503: {"description": "User enumeration failed", "model": ProblemDetails},
    },
    summary="Run bulk provisioning",
    description=(
        "Pages through every user and provisions each in the external "
        "identity provider. Runs are forced to dry run while provisioning is "
        "not configured. Per-user failures are counted in the response."
    ),
)
async def create_provisioning_run(
    request: Request,
    data: ProvisioningRunRequest,
    orchestrator: MigrationOrchestrator = Depends(get_migration_orchestrator),
) -> ProvisioningRunResponse | JSONResponse:
    """Run bulk provisioning.

    POST /api/v1/admin/migration/provisioning → 201 Created

    Args:
        request: FastAPI request object.
        data: Batch size and dry run flag.
        orchestrator: Migration orchestrator (injected).

    Returns:
        ProvisioningRunResponse, or RFC 7807 503 when enumeration fails.
    """
    result = await orchestrator.bulk_provision(
        batch_size=data.batch_size, dry_run=data.dry_run
    )

    match result:
        case Success(value=summary):
            return ProvisioningRunResponse.from_result(summary)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id()
            )


@router.post(
    "/sample-verifications",
    status_code=status.HTTP_201_CREATED,
    response_model=SampleVerificationResponse,
    responses={
        201: {"description": "Sample checked", "model": SampleVerificationResponse},
        503: {"description": "User enumeration failed", "model": ProblemDetails},
    },
    summary="Verify a random sample",
)
async def create_sample_verification(
    request: Request,
    data: SampleVerificationRequest,
    orchestrator: MigrationOrchestrator = Depends(get_migration_orchestrator),
) -> SampleVerificationResponse | JSONResponse:
    """Check that sampled users exist in the external provider.

    POST /api/v1/admin/migration/sample-verifications → 201 Created
    """
    result = await orchestrator.verify_sample(sample_size=data.sample_size)

    match result:
        case Success(value=verification):
            return SampleVerificationResponse.from_result(verification)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id()
            )


@router.get(
    "/metrics",
    response_model=MigrationMetricsResponse,
    summary="Migration window metrics",
)
async def get_migration_metrics(
    orchestrator: MigrationOrchestrator = Depends(get_migration_orchestrator),
) -> MigrationMetricsResponse:
    return MigrationMetricsResponse.from_result(await orchestrator.current_metrics())
