"""Database credentials admin router.

Endpoints:
    GET  /api/v1/admin/database-credentials         - Current credential (no password)
    POST /api/v1/admin/database-credentials/drains  - Manual connection drain
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.core.container import get_connection_pool_drainer, get_credential_store
from src.core.result import Failure, Success
from src.domain.protocols.credential_store_protocol import CredentialStoreProtocol
from src.infrastructure.persistence.connection_pool_drainer import (
    ConnectionPoolDrainer,
)
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.credential_schemas import (
    ConnectionDrainRequest,
    ConnectionDrainResponse,
    DatabaseCredentialResponse,
)

router = APIRouter(prefix="/database-credentials", tags=["Database Credentials"])


@router.get(
    "",
    response_model=DatabaseCredentialResponse,
    responses={
        200: {"description": "Current credential", "model": DatabaseCredentialResponse},
        503: {"description": "Credentials not yet delivered", "model": ProblemDetails},
    },
    summary="Get current database credential",
)
async def get_database_credential(
    request: Request,
    store: CredentialStoreProtocol = Depends(get_credential_store),
) -> DatabaseCredentialResponse | JSONResponse:
    """Current database credential metadata.

    GET /api/v1/admin/database-credentials → 200 OK

    The password is never returned.
    """
    result = await store.get_current()

    match result:
        case Success(value=credential):
            return DatabaseCredentialResponse(
                username=credential.username,
                lease_id=credential.lease_id,
                lease_duration=credential.lease_duration,
                renewable=credential.renewable,
                loaded_at=credential.loaded_at,
                state=store.state.value,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id()
            )


@router.post(
    "/drains",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ConnectionDrainResponse,
    summary="Drain connections opened with a role",
    description=(
        "Clears the connection pool now and completes the drain after the "
        "manual grace window."
    ),
)
async def create_connection_drain(
    data: ConnectionDrainRequest,
    drainer: ConnectionPoolDrainer = Depends(get_connection_pool_drainer),
) -> ConnectionDrainResponse:
    """Start a manual drain.

    POST /api/v1/admin/database-credentials/drains → 202 Accepted
    """
    grace_seconds = await drainer.drain_old_connections(data.username)
    return ConnectionDrainResponse(username=data.username, grace_seconds=grace_seconds)
