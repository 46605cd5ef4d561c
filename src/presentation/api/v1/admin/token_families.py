"""Token families admin router.

Endpoints:
    POST /api/v1/admin/token-families/revocations  - Revoke a refresh token family
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.handlers.revoke_token_family_handler import (
    RevokeTokenFamilyHandler,
)
from src.application.commands.refresh_token_commands import RevokeTokenFamily
from src.core.container import get_revoke_token_family_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.token_family_schemas import (
    TokenFamilyRevocationRequest,
    TokenFamilyRevocationResponse,
)

router = APIRouter(prefix="/token-families", tags=["Token Families"])


@router.post(
    "/revocations",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenFamilyRevocationResponse,
    responses={
        201: {"description": "Family revoked", "model": TokenFamilyRevocationResponse},
        400: {"description": "Malformed refresh token", "model": ProblemDetails},
        503: {"description": "Token store unavailable", "model": ProblemDetails},
    },
    summary="Revoke a refresh token family",
    description=(
        "Admin-only. Invalidates every refresh token of the family the given "
        "token belongs to. Holders must authenticate again."
    ),
)
async def create_token_family_revocation(
    request: Request,
    data: TokenFamilyRevocationRequest,
    handler: RevokeTokenFamilyHandler = Depends(get_revoke_token_family_handler),
) -> TokenFamilyRevocationResponse | JSONResponse:
    """Revoke a token family.

    POST /api/v1/admin/token-families/revocations → 201 Created
    """
    result = await handler.handle(
        RevokeTokenFamily(refresh_token=data.refresh_token, initiated_by="admin")
    )

    match result:
        case Success(value=revocation):
            return TokenFamilyRevocationResponse(
                family_id=revocation.family_id,
                revoked_count=revocation.revoked_count,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error, request=request, trace_id=get_trace_id()
            )
