"""Error response builder for RFC 7807 Problem Details.

Converts domain errors returned inside a Failure into HTTP responses.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.presentation.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_FAMILY_REVOKED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.CREDENTIALS_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.CREDENTIALS_INVALID: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.USER_ENUMERATION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.CACHE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLE_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Validation Failed",
    status.HTTP_401_UNAUTHORIZED: "Authentication Failed",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> response = ErrorResponseBuilder.from_domain_error(
        ...     error=result.error,
        ...     request=request,
        ...     trace_id=get_trace_id(),
        ... )
    """

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert a DomainError to an RFC 7807 JSON response.

        Args:
            error: Error carried by a Failure.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with ProblemDetails content. Unavailable
            dependencies answer 503 with a Retry-After hint.
        """
        status_code = ErrorResponseBuilder.get_status_code(error.code)

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=_TITLE_BY_STATUS.get(status_code, "Internal Server Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=error.code.value,
            errors=None,
            trace_id=trace_id,
        )

        if isinstance(error, ValidationError) and error.field:
            problem.errors = [
                ErrorDetail(
                    field=error.field,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        headers = (
            {"Retry-After": "5"}
            if status_code == status.HTTP_503_SERVICE_UNAVAILABLE
            else None
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def get_status_code(code: ErrorCode) -> int:
        """Map an error code to an HTTP status code (500 when unmapped).

        Example:
            >>> ErrorResponseBuilder.get_status_code(ErrorCode.INVALID_INPUT)
            400
        """
        return _STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)
