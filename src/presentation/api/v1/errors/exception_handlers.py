"""Exception handlers rendering RFC 7807 bodies.

Failures returned by the engines go through ErrorResponseBuilder in the
routers. These handlers cover what is raised instead: HTTPException from
the admin key guard, FastAPI body validation, and anything unexpected.
"""

from collections.abc import Mapping

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_logger
from src.presentation.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Authentication Required",
    403: "Access Denied",
    404: "Resource Not Found",
    405: "Method Not Allowed",
    409: "Resource Conflict",
    422: "Validation Failed",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    *,
    errors: list[ErrorDetail] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    title = _TITLES.get(status_code, "Error")
    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{title.lower().replace(' ', '-')}",
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        errors=errors,
        trace_id=getattr(request.state, "trace_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=dict(headers) if headers else None,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """HTTPException keeps its status code and headers."""
    assert isinstance(exc, HTTPException)
    return _problem_response(
        request, exc.status_code, str(exc.detail), headers=exc.headers
    )


def _field_name(location: tuple[int | str, ...]) -> str:
    # ("body", "batch_size") -> "batch_size"
    return ".".join(str(part) for part in location if part != "body") or "unknown"


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Request body rejected by pydantic: 422 listing each bad field."""
    assert isinstance(exc, RequestValidationError)
    rejected = [
        ErrorDetail(
            field=_field_name(tuple(item.get("loc", ()))),
            code=item.get("type", "validation_error"),
            message=item.get("msg", "Validation failed"),
        )
        for item in exc.errors()
    ]
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed. Check 'errors' for details.",
        errors=rejected or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the exception and answer 500 with only the trace id."""
    get_logger().error(
        "unhandled_exception",
        error=exc,
        trace_id=getattr(request.state, "trace_id", None),
        request_path=request.url.path,
        request_method=request.method,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
