"""RFC 7807 Problem Details models.

Every admin endpoint failure is rendered with these models, whether it
started as a Failure from an engine, a rejected request body or an HTTP
exception raised by a dependency.

RFC 7807: https://tools.ietf.org/html/rfc7807
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One rejected request field."""

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Why the value was rejected")


class ProblemDetails(BaseModel):
    """RFC 7807 problem document, plus the machine code and trace id.

    ``code`` carries the ErrorCode value for failures returned by the
    engines (``token_store_unavailable``, ``user_enumeration_failed``...) so
    operators can branch on it without parsing ``type``.

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/token_store_unavailable",
        ...     title="Service Unavailable",
        ...     status=503,
        ...     detail="Token family store is unavailable",
        ...     instance="/api/v1/admin/token-families/revocations",
        ...     code="token_store_unavailable",
        ... )
    """

    type: str = Field(
        ...,
        description="Problem type URI",
        examples=["http://localhost:8000/errors/token_store_unavailable"],
    )
    title: str = Field(..., description="Summary of the problem type")
    status: int = Field(..., description="HTTP status code", examples=[503])
    detail: str = Field(
        ...,
        description="Explanation of this occurrence",
        examples=["Token family store is unavailable"],
    )
    instance: str = Field(
        ...,
        description="Request path of this occurrence",
        examples=["/api/v1/admin/token-families/revocations"],
    )
    code: str | None = Field(
        None,
        description="ErrorCode value when the failure came from an engine",
    )
    errors: list[ErrorDetail] | None = Field(
        None, description="Rejected fields (validation failures)"
    )
    trace_id: str | None = Field(None, description="Request trace id")
