"""Infrastructure-specific error codes.

Internal codes for tracking infrastructure failures. They are mapped to
domain ErrorCode when flowing to the domain layer.

Categories:
- Cache errors (CACHE_*)
- Secret source errors (SECRET_*)
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Cache errors
    CACHE_CONNECTION_ERROR = "cache_connection_error"
    CACHE_GET_ERROR = "cache_get_error"
    CACHE_SET_ERROR = "cache_set_error"
    CACHE_DELETE_ERROR = "cache_delete_error"
    CACHE_LIST_ERROR = "cache_list_error"

    # Secret source errors
    SECRET_NOT_FOUND = "secret_not_found"
    SECRET_READ_ERROR = "secret_read_error"
    SECRET_MALFORMED = "secret_malformed"
