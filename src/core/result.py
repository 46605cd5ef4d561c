"""Result types for railway-oriented programming.

Operations that can fail in an expected way (revoked token family, missing
secret file, unreachable Redis) return a Result instead of raising. Callers
pattern-match on the outcome, which keeps fail-closed decisions explicit.

Usage:
    result = await tracker.is_revoked(family_id)
    match result:
        case Success(value=True):
            ...  # reject
        case Success(value=False):
            ...  # continue
        case Failure(error=error):
            ...  # storage unavailable, reject
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result = Success[T] | Failure[E]
