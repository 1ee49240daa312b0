"""Result types for railway-oriented programming.

Every lifecycle operation and every store call returns a Result instead of
raising. Failures carry a DomainError value describing what went wrong, so
callers branch on data rather than catching exceptions.

Usage:
    result = await handler.handle(RequestConnection(...))
    match result:
        case Success(value=connection):
            print(connection.state)
        case Failure(error=error):
            print(error.code, error.message)
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


type Result[T, E] = Success[T] | Failure[E]
