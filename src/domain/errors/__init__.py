"""Domain errors package.

Usage:
    from src.domain.errors import ConnectionNotFoundError, InvalidTransitionError
"""

from src.domain.errors.connection_error import (
    ConnectionAlreadyExistsError,
    ConnectionConflictError,
    ConnectionErrorMessage,
    ConnectionForbiddenError,
    ConnectionNotFoundError,
    InvalidTransitionError,
    StaleStateError,
)

__all__ = [
    "ConnectionAlreadyExistsError",
    "ConnectionConflictError",
    "ConnectionErrorMessage",
    "ConnectionForbiddenError",
    "ConnectionNotFoundError",
    "InvalidTransitionError",
    "StaleStateError",
]
