"""Core shared kernel.

Foundational pieces used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes and machine-readable error codes
- Settings and the dependency container

The core module has NO dependencies on other application layers
(the container is the composition root and imports lazily).
"""

from src.core.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]
