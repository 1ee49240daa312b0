"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for ALL errors in the service (core, domain,
infrastructure). Errors are values carried by Failure, never raised.

Architecture:
- Does NOT inherit from Exception (returned in Result, not raised)
- Uses dataclass inheritance (NOT Protocol/ABC)
- Subclasses add typed payload fields (current state, required role, ...)

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional string context for diagnostics.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
