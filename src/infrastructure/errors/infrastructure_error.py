"""Infrastructure layer error types.

Infrastructure errors represent failures of the database behind the
connection store.

Architecture:
- The store catches SQLAlchemy exceptions and maps them to these errors
- Infrastructure errors inherit from DomainError (not Exception)
- StorageUnavailableError is transient, StorageFailureError is not
- InfrastructureErrorCode records the underlying failure for operators
- Used with Result types for error propagation
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        infrastructure_code: Original infrastructure error code.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Database-specific errors wrapping SQLAlchemy exceptions."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageUnavailableError(DatabaseError):
    """Transient storage failure, safe to retry at the caller's discretion.

    A timed-out write has an unknown outcome: the caller must re-read the
    record before acting again.

    Attributes:
        operation: Store operation that failed.
    """

    code: ErrorCode = ErrorCode.STORAGE_UNAVAILABLE
    operation: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageFailureError(DatabaseError):
    """Permanent storage failure: the database rejected the statement.

    Retrying the same operation fails the same way (bad data, constraint
    violation, schema mismatch).

    Attributes:
        operation: Store operation that failed.
    """

    code: ErrorCode = ErrorCode.STORAGE_FAILED
    operation: str = ""
