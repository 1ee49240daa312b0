"""Infrastructure errors package.

Usage:
    from src.infrastructure.errors import (
        StorageFailureError,
        StorageUnavailableError,
    )
"""

from src.infrastructure.errors.infrastructure_error import (
    DatabaseError,
    InfrastructureError,
    StorageFailureError,
    StorageUnavailableError,
)

__all__ = [
    "InfrastructureError",
    "DatabaseError",
    "StorageFailureError",
    "StorageUnavailableError",
]
