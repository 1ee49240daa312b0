"""Infrastructure-specific error codes.

Internal codes for tracking storage failures. They travel alongside the
domain ErrorCode (STORAGE_UNAVAILABLE or STORAGE_FAILED) so operators can
tell a timeout from a refused connection or a rejected value without
parsing messages.
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    DATABASE_CONNECTION_FAILED = "database_connection_failed"
    DATABASE_TIMEOUT = "database_timeout"
    DATABASE_CONSTRAINT_VIOLATION = "database_constraint_violation"
    DATABASE_ERROR = "database_error"
