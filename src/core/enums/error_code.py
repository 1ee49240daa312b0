"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and are the
machine-readable "kind" of every failure returned by the connection
lifecycle. Presentation layers map them to status codes and messages.

Categories:
- Validation errors (VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authorization errors (*_FORBIDDEN)
- State machine errors (*_INVALID_TRANSITION, *_STALE_STATE)
- Storage errors (STORAGE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    CONNECTION_NOT_FOUND = "connection_not_found"

    # Conflict errors
    CONNECTION_ALREADY_EXISTS = "connection_already_exists"

    # Authorization errors
    CONNECTION_FORBIDDEN = "connection_forbidden"

    # State machine errors
    CONNECTION_INVALID_TRANSITION = "connection_invalid_transition"
    CONNECTION_STALE_STATE = "connection_stale_state"

    # Storage errors
    STORAGE_UNAVAILABLE = "storage_unavailable"
    STORAGE_FAILED = "storage_failed"
