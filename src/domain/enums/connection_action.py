"""Actions that drive the connection state machine."""

from enum import Enum


class ConnectionAction(str, Enum):
    """Lifecycle operations a caller can perform on a connection.

    REQUEST creates a record or reactivates a revoked one, APPROVE moves a
    pending request to approved, REVOKE rejects a pending request or
    withdraws an approved grant.
    """

    REQUEST = "request"
    APPROVE = "approve"
    REVOKE = "revoke"
