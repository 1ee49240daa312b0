"""Logging port used by the connection lifecycle handlers.

Handlers record one structured event per outcome: the event name is a
snake_case string ("connection_approved", "connection_revocation_failed")
and everything else goes into keyword context.

What handlers pass as context:
    connection_id, requester_id, grantor_id: opaque UUIDs as strings
    state / previous_state: ConnectionState values
    error_code: ErrorCode value of a failure

Profile content and revocation reason text never reach the logger; only
whether a reason was given (has_reason).

Usage:
    from src.core.container import get_logger

    logger = get_logger().bind(handler="AcceptConnectionHandler")
    logger.info("connection_approved", connection_id=str(connection.id))
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger: event name plus keyword context."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None:
        """Record a completed transition or a served query."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Record a rejected operation (forbidden, invalid transition, lost race)."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Record a failed operation, typically the store being unavailable.

        Args:
            message: Event name.
            error: Exception behind the failure, if one was caught.
                Adapters expand it into error_type and error_message.
            **context: Structured key-value context.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds context to every record.

        The receiver keeps its own context.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol: ...
