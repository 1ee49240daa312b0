"""structlog adapter writing connection lifecycle events to stdout.

Renderers:
- development: colored key=value console output
- testing/CI/production: one JSON object per line

Records pass through a redaction step before rendering, so free-text fields
that may carry personal information are masked even if a caller forgets.

Implementation does NOT inherit from LoggerProtocol (PEP 544 structural
subtyping).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

REDACTED = "[redacted]"

# Free-text fields written by end users
REDACTED_FIELDS = frozenset({"revocation_reason", "reason", "notes"})


def redact_free_text(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask user-written free text before it is rendered."""
    for key in REDACTED_FIELDS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


class ConsoleAdapter:
    """Stdout logger backed by structlog.

    Args:
        use_json (bool): JSON lines when True, console renderer when False.
        level (str): Minimum level name (DEBUG, INFO, ...).
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        renderer: structlog.typing.Processor = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                redact_free_text,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(level.upper())
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at error level, expanding error into error_type/error_message."""
        self._logger.error(message, **_with_error(error, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(error, context))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a new adapter carrying context; self is unchanged."""
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound

    with_context = bind


def _with_error(error: Exception | None, context: dict[str, Any]) -> dict[str, Any]:
    if error is None:
        return context
    return {
        **context,
        "error_type": type(error).__name__,
        "error_message": str(error),
    }
