"""Domain protocols (ports) package.

Protocol definitions the domain and application layers depend on.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import ConnectionRepository, LoggerProtocol
"""

from src.domain.protocols.connection_repository import ConnectionRepository
from src.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "ConnectionRepository",
    "LoggerProtocol",
]
