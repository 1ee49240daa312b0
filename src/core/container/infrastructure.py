"""Infrastructure dependency factories.

Process-wide singletons:
- get_database(): engine and session factory built from Settings
- get_logger(): structlog ConsoleAdapter bound with app/environment

Per-request:
- get_db_session(): one AsyncSession per request, committed or rolled back
  when the request ends
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol


@lru_cache()
def get_database() -> Database:
    """Return the process-wide Database (one pool per process)."""
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        command_timeout=settings.db_command_timeout,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the process-wide logger.

    Development gets the colored console renderer; every other environment
    gets JSON lines.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    ).bind(app=settings.app_name, environment=settings.environment.value)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session.

    Usage:
        @router.post("/connections")
        async def request_connection(
            handler: RequestConnectionHandler = Depends(
                get_request_connection_handler
            ),
        ):
            ...
    """
    async with get_database().get_session() as session:
        yield session
