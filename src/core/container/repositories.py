"""Repository dependency factories.

Request-scoped repository instances for domain entity persistence.
Each request gets a fresh repository bound to the request's session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import ConnectionRepository


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_connection_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "ConnectionRepository":
    """Get connection repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Returns:
        ConnectionRepository instance.

    Usage:
        # Presentation Layer (FastAPI Depends)
        @router.get("/connections/{connection_id}")
        async def get_connection(
            repo: ConnectionRepository = Depends(get_connection_repository)
        ):
            ...
    """
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return ConnectionRepository(session=session)
