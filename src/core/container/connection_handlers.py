"""Connection handler dependency factories.

Request-scoped handler instances for the connection lifecycle:
- Commands (request, accept, revoke)
- Queries (get, list, access check)

Every handler receives a repository bound to the request's session; no
handler holds a process-wide session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.infrastructure import get_db_session, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.accept_connection_handler import (
        AcceptConnectionHandler,
    )
    from src.application.commands.handlers.request_connection_handler import (
        RequestConnectionHandler,
    )
    from src.application.commands.handlers.revoke_connection_handler import (
        RevokeConnectionHandler,
    )
    from src.application.queries.handlers.check_connection_access_handler import (
        CheckConnectionAccessHandler,
    )
    from src.application.queries.handlers.get_connection_handler import (
        GetConnectionHandler,
    )
    from src.application.queries.handlers.list_connections_handler import (
        ListGrantorConnectionsHandler,
        ListRequesterConnectionsHandler,
    )


# ============================================================================
# Command Handler Factories
# ============================================================================


async def get_request_connection_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RequestConnectionHandler":
    """Get RequestConnection command handler (request-scoped).

    Creates handler with:
    - ConnectionRepository (request-scoped)
    - Logger (app-scoped singleton)

    Returns:
        RequestConnectionHandler instance.
    """
    from src.application.commands.handlers.request_connection_handler import (
        RequestConnectionHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return RequestConnectionHandler(
        connection_repo=ConnectionRepository(session=session),
        logger=get_logger(),
    )


async def get_accept_connection_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AcceptConnectionHandler":
    """Get AcceptConnection command handler (request-scoped).

    Creates handler with:
    - ConnectionRepository (request-scoped)
    - Logger (app-scoped singleton)
    - Default access level from settings

    Returns:
        AcceptConnectionHandler instance.
    """
    from src.application.commands.handlers.accept_connection_handler import (
        AcceptConnectionHandler,
    )
    from src.domain.enums.access_level import AccessLevel
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return AcceptConnectionHandler(
        connection_repo=ConnectionRepository(session=session),
        logger=get_logger(),
        default_access_level=AccessLevel(settings.default_access_level),
    )


async def get_revoke_connection_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeConnectionHandler":
    """Get RevokeConnection command handler (request-scoped)."""
    from src.application.commands.handlers.revoke_connection_handler import (
        RevokeConnectionHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return RevokeConnectionHandler(
        connection_repo=ConnectionRepository(session=session),
        logger=get_logger(),
    )


# ============================================================================
# Query Handler Factories
# ============================================================================


async def get_get_connection_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetConnectionHandler":
    """Get GetConnection query handler (request-scoped)."""
    from src.application.queries.handlers.get_connection_handler import (
        GetConnectionHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return GetConnectionHandler(connection_repo=ConnectionRepository(session=session))


async def get_list_requester_connections_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListRequesterConnectionsHandler":
    """Get ListRequesterConnections query handler (request-scoped)."""
    from src.application.queries.handlers.list_connections_handler import (
        ListRequesterConnectionsHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return ListRequesterConnectionsHandler(
        connection_repo=ConnectionRepository(session=session)
    )


async def get_list_grantor_connections_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListGrantorConnectionsHandler":
    """Get ListGrantorConnections query handler (request-scoped)."""
    from src.application.queries.handlers.list_connections_handler import (
        ListGrantorConnectionsHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return ListGrantorConnectionsHandler(
        connection_repo=ConnectionRepository(session=session)
    )


async def get_check_connection_access_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CheckConnectionAccessHandler":
    """Get CheckConnectionAccess query handler (request-scoped)."""
    from src.application.queries.handlers.check_connection_access_handler import (
        CheckConnectionAccessHandler,
    )
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return CheckConnectionAccessHandler(
        connection_repo=ConnectionRepository(session=session)
    )
