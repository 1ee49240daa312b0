"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_request_connection_handler

The container is organized into modules:
- infrastructure: Core services (database, sessions, logging)
- repositories: Repository factories
- connection_handlers: Connection command and query handler factories
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
)

# Repositories
from src.core.container.repositories import get_connection_repository

# Connection handlers
from src.core.container.connection_handlers import (
    get_accept_connection_handler,
    get_check_connection_access_handler,
    get_get_connection_handler,
    get_list_grantor_connections_handler,
    get_list_requester_connections_handler,
    get_request_connection_handler,
    get_revoke_connection_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    # Repositories
    "get_connection_repository",
    # Connection handlers
    "get_accept_connection_handler",
    "get_check_connection_access_handler",
    "get_get_connection_handler",
    "get_list_grantor_connections_handler",
    "get_list_requester_connections_handler",
    "get_request_connection_handler",
    "get_revoke_connection_handler",
]
