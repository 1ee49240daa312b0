"""List connection query handlers.

Handles listing the connections of one principal, seen from either side:
- ListRequesterConnectionsHandler: everything a requester has asked for
- ListGrantorConnectionsHandler: requests addressed to a grantor (pending
  inbox, currently connected requesters, or all)

Architecture:
- Application layer handlers (orchestrate data retrieval)
- Return Result[ConnectionListResult, DomainError]
- Side-effect free
"""

from src.application.dtos.connection_dtos import ConnectionListResult
from src.application.queries.connection_queries import (
    ListGrantorConnections,
    ListRequesterConnections,
)
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols.connection_repository import ConnectionRepository


class ListRequesterConnectionsHandler:
    """Handler for ListRequesterConnections query.

    Dependencies (injected via constructor):
        - ConnectionRepository: For data retrieval
    """

    def __init__(self, connection_repo: ConnectionRepository) -> None:
        self._connection_repo = connection_repo

    async def handle(
        self, query: ListRequesterConnections
    ) -> Result[ConnectionListResult, DomainError]:
        """Handle ListRequesterConnections query.

        Args:
            query: Requester and optional state filter.

        Returns:
            Success(ConnectionListResult): Possibly empty list with counts.
            Failure(StorageUnavailableError): Store failure.
        """
        found = await self._connection_repo.find_by_requester(
            query.requester_id, state=query.state
        )
        if isinstance(found, Failure):
            return found

        return Success(value=ConnectionListResult.from_entities(found.value))


class ListGrantorConnectionsHandler:
    """Handler for ListGrantorConnections query.

    Dependencies (injected via constructor):
        - ConnectionRepository: For data retrieval
    """

    def __init__(self, connection_repo: ConnectionRepository) -> None:
        self._connection_repo = connection_repo

    async def handle(
        self, query: ListGrantorConnections
    ) -> Result[ConnectionListResult, DomainError]:
        """Handle ListGrantorConnections query.

        Args:
            query: Grantor and optional state filter.

        Returns:
            Success(ConnectionListResult): Possibly empty list with counts.
            Failure(StorageUnavailableError): Store failure.
        """
        found = await self._connection_repo.find_by_grantor(
            query.grantor_id, state=query.state
        )
        if isinstance(found, Failure):
            return found

        return Success(value=ConnectionListResult.from_entities(found.value))
