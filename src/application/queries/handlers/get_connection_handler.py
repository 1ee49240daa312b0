"""GetConnection query handler.

Handles requests to retrieve a single connection.
Returns DTO (not domain entity) to prevent leaking domain to presentation.

Architecture:
- Application layer handler (orchestrates data retrieval)
- Returns Result[DTO, DomainError] (explicit error handling)
- Side-effect free
"""

from src.application.dtos.connection_dtos import ConnectionResult
from src.application.queries.connection_queries import GetConnection
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors.connection_error import (
    ConnectionErrorMessage,
    ConnectionForbiddenError,
    ConnectionNotFoundError,
)
from src.domain.protocols.connection_repository import ConnectionRepository


class GetConnectionHandler:
    """Handler for GetConnection query.

    Retrieves a single connection by ID. Only its requester and its grantor
    may read it.

    Dependencies (injected via constructor):
        - ConnectionRepository: For data retrieval

    Returns:
        Result[ConnectionResult, DomainError]: Success(DTO) or Failure(error)
    """

    def __init__(self, connection_repo: ConnectionRepository) -> None:
        """Initialize handler with dependencies.

        Args:
            connection_repo: Connection repository.
        """
        self._connection_repo = connection_repo

    async def handle(
        self, query: GetConnection
    ) -> Result[ConnectionResult, DomainError]:
        """Handle GetConnection query.

        Args:
            query: GetConnection query with connection and principal IDs.

        Returns:
            Success(ConnectionResult): Caller participates in the connection.
            Failure(ConnectionNotFoundError): No such connection.
            Failure(ConnectionForbiddenError): Caller is not a participant.
            Failure(StorageUnavailableError): Store failure.
        """
        found = await self._connection_repo.find_by_id(query.connection_id)
        if isinstance(found, Failure):
            return found

        connection = found.value
        if connection is None:
            return Failure(error=ConnectionNotFoundError.for_id(query.connection_id))

        if not connection.involves(query.principal_id):
            return Failure(
                error=ConnectionForbiddenError(
                    code=ErrorCode.CONNECTION_FORBIDDEN,
                    message=ConnectionErrorMessage.NOT_PARTICIPANT,
                )
            )

        return Success(value=ConnectionResult.from_entity(connection))
