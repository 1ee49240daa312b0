"""CheckConnectionAccess query handler.

Answers whether a requester may currently read a grantor's records. Callers
gate every record read on this check; only an APPROVED connection grants
access.
"""

from src.application.dtos.connection_dtos import ConnectionAccessResult
from src.application.queries.connection_queries import CheckConnectionAccess
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols.connection_repository import ConnectionRepository


class CheckConnectionAccessHandler:
    """Handler for CheckConnectionAccess query.

    Dependencies (injected via constructor):
        - ConnectionRepository: For data retrieval

    Returns:
        Result[ConnectionAccessResult, DomainError]
    """

    def __init__(self, connection_repo: ConnectionRepository) -> None:
        """Initialize handler with dependencies.

        Args:
            connection_repo: Connection repository.
        """
        self._connection_repo = connection_repo

    async def handle(
        self, query: CheckConnectionAccess
    ) -> Result[ConnectionAccessResult, DomainError]:
        """Handle CheckConnectionAccess query.

        Args:
            query: Requester and grantor to check.

        Returns:
            Success(ConnectionAccessResult): is_connected is True only for an
                APPROVED connection; access_level is set only then.
            Failure(StorageUnavailableError): Store failure.
        """
        found = await self._connection_repo.find_by_pair(
            query.requester_id, query.grantor_id
        )
        if isinstance(found, Failure):
            return found

        connection = found.value
        if connection is None:
            return Success(value=ConnectionAccessResult(is_connected=False))

        if not connection.is_approved():
            return Success(
                value=ConnectionAccessResult(
                    is_connected=False, connection_id=connection.id
                )
            )

        return Success(
            value=ConnectionAccessResult(
                is_connected=True,
                access_level=connection.access_level,
                connection_id=connection.id,
            )
        )
