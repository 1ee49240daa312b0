"""ConnectionRepository protocol for connection persistence.

Port (interface) for hexagonal architecture. The infrastructure layer
implements this protocol; the lifecycle handlers depend only on it.

Store Contract:
    - One record per (requester_id, grantor_id), enforced by a storage-level
      uniqueness constraint, so insert() is race-safe without a prior read.
    - conditional_update() is the sole mutation path. It applies a transition
      only if the stored state still equals expected_state.
    - Every write is persisted before the call returns. No caching.
    - Driver exceptions never escape: all failures are returned as Failure.

Failure Values:
    - ConnectionConflictError: insert() hit the pair uniqueness constraint
    - ConnectionNotFoundError: conditional_update() target does not exist
    - StaleStateError: conditional_update() found a different state
    - StorageUnavailableError (infrastructure): transient, caller may retry
    - StorageFailureError (infrastructure): permanent, retrying fails again
"""

from typing import Protocol
from uuid import UUID

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.entities.connection import Connection
from src.domain.enums.connection_state import ConnectionState
from src.domain.value_objects.connection_transition import ConnectionTransition


class ConnectionRepository(Protocol):
    """Connection repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Point lookup by id
        find_by_pair: Lookup by (requester_id, grantor_id)
        find_by_requester: All connections of a requester
        find_by_grantor: All connections of a grantor
        insert: Create a record (fails on pair conflict)
        conditional_update: Compare-and-swap on state
    """

    async def find_by_id(
        self, connection_id: UUID
    ) -> Result[Connection | None, DomainError]:
        """Find connection by ID.

        Args:
            connection_id: Connection's unique identifier.

        Returns:
            Success(Connection | None): Record, or None if absent.
            Failure(DomainError): Storage error.
        """
        ...

    async def find_by_pair(
        self,
        requester_id: UUID,
        grantor_id: UUID,
    ) -> Result[Connection | None, DomainError]:
        """Find the connection of a (requester, grantor) pair.

        Args:
            requester_id: Requesting principal.
            grantor_id: Granting principal.

        Returns:
            Success(Connection | None): Record, or None if the pair never
                requested.
            Failure(DomainError): Storage error.
        """
        ...

    async def find_by_requester(
        self,
        requester_id: UUID,
        state: ConnectionState | None = None,
    ) -> Result[list[Connection], DomainError]:
        """Find all connections of a requester, oldest request first.

        Args:
            requester_id: Requesting principal.
            state: Optional state filter.

        Returns:
            Success(list[Connection]): Possibly empty list.
            Failure(DomainError): Storage error.
        """
        ...

    async def find_by_grantor(
        self,
        grantor_id: UUID,
        state: ConnectionState | None = None,
    ) -> Result[list[Connection], DomainError]:
        """Find all connections of a grantor, oldest first.

        APPROVED listings are ordered by approval time, all others by
        request time.

        Args:
            grantor_id: Granting principal.
            state: Optional state filter.

        Returns:
            Success(list[Connection]): Possibly empty list.
            Failure(DomainError): Storage error.
        """
        ...

    async def insert(self, connection: Connection) -> Result[Connection, DomainError]:
        """Persist a new connection.

        Args:
            connection: New PENDING connection.

        Returns:
            Success(Connection): Stored snapshot.
            Failure(ConnectionConflictError): Pair already has a record.
            Failure(DomainError): Storage error.
        """
        ...

    async def conditional_update(
        self,
        connection_id: UUID,
        expected_state: ConnectionState,
        transition: ConnectionTransition,
    ) -> Result[Connection, DomainError]:
        """Apply a transition only if the stored state equals expected_state.

        Args:
            connection_id: Target record.
            expected_state: State the caller observed and validated against.
            transition: Planned step whose changes() are written.

        Returns:
            Success(Connection): Snapshot after the write.
            Failure(ConnectionNotFoundError): Record does not exist.
            Failure(StaleStateError): Stored state differs from expected_state.
            Failure(DomainError): Storage unavailable (outcome unknown on timeout).
        """
        ...
