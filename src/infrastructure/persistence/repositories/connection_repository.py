"""ConnectionRepository - SQLAlchemy implementation.

Adapter for hexagonal architecture.
Maps between domain Connection entities and database ConnectionModel.

Concurrency:
    - insert() relies on uq_connections_requester_grantor, never on a
      prior read, so concurrent first requests resolve in the database
    - conditional_update() is a single UPDATE ... WHERE id = :id AND
      state = :expected; a zero row count means the caller lost the race
      (or the record does not exist)

Driver exceptions never leave this module. They are returned inside a
Failure as StorageUnavailableError (timeouts, lost connections) or
StorageFailureError (statements the database rejected).
"""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities.connection import Connection
from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_state import ConnectionState
from src.domain.errors.connection_error import (
    ConnectionConflictError,
    ConnectionErrorMessage,
    ConnectionNotFoundError,
    StaleStateError,
)
from src.domain.value_objects.connection_transition import ConnectionTransition
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import (
    DatabaseError,
    StorageFailureError,
    StorageUnavailableError,
)
from src.infrastructure.persistence.models.connection import ConnectionModel


class ConnectionRepository:
    """SQLAlchemy implementation of ConnectionRepository protocol.

    This is an adapter that implements the ConnectionRepository port.
    It handles the mapping between domain Connection entities and
    database ConnectionModel.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = ConnectionRepository(session=session)
        ...     result = await repo.find_by_id(connection_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def find_by_id(
        self, connection_id: UUID
    ) -> Result[Connection | None, DomainError]:
        """Find connection by ID.

        Args:
            connection_id: Connection's unique identifier.

        Returns:
            Success(Connection | None): Domain entity, or None if not found.
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        try:
            model = await self._fetch_one(
                _select().where(ConnectionModel.id == connection_id)
            )
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("find_by_id", e))

        return Success(value=None if model is None else self._to_domain(model))

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
            Success(Connection | None): Domain entity, or None if not found.
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        stmt = _select().where(
            ConnectionModel.requester_id == requester_id,
            ConnectionModel.grantor_id == grantor_id,
        )
        try:
            model = await self._fetch_one(stmt)
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("find_by_pair", e))

        return Success(value=None if model is None else self._to_domain(model))

    async def find_by_requester(
        self,
        requester_id: UUID,
        state: ConnectionState | None = None,
    ) -> Result[list[Connection], DomainError]:
        """Find all connections of a requester.

        Args:
            requester_id: Requesting principal.
            state: Optional state filter.

        Returns:
            Success(list[Connection]): Ordered by created_at (oldest first).
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        conditions: list[Any] = [ConnectionModel.requester_id == requester_id]
        if state is not None:
            conditions.append(ConnectionModel.state == state.value)

        try:
            models = await self._fetch_all(_select().where(*conditions))
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("find_by_requester", e))

        return Success(value=[self._to_domain(model) for model in models])

    async def find_by_grantor(
        self,
        grantor_id: UUID,
        state: ConnectionState | None = None,
    ) -> Result[list[Connection], DomainError]:
        """Find all connections of a grantor.

        Args:
            grantor_id: Granting principal.
            state: Optional state filter (e.g. PENDING for an inbox).

        Returns:
            Success(list[Connection]): Oldest first, by approved_at when
                filtering on APPROVED and by created_at otherwise.
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        conditions: list[Any] = [ConnectionModel.grantor_id == grantor_id]
        if state is not None:
            conditions.append(ConnectionModel.state == state.value)

        # Approved grants are listed in the order they were granted
        order_by = (
            ConnectionModel.approved_at
            if state == ConnectionState.APPROVED
            else ConnectionModel.created_at
        )

        try:
            models = await self._fetch_all(_select().where(*conditions), order_by)
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("find_by_grantor", e))

        return Success(value=[self._to_domain(model) for model in models])

    async def insert(self, connection: Connection) -> Result[Connection, DomainError]:
        """Persist a new connection.

        Args:
            connection: New connection entity.

        Returns:
            Success(Connection): Stored snapshot.
            Failure(ConnectionConflictError): Pair already has a record.
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        model = self._to_model(connection)
        self._session.add(model)

        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            return Failure(
                error=ConnectionConflictError(
                    code=ErrorCode.CONNECTION_ALREADY_EXISTS,
                    message=ConnectionErrorMessage.PAIR_CONFLICT,
                    conflicting_field="requester_id,grantor_id",
                    details={
                        "requester_id": str(connection.requester_id),
                        "grantor_id": str(connection.grantor_id),
                    },
                )
            )
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("insert", e))

        return Success(value=self._to_domain(model))

    async def conditional_update(
        self,
        connection_id: UUID,
        expected_state: ConnectionState,
        transition: ConnectionTransition,
    ) -> Result[Connection, DomainError]:
        """Apply a transition only if the stored state equals expected_state.

        Args:
            connection_id: Target record.
            expected_state: State the caller validated against.
            transition: Planned step; only its changes() are written.

        Returns:
            Success(Connection): Snapshot after the write.
            Failure(ConnectionNotFoundError): Record does not exist.
            Failure(StaleStateError): Stored state differs from expected_state.
            Failure(StorageUnavailableError): Database unreachable or timed out.
            Failure(StorageFailureError): Database rejected the statement.
        """
        stmt = (
            update(ConnectionModel)
            .where(
                ConnectionModel.id == connection_id,
                ConnectionModel.state == expected_state.value,
            )
            .values(**self._to_columns(transition.changes()))
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self._session.execute(stmt)

            if (cast(Any, result).rowcount or 0) == 0:
                await self._session.rollback()
                current = await self._fetch_one(
                    _select().where(ConnectionModel.id == connection_id)
                )
                if current is None:
                    return Failure(error=ConnectionNotFoundError.for_id(connection_id))
                return Failure(
                    error=StaleStateError.observed(
                        connection_id,
                        expected_state,
                        ConnectionState(current.state),
                    )
                )

            model = await self._fetch_one(
                _select().where(ConnectionModel.id == connection_id)
            )
            await self._session.commit()
        except (SQLAlchemyError, OSError) as e:
            return Failure(error=await self._storage_error("conditional_update", e))

        return Success(value=self._to_domain(cast(ConnectionModel, model)))

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _fetch_one(
        self, stmt: Select[tuple[ConnectionModel]]
    ) -> ConnectionModel | None:
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _fetch_all(
        self,
        stmt: Select[tuple[ConnectionModel]],
        order_by: Any = ConnectionModel.created_at,
    ) -> list[ConnectionModel]:
        result = await self._session.execute(
            stmt.order_by(order_by, ConnectionModel.id)
        )
        return list(result.scalars().all())

    async def _storage_error(self, operation: str, error: Exception) -> DatabaseError:
        """Roll back the failed unit of work and describe the failure.

        Timeouts and lost connections are transient (StorageUnavailableError).
        Anything the database rejected on its merits, such as a value too
        long for its column or a constraint other than the pair key, fails
        the same way on every retry (StorageFailureError).

        Args:
            operation: Store operation that failed.
            error: Driver or SQLAlchemy exception.

        Returns:
            DatabaseError subclass carrying the infrastructure code.
        """
        await self._session.rollback()

        details = {"operation": operation, "error_type": type(error).__name__}

        if isinstance(error, TimeoutError):
            return StorageUnavailableError(
                message="Connection store timed out",
                infrastructure_code=InfrastructureErrorCode.DATABASE_TIMEOUT,
                operation=operation,
                details=details,
            )
        if isinstance(error, (OperationalError, InterfaceError, OSError)):
            return StorageUnavailableError(
                message="Connection store is unavailable",
                infrastructure_code=InfrastructureErrorCode.DATABASE_CONNECTION_FAILED,
                operation=operation,
                details=details,
            )

        infrastructure_code = (
            InfrastructureErrorCode.DATABASE_CONSTRAINT_VIOLATION
            if isinstance(error, IntegrityError)
            else InfrastructureErrorCode.DATABASE_ERROR
        )
        return StorageFailureError(
            message="Connection store rejected the operation",
            infrastructure_code=infrastructure_code,
            operation=operation,
            details=details,
        )

    def _to_domain(self, model: ConnectionModel) -> Connection:
        """Convert database model to domain entity.

        Args:
            model: SQLAlchemy model instance.

        Returns:
            Domain Connection entity.
        """
        return Connection(
            id=model.id,
            requester_id=model.requester_id,
            grantor_id=model.grantor_id,
            state=ConnectionState(model.state),
            access_level=(
                AccessLevel(model.access_level) if model.access_level else None
            ),
            created_at=_as_utc(model.created_at),
            approved_at=_as_utc(model.approved_at),
            revocation_reason=model.revocation_reason,
            revoked_by=ActorRole(model.revoked_by) if model.revoked_by else None,
            revoked_at=_as_utc(model.revoked_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: Connection) -> ConnectionModel:
        """Convert domain entity to database model.

        Args:
            entity: Domain Connection entity.

        Returns:
            SQLAlchemy model instance.
        """
        return ConnectionModel(
            id=entity.id,
            requester_id=entity.requester_id,
            grantor_id=entity.grantor_id,
            state=entity.state.value,
            access_level=entity.access_level.value if entity.access_level else None,
            created_at=entity.created_at,
            approved_at=entity.approved_at,
            revocation_reason=entity.revocation_reason,
            revoked_by=entity.revoked_by.value if entity.revoked_by else None,
            revoked_at=entity.revoked_at,
            updated_at=entity.updated_at,
        )

    def _to_columns(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Convert transition changes to column values (enums to strings)."""
        return {
            name: value.value
            if isinstance(value, (ConnectionState, AccessLevel, ActorRole))
            else value
            for name, value in changes.items()
        }


def _select() -> Select[tuple[ConnectionModel]]:
    # Rows may have changed in another session since they entered the identity map
    return select(ConnectionModel).execution_options(populate_existing=True)


def _as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes returned by backends without tz support."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
