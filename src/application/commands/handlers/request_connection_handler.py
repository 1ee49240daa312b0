"""RequestConnection command handler.

Handles a requester asking a grantor for access. Creates the pair's
connection, or reactivates it when it was previously revoked.

Architecture:
- Application layer handler (orchestrates business logic)
- Imports only from domain layer (entities, protocols, errors)
- Uses Result types for error handling
- Never reads then writes unconditionally: new pairs rely on the store's
  uniqueness constraint, revoked pairs on a conditional update
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.connection_commands import RequestConnection
from src.application.dtos.connection_dtos import ConnectionResult
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.connection import Connection
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState
from src.domain.errors.connection_error import (
    ConnectionAlreadyExistsError,
    ConnectionConflictError,
    ConnectionErrorMessage,
    InvalidTransitionError,
    StaleStateError,
)
from src.domain.protocols.connection_repository import ConnectionRepository
from src.domain.protocols.logger_protocol import LoggerProtocol


class RequestConnectionHandler:
    """Handler for RequestConnection command.

    Dependencies (injected via constructor):
        - ConnectionRepository: For persistence
        - LoggerProtocol: For structured outcome logging

    Returns:
        Result[ConnectionResult, DomainError]: Success(snapshot) or Failure(error)
    """

    def __init__(
        self,
        connection_repo: ConnectionRepository,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            connection_repo: Connection repository.
            logger: Structured logger.
        """
        self._connection_repo = connection_repo
        self._logger = logger

    async def handle(
        self, cmd: RequestConnection
    ) -> Result[ConnectionResult, DomainError]:
        """Handle RequestConnection command.

        Args:
            cmd: RequestConnection command with requester and grantor.

        Returns:
            Success(ConnectionResult): New or reactivated PENDING connection.
            Failure(ValidationError): Requester and grantor are the same.
            Failure(ConnectionAlreadyExistsError): Pair is PENDING or APPROVED,
                including when a concurrent request won the race.
            Failure(InvalidTransitionError): Reactivation raced a request and
                a revoke, and the record was found REVOKED again.
            Failure(StorageUnavailableError): Store unreachable or timed out.
            Failure(StorageFailureError): Store rejected the write.
        """
        if cmd.requester_id == cmd.grantor_id:
            return self._fail(
                cmd,
                ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=ConnectionErrorMessage.SAME_PRINCIPAL,
                    field="grantor_id",
                ),
            )

        found = await self._connection_repo.find_by_pair(
            cmd.requester_id, cmd.grantor_id
        )
        if isinstance(found, Failure):
            return self._fail(cmd, found.error)

        existing = found.value
        if existing is None:
            result = await self._create(cmd)
        elif existing.is_revoked():
            result = await self._reactivate(existing)
        else:
            result = Failure(
                error=ConnectionAlreadyExistsError.for_existing(
                    existing.id, existing.state
                )
            )

        if isinstance(result, Failure):
            return self._fail(cmd, result.error)

        connection = result.value
        self._logger.info(
            "connection_requested",
            connection_id=str(connection.id),
            requester_id=str(connection.requester_id),
            grantor_id=str(connection.grantor_id),
            state=connection.state.value,
            reactivated=existing is not None,
        )
        return Success(value=ConnectionResult.from_entity(connection))

    async def _create(
        self, cmd: RequestConnection
    ) -> Result[Connection, DomainError]:
        """Insert a new PENDING connection for a never-seen pair."""
        now = datetime.now(UTC)
        connection = Connection(
            id=uuid7(),
            requester_id=cmd.requester_id,
            grantor_id=cmd.grantor_id,
            state=ConnectionState.PENDING,
            created_at=now,
            updated_at=now,
        )

        inserted = await self._connection_repo.insert(connection)
        if isinstance(inserted, Failure) and isinstance(
            inserted.error, ConnectionConflictError
        ):
            # A concurrent request created the pair first; report the winner
            winner = await self._connection_repo.find_by_pair(
                cmd.requester_id, cmd.grantor_id
            )
            if isinstance(winner, Failure):
                return winner
            if winner.value is None:
                return inserted
            return Failure(
                error=ConnectionAlreadyExistsError.for_existing(
                    winner.value.id, winner.value.state
                )
            )
        return inserted

    async def _reactivate(
        self, existing: Connection
    ) -> Result[Connection, DomainError]:
        """Move a REVOKED connection back to PENDING, keeping its id."""
        planned = existing.plan_reactivation(datetime.now(UTC))
        if isinstance(planned, Failure):
            return planned

        transition = planned.value
        updated = await self._connection_repo.conditional_update(
            existing.id, transition.from_state, transition
        )
        if isinstance(updated, Failure) and isinstance(updated.error, StaleStateError):
            stale = updated.error
            if stale.current_state in ConnectionState.live_states():
                return Failure(
                    error=ConnectionAlreadyExistsError.for_existing(
                        stale.connection_id, stale.current_state
                    )
                )
            # Re-read found it revoked again: another request and a revoke
            # both landed after our read
            return Failure(
                error=InvalidTransitionError.from_state(
                    stale.current_state, ConnectionAction.REQUEST
                )
            )
        return updated

    def _fail(
        self, cmd: RequestConnection, error: DomainError
    ) -> Failure[DomainError]:
        log = (
            self._logger.error
            if error.code in (ErrorCode.STORAGE_UNAVAILABLE, ErrorCode.STORAGE_FAILED)
            else self._logger.warning
        )
        log(
            "connection_request_failed",
            requester_id=str(cmd.requester_id),
            grantor_id=str(cmd.grantor_id),
            error_code=error.code.value,
        )
        return Failure(error=error)
