"""AcceptConnection command handler.

Handles a grantor approving a pending connection request.

Architecture:
- Application layer handler (orchestrates business logic)
- Imports only from domain layer (entities, protocols, errors)
- Uses Result types for error handling
"""

from datetime import UTC, datetime

from src.application.commands.connection_commands import AcceptConnection
from src.application.dtos.connection_dtos import ConnectionResult
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.errors.connection_error import (
    ConnectionErrorMessage,
    ConnectionForbiddenError,
    ConnectionNotFoundError,
    InvalidTransitionError,
    StaleStateError,
)
from src.domain.protocols.connection_repository import ConnectionRepository
from src.domain.protocols.logger_protocol import LoggerProtocol


class AcceptConnectionHandler:
    """Handler for AcceptConnection command.

    Approves a PENDING connection on behalf of its grantor. Two concurrent
    approvals of the same request cannot both succeed: the write is a
    conditional update on the PENDING state, and the loser is reported as
    an invalid transition from the state it found.

    The guard is the state alone, not the request lineage. If the request
    is revoked and asked for again between this handler's read and its
    write, the approval lands on the newer PENDING request. Same record,
    same grantor, so the grantor approves what is now pending.

    Dependencies (injected via constructor):
        - ConnectionRepository: For persistence
        - LoggerProtocol: For structured outcome logging
        - default_access_level: Scope granted when the command names none

    Returns:
        Result[ConnectionResult, DomainError]: Success(snapshot) or Failure(error)
    """

    def __init__(
        self,
        connection_repo: ConnectionRepository,
        logger: LoggerProtocol,
        default_access_level: AccessLevel = AccessLevel.READ_ONLY,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            connection_repo: Connection repository.
            logger: Structured logger.
            default_access_level: Scope granted when the command names none.
        """
        self._connection_repo = connection_repo
        self._logger = logger
        self._default_access_level = default_access_level

    async def handle(
        self, cmd: AcceptConnection
    ) -> Result[ConnectionResult, DomainError]:
        """Handle AcceptConnection command.

        Args:
            cmd: AcceptConnection command.

        Returns:
            Success(ConnectionResult): Connection is now APPROVED.
            Failure(ConnectionNotFoundError): No such connection.
            Failure(ConnectionForbiddenError): Actor is not the grantor.
            Failure(InvalidTransitionError): Connection is not PENDING.
            Failure(StorageUnavailableError): Store unreachable or timed out.
            Failure(StorageFailureError): Store rejected the write.
        """
        found = await self._connection_repo.find_by_id(cmd.connection_id)
        if isinstance(found, Failure):
            return self._fail(cmd, found.error)

        connection = found.value
        if connection is None:
            return self._fail(cmd, ConnectionNotFoundError.for_id(cmd.connection_id))

        if connection.grantor_id != cmd.grantor_id:
            return self._fail(
                cmd,
                ConnectionForbiddenError.for_role(
                    ActorRole.GRANTOR, ConnectionErrorMessage.NOT_GRANTOR
                ),
            )

        planned = connection.plan_approval(
            cmd.access_level or self._default_access_level,
            datetime.now(UTC),
        )
        if isinstance(planned, Failure):
            return self._fail(cmd, planned.error)

        transition = planned.value
        updated = await self._connection_repo.conditional_update(
            connection.id, transition.from_state, transition
        )
        if isinstance(updated, Failure):
            error = updated.error
            if isinstance(error, StaleStateError):
                # Lost the race to a concurrent approve or revoke
                error = InvalidTransitionError.from_state(
                    error.current_state, ConnectionAction.APPROVE
                )
            return self._fail(cmd, error)

        approved = updated.value
        self._logger.info(
            "connection_approved",
            connection_id=str(approved.id),
            requester_id=str(approved.requester_id),
            grantor_id=str(approved.grantor_id),
            state=approved.state.value,
            access_level=(
                approved.access_level.value if approved.access_level else None
            ),
        )
        return Success(value=ConnectionResult.from_entity(approved))

    def _fail(
        self, cmd: AcceptConnection, error: DomainError
    ) -> Failure[DomainError]:
        log = (
            self._logger.error
            if error.code in (ErrorCode.STORAGE_UNAVAILABLE, ErrorCode.STORAGE_FAILED)
            else self._logger.warning
        )
        log(
            "connection_approval_failed",
            connection_id=str(cmd.connection_id),
            grantor_id=str(cmd.grantor_id),
            error_code=error.code.value,
        )
        return Failure(error=error)
