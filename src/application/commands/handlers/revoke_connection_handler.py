"""RevokeConnection command handler.

Handles rejecting a pending request and revoking an established
connection. Both are the same transition to REVOKED.

Architecture:
- Application layer handler (orchestrates business logic)
- Imports only from domain layer (entities, protocols, errors)
- Uses Result types for error handling
"""

from datetime import UTC, datetime

from src.application.commands.connection_commands import RevokeConnection
from src.application.dtos.connection_dtos import ConnectionResult
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.connection import MAX_REVOCATION_REASON_LENGTH, Connection
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


class RevokeConnectionHandler:
    """Handler for RevokeConnection command.

    The requester, the grantor or an administrator may revoke. Revoking an
    already revoked connection is an invalid transition, not a no-op.

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
        self, cmd: RevokeConnection
    ) -> Result[ConnectionResult, DomainError]:
        """Handle RevokeConnection command.

        Args:
            cmd: RevokeConnection command.

        Returns:
            Success(ConnectionResult): Connection is now REVOKED.
            Failure(ValidationError): Reason exceeds MAX_REVOCATION_REASON_LENGTH.
            Failure(ConnectionNotFoundError): No such connection.
            Failure(ConnectionForbiddenError): Actor does not hold the claimed
                role on this connection.
            Failure(InvalidTransitionError): Connection is already REVOKED.
            Failure(StorageUnavailableError): Store unreachable or timed out.
            Failure(StorageFailureError): Store rejected the write.
        """
        if cmd.reason is not None and len(cmd.reason) > MAX_REVOCATION_REASON_LENGTH:
            return self._fail(
                cmd,
                ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=ConnectionErrorMessage.REASON_TOO_LONG,
                    field="reason",
                    details={"max_length": str(MAX_REVOCATION_REASON_LENGTH)},
                ),
            )

        found = await self._connection_repo.find_by_id(cmd.connection_id)
        if isinstance(found, Failure):
            return self._fail(cmd, found.error)

        connection = found.value
        if connection is None:
            return self._fail(cmd, ConnectionNotFoundError.for_id(cmd.connection_id))

        if not connection.is_authorized(cmd.actor_id, cmd.actor_role):
            return self._fail(cmd, self._forbidden(cmd.actor_role))

        planned = connection.plan_revocation(
            cmd.actor_role, cmd.reason, datetime.now(UTC)
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
                error = InvalidTransitionError.from_state(
                    error.current_state, ConnectionAction.REVOKE
                )
            return self._fail(cmd, error)

        revoked = updated.value
        self._log_revoked(revoked, previous=connection)
        return Success(value=ConnectionResult.from_entity(revoked))

    def _forbidden(self, actor_role: ActorRole) -> ConnectionForbiddenError:
        if actor_role == ActorRole.REQUESTER:
            return ConnectionForbiddenError.for_role(
                ActorRole.REQUESTER, ConnectionErrorMessage.NOT_REQUESTER
            )
        return ConnectionForbiddenError.for_role(
            ActorRole.GRANTOR, ConnectionErrorMessage.NOT_GRANTOR_OF_RECORD
        )

    def _log_revoked(self, revoked: Connection, previous: Connection) -> None:
        # Log presence of a reason, never its text
        self._logger.info(
            "connection_revoked",
            connection_id=str(revoked.id),
            requester_id=str(revoked.requester_id),
            grantor_id=str(revoked.grantor_id),
            state=revoked.state.value,
            previous_state=previous.state.value,
            revoked_by=revoked.revoked_by.value if revoked.revoked_by else None,
            has_reason=revoked.revocation_reason is not None,
        )

    def _fail(
        self, cmd: RevokeConnection, error: DomainError
    ) -> Failure[DomainError]:
        log = (
            self._logger.error
            if error.code in (ErrorCode.STORAGE_UNAVAILABLE, ErrorCode.STORAGE_FAILED)
            else self._logger.warning
        )
        log(
            "connection_revocation_failed",
            connection_id=str(cmd.connection_id),
            actor_id=str(cmd.actor_id),
            actor_role=cmd.actor_role.value,
            error_code=error.code.value,
        )
        return Failure(error=error)
