"""Connection lifecycle domain errors.

Typed failures returned by the lifecycle handlers and by the connection
store. Each error carries a machine-readable ErrorCode plus the context a
caller needs to render an actionable message (current state, required role).

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Store Contract:
    ConnectionConflictError and StaleStateError are part of the
    ConnectionRepository protocol. They describe losing a race at the storage
    boundary and are always translated by the handlers into
    ConnectionAlreadyExistsError or InvalidTransitionError before reaching a
    caller.

Usage:
    from src.domain.errors import InvalidTransitionError

    match result:
        case Failure(error=InvalidTransitionError(current_state=state)):
            ...
"""

from dataclasses import dataclass
from uuid import UUID

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
)
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState

CONNECTION_RESOURCE = "Connection"


class ConnectionErrorMessage:
    """Human-readable messages for connection failures."""

    NOT_FOUND = "Connection not found"
    REQUEST_PENDING = "A connection request is already pending"
    ALREADY_CONNECTED = "Requester and grantor are already connected"
    NOT_GRANTOR = "Only the grantor of this connection may approve it"
    NOT_REQUESTER = "Actor is not the requester of this connection"
    NOT_GRANTOR_OF_RECORD = "Actor is not the grantor of this connection"
    NOT_PARTICIPANT = "Principal is not a participant of this connection"
    ALREADY_APPROVED = "Connection request has already been approved"
    ALREADY_REVOKED = "Connection has already been revoked"
    NOT_REVOKED = "Only a revoked connection can be requested again"
    STILL_PENDING = "Connection request is still pending"
    SAME_PRINCIPAL = "Requester and grantor must be different principals"
    PAIR_CONFLICT = "A connection for this requester and grantor already exists"
    STATE_CHANGED = "Connection state changed concurrently"
    REASON_TOO_LONG = "Revocation reason is too long"


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionNotFoundError(NotFoundError):
    """No connection record for the supplied id."""

    resource_type: str = CONNECTION_RESOURCE

    @classmethod
    def for_id(cls, connection_id: UUID) -> "ConnectionNotFoundError":
        """Build the error for a missing connection id.

        Args:
            connection_id: Identifier that was looked up.

        Returns:
            ConnectionNotFoundError for the id.
        """
        return cls(
            code=ErrorCode.CONNECTION_NOT_FOUND,
            message=ConnectionErrorMessage.NOT_FOUND,
            resource_id=str(connection_id),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionAlreadyExistsError(ConflictError):
    """Request on a pair whose record is PENDING or APPROVED.

    Carries the existing record's id and state so callers can tell
    "a request is already pending" from "already connected".

    Attributes:
        connection_id: Id of the existing record.
        current_state: State of the existing record.
    """

    connection_id: UUID
    current_state: ConnectionState
    resource_type: str = CONNECTION_RESOURCE

    @classmethod
    def for_existing(
        cls,
        connection_id: UUID,
        current_state: ConnectionState,
    ) -> "ConnectionAlreadyExistsError":
        """Build the error from the existing record's id and state.

        Args:
            connection_id: Id of the existing record.
            current_state: State observed on the existing record.

        Returns:
            ConnectionAlreadyExistsError with a state-specific message.
        """
        message = (
            ConnectionErrorMessage.ALREADY_CONNECTED
            if current_state == ConnectionState.APPROVED
            else ConnectionErrorMessage.REQUEST_PENDING
        )
        return cls(
            code=ErrorCode.CONNECTION_ALREADY_EXISTS,
            message=message,
            connection_id=connection_id,
            current_state=current_state,
            conflicting_field="requester_id,grantor_id",
            details={
                "connection_id": str(connection_id),
                "current_state": current_state.value,
            },
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionForbiddenError(AuthorizationError):
    """Actor is not authorised for this record and role.

    Attributes:
        required_role: Role the actor would have needed.
    """

    required_role: ActorRole | None = None

    @classmethod
    def for_role(
        cls,
        required_role: ActorRole,
        message: str,
    ) -> "ConnectionForbiddenError":
        """Build the error naming the role that was required.

        Args:
            required_role: Role needed to perform the action.
            message: Human-readable explanation.

        Returns:
            ConnectionForbiddenError.
        """
        return cls(
            code=ErrorCode.CONNECTION_FORBIDDEN,
            message=message,
            required_role=required_role,
            required_permission=required_role.value,
            details={"required_role": required_role.value},
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTransitionError(DomainError):
    """Transition not legal from the record's current state.

    Attributes:
        current_state: State the record is in.
        attempted: Lifecycle action that was attempted.
    """

    current_state: ConnectionState
    attempted: ConnectionAction

    @classmethod
    def from_state(
        cls,
        current_state: ConnectionState,
        attempted: ConnectionAction,
    ) -> "InvalidTransitionError":
        """Build the error with a message describing the current state.

        Args:
            current_state: State the record is in.
            attempted: Transition that was attempted.

        Returns:
            InvalidTransitionError with a diagnostic message.
        """
        if current_state == ConnectionState.APPROVED:
            message = ConnectionErrorMessage.ALREADY_APPROVED
        elif current_state == ConnectionState.REVOKED:
            message = ConnectionErrorMessage.ALREADY_REVOKED
        elif attempted == ConnectionAction.REQUEST:
            message = ConnectionErrorMessage.NOT_REVOKED
        else:
            message = ConnectionErrorMessage.STILL_PENDING
        return cls(
            code=ErrorCode.CONNECTION_INVALID_TRANSITION,
            message=message,
            current_state=current_state,
            attempted=attempted,
            details={
                "current_state": current_state.value,
                "attempted": attempted.value,
            },
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionConflictError(ConflictError):
    """Store rejected an insert because the pair already has a record."""

    resource_type: str = CONNECTION_RESOURCE


@dataclass(frozen=True, slots=True, kw_only=True)
class StaleStateError(DomainError):
    """Conditional update lost: the stored state was not the expected one.

    Attributes:
        connection_id: Record that was targeted.
        expected_state: State the writer expected.
        current_state: State found in storage.
    """

    connection_id: UUID
    expected_state: ConnectionState
    current_state: ConnectionState

    @classmethod
    def observed(
        cls,
        connection_id: UUID,
        expected_state: ConnectionState,
        current_state: ConnectionState,
    ) -> "StaleStateError":
        """Build the error from the expected and the observed state."""
        return cls(
            code=ErrorCode.CONNECTION_STALE_STATE,
            message=ConnectionErrorMessage.STATE_CHANGED,
            connection_id=connection_id,
            expected_state=expected_state,
            current_state=current_state,
            details={
                "expected_state": expected_state.value,
                "current_state": current_state.value,
            },
        )
