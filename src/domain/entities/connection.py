"""Connection domain entity.

Represents the single record modelling one requester ↔ grantor relationship
and its approval state. The grantor's records become visible to the
requester only while the connection is APPROVED.

Architecture:
    - Pure domain entity (no infrastructure dependencies)
    - Uses Result types (railway-oriented programming)
    - Transition methods PLAN steps, they never mutate the entity; the store
      applies a plan with a conditional update on the expected state

Usage:
    from uuid_extensions import uuid7
    from src.domain.entities import Connection
    from src.domain.enums import ConnectionState

    connection = Connection(
        id=uuid7(),
        requester_id=patient_id,
        grantor_id=practitioner_id,
        state=ConnectionState.PENDING,
    )

    match connection.plan_approval(AccessLevel.FULL, now):
        case Success(value=transition):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState
from src.domain.errors.connection_error import InvalidTransitionError
from src.domain.value_objects.connection_transition import ConnectionTransition

# Longest revocation reason the store accepts (connections.revocation_reason)
MAX_REVOCATION_REASON_LENGTH = 500


@dataclass
class Connection:
    """Requester ↔ grantor connection.

    At most one Connection exists per (requester_id, grantor_id) pair. A
    revoked connection is reactivated by a new request instead of being
    duplicated, so the id is stable across the pair's whole history.

    State Machine:
        PENDING → APPROVED → REVOKED
        PENDING → REVOKED
        REVOKED → PENDING (reactivation)

    Field Invariants:
        - PENDING: access_level, approved_at and revocation fields are null
        - APPROVED: access_level and approved_at are set, revocation fields null
        - REVOKED: revoked_by and revoked_at are set; access_level/approved_at
          may keep what was granted before the revocation

    Attributes:
        id: Unique connection identifier (immutable).
        requester_id: Principal asking for access (immutable).
        grantor_id: Principal whose records are shared (immutable).
        state: Current lifecycle state.
        access_level: Granted scope, set on approval.
        created_at: When the request of the current lineage was made.
        approved_at: When the grantor approved.
        revocation_reason: Free-text reason given on revocation.
        revoked_by: Role of the actor who revoked.
        revoked_at: When the connection was revoked.
        updated_at: Last modification timestamp.
    """

    id: UUID
    requester_id: UUID
    grantor_id: UUID
    state: ConnectionState
    access_level: AccessLevel | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    approved_at: datetime | None = None
    revocation_reason: str | None = None
    revoked_by: ActorRole | None = None
    revoked_at: datetime | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate field consistency after initialization.

        Raises:
            ValueError: If fields contradict the state.

        Note:
            __post_init__ raises ValueError for construction errors.
            These are programming errors, not business logic failures.
        """
        if self.requester_id == self.grantor_id:
            raise ValueError("requester_id and grantor_id must differ")

        has_grant = self.access_level is not None or self.approved_at is not None
        has_revocation = (
            self.revoked_by is not None
            or self.revoked_at is not None
            or self.revocation_reason is not None
        )

        match self.state:
            case ConnectionState.PENDING:
                if has_grant:
                    raise ValueError("PENDING connection cannot carry a grant")
                if has_revocation:
                    raise ValueError("PENDING connection cannot carry a revocation")
            case ConnectionState.APPROVED:
                if self.access_level is None or self.approved_at is None:
                    raise ValueError(
                        "APPROVED connection requires access_level and approved_at"
                    )
                if has_revocation:
                    raise ValueError("APPROVED connection cannot carry a revocation")
            case ConnectionState.REVOKED:
                if self.revoked_by is None or self.revoked_at is None:
                    raise ValueError(
                        "REVOKED connection requires revoked_by and revoked_at"
                    )

    # -------------------------------------------------------------------------
    # Query Methods (Read-Only)
    # -------------------------------------------------------------------------

    def is_pending(self) -> bool:
        """Check if the request awaits the grantor."""
        return self.state == ConnectionState.PENDING

    def is_approved(self) -> bool:
        """Check if the connection currently grants access."""
        return self.state == ConnectionState.APPROVED

    def is_revoked(self) -> bool:
        """Check if the connection was rejected or revoked."""
        return self.state == ConnectionState.REVOKED

    def involves(self, principal_id: UUID) -> bool:
        """Check if a principal is the requester or the grantor.

        Args:
            principal_id: Principal to check.

        Returns:
            bool: True if principal is one of the two participants.
        """
        return principal_id in (self.requester_id, self.grantor_id)

    def is_authorized(self, actor_id: UUID, actor_role: ActorRole) -> bool:
        """Check if an actor acting in a role may act on this record.

        Args:
            actor_id: Identifier of the acting principal.
            actor_role: Role the actor claims.

        Returns:
            bool: True for ADMIN, or when actor_id matches the principal of
            the claimed role.
        """
        match actor_role:
            case ActorRole.ADMIN:
                return True
            case ActorRole.REQUESTER:
                return actor_id == self.requester_id
            case ActorRole.GRANTOR:
                return actor_id == self.grantor_id
        return False

    # -------------------------------------------------------------------------
    # Transition Planning (Return Result, never mutate)
    # -------------------------------------------------------------------------

    def plan_reactivation(
        self,
        now: datetime,
    ) -> Result[ConnectionTransition, InvalidTransitionError]:
        """Plan REVOKED → PENDING for a new request on the same pair.

        Args:
            now: Timestamp of the new request (new created_at).

        Returns:
            Success(transition): Record is REVOKED.
            Failure(InvalidTransitionError): Record is PENDING or APPROVED.
        """
        if self.state != ConnectionState.REVOKED:
            return Failure(
                error=InvalidTransitionError.from_state(
                    self.state, ConnectionAction.REQUEST
                )
            )

        return Success(
            value=ConnectionTransition(
                action=ConnectionAction.REQUEST,
                from_state=ConnectionState.REVOKED,
                to_state=ConnectionState.PENDING,
                occurred_at=now,
            )
        )

    def plan_approval(
        self,
        access_level: AccessLevel,
        now: datetime,
    ) -> Result[ConnectionTransition, InvalidTransitionError]:
        """Plan PENDING → APPROVED.

        Args:
            access_level: Scope granted to the requester.
            now: Approval timestamp.

        Returns:
            Success(transition): Record is PENDING.
            Failure(InvalidTransitionError): Already approved or revoked.
        """
        if self.state != ConnectionState.PENDING:
            return Failure(
                error=InvalidTransitionError.from_state(
                    self.state, ConnectionAction.APPROVE
                )
            )

        return Success(
            value=ConnectionTransition(
                action=ConnectionAction.APPROVE,
                from_state=ConnectionState.PENDING,
                to_state=ConnectionState.APPROVED,
                occurred_at=now,
                access_level=access_level,
            )
        )

    def plan_revocation(
        self,
        actor_role: ActorRole,
        reason: str | None,
        now: datetime,
    ) -> Result[ConnectionTransition, InvalidTransitionError]:
        """Plan PENDING/APPROVED → REVOKED.

        Rejecting a pending request and revoking an established grant are the
        same step. Grant fields are left untouched as historical trace until
        the next reactivation clears them.

        Args:
            actor_role: Role of the revoking actor.
            reason: Optional free-text reason.
            now: Revocation timestamp.

        Returns:
            Success(transition): Record is PENDING or APPROVED.
            Failure(InvalidTransitionError): Already revoked.
        """
        if self.state not in ConnectionState.revocable_states():
            return Failure(
                error=InvalidTransitionError.from_state(
                    self.state, ConnectionAction.REVOKE
                )
            )

        return Success(
            value=ConnectionTransition(
                action=ConnectionAction.REVOKE,
                from_state=self.state,
                to_state=ConnectionState.REVOKED,
                occurred_at=now,
                revocation_reason=reason,
                revoked_by=actor_role,
            )
        )
