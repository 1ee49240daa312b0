"""Connection transition value object.

Immutable description of one state machine step: which state the record
must be in, which state it moves to, and the field values the step writes.
A transition is planned by the Connection entity and applied by the store
as a single conditional update, so the check ("record is still in
from_state") and the write happen atomically.

Only the fields a step owns are written. Revocation never touches the grant
fields, so a revoke that races a re-approval cannot restore stale values.

Usage:
    from src.domain.value_objects import ConnectionTransition

    match connection.plan_approval(AccessLevel.FULL, now):
        case Success(value=transition):
            await repo.conditional_update(
                connection.id, transition.from_state, transition
            )
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState


@dataclass(frozen=True, slots=True, kw_only=True)
class ConnectionTransition:
    """A planned, validated state machine step.

    Attributes:
        action: Lifecycle action producing the step.
        from_state: State the record must be in for the step to apply.
        to_state: State after the step.
        occurred_at: Timestamp stamped by the step.
        access_level: Granted scope (approval only).
        revocation_reason: Free-text reason (revocation only).
        revoked_by: Role that revoked (revocation only).
    """

    action: ConnectionAction
    from_state: ConnectionState
    to_state: ConnectionState
    occurred_at: datetime
    access_level: AccessLevel | None = None
    revocation_reason: str | None = None
    revoked_by: ActorRole | None = None

    def __post_init__(self) -> None:
        """Validate the step carries what its target state needs.

        Raises:
            ValueError: If approval lacks an access level or revocation
                lacks the revoking role.
        """
        if self.to_state == ConnectionState.APPROVED and self.access_level is None:
            raise ValueError("Approval requires an access level")
        if self.to_state == ConnectionState.REVOKED and self.revoked_by is None:
            raise ValueError("Revocation requires the revoking role")

    def changes(self) -> dict[str, Any]:
        """Field values written by this step, keyed by attribute name.

        Returns:
            dict[str, Any]: Attribute name to new value. Always includes
            state and updated_at.
        """
        values: dict[str, Any] = {
            "state": self.to_state,
            "updated_at": self.occurred_at,
        }

        match self.to_state:
            case ConnectionState.PENDING:
                # Reactivation starts a new lineage
                values.update(
                    created_at=self.occurred_at,
                    access_level=None,
                    approved_at=None,
                    revocation_reason=None,
                    revoked_by=None,
                    revoked_at=None,
                )
            case ConnectionState.APPROVED:
                values.update(
                    access_level=self.access_level,
                    approved_at=self.occurred_at,
                )
            case ConnectionState.REVOKED:
                values.update(
                    revocation_reason=self.revocation_reason,
                    revoked_by=self.revoked_by,
                    revoked_at=self.occurred_at,
                )

        return values
