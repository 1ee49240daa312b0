"""Connection commands (CQRS write operations).

Commands represent intent to move a connection through its lifecycle.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole


@dataclass(frozen=True, kw_only=True)
class RequestConnection:
    """Ask a grantor for access to their records.

    Creates the pair's connection, or reactivates it if it was revoked.

    State Transition: (none) → PENDING, REVOKED → PENDING

    Attributes:
        requester_id: Principal asking for access (authenticated caller).
        grantor_id: Principal being asked.

    Example:
        >>> command = RequestConnection(
        ...     requester_id=patient_id,
        ...     grantor_id=practitioner_id,
        ... )
        >>> result = await handler.handle(command)
    """

    requester_id: UUID
    grantor_id: UUID


@dataclass(frozen=True, kw_only=True)
class AcceptConnection:
    """Grantor approves a pending request.

    State Transition: PENDING → APPROVED

    Attributes:
        connection_id: Connection to approve.
        grantor_id: Acting principal (must be the record's grantor).
        access_level: Scope granted. Configured default when omitted.
    """

    connection_id: UUID
    grantor_id: UUID
    access_level: AccessLevel | None = None


@dataclass(frozen=True, kw_only=True)
class RevokeConnection:
    """Reject a pending request or revoke an established connection.

    State Transition: PENDING → REVOKED, APPROVED → REVOKED

    Attributes:
        connection_id: Connection to revoke.
        actor_id: Acting principal.
        actor_role: Role the actor acts in (requester, grantor or admin).
        reason: Optional free-text reason, at most 500 characters.
    """

    connection_id: UUID
    actor_id: UUID
    actor_role: ActorRole
    reason: str | None = None
