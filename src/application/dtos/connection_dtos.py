"""Connection DTOs (Data Transfer Objects).

Response/result dataclasses returned by the connection command and query
handlers. They carry connection snapshots from handlers to the presentation
layer without exposing the domain entity.

DTOs:
    - ConnectionResult: Snapshot of one connection
    - ConnectionListResult: Connections of one principal plus per-state counts
    - ConnectionAccessResult: Whether a requester may read a grantor's records
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.entities.connection import Connection
from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_state import ConnectionState


@dataclass
class ConnectionResult:
    """Single connection result DTO.

    Attributes:
        id: Connection unique identifier.
        requester_id: Requesting principal.
        grantor_id: Granting principal.
        state: Current lifecycle state.
        access_level: Granted scope (None until approved).
        created_at: When the current request was made.
        approved_at: When the grantor approved.
        revocation_reason: Reason supplied on revocation.
        revoked_by: Role that revoked.
        revoked_at: When the connection was revoked.
        updated_at: Last modification timestamp.
    """

    id: UUID
    requester_id: UUID
    grantor_id: UUID
    state: ConnectionState
    access_level: AccessLevel | None
    created_at: datetime
    approved_at: datetime | None
    revocation_reason: str | None
    revoked_by: ActorRole | None
    revoked_at: datetime | None
    updated_at: datetime

    @classmethod
    def from_entity(cls, connection: Connection) -> "ConnectionResult":
        """Map a domain snapshot to the DTO."""
        return cls(
            id=connection.id,
            requester_id=connection.requester_id,
            grantor_id=connection.grantor_id,
            state=connection.state,
            access_level=connection.access_level,
            created_at=connection.created_at,
            approved_at=connection.approved_at,
            revocation_reason=connection.revocation_reason,
            revoked_by=connection.revoked_by,
            revoked_at=connection.revoked_at,
            updated_at=connection.updated_at,
        )


@dataclass
class ConnectionListResult:
    """Connections of one principal.

    Attributes:
        connections: Connection snapshots, oldest request first.
        total_count: Number of connections returned.
        pending_count: How many are PENDING.
        approved_count: How many are APPROVED.
        revoked_count: How many are REVOKED.
    """

    connections: list[ConnectionResult] = field(default_factory=list)
    total_count: int = 0
    pending_count: int = 0
    approved_count: int = 0
    revoked_count: int = 0

    @classmethod
    def from_entities(cls, connections: list[Connection]) -> "ConnectionListResult":
        """Build the list result and its per-state counts."""
        states = [connection.state for connection in connections]
        return cls(
            connections=[ConnectionResult.from_entity(c) for c in connections],
            total_count=len(connections),
            pending_count=states.count(ConnectionState.PENDING),
            approved_count=states.count(ConnectionState.APPROVED),
            revoked_count=states.count(ConnectionState.REVOKED),
        )


@dataclass
class ConnectionAccessResult:
    """Access check between a requester and a grantor.

    Attributes:
        is_connected: True only while the pair's connection is APPROVED.
        access_level: Granted scope when connected, otherwise None.
        connection_id: Id of the pair's record, if one exists.
    """

    is_connected: bool
    access_level: AccessLevel | None = None
    connection_id: UUID | None = None
