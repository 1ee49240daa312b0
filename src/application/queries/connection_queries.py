"""Connection queries (CQRS read operations).

Queries represent requests for connection data. They are immutable
dataclasses with question-like names. Queries NEVER change state.

Pattern:
- Queries are data containers (no logic)
- Handlers fetch and return data
- Queries never change state
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.connection_state import ConnectionState


@dataclass(frozen=True, kw_only=True)
class GetConnection:
    """Get a single connection by ID.

    Attributes:
        connection_id: Connection to retrieve.
        principal_id: Caller (must be the requester or the grantor).

    Example:
        >>> query = GetConnection(
        ...     connection_id=connection_id,
        ...     principal_id=patient_id,
        ... )
        >>> result = await handler.handle(query)
    """

    connection_id: UUID
    principal_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListRequesterConnections:
    """List the connections a requester has asked for.

    Attributes:
        requester_id: Requesting principal.
        state: Only connections in this state. All states when None.
    """

    requester_id: UUID
    state: ConnectionState | None = None


@dataclass(frozen=True, kw_only=True)
class ListGrantorConnections:
    """List the connections addressed to a grantor.

    With state=PENDING this is the grantor's inbox of open requests; with
    state=APPROVED it lists the requesters currently granted access.

    Attributes:
        grantor_id: Granting principal.
        state: Only connections in this state. All states when None.
    """

    grantor_id: UUID
    state: ConnectionState | None = None


@dataclass(frozen=True, kw_only=True)
class CheckConnectionAccess:
    """Check whether a requester may currently read a grantor's records.

    Attributes:
        requester_id: Requesting principal.
        grantor_id: Granting principal.
    """

    requester_id: UUID
    grantor_id: UUID
