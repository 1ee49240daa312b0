"""Domain enums for the connection lifecycle.

Available Enums:
    - ConnectionState: PENDING, APPROVED, REVOKED
    - ConnectionAction: REQUEST, APPROVE, REVOKE
    - AccessLevel: Grant scope of an approved connection
    - ActorRole: Role of the principal acting on a connection
"""

from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState

__all__ = [
    "AccessLevel",
    "ActorRole",
    "ConnectionAction",
    "ConnectionState",
]
