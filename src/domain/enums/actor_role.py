"""Roles an actor can take when acting on a connection."""

from enum import Enum


class ActorRole(str, Enum):
    """Role of the principal performing a revocation.

    REQUESTER and GRANTOR must match the corresponding principal on the
    record. ADMIN is an administrative actor allowed on any record.
    """

    REQUESTER = "requester"
    GRANTOR = "grantor"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings."""
        return [role.value for role in cls]
