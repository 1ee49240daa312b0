"""Connection lifecycle states.

Defines the state machine for requester ↔ grantor connections.

State Machine:
    (no record) → PENDING → APPROVED → REVOKED
    PENDING → REVOKED (a grantor rejecting a request is a revocation)
    REVOKED → PENDING (reactivation by a new request on the same pair)

    - PENDING: Requester asked for access, awaiting the grantor
    - APPROVED: Grantor approved, access level in effect
    - REVOKED: Request rejected or grant withdrawn (resumable)

Usage:
    from src.domain.enums import ConnectionState

    if connection.state == ConnectionState.APPROVED:
        # Requester may see the grantor's records
"""

from enum import Enum


class ConnectionState(str, Enum):
    """Connection lifecycle states.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are lowercase for consistency.

    State Transitions:
        PENDING → APPROVED: Grantor accepts the request
        PENDING → REVOKED: Grantor rejects, requester withdraws, admin revokes
        APPROVED → REVOKED: Either principal or an admin revokes the grant
        REVOKED → PENDING: Requester asks again (same record reused)

    There is no APPROVED → PENDING transition.
    """

    PENDING = "pending"
    """Request created, awaiting the grantor's decision.

    access_level and approved_at are always null in this state.
    """

    APPROVED = "approved"
    """Grantor approved the request.

    access_level and approved_at are always set in this state.
    """

    REVOKED = "revoked"
    """Request rejected or established grant revoked.

    Terminal-but-resumable: a new request reactivates the same record.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all state values as strings.

        Returns:
            list[str]: List of state values.
        """
        return [state.value for state in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid state.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid state.
        """
        return value in cls.values()

    @classmethod
    def live_states(cls) -> list["ConnectionState"]:
        """Get states that block a new request on the same pair.

        Returns:
            list[ConnectionState]: PENDING and APPROVED.
        """
        return [cls.PENDING, cls.APPROVED]

    @classmethod
    def revocable_states(cls) -> list["ConnectionState"]:
        """Get states from which a revocation is accepted.

        Returns:
            list[ConnectionState]: PENDING and APPROVED.
        """
        return [cls.PENDING, cls.APPROVED]
