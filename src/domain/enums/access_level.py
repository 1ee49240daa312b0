"""Access levels granted by an approved connection.

Enumerated scope of what an APPROVED connection lets the requester see of
the grantor's records.

Usage:
    from src.domain.enums import AccessLevel

    level = AccessLevel.FULL
"""

from enum import Enum


class AccessLevel(str, Enum):
    """Grant scopes for an approved connection.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    FULL = "full"
    """Complete access to the shared records."""

    PARTIAL = "partial"
    """Access to a restricted subset of the shared records."""

    READ_ONLY = "read_only"
    """View-only access."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all access level values as strings.

        Returns:
            list[str]: List of access level values.
        """
        return [level.value for level in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid access level.

        Args:
            value: String to check.

        Returns:
            bool: True if value is a valid access level.
        """
        return value in cls.values()
