"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.connection import MAX_REVOCATION_REASON_LENGTH, Connection

__all__ = [
    "Connection",
    "MAX_REVOCATION_REASON_LENGTH",
]
