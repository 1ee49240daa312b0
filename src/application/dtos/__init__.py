"""Data Transfer Objects (DTOs) for application layer.

DTOs are response/result dataclasses returned by command and query handlers.
They transfer data from the application layer to the presentation layer.

Usage:
    from src.application.dtos import ConnectionResult
"""

from src.application.dtos.connection_dtos import (
    ConnectionAccessResult,
    ConnectionListResult,
    ConnectionResult,
)

__all__ = [
    "ConnectionAccessResult",
    "ConnectionListResult",
    "ConnectionResult",
]
