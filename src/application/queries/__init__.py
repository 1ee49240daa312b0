"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetConnection, ListGrantorConnections).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.connection_queries import (
    CheckConnectionAccess,
    GetConnection,
    ListGrantorConnections,
    ListRequesterConnections,
)

__all__ = [
    "CheckConnectionAccess",
    "GetConnection",
    "ListGrantorConnections",
    "ListRequesterConnections",
]
