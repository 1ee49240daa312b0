"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (RequestConnection, RevokeConnection).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.connection_commands import (
    AcceptConnection,
    RequestConnection,
    RevokeConnection,
)

__all__ = [
    "AcceptConnection",
    "RequestConnection",
    "RevokeConnection",
]
