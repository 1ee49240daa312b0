"""Domain value objects.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.connection_transition import ConnectionTransition

__all__ = [
    "ConnectionTransition",
]
