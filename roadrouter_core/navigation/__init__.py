"""Navigation module - Location adapters."""

from roadrouter_core.navigation.adapter import (
    NavigationAdapter,
    MemoryNavigation,
    Listener,
)

__all__ = [
    "NavigationAdapter",
    "MemoryNavigation",
    "Listener",
]
