"""Navigation Adapter - Location source and change notifications.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from contextlib import contextmanager
from typing import Callable, Deque, Iterator, List

from roadrouter_core.utils.helpers import split_href

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class NavigationAdapter(ABC):
    """Abstract location source.

    Mirrors the parts of a browser location the router needs:

    ┌────────────────────────────────────────────────────────────┐
    │                  Navigation Adapter                         │
    │                                                             │
    │  pathname / hash ──▶ Router.handle_routes()                 │
    │  set_hash(path)  ──▶ hash change ──▶ listeners              │
    │  set_href(href)  ──▶ pathname + hash replaced               │
    └────────────────────────────────────────────────────────────┘
    """

    @property
    @abstractmethod
    def pathname(self) -> str:
        """Current path (without hash)."""
        pass

    @property
    @abstractmethod
    def hash(self) -> str:
        """Current hash fragment, including the leading '#', or ''."""
        pass

    @abstractmethod
    def set_hash(self, value: str) -> None:
        """Set the hash fragment (triggers navigation)."""
        pass

    @abstractmethod
    def set_href(self, href: str) -> None:
        """Replace the full location."""
        pass

    @abstractmethod
    def add_listener(self, listener: Listener) -> None:
        """Subscribe to hash changes."""
        pass

    @abstractmethod
    def remove_listener(self, listener: Listener) -> None:
        """Unsubscribe from hash changes."""
        pass

    @contextmanager
    def deferred(self) -> Iterator[None]:
        """Hold change notifications until the block exits.

        Adapters that notify asynchronously need no override.
        """
        yield


class MemoryNavigation(NavigationAdapter):
    """In-memory location with hash-change notifications.

    Adding the same callback twice registers it once. Notifications are
    delivered one at a time; a change made by a listener is queued until
    the current delivery returns.

    Usage:
        nav = MemoryNavigation("/#/about")
        nav.add_listener(on_change)
        nav.set_hash("/users/7")   # on_change() called
    """

    def __init__(self, href: str = "/"):
        self._pathname, self._hash = split_href(href)
        self._listeners: List[Listener] = []
        self._pending: Deque[str] = deque()
        self._delivering = False
        self._held = 0
        self.history: List[str] = [self.href]

    @property
    def pathname(self) -> str:
        return self._pathname

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def href(self) -> str:
        """Full location."""
        return self._pathname + self._hash

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def set_hash(self, value: str) -> None:
        """Set the hash fragment, notifying listeners when it changes."""
        if value and not value.startswith("#"):
            value = "#" + value
        if value == "#":
            value = ""
        self._navigate(self._pathname, value)

    def set_href(self, href: str) -> None:
        """Replace pathname and hash, notifying listeners if the hash changed."""
        pathname, hash_value = split_href(href)
        self._navigate(pathname, hash_value)

    def back(self) -> bool:
        """Return to the previous history entry."""
        if len(self.history) < 2:
            return False

        self.history.pop()
        pathname, hash_value = split_href(self.history[-1])
        old_hash = self._hash
        self._pathname, self._hash = pathname, hash_value

        if old_hash != hash_value:
            self._notify(self.href)
        return True

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _navigate(self, pathname: str, hash_value: str) -> None:
        old_hash = self._hash
        self._pathname, self._hash = pathname, hash_value
        self.history.append(self.href)

        if old_hash != hash_value:
            logger.debug(f"Hash changed: {old_hash!r} -> {hash_value!r}")
            self._notify(self.href)

    @contextmanager
    def deferred(self) -> Iterator[None]:
        """Queue notifications raised inside the block and deliver them after.

        Listeners added inside the block receive the held notifications.
        """
        self._held += 1
        try:
            yield
        except BaseException:
            self._held -= 1
            if not self._held:
                self._pending.clear()
            raise
        self._held -= 1
        if not self._held and self._pending and not self._delivering:
            self._deliver()

    def _notify(self, href: str) -> None:
        self._pending.append(href)
        if self._delivering or self._held:
            return
        self._deliver()

    def _deliver(self) -> None:
        self._delivering = True
        try:
            while self._pending:
                self._pending.popleft()
                for listener in list(self._listeners):
                    listener()
        finally:
            self._delivering = False
            self._pending.clear()


__all__ = [
    "NavigationAdapter",
    "MemoryNavigation",
    "Listener",
]
