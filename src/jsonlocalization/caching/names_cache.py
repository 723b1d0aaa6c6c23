"""Thread-safe cache of resource name lists.

Memoizes "all keys available for culture X" computations made by the
string provider. Values are stored once per name; concurrent misses may
compute the factory more than once, but every caller receives the first
stored list.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from threading import RLock
from typing import Protocol

__all__ = ["ResourceNamesCache", "ResourceNamesCacheProtocol"]

type NamesFactory = Callable[[str], list[str] | None]


class ResourceNamesCacheProtocol(Protocol):
    """Structural interface for resource name caches."""

    def get_or_add(self, name: str, factory: NamesFactory) -> list[str] | None:
        """Return the cached names for ``name``, computing them on a miss."""

    def discard(self, name: str) -> None:
        """Forget the cached names for ``name`` (no-op when absent)."""


class ResourceNamesCache:
    """Get-or-create cache mapping a cache key to a list of resource names.

    The factory runs outside the lock so slow directory scans never block
    readers of other keys. ``None`` results (no resource set for a culture)
    are returned but not stored, so a resource file created later is found.

    Example:
        >>> cache = ResourceNamesCache()
        >>> cache.get_or_add("fr-FR", lambda _: ["Hello", "Bye"])
        ['Hello', 'Bye']
        >>> cache.get_or_add("fr-FR", lambda _: ["ignored"])
        ['Hello', 'Bye']
    """

    __slots__ = ("_cache", "_lock")

    def __init__(self) -> None:
        self._cache: dict[str, list[str]] = {}
        self._lock = RLock()

    def get_or_add(self, name: str, factory: NamesFactory) -> list[str] | None:
        """Get the names stored under ``name`` or add the factory's result.

        Args:
            name: Cache key
            factory: Called with ``name`` on a miss

        Returns:
            The stored list, or None if the factory produced None
        """
        if name is None:
            msg = "name must not be None"  # type: ignore[unreachable]
            raise TypeError(msg)

        cached = self._cache.get(name)
        if cached is not None:
            return cached

        value = factory(name)
        if value is None:
            return None

        with self._lock:
            # First writer wins: a concurrent miss may have stored a value already.
            return self._cache.setdefault(name, value)

    def discard(self, name: str) -> None:
        """Forget the names stored under ``name``."""
        with self._lock:
            self._cache.pop(name, None)

    def clear(self) -> None:
        """Forget all cached names."""
        with self._lock:
            self._cache.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return f"ResourceNamesCache(size={len(self._cache)})"
