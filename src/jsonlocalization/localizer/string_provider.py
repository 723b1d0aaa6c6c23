"""Enumeration of all resource names available for a culture.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from jsonlocalization.errors import MissingManifestError
from jsonlocalization.resources.types import CultureName, ResourceKey

if TYPE_CHECKING:
    from jsonlocalization.caching import ResourceNamesCacheProtocol
    from jsonlocalization.resources.manager import JsonResourceManager

__all__ = ["JsonStringProvider", "ResourceStringProvider"]

logger = logging.getLogger(__name__)


class ResourceStringProvider(Protocol):
    """Lists the resource keys defined for one culture."""

    def get_all_resource_strings(
        self, culture: CultureName, throw_on_missing: bool
    ) -> list[str] | None:
        """Return the keys of the culture's own resource set.

        Raises:
            MissingManifestError: If the set is absent and throw_on_missing is set
        """


class JsonStringProvider:
    """Names provider backed by a JsonResourceManager and a names cache.

    Only the exact culture is consulted; callers wanting parent cultures walk
    the chain themselves. Results are memoized in the names cache and dropped
    when the manager reloads the underlying set.
    """

    __slots__ = ("_cache_keys", "_manager", "_names_cache")

    def __init__(
        self,
        resource_names_cache: ResourceNamesCacheProtocol,
        resource_manager: JsonResourceManager,
    ) -> None:
        self._names_cache = resource_names_cache
        self._manager = resource_manager
        self._cache_keys: dict[CultureName, str] = {}
        resource_manager.add_reload_listener(self._on_reload)

    def _cache_key(self, culture: CultureName) -> str:
        key = self._cache_keys.get(culture)
        if key is None:
            roots = ";".join(str(root) for root in self._manager.resources_paths)
            key = (
                f"culture={culture};resource_name={self._manager.resource_name};"
                f"roots={roots}"
            )
            self._cache_keys[culture] = key
        return key

    def get_all_resource_strings(
        self, culture: CultureName, throw_on_missing: bool
    ) -> list[str] | None:
        """List the keys of one culture's resource set.

        Args:
            culture: Culture whose own set is listed (no parent fallback)
            throw_on_missing: Raise instead of returning None for a missing set

        Returns:
            Keys in file order, or None when the culture has no resource set

        Raises:
            MissingManifestError: If the set is absent and throw_on_missing is set
        """

        def read_names(_cache_key: str) -> list[str] | None:
            resource_set = self._manager.get_resource_set(culture, try_parents=False)
            if resource_set is None:
                logger.debug("No resource set for culture '%s'", culture)
                return None
            # copy() is atomic with respect to a concurrent reload
            return list(resource_set.copy())

        names = self._names_cache.get_or_add(self._cache_key(culture), read_names)
        if names is None and throw_on_missing:
            raise MissingManifestError(culture, self._manager.resource_name)
        return names

    def _on_reload(self, key: ResourceKey) -> None:
        self.invalidate(key.culture)

    def invalidate(self, culture: CultureName | None = None) -> None:
        """Drop cached names for one culture, or for every culture seen so far."""
        cultures = tuple(self._cache_keys) if culture is None else (culture,)
        for name in cultures:
            self._names_cache.discard(self._cache_key(name))
