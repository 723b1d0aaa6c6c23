"""Factory creating and memoizing string localizers.

JsonStringLocalizerFactory is the entry point for applications: it maps a
class (or a base name plus location) to a resource name, resolves resource
roots from JsonLocalizationOptions, and returns one shared
JsonStringLocalizer per ``(resource name, roots)`` pair.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import RLock
from typing import TYPE_CHECKING

from jsonlocalization.caching import ResourceNamesCache
from jsonlocalization.enums import ResourcesType
from jsonlocalization.localizer import JsonStringLocalizer
from jsonlocalization.naming import get_resource_location, resource_name_for_type, trim_prefix
from jsonlocalization.options import JsonLocalizationOptions
from jsonlocalization.resources.manager import JsonResourceManager

if TYPE_CHECKING:
    from pathlib import Path

    from jsonlocalization.caching import ResourceNamesCacheProtocol

__all__ = ["JsonStringLocalizerFactory", "LocalizerBuilder"]

logger = logging.getLogger(__name__)

type LocalizerBuilder = Callable[
    [JsonResourceManager, ResourceNamesCacheProtocol, JsonLocalizationOptions],
    JsonStringLocalizer,
]
"""Builds the localizer for a freshly created resource manager."""


class JsonStringLocalizerFactory:
    """Creates JsonStringLocalizer instances and caches them.

    Every localizer owns a JsonResourceManager (and its file watchers), so
    close the factory, or use it as a context manager, to release them.

    Example:
        >>> options = JsonLocalizationOptions(resources_path="Resources")
        >>> with JsonStringLocalizerFactory(options) as factory:
        ...     localizer = factory.create(Foo)
        ...     localizer.get("Hello", "fr-FR").value
        'Bonjour'
        >>> factory.create(Foo) is factory.create(Foo)
        True
    """

    __slots__ = ("_localizer_builder", "_localizers", "_lock", "_logger", "_names_cache", "options")

    def __init__(
        self,
        options: JsonLocalizationOptions | None = None,
        *,
        resource_names_cache: ResourceNamesCacheProtocol | None = None,
        localizer_builder: LocalizerBuilder | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            options: Localization options (default: JsonLocalizationOptions())
            resource_names_cache: Names cache shared by all created localizers
            localizer_builder: Replaces construction of JsonStringLocalizer,
                e.g. to return a subclass
            logger: Logger handed to localizers built by the default builder
        """
        self.options = JsonLocalizationOptions() if options is None else options
        self._names_cache: ResourceNamesCacheProtocol = (
            ResourceNamesCache() if resource_names_cache is None else resource_names_cache
        )
        self._localizer_builder: LocalizerBuilder = (
            self._build_localizer if localizer_builder is None else localizer_builder
        )
        self._logger = logger
        self._localizers: dict[str, JsonStringLocalizer] = {}
        self._lock = RLock()

    def create(self, resource_source: type) -> JsonStringLocalizer:
        """Get the localizer for a class.

        Args:
            resource_source: Class whose module path and name select the
                resource files (ignored for culture-based resources)

        Raises:
            TypeError: If resource_source is not a class
        """
        if not isinstance(resource_source, type):
            msg = f"resource_source must be a class, got {type(resource_source).__name__}"
            raise TypeError(msg)

        resource_name = ""
        if self.options.resources_type is ResourcesType.TYPE_BASED:
            resource_name = resource_name_for_type(resource_source)
        return self._get_or_create(resource_name, self._resolve_roots(resource_source.__module__))

    def create_from_base_name(self, base_name: str, location: str) -> JsonStringLocalizer:
        """Get the localizer for a dotted base name.

        Args:
            base_name: Fully qualified resource base name ("myapp.models.Foo");
                empty selects the shared culture-based localizer
            location: Package name whose prefix is trimmed from base_name

        Raises:
            TypeError: If base_name or location is None
        """
        if base_name is None or location is None:
            msg = "base_name and location must not be None"  # type: ignore[unreachable]
            raise TypeError(msg)

        resource_name = ""
        if base_name and self.options.resources_type is ResourcesType.TYPE_BASED:
            resource_name = trim_prefix(base_name, location)
        return self._get_or_create(resource_name, self._resolve_roots(location))

    def _resolve_roots(self, module_name: str) -> tuple[Path, ...]:
        location = get_resource_location(module_name) if module_name else None
        if location is not None:
            return self.options.resolve_paths((location,))
        return self.options.resolve_paths()

    def _get_or_create(self, resource_name: str, roots: tuple[Path, ...]) -> JsonStringLocalizer:
        cache_key = f"B={resource_name},L={';'.join(str(root) for root in roots)}"
        localizer = self._localizers.get(cache_key)
        if localizer is not None:
            return localizer

        with self._lock:
            # Double-check: a manager owns watchers, so build at most one per key.
            localizer = self._localizers.get(cache_key)
            if localizer is None:
                manager = JsonResourceManager(
                    roots,
                    resource_name,
                    fallback_to_parent_cultures=self.options.fallback_to_parent_cultures,
                    watch_files=self.options.watch_files,
                )
                localizer = self._localizer_builder(manager, self._names_cache, self.options)
                self._localizers[cache_key] = localizer
                logger.debug("Created localizer %s", cache_key)
        return localizer

    def _build_localizer(
        self,
        resource_manager: JsonResourceManager,
        resource_names_cache: ResourceNamesCacheProtocol,
        options: JsonLocalizationOptions,
    ) -> JsonStringLocalizer:
        return JsonStringLocalizer(
            resource_manager,
            resource_names_cache,
            missing_localization_behavior=options.missing_localization_behavior,
            logger=self._logger,
        )

    def close(self) -> None:
        """Stop the file watchers of every created localizer and forget them."""
        with self._lock:
            localizers = tuple(self._localizers.values())
            self._localizers.clear()
        for localizer in localizers:
            localizer.resource_manager.close()

    def __len__(self) -> int:
        return len(self._localizers)

    def __enter__(self) -> JsonStringLocalizerFactory:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"JsonStringLocalizerFactory(resources_type={self.options.resources_type.value!r}, "
            f"localizers={len(self._localizers)})"
        )
