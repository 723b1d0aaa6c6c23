"""String localizer over a JsonResourceManager.

JsonStringLocalizer is the lookup surface applications use: it resolves a
key for a culture (walking parent cultures through the manager), applies
positional formatting, enumerates every available string, and applies the
configured policy when a key cannot be resolved.

Missing-key policy:
    IGNORE          the key itself is returned as the value (found=False)
    LOG_WARNING     same as IGNORE, plus a warning log record
    THROW_EXCEPTION MissingLocalizationError on every failed lookup

Unresolvable ``(name, culture)`` pairs are remembered in a negative cache so
repeated misses skip the manager. The negative cache is emptied whenever the
manager reloads a resource set, so keys added to a file on disk become
visible without restarting.

Python 3.13+.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING

from jsonlocalization.caching import ResourceNamesCache
from jsonlocalization.culture_context import get_current_culture
from jsonlocalization.cultures import get_culture_chain, normalize_culture
from jsonlocalization.enums import MissingLocalizationBehavior
from jsonlocalization.errors import (
    LocalizationFormatError,
    MissingLocalizationError,
    MissingManifestError,
)
from jsonlocalization.localizer.localized_string import LocalizedString
from jsonlocalization.localizer.string_provider import JsonStringProvider

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from jsonlocalization.caching import ResourceNamesCacheProtocol
    from jsonlocalization.localizer.string_provider import ResourceStringProvider
    from jsonlocalization.resources.manager import JsonResourceManager
    from jsonlocalization.resources.types import CultureName, ResourceKey

__all__ = ["JsonStringLocalizer"]


class JsonStringLocalizer:
    """Resolves localized strings for one resource name.

    Thread Safety:
        All lookups may run concurrently. The negative cache is guarded by a
        lock for writes; reads are plain set membership tests.

    Example:
        >>> manager = JsonResourceManager("Resources", "Models.Foo")
        >>> localizer = JsonStringLocalizer(manager)
        >>> localizer.get("Hello", "fr-FR").value
        'Bonjour'
        >>> localizer.format("Greeting", "World", culture="fr-FR").value
        'Bonjour, World'
        >>> with culture_scope("fr-FR"):
        ...     str(localizer["Hello"])
        'Bonjour'
    """

    __slots__ = (
        "_logger",
        "_manager",
        "_missing",
        "_missing_behavior",
        "_missing_generation",
        "_missing_lock",
        "_provider",
    )

    def __init__(
        self,
        resource_manager: JsonResourceManager,
        resource_names_cache: ResourceNamesCacheProtocol | None = None,
        *,
        string_provider: ResourceStringProvider | None = None,
        missing_localization_behavior: MissingLocalizationBehavior = (
            MissingLocalizationBehavior.IGNORE
        ),
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the localizer.

        Args:
            resource_manager: Source of resource sets and single strings
            resource_names_cache: Names cache shared with other localizers
                (default: a private ResourceNamesCache)
            string_provider: Lists the keys of a culture (default: a
                JsonStringProvider over the manager and names cache)
            missing_localization_behavior: Policy for unresolvable keys
            logger: Logger for lookup traces and missing-key warnings
        """
        self._manager = resource_manager
        if string_provider is None:
            names_cache = (
                ResourceNamesCache() if resource_names_cache is None else resource_names_cache
            )
            string_provider = JsonStringProvider(names_cache, resource_manager)
        self._provider = string_provider
        self._missing_behavior = MissingLocalizationBehavior(missing_localization_behavior)
        self._logger = logger or logging.getLogger(__name__)
        self._missing: set[tuple[str, CultureName]] = set()
        self._missing_lock = Lock()
        # Bumped on every reload; a miss observed before a reload is not cached
        self._missing_generation = 0
        resource_manager.add_reload_listener(self._on_reload)

    @property
    def resource_manager(self) -> JsonResourceManager:
        """The manager this localizer reads from."""
        return self._manager

    @property
    def missing_localization_behavior(self) -> MissingLocalizationBehavior:
        """Policy applied when a key cannot be resolved."""
        return self._missing_behavior

    def get(self, name: str, culture: CultureName | None = None) -> LocalizedString:
        """Look up a localized string.

        Args:
            name: Flattened resource key
            culture: Culture to resolve for; None uses the ambient culture

        Returns:
            The resolved string, or the key itself with found=False

        Raises:
            TypeError: If name is None
            ValueError: If culture is not a valid culture name
            MissingLocalizationError: If the key is missing and the policy is
                THROW_EXCEPTION
        """
        if name is None:
            msg = "name must not be None"  # type: ignore[unreachable]
            raise TypeError(msg)

        culture = self._resolve_culture(culture)
        value = self._get_string_safely(name, culture)
        location = self._manager.describe_location(culture)
        if value is None:
            self._handle_missing(name, culture, location)
            return LocalizedString(name, name, found=False, searched_location=location)
        return LocalizedString(name, value, found=True, searched_location=location)

    def __getitem__(self, name: str) -> LocalizedString:
        return self.get(name)

    def format(
        self, name: str, *args: object, culture: CultureName | None = None
    ) -> LocalizedString:
        """Look up a string and substitute positional arguments into it.

        The resolved value (or the key, when missing under a non-throwing
        policy) is used as a ``str.format`` template: ``"Hello, {0}"``.

        Raises:
            LocalizationFormatError: If the template does not accept the arguments
            MissingLocalizationError: If the key is missing and the policy is
                THROW_EXCEPTION
        """
        localized = self.get(name, culture)
        try:
            value = localized.value.format(*args)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            msg = f"Cannot format localized string '{name}' with {len(args)} argument(s): {e}"
            raise LocalizationFormatError(msg, name=name, template=localized.value) from e
        return LocalizedString(
            name, value, found=localized.found, searched_location=localized.searched_location
        )

    def get_all_strings(
        self, include_parent_cultures: bool, culture: CultureName | None = None
    ) -> Iterator[LocalizedString]:
        """Enumerate every string available for a culture.

        Key names are collected eagerly; values are resolved lazily as the
        iterator is consumed, each with the normal fallback-aware lookup. The
        missing-key policy is not applied to enumerated keys.

        Args:
            include_parent_cultures: Also list keys defined only by parent
                cultures of ``culture``
            culture: Culture to enumerate; None uses the ambient culture

        Raises:
            ValueError: If culture is not a valid culture name
            MissingManifestError: If no resource set exists and the policy is
                THROW_EXCEPTION
        """
        culture = self._resolve_culture(culture)
        throw_on_missing = self._missing_behavior is MissingLocalizationBehavior.THROW_EXCEPTION

        if include_parent_cultures:
            names: Iterable[str] = self._names_from_culture_hierarchy(culture, throw_on_missing)
        else:
            names = self._provider.get_all_resource_strings(culture, throw_on_missing) or ()

        return self._iter_strings(tuple(names), culture)

    def _iter_strings(
        self, names: tuple[str, ...], culture: CultureName
    ) -> Iterator[LocalizedString]:
        location = self._manager.describe_location(culture)
        for name in names:
            value = self._get_string_safely(name, culture)
            yield LocalizedString(
                name,
                name if value is None else value,
                found=value is not None,
                searched_location=location,
            )

    def _names_from_culture_hierarchy(
        self, culture: CultureName, throw_on_missing: bool
    ) -> list[str]:
        """Union of key names over the culture chain, nearest culture first."""
        names: dict[str, None] = {}
        found_any = False
        for current in get_culture_chain(culture):
            culture_names = self._provider.get_all_resource_strings(current, throw_on_missing=False)
            if culture_names is None:
                continue
            found_any = True
            names.update(dict.fromkeys(culture_names))

        if not found_any and throw_on_missing:
            raise MissingManifestError(culture, self._manager.resource_name)
        return list(names)

    @staticmethod
    def _resolve_culture(culture: CultureName | None) -> CultureName:
        if culture is None:
            return get_current_culture()
        return normalize_culture(culture)

    def _get_string_safely(self, name: str, culture: CultureName) -> str | None:
        """Resolve a key through the manager, consulting the negative cache first."""
        cache_key = (name, culture)
        if cache_key in self._missing:
            self._logger.debug("Key '%s' is known to be missing for culture '%s'", name, culture)
            return None

        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Searching key '%s' for culture '%s' in %s",
                name,
                culture,
                self._manager.describe_location(culture),
            )
        generation = self._missing_generation
        value = self._manager.get_string(name, culture)
        if value is None:
            with self._missing_lock:
                if generation == self._missing_generation:
                    self._missing.add(cache_key)
        return value

    def _handle_missing(self, name: str, culture: CultureName, location: str) -> None:
        match self._missing_behavior:
            case MissingLocalizationBehavior.THROW_EXCEPTION:
                raise MissingLocalizationError(name, culture, location)
            case MissingLocalizationBehavior.LOG_WARNING:
                self._logger.warning(
                    "Localization for key '%s' was not found for culture '%s' in '%s'",
                    name,
                    culture,
                    location,
                )
            case _:
                pass

    def _on_reload(self, key: ResourceKey) -> None:
        with self._missing_lock:
            self._missing_generation += 1
            self._missing.clear()
        self._logger.debug("Negative cache cleared after reload of '%s'", key)

    def __repr__(self) -> str:
        return (
            f"JsonStringLocalizer(resource_name={self._manager.resource_name!r}, "
            f"missing_localization_behavior={self._missing_behavior.value!r})"
        )
