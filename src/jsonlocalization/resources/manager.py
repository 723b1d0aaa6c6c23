"""Resource resolution and caching engine.

JsonResourceManager resolves which JSON files back a ``(resource name,
culture)`` pair, loads and merges them into a per-culture cache, serves
single-key and whole-set lookups with culture fallback, and reloads cache
entries when a watched file changes.

File resolution:
    Culture-based mode (empty resource name):
        {root}/{culture}.json
    Type-based mode (resource name "Models.Foo", culture "fr-FR"):
        {root}/Models.Foo.fr*.json        (dotted names only, tried first)
        {root}/Models/Foo.fr*.json        (directory descent)
    Every matched file feeds the entry of the culture named in its file
    name, so "Foo.fr.json" and "Foo.fr-FR.json" never collide.

Merge precedence:
    Roots are searched in configured order. The first root to provide a key
    wins; later roots only fill gaps.

Cache entry lifecycle:
    Unloaded -> Loaded -> (Invalidated -> Loaded)*
    Entries are created lazily, never evicted, and cleared in place then
    repopulated when one of their files changes.

Thread Safety:
    Loads and reloads are serialized by an internal RLock. Reads are plain
    dict lookups and never wait for a reload; a reader racing a reload may
    observe the old set, an empty set or the reloaded set.

Python 3.13+.
"""

from __future__ import annotations

import glob
import logging
from collections import deque
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING

from jsonlocalization.constants import INVARIANT_CULTURE, JSON_FILE_EXTENSION, MAX_LOAD_RESULTS
from jsonlocalization.culture_context import get_current_culture
from jsonlocalization.cultures import (
    get_culture_chain,
    get_language_prefix,
    is_valid_culture,
    normalize_culture,
)
from jsonlocalization.enums import LoadStatus
from jsonlocalization.errors import ResourceParseError
from jsonlocalization.resources.loader import load_json_resource
from jsonlocalization.resources.loading import LoadSummary, ResourceLoadResult
from jsonlocalization.resources.types import (
    CultureName,
    ResourceKey,
    ResourceName,
    ResourceSet,
)
from jsonlocalization.resources.watcher import JsonFileWatcher

if TYPE_CHECKING:
    from watchdog.observers.api import BaseObserver

__all__ = ["JsonResourceManager", "ReloadListener", "ResourceFileLoader"]

logger = logging.getLogger(__name__)

type ResourceFileLoader = Callable[[Path], ResourceSet]
"""Loads one file into a flat key table (missing file -> empty table)."""

type ReloadListener = Callable[[ResourceKey], None]
"""Called after a cache entry was reloaded, or a new file for it appeared."""


class JsonResourceManager:
    """Loads, merges and caches flattened JSON resources per culture.

    Example - type-based resources:
        >>> # Resources/Models/Foo.fr.json     {"Yes": "Oui"}
        >>> # Resources/Models/Foo.fr-FR.json  {"Hello": "Bonjour"}
        >>> manager = JsonResourceManager("Resources", "Models.Foo", watch_files=False)
        >>> manager.get_string("Hello", "fr-FR")
        'Bonjour'
        >>> manager.get_string("Yes", "fr-FR")  # falls back to fr
        'Oui'

    Example - culture-based resources over two roots:
        >>> manager = JsonResourceManager(["Resources", "Shared"])
        >>> manager.get_resource_set("fr-FR", try_parents=True)
        {'Hello': 'Bonjour', 'Yes': 'Oui', ...}

    Attributes:
        resource_name: Logical resource name ("" in culture-based mode)
        resources_paths: Resource roots in precedence order
        fallback_to_parent_cultures: Whether get_string walks parent cultures
    """

    __slots__ = (
        "_keys_by_path",
        "_load_count",
        "_load_results",
        "_loader",
        "_lock",
        "_probed",
        "_reload_listeners",
        "_resources",
        "_sources",
        "_watchers",
        "fallback_to_parent_cultures",
        "resource_name",
        "resources_paths",
    )

    def __init__(
        self,
        resources_paths: str | Path | Iterable[str | Path],
        resource_name: ResourceName | None = None,
        *,
        fallback_to_parent_cultures: bool = True,
        watch_files: bool = True,
        loader: ResourceFileLoader = load_json_resource,
        observer_factory: Callable[[], BaseObserver] | None = None,
    ) -> None:
        """Initialize the resource manager.

        Args:
            resources_paths: One root directory or several, in precedence order
            resource_name: Dotted logical resource name; empty or None selects
                culture-based mode
            fallback_to_parent_cultures: Walk the parent chain in get_string()
            watch_files: Start a JsonFileWatcher per existing root
            loader: Parses one file; injectable for instrumentation
            observer_factory: watchdog observer factory passed to each watcher

        Raises:
            ValueError: If no root is given or resource_name is unsafe
        """
        if isinstance(resources_paths, (str, Path)):
            raw_paths: tuple[str | Path, ...] = (resources_paths,)
        else:
            raw_paths = tuple(resources_paths)
        if not raw_paths:
            msg = "At least one resources path is required"
            raise ValueError(msg)

        self.resources_paths: tuple[Path, ...] = tuple(
            dict.fromkeys(Path(p).resolve() for p in raw_paths)
        )
        self.resource_name: ResourceName = self._validate_resource_name(resource_name or "")
        self.fallback_to_parent_cultures = fallback_to_parent_cultures

        self._loader = loader
        self._lock = RLock()
        self._resources: dict[ResourceKey, ResourceSet] = {}
        # Files feeding each entry, in root precedence order
        self._sources: dict[ResourceKey, list[Path]] = {}
        self._keys_by_path: dict[Path, ResourceKey] = {}
        # Cultures whose candidate files have already been searched for
        self._probed: set[CultureName] = set()
        self._load_results: deque[ResourceLoadResult] = deque(maxlen=MAX_LOAD_RESULTS)
        self._load_count = 0
        self._reload_listeners: list[ReloadListener] = []

        watchers: list[JsonFileWatcher] = []
        if watch_files:
            for root in self.resources_paths:
                if observer_factory is None:
                    watcher = JsonFileWatcher(root)
                else:
                    watcher = JsonFileWatcher(root, observer_factory=observer_factory)
                watcher.subscribe(self.notify_changed)
                watcher.start()
                watchers.append(watcher)
        self._watchers: tuple[JsonFileWatcher, ...] = tuple(watchers)

    @staticmethod
    def _validate_resource_name(resource_name: ResourceName) -> ResourceName:
        """Reject resource names that could escape the resource roots.

        Raises:
            ValueError: If the name has path separators, '..' or surrounding whitespace
        """
        if resource_name.strip() != resource_name:
            msg = f"Resource name contains leading/trailing whitespace: {resource_name!r}"
            raise ValueError(msg)
        if "/" in resource_name or "\\" in resource_name:
            msg = f"Path separators not allowed in resource name: '{resource_name}'"
            raise ValueError(msg)
        if ".." in resource_name or resource_name.startswith(".") or resource_name.endswith("."):
            msg = f"Empty name segments not allowed in resource name: '{resource_name}'"
            raise ValueError(msg)
        return resource_name

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def is_culture_based(self) -> bool:
        """True when resources are one shared file per culture."""
        return not self.resource_name

    @property
    def load_count(self) -> int:
        """Number of times a resource file was read from disk."""
        return self._load_count

    @property
    def is_watching(self) -> bool:
        """True if at least one root has live reload active."""
        return any(watcher.is_watching for watcher in self._watchers)

    def cached_keys(self) -> tuple[ResourceKey, ...]:
        """Keys of all resource sets currently held in the cache."""
        return tuple(self._resources)

    def get_load_summary(self) -> LoadSummary:
        """Summarize the most recent file loads, including reloads.

        At most MAX_LOAD_RESULTS results are kept; older ones are dropped.
        """
        with self._lock:
            return LoadSummary(results=tuple(self._load_results))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_resource_set(
        self, culture: CultureName | None, try_parents: bool
    ) -> Mapping[str, str] | None:
        """Get the resource set for a culture.

        Args:
            culture: Culture name; None uses the ambient culture
            try_parents: Merge the whole parent chain, nearest culture wins

        Returns:
            Without try_parents, a read-only live view of the exact culture's
            set. With try_parents, a new dict merged across the chain. None if
            no set exists for the exact culture (or for any culture in the
            chain when try_parents is set).

        Raises:
            ValueError: If culture is not a valid culture name
        """
        culture = self._resolve_culture(culture)

        if not try_parents:
            self._ensure_loaded(culture)
            resources = self._resources.get(ResourceKey(self.resource_name, culture))
            return None if resources is None else MappingProxyType(resources)

        merged: ResourceSet = {}
        found = False
        for current in get_culture_chain(culture):
            self._ensure_loaded(current)
            resources = self._resources.get(ResourceKey(self.resource_name, current))
            if resources is None:
                continue
            found = True
            # copy() is atomic with respect to a concurrent reload
            for key, value in resources.copy().items():
                merged.setdefault(key, value)
        return merged if found else None

    def get_string(self, name: str, culture: CultureName | None = None) -> str | None:
        """Get a single localized string.

        Walks from ``culture`` outward through its parents while
        fallback_to_parent_cultures is enabled and returns the first match.

        Args:
            name: Flattened resource key (e.g. "Book.Page.One")
            culture: Starting culture; None uses the ambient culture

        Returns:
            The value, or None if no culture in the searched chain has the key

        Raises:
            TypeError: If name is None
            ValueError: If culture is not a valid culture name
        """
        if name is None:
            msg = "name must not be None"  # type: ignore[unreachable]
            raise TypeError(msg)

        culture = self._resolve_culture(culture)
        chain = get_culture_chain(culture)
        if not self.fallback_to_parent_cultures:
            chain = chain[:1]

        for current in chain:
            self._ensure_loaded(current)
            resources = self._resources.get(ResourceKey(self.resource_name, current))
            if resources is not None:
                value = resources.get(name)
                if value is not None:
                    return value
        return None

    def describe_location(self, culture: CultureName | None = None) -> str:
        """Return the file path a culture's resources are (or would be) read from.

        Used for "searched location" diagnostics.
        """
        culture = self._resolve_culture(culture)
        sources = self._sources.get(ResourceKey(self.resource_name, culture))
        if sources:
            return str(sources[0])
        return str(self._candidate_path(self.resources_paths[0], culture))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_culture(culture: CultureName | None) -> CultureName:
        if culture is None:
            return get_current_culture()
        return normalize_culture(culture)

    def _candidate_path(self, root: Path, culture: CultureName) -> Path:
        if self.is_culture_based:
            return root / f"{culture}{JSON_FILE_EXTENSION}"
        return root / f"{self.resource_name}.{culture}{JSON_FILE_EXTENSION}"

    def _ensure_loaded(self, culture: CultureName) -> None:
        """Search every root for the culture's files once and merge them."""
        if culture == INVARIANT_CULTURE or culture in self._probed:
            return

        with self._lock:
            # Double-check: another thread may have finished the search meanwhile.
            if culture in self._probed:
                return
            for root in self.resources_paths:
                for path, file_culture in self._find_resource_files(root, culture):
                    self._merge_file(ResourceKey(self.resource_name, file_culture), path)
            self._probed.add(culture)

    def _find_resource_files(
        self, root: Path, culture: CultureName
    ) -> list[tuple[Path, CultureName]]:
        """List candidate files under one root with the culture each one feeds."""
        if self.is_culture_based:
            return [(self._candidate_path(root, culture), culture)]

        prefix = get_language_prefix(culture)
        files: list[Path] = []
        if "." in self.resource_name:
            files = self._glob_resource_files(root, self.resource_name, prefix)
        if not files:
            *directories, base_name = self.resource_name.split(".")
            files = self._glob_resource_files(root.joinpath(*directories), base_name, prefix)

        found: list[tuple[Path, CultureName]] = []
        for path in files:
            file_culture = path.stem.rpartition(".")[2]
            if not is_valid_culture(file_culture):
                logger.debug("Skipping %s: '%s' is not a culture name", path, file_culture)
                continue
            found.append((path, normalize_culture(file_culture)))
        return found

    @staticmethod
    def _glob_resource_files(directory: Path, base_name: str, prefix: str) -> list[Path]:
        if not directory.is_dir():
            return []
        pattern = f"{glob.escape(base_name)}.{glob.escape(prefix)}*{JSON_FILE_EXTENSION}"
        return sorted(path for path in directory.glob(pattern) if path.is_file())

    def _root_index(self, path: Path) -> int:
        for index, root in enumerate(self.resources_paths):
            if path.is_relative_to(root):
                return index
        return len(self.resources_paths)

    def _merge_file(self, key: ResourceKey, path: Path) -> None:
        """Merge one file into an entry unless it already feeds it. Lock held."""
        sources = self._sources.setdefault(key, [])
        if path in sources:
            return

        sources.append(path)
        sources.sort(key=self._root_index)
        self._keys_by_path[path] = key

        if sources[-1] != path:
            # A higher-precedence root appeared after the entry was built.
            self._reload_entry(key)
            return

        resources = self._read_file(key, path)
        if resources is None:
            return
        existing = self._resources.get(key)
        if existing is None:
            self._resources[key] = resources
        else:
            for name, value in resources.items():
                existing.setdefault(name, value)

    def _read_file(self, key: ResourceKey, path: Path) -> ResourceSet | None:
        """Read one file, recording the outcome. Failures count as absent. Lock held."""
        if not path.is_file():
            self._record(key, path, LoadStatus.NOT_FOUND)
            return None

        self._load_count += 1
        try:
            resources = self._loader(path)
        except (ResourceParseError, OSError) as e:
            logger.warning("Ignoring resource file %s: %s", path, e)
            self._record(key, path, LoadStatus.ERROR, error=e)
            return None

        self._record(key, path, LoadStatus.SUCCESS, key_count=len(resources))
        logger.info("Loaded %d resources for '%s' from %s", len(resources), key, path)
        return resources

    def _record(
        self,
        key: ResourceKey,
        path: Path,
        status: LoadStatus,
        *,
        key_count: int = 0,
        error: Exception | None = None,
    ) -> None:
        self._load_results.append(
            ResourceLoadResult(
                resource_name=key.resource_name,
                culture=key.culture,
                status=status,
                source_path=str(path),
                key_count=key_count,
                error=error,
            )
        )

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def add_reload_listener(self, listener: ReloadListener) -> None:
        """Register a callback invoked after an entry is reloaded."""
        with self._lock:
            self._reload_listeners.append(listener)

    def remove_reload_listener(self, listener: ReloadListener) -> None:
        """Unregister a reload callback (no-op if unknown)."""
        with self._lock:
            if listener in self._reload_listeners:
                self._reload_listeners.remove(listener)

    def notify_changed(self, path: str | Path) -> None:
        """Invalidate and reload the cache entry backed by a changed file.

        Called by the file watchers; may also be called directly. A file that
        does not feed any entry yet resets the search record, so new files are
        picked up by the next lookup.

        Args:
            path: Full path of the changed JSON file
        """
        changed = Path(path).resolve()
        key = self._keys_by_path.get(changed) or self._key_from_file_name(changed)

        with self._lock:
            if key is None or changed not in self._sources.get(key, ()):
                self._probed.clear()
                logger.debug("New resource file %s; cultures will be searched again", changed)
            else:
                self._reload_entry(key)
            listeners = tuple(self._reload_listeners)

        if key is None:
            return
        for listener in listeners:
            listener(key)

    def _key_from_file_name(self, path: Path) -> ResourceKey | None:
        """Derive the cache key implied by a file name, if it is one of ours."""
        stem = path.stem
        if self.is_culture_based:
            return ResourceKey("", normalize_culture(stem)) if is_valid_culture(stem) else None

        name, _, culture = stem.rpartition(".")
        short_name = self.resource_name.rpartition(".")[2]
        if name not in (self.resource_name, short_name) or not is_valid_culture(culture):
            return None
        return ResourceKey(self.resource_name, normalize_culture(culture))

    def _reload_entry(self, key: ResourceKey) -> None:
        """Clear an entry in place and repopulate it from its files. Lock held."""
        fresh: ResourceSet = {}
        loaded = False
        for source in self._sources.get(key, ()):
            resources = self._read_file(key, source)
            if resources is None:
                continue
            loaded = True
            for name, value in resources.items():
                fresh.setdefault(name, value)

        existing = self._resources.get(key)
        if existing is not None:
            existing.clear()
            existing.update(fresh)
        elif loaded:
            self._resources[key] = fresh
        logger.info("Reloaded resources for '%s' (%d keys)", key, len(fresh))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Stop all file watchers. Cached resources stay readable."""
        for watcher in self._watchers:
            watcher.close()
        with self._lock:
            self._reload_listeners.clear()

    def __enter__(self) -> JsonResourceManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        roots = ", ".join(str(root) for root in self.resources_paths)
        return (
            f"JsonResourceManager(resource_name={self.resource_name!r}, "
            f"roots=[{roots}], sets={len(self._resources)})"
        )
