"""Diagnostics for resource file loads.

The resource manager appends one ResourceLoadResult per file it touches,
including candidates that turned out to be absent and files re-read after a
change on disk. ``JsonResourceManager.get_load_summary()`` freezes them into
a LoadSummary:

    >>> summary = manager.get_load_summary()
    >>> summary
    LoadSummary(total=3, ok=2, not_found=0, errors=1)
    >>> [result.source_path for result in summary.get_errors()]
    ['/app/Resources/fr.json']

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from jsonlocalization.enums import LoadStatus
from jsonlocalization.resources.types import CultureName, ResourceName

__all__ = ["LoadSummary", "ResourceLoadResult"]


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Outcome of reading one JSON file for one cache entry.

    Attributes:
        resource_name: Logical resource name ("" in culture-based mode)
        culture: Culture named by the file
        status: SUCCESS, NOT_FOUND or ERROR
        source_path: Absolute path of the file
        key_count: Flattened keys read (0 unless SUCCESS)
        error: The parse or I/O error when status is ERROR
    """

    resource_name: ResourceName
    culture: CultureName
    status: LoadStatus
    source_path: str
    key_count: int = 0
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        return self.status is LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        return self.status is LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Snapshot of every load the manager attempted, oldest first."""

    results: tuple[ResourceLoadResult, ...]
    _by_status: Counter[LoadStatus] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_status", Counter(result.status for result in self.results)
        )

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return self._by_status[LoadStatus.SUCCESS]

    @property
    def not_found(self) -> int:
        return self._by_status[LoadStatus.NOT_FOUND]

    @property
    def errors(self) -> int:
        return self._by_status[LoadStatus.ERROR]

    @property
    def has_errors(self) -> bool:
        return LoadStatus.ERROR in self._by_status

    @property
    def total_keys(self) -> int:
        """Flattened keys read across all successful loads (reloads count again)."""
        return sum(result.key_count for result in self.results)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        return self.with_status(LoadStatus.ERROR)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        return self.with_status(LoadStatus.SUCCESS)

    def with_status(self, status: LoadStatus) -> tuple[ResourceLoadResult, ...]:
        """Results with one status, in load order."""
        return tuple(result for result in self.results if result.status is status)

    def get_by_culture(self, culture: CultureName) -> tuple[ResourceLoadResult, ...]:
        """Results for files that feed one culture's entry."""
        return tuple(result for result in self.results if result.culture == culture)

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, ok={self.successful}, "
            f"not_found={self.not_found}, errors={self.errors})"
        )
