"""Type aliases and keys for the resource domain.

Python 3.13+. Zero external dependencies.
"""

from typing import NamedTuple

__all__ = [
    "CultureName",
    "ResourceKey",
    "ResourceName",
    "ResourceSet",
]

type CultureName = str
"""Canonical culture name (e.g., 'fr-FR', 'zh-Hans'); '' is the invariant culture."""

type ResourceName = str
"""Logical resource name: '' in culture-based mode, a dotted name otherwise."""

type ResourceSet = dict[str, str]
"""Flattened key -> value table for one (resource name, culture) pair."""


class ResourceKey(NamedTuple):
    """Identifies one cached resource set."""

    resource_name: ResourceName
    culture: CultureName

    def __str__(self) -> str:
        if self.resource_name:
            return f"{self.resource_name}.{self.culture}"
        return self.culture
