"""JSON resource loading, caching and change tracking.

Python 3.13+.
"""

from jsonlocalization.resources.loader import flatten_resource, load_json_resource
from jsonlocalization.resources.loading import LoadSummary, ResourceLoadResult
from jsonlocalization.resources.manager import JsonResourceManager
from jsonlocalization.resources.types import CultureName, ResourceKey, ResourceName, ResourceSet
from jsonlocalization.resources.watcher import JsonFileWatcher

__all__ = [
    "CultureName",
    "JsonFileWatcher",
    "JsonResourceManager",
    "LoadSummary",
    "ResourceKey",
    "ResourceLoadResult",
    "ResourceName",
    "ResourceSet",
    "flatten_resource",
    "load_json_resource",
]
