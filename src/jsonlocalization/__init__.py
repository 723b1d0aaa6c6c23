"""jsonlocalization - JSON resource localization with culture fallback.

Resolves ``(culture, key)`` pairs to translated strings stored in JSON files,
walking the culture hierarchy (fr-FR -> fr -> invariant), caching parsed
resources per culture and reloading them when files change on disk.

Public API:
    JsonStringLocalizerFactory - Creates and caches localizers per type or base name
    JsonStringLocalizer - Key lookup, positional formatting, enumeration
    JsonResourceManager - File resolution, merging and per-culture caching
    JsonLocalizationOptions - Immutable configuration
    LocalizedString - Lookup result (name, value, found, searched_location)
    culture_scope - Context manager setting the ambient culture

Exceptions:
    LocalizationError - Base exception class
    MissingLocalizationError - Key not found (THROW_EXCEPTION policy)
    MissingManifestError - No resource set for a culture
    ResourceParseError - Resource file is not a usable JSON object
    LocalizationFormatError - Positional substitution failed

Submodules:
    jsonlocalization.resources - Loader, watcher, manager and load diagnostics
    jsonlocalization.caching - Resource names cache
    jsonlocalization.cultures - Culture normalization and parent chains
"""

from .culture_context import culture_scope, get_current_culture, set_current_culture
from .enums import MissingLocalizationBehavior, ResourcesType
from .errors import (
    LocalizationError,
    LocalizationFormatError,
    MissingLocalizationError,
    MissingManifestError,
    ResourceParseError,
)
from .factory import JsonStringLocalizerFactory
from .localizer import JsonStringLocalizer, LocalizedString
from .options import JsonLocalizationOptions
from .resources import JsonResourceManager

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("jsonlocalization")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "JsonLocalizationOptions",
    "JsonResourceManager",
    "JsonStringLocalizer",
    "JsonStringLocalizerFactory",
    "LocalizationError",
    "LocalizationFormatError",
    "LocalizedString",
    "MissingLocalizationBehavior",
    "MissingLocalizationError",
    "MissingManifestError",
    "ResourceParseError",
    "ResourcesType",
    "__version__",
    "culture_scope",
    "get_current_culture",
    "set_current_culture",
]
