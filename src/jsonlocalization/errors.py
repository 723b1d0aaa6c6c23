"""Exception hierarchy for jsonlocalization.

Hierarchy:
    LocalizationError (base)
    ├─ MissingLocalizationError (key absent, THROW_EXCEPTION policy)
    ├─ MissingManifestError (no resource set at all for a culture)
    ├─ ResourceParseError (resource file is not a usable JSON object)
    └─ LocalizationFormatError (template substitution failed)

Soft conditions (a key missing under the IGNORE policy, a file that does
not exist) never raise; see JsonStringLocalizer and JsonResourceManager.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "LocalizationError",
    "LocalizationFormatError",
    "MissingLocalizationError",
    "MissingManifestError",
    "ResourceParseError",
]


class LocalizationError(Exception):
    """Base exception for all jsonlocalization errors."""


class MissingLocalizationError(LocalizationError):
    """A localization key could not be resolved.

    Raised only when the localizer is configured with
    MissingLocalizationBehavior.THROW_EXCEPTION.

    Attributes:
        key: The localization key that was not found
        culture: Culture name the lookup started from
        searched_location: Resource file path the key was searched in
    """

    def __init__(self, key: str, culture: str, searched_location: str) -> None:
        """Initialize MissingLocalizationError.

        Args:
            key: The localization key that was not found
            culture: Culture name the lookup started from
            searched_location: Resource file path the key was searched in
        """
        super().__init__(
            f"Localization for key '{key}' was not found for culture "
            f"'{culture}' in '{searched_location}'."
        )
        self.key = key
        self.culture = culture
        self.searched_location = searched_location


class MissingManifestError(LocalizationError, LookupError):
    """No resource set exists for a culture.

    Distinct from a key missing inside a resource set that was found.

    Attributes:
        culture: Culture name with no resource set
        resource_name: Logical resource name ("" in culture-based mode)
    """

    def __init__(self, culture: str, resource_name: str = "") -> None:
        """Initialize MissingManifestError.

        Args:
            culture: Culture name with no resource set
            resource_name: Logical resource name ("" in culture-based mode)
        """
        super().__init__(f"The manifest resource for the culture '{culture}' is missing.")
        self.culture = culture
        self.resource_name = resource_name


class ResourceParseError(LocalizationError, ValueError):
    """A resource file exists but cannot be turned into a flat key table.

    Attributes:
        path: Path of the offending file
    """

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class LocalizationFormatError(LocalizationError, ValueError):
    """Positional substitution into a localized template failed.

    Attributes:
        name: Localization key
        template: The template that could not be formatted
    """

    def __init__(self, message: str, *, name: str, template: str) -> None:
        super().__init__(message)
        self.name = name
        self.template = template
