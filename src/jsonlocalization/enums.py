"""Enumerations for jsonlocalization type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so configuration mappings can carry
plain strings ("ignore", "type_based") and still compare equal.

Python 3.13+.
"""

from enum import StrEnum


class ResourcesType(StrEnum):
    """Addressing mode for resource files.

    StrEnum provides automatic string conversion: str(ResourcesType.TYPE_BASED) == "type_based"
    """

    CULTURE_BASED = "culture_based"
    """One shared file per culture: Resources/fr-FR.json"""

    TYPE_BASED = "type_based"
    """One file per (type, culture): Resources/Models/Foo.fr-FR.json"""


class MissingLocalizationBehavior(StrEnum):
    """Behavior when a key cannot be resolved for the requested culture."""

    IGNORE = "ignore"
    """Use the key as the value (default)."""

    LOG_WARNING = "log_warning"
    """Log a warning, then use the key as the value."""

    THROW_EXCEPTION = "throw_exception"
    """Raise MissingLocalizationError."""


class LoadStatus(StrEnum):
    """Outcome of loading a single resource file."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


__all__ = [
    "LoadStatus",
    "MissingLocalizationBehavior",
    "ResourcesType",
]
