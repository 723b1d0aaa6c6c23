"""Result type of localizer lookups.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["LocalizedString"]


@dataclass(frozen=True, slots=True)
class LocalizedString:
    """A resolved (or fallback) localized value.

    ``str(localized)`` is the value, so instances can be used directly in
    string formatting.

    Attributes:
        name: Localization key that was requested
        value: Resolved value, or the key itself when not found
        found: False when the value is the key fallback
        searched_location: Resource file path the key was looked up in
    """

    name: str
    value: str
    found: bool = True
    searched_location: str | None = None

    @property
    def resource_not_found(self) -> bool:
        """True when the value is the key fallback."""
        return not self.found

    def __str__(self) -> str:
        return self.value
