"""String localizers and their names provider.

Python 3.13+.
"""

from jsonlocalization.localizer.localized_string import LocalizedString
from jsonlocalization.localizer.string_localizer import JsonStringLocalizer
from jsonlocalization.localizer.string_provider import JsonStringProvider, ResourceStringProvider

__all__ = [
    "JsonStringLocalizer",
    "JsonStringProvider",
    "LocalizedString",
    "ResourceStringProvider",
]
