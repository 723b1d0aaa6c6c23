"""Culture name utilities: normalization, parent chains and system detection.

Culture names are BCP-47 style identifiers ("fr-FR", "zh-Hans-CN"). POSIX
spelling ("fr_FR") is accepted at the boundary and normalized to hyphens,
because resource files on disk are named with hyphens (Resources/fr-FR.json).

Parent chains follow CLDR: the parent exceptions shipped with Babel are
consulted first (es-MX -> es-419), otherwise the last subtag is dropped.
The chain always ends before the invariant culture ("").

Python 3.13+. External dependency: Babel (CLDR data).
"""

from __future__ import annotations

import functools
import os

from babel.core import get_global, parse_locale

from jsonlocalization.constants import INVARIANT_CULTURE

__all__ = [
    "clear_culture_cache",
    "get_culture_chain",
    "get_language_prefix",
    "get_parent_culture",
    "get_system_culture",
    "is_valid_culture",
    "normalize_culture",
]

# CLDR marks some parents as "root"; for resource lookup that is the invariant culture.
_CLDR_ROOT = "root"

_UNSAFE_CHARACTERS = frozenset("./\\ \t\r\n")


@functools.lru_cache(maxsize=256)
def normalize_culture(culture: str) -> str:
    """Return the canonical spelling of a culture name.

    Language is lowercased, script titlecased and territory uppercased, so
    "FR_fr" and "fr-FR" address the same resource file. The invariant
    culture ("") is returned unchanged, and CLDR's "root" maps to it.

    Args:
        culture: Culture name in BCP-47 or POSIX form

    Returns:
        Canonical hyphenated culture name

    Raises:
        TypeError: If culture is not a string
        ValueError: If culture is not a syntactically valid identifier

    Example:
        >>> normalize_culture("fr_fr")
        'fr-FR'
        >>> normalize_culture("zh-hans-cn")
        'zh-Hans-CN'
    """
    if not isinstance(culture, str):
        msg = f"Culture must be a string, got {type(culture).__name__}"  # type: ignore[unreachable]
        raise TypeError(msg)
    if culture == INVARIANT_CULTURE or culture.lower() == _CLDR_ROOT:
        return INVARIANT_CULTURE
    if _UNSAFE_CHARACTERS.intersection(culture):
        msg = f"Invalid culture name: {culture!r}"
        raise ValueError(msg)

    parts = parse_locale(culture.replace("_", "-"), sep="-")
    language, territory, script, variant = parts[:4]
    return "-".join(part for part in (language, script, territory, variant) if part)


def is_valid_culture(culture: str) -> bool:
    """Check whether a string is a syntactically valid, non-invariant culture name."""
    if not culture:
        return False
    try:
        return normalize_culture(culture) != INVARIANT_CULTURE
    except ValueError:
        return False


@functools.lru_cache(maxsize=256)
def get_parent_culture(culture: str) -> str:
    """Get the parent of a culture.

    Args:
        culture: Culture name (any accepted spelling)

    Returns:
        Parent culture name, or "" when the parent is the invariant culture

    Example:
        >>> get_parent_culture("fr-FR")
        'fr'
        >>> get_parent_culture("es-MX")
        'es-419'
        >>> get_parent_culture("fr")
        ''
    """
    normalized = normalize_culture(culture)
    if normalized == INVARIANT_CULTURE:
        return INVARIANT_CULTURE

    parent_exceptions: dict[str, str] = get_global("parent_exceptions")
    parent = parent_exceptions.get(normalized.replace("-", "_"))
    if parent is not None:
        if parent == _CLDR_ROOT:
            return INVARIANT_CULTURE
        return normalize_culture(parent)

    head, _, _ = normalized.rpartition("-")
    return head


@functools.lru_cache(maxsize=256)
def get_culture_chain(culture: str) -> tuple[str, ...]:
    """Get the fallback chain of a culture, most specific first.

    The invariant culture is never part of the chain.

    Thread-safe via lru_cache internal locking.

    Example:
        >>> get_culture_chain("zh-Hans-CN")
        ('zh-Hans-CN', 'zh-Hans', 'zh')
        >>> get_culture_chain("")
        ()
    """
    chain: list[str] = []
    current = normalize_culture(culture)
    while current != INVARIANT_CULTURE and current not in chain:
        chain.append(current)
        current = get_parent_culture(current)
    return tuple(chain)


def get_language_prefix(culture: str) -> str:
    """Get the language subtag used to glob type-based resource files.

    Example:
        >>> get_language_prefix("fr-FR")
        'fr'
    """
    normalized = normalize_culture(culture)
    return normalized.split("-", 1)[0]


def get_system_culture(*, raise_on_failure: bool = False) -> str:
    """Culture of the running process, used when no ambient culture is set.

    Candidates are tried in order: the OS locale reported by
    ``locale.getlocale()``, then $LC_ALL, $LC_MESSAGES and $LANG. Encoding and
    modifier suffixes ("fr_FR.UTF-8@euro") are dropped; "C" and "POSIX" never
    match.

    Args:
        raise_on_failure: If True, raise RuntimeError when the culture cannot be
            determined. If False (default), return "en-US" as fallback.

    Returns:
        Detected culture in canonical hyphenated form

    Raises:
        RuntimeError: If raise_on_failure is True and no culture is detectable.
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str] = []
    try:
        system_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        system_locale = None
    if system_locale:
        candidates.append(system_locale)
    candidates.extend(os.environ.get(var, "") for var in ("LC_ALL", "LC_MESSAGES", "LANG"))

    for candidate in candidates:
        code = candidate.split(".")[0].split("@")[0]
        if code and code not in ("C", "POSIX") and is_valid_culture(code):
            return normalize_culture(code)

    if raise_on_failure:
        msg = "No usable culture in the OS locale or in LC_ALL, LC_MESSAGES or LANG"
        raise RuntimeError(msg)

    return "en-US"


def clear_culture_cache() -> None:
    """Clear the memoized culture normalization and parent chains."""
    normalize_culture.cache_clear()
    get_parent_culture.cache_clear()
    get_culture_chain.cache_clear()
