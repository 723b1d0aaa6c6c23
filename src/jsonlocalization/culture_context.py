"""Request-scoped ambient culture.

The resource manager and string localizer take an explicit ``culture``
argument on every lookup. Callers that do not pass one get the ambient
culture from this module, which a host sets once per request (or task)
at its boundary:

    >>> with culture_scope("fr-FR"):
    ...     localizer["Hello"].value
    'Bonjour'

Backed by a ContextVar, so values are isolated per thread and per asyncio
task. When nothing has been set, the system culture is used.

Python 3.13+.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

from jsonlocalization.cultures import get_system_culture, normalize_culture

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "culture_scope",
    "get_current_culture",
    "reset_current_culture",
    "set_current_culture",
]

_current_culture: ContextVar[str | None] = ContextVar("jsonlocalization_culture", default=None)


def get_current_culture() -> str:
    """Return the ambient culture, falling back to the system culture."""
    culture = _current_culture.get()
    if culture is None:
        return get_system_culture()
    return culture


def set_current_culture(culture: str) -> Token[str | None]:
    """Set the ambient culture for the current context.

    Args:
        culture: Culture name (validated and normalized)

    Returns:
        Token accepted by reset_current_culture()

    Raises:
        ValueError: If culture is not a valid culture name
    """
    return _current_culture.set(normalize_culture(culture))


def reset_current_culture(token: Token[str | None]) -> None:
    """Restore the ambient culture that was active before set_current_culture()."""
    _current_culture.reset(token)


@contextmanager
def culture_scope(culture: str) -> Generator[str]:
    """Temporarily set the ambient culture.

    Yields:
        The normalized culture name
    """
    token = set_current_culture(culture)
    try:
        yield normalize_culture(culture)
    finally:
        reset_current_culture(token)
