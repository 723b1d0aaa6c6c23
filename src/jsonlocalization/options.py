"""Configuration for JSON localization.

Provides a single frozen dataclass that encapsulates every recognized
option. The resource root can be given as a single path, a sequence of
paths, or a primary path plus additional paths; all three are equivalent
once normalized through ``all_resources_paths``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonlocalization.constants import DEFAULT_RESOURCES_PATH
from jsonlocalization.enums import MissingLocalizationBehavior, ResourcesType

__all__ = ["JsonLocalizationOptions"]


@dataclass(frozen=True, slots=True)
class JsonLocalizationOptions:
    """Immutable configuration for JsonStringLocalizerFactory.

    All fields have sensible defaults; ``JsonLocalizationOptions()`` looks for
    type-based resources under ./Resources, falls back to parent cultures and
    ignores missing keys.

    Attributes:
        resources_path: Root directory, or sequence of root directories in
            precedence order (default: "Resources").
        additional_resources_paths: Extra roots searched after resources_path.
        resources_type: Type-based (one file set per type) or culture-based
            (one shared file per culture) addressing (default: TYPE_BASED).
        missing_localization_behavior: What to do when a key is not found
            (default: IGNORE).
        fallback_to_parent_cultures: Walk the culture parent chain when a key
            is absent for the exact culture (default: True).
        base_directory: Directory relative roots are resolved against
            (default: current working directory at resolution time).
        watch_files: Reload cached resources when their files change on disk
            (default: True).

    Example:
        >>> options = JsonLocalizationOptions(
        ...     resources_path="Resources",
        ...     additional_resources_paths=("SharedResources",),
        ...     missing_localization_behavior=MissingLocalizationBehavior.LOG_WARNING,
        ... )
        >>> options.all_resources_paths
        ('Resources', 'SharedResources')
    """

    resources_path: str | Sequence[str] = DEFAULT_RESOURCES_PATH
    additional_resources_paths: Sequence[str] = field(default=())
    resources_type: ResourcesType = ResourcesType.TYPE_BASED
    missing_localization_behavior: MissingLocalizationBehavior = MissingLocalizationBehavior.IGNORE
    fallback_to_parent_cultures: bool = True
    base_directory: str | None = None
    watch_files: bool = True

    def __post_init__(self) -> None:
        """Validate and normalize values at construction time.

        Raises:
            ValueError: If no resource path is configured, a path is empty, or
                an enum option has an unknown value.
        """
        if isinstance(self.resources_path, str):
            primary: tuple[str, ...] = (self.resources_path,)
        else:
            primary = tuple(self.resources_path)
        if isinstance(self.additional_resources_paths, str):
            additional: tuple[str, ...] = (self.additional_resources_paths,)
        else:
            additional = tuple(self.additional_resources_paths)

        if not primary and not additional:
            msg = "At least one resources path is required"
            raise ValueError(msg)
        for path in (*primary, *additional):
            if not isinstance(path, str) or not path.strip():
                msg = f"Resources paths must be non-empty strings, got {path!r}"
                raise ValueError(msg)

        object.__setattr__(
            self, "resources_path", primary[0] if len(primary) == 1 else primary
        )
        object.__setattr__(self, "additional_resources_paths", additional)
        object.__setattr__(self, "resources_type", ResourcesType(self.resources_type))
        object.__setattr__(
            self,
            "missing_localization_behavior",
            MissingLocalizationBehavior(self.missing_localization_behavior),
        )

    @property
    def all_resources_paths(self) -> tuple[str, ...]:
        """All configured roots in precedence order, duplicates removed."""
        if isinstance(self.resources_path, str):
            primary: tuple[str, ...] = (self.resources_path,)
        else:
            primary = tuple(self.resources_path)
        # dict.fromkeys() removes duplicates while maintaining insertion order
        return tuple(dict.fromkeys((*primary, *self.additional_resources_paths)))

    def resolve_paths(self, paths: Sequence[str] | None = None) -> tuple[Path, ...]:
        """Resolve roots against base_directory.

        Args:
            paths: Roots to resolve (default: all_resources_paths)

        Returns:
            Absolute paths in the same order
        """
        base = Path(self.base_directory) if self.base_directory else Path.cwd()
        roots = self.all_resources_paths if paths is None else paths
        return tuple(dict.fromkeys((base / root).resolve() for root in roots))

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> JsonLocalizationOptions:
        """Build options from a plain mapping (e.g. a parsed settings file).

        Unknown keys are rejected so that typos surface immediately.

        Raises:
            ValueError: If the mapping contains unknown keys or invalid values
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(config) - known)
        if unknown:
            msg = f"Unknown localization options: {', '.join(unknown)}"
            raise ValueError(msg)
        return cls(**config)
