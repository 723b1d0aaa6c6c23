"""Tests for JsonLocalizationOptions validation and path resolution.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from jsonlocalization.enums import MissingLocalizationBehavior, ResourcesType
from jsonlocalization.options import JsonLocalizationOptions


class TestDefaults:
    def test_defaults(self) -> None:
        options = JsonLocalizationOptions()
        assert options.resources_path == "Resources"
        assert options.additional_resources_paths == ()
        assert options.resources_type is ResourcesType.TYPE_BASED
        assert options.missing_localization_behavior is MissingLocalizationBehavior.IGNORE
        assert options.fallback_to_parent_cultures is True
        assert options.watch_files is True

    def test_frozen(self) -> None:
        options = JsonLocalizationOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.resources_path = "Other"  # type: ignore[misc]


class TestResourcePaths:
    """The three ways of configuring roots normalize to the same tuple."""

    def test_single_path(self) -> None:
        assert JsonLocalizationOptions(resources_path="A").all_resources_paths == ("A",)

    def test_sequence_of_paths(self) -> None:
        options = JsonLocalizationOptions(resources_path=["A", "B"])
        assert options.resources_path == ("A", "B")
        assert options.all_resources_paths == ("A", "B")

    def test_additional_paths_follow_primary(self) -> None:
        options = JsonLocalizationOptions(resources_path="A", additional_resources_paths=["B", "C"])
        assert options.all_resources_paths == ("A", "B", "C")

    def test_additional_path_as_string(self) -> None:
        options = JsonLocalizationOptions(additional_resources_paths="B")  # type: ignore[arg-type]
        assert options.all_resources_paths == ("Resources", "B")

    def test_duplicates_removed_in_order(self) -> None:
        options = JsonLocalizationOptions(
            resources_path=["A", "B"], additional_resources_paths=["A"]
        )
        assert options.all_resources_paths == ("A", "B")

    def test_no_paths_rejected(self) -> None:
        with pytest.raises(ValueError, match="At least one resources path"):
            JsonLocalizationOptions(resources_path=[])

    def test_blank_path_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty strings"):
            JsonLocalizationOptions(resources_path=["A", " "])

    def test_resolve_against_base_directory(self, tmp_path: Path) -> None:
        options = JsonLocalizationOptions(
            resources_path="Resources", additional_resources_paths=["Shared"],
            base_directory=str(tmp_path),
        )
        assert options.resolve_paths() == (
            (tmp_path / "Resources").resolve(),
            (tmp_path / "Shared").resolve(),
        )

    def test_resolve_explicit_paths(self, tmp_path: Path) -> None:
        options = JsonLocalizationOptions(base_directory=str(tmp_path))
        assert options.resolve_paths(["i18n"]) == ((tmp_path / "i18n").resolve(),)

    def test_resolve_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert JsonLocalizationOptions().resolve_paths() == ((tmp_path / "Resources").resolve(),)


class TestEnumOptions:
    def test_string_values_coerced(self) -> None:
        options = JsonLocalizationOptions(
            resources_type="culture_based",  # type: ignore[arg-type]
            missing_localization_behavior="throw_exception",  # type: ignore[arg-type]
        )
        assert options.resources_type is ResourcesType.CULTURE_BASED
        assert options.missing_localization_behavior is MissingLocalizationBehavior.THROW_EXCEPTION

    def test_unknown_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            JsonLocalizationOptions(
                missing_localization_behavior="explode"  # type: ignore[arg-type]
            )


class TestFromMapping:
    def test_from_mapping(self) -> None:
        options = JsonLocalizationOptions.from_mapping(
            {
                "resources_path": "i18n",
                "resources_type": "culture_based",
                "fallback_to_parent_cultures": False,
            }
        )
        assert options.resources_path == "i18n"
        assert options.resources_type is ResourcesType.CULTURE_BASED
        assert options.fallback_to_parent_cultures is False

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown localization options: resource_path"):
            JsonLocalizationOptions.from_mapping({"resource_path": "typo"})
