"""Tests for JsonStringLocalizer lookup, formatting, enumeration and policies.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jsonlocalization.caching import ResourceNamesCache
from jsonlocalization.culture_context import culture_scope
from jsonlocalization.enums import MissingLocalizationBehavior
from jsonlocalization.errors import (
    LocalizationFormatError,
    MissingLocalizationError,
    MissingManifestError,
)
from jsonlocalization.localizer import JsonStringLocalizer, LocalizedString
from jsonlocalization.resources.manager import JsonResourceManager
from tests.helpers.resource_files import write_resource


@pytest.fixture
def manager(culture_resources: Path) -> JsonResourceManager:
    return JsonResourceManager(culture_resources, watch_files=False)


def make_localizer(
    manager: JsonResourceManager,
    behavior: MissingLocalizationBehavior = MissingLocalizationBehavior.IGNORE,
) -> JsonStringLocalizer:
    return JsonStringLocalizer(manager, missing_localization_behavior=behavior)


class TestGet:
    """Key lookup returning LocalizedString."""

    def test_found(self, manager: JsonResourceManager) -> None:
        localized = make_localizer(manager).get("Hello", "fr-FR")
        assert localized == LocalizedString(
            "Hello", "Bonjour", found=True, searched_location=manager.describe_location("fr-FR")
        )
        assert str(localized) == "Bonjour"
        assert not localized.resource_not_found

    def test_parent_fallback(self, manager: JsonResourceManager) -> None:
        assert make_localizer(manager).get("Yes", "fr-FR").value == "Oui"

    def test_nested_keys(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager)
        assert localizer.get("Book.Page.One", "fr-FR").value == "Page Un"
        assert localizer.get("Articles[0].Content", "fr-FR").value == "Contenu 1"

    def test_indexer_uses_ambient_culture(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager)
        with culture_scope("fr-FR"):
            assert localizer["Hello"].value == "Bonjour"
        with culture_scope("en-US"):
            assert localizer["Hello"].value == "Hello"

    def test_searched_location(self, manager: JsonResourceManager, culture_resources: Path) -> None:
        localized = make_localizer(manager).get("Hello", "fr-FR")
        assert localized.searched_location == str((culture_resources / "fr-FR.json").resolve())

    def test_none_name_rejected(self, manager: JsonResourceManager) -> None:
        with pytest.raises(TypeError, match="name must not be None"):
            make_localizer(manager).get(None, "fr-FR")  # type: ignore[arg-type]

    def test_invalid_culture_rejected(self, manager: JsonResourceManager) -> None:
        with pytest.raises(ValueError):
            make_localizer(manager).get("Hello", "fr/FR")


class TestFormat:
    def test_positional_substitution(self, manager: JsonResourceManager) -> None:
        localized = make_localizer(manager).format("Greeting", "Marie", culture="fr-FR")
        assert localized.value == "Bonjour, Marie"
        assert localized.found

    def test_other_culture(self, manager: JsonResourceManager) -> None:
        localized = make_localizer(manager).format("Greeting", "Bob", culture="en-US")
        assert localized.value == "Hello, Bob"

    def test_missing_key_formats_key(self, manager: JsonResourceManager) -> None:
        localized = make_localizer(manager).format("Hi {0}", "Ann", culture="fr-FR")
        assert localized.value == "Hi Ann"
        assert not localized.found

    def test_too_few_arguments(self, manager: JsonResourceManager) -> None:
        with pytest.raises(LocalizationFormatError) as exc_info:
            make_localizer(manager).format("Greeting", culture="fr-FR")
        assert exc_info.value.name == "Greeting"
        assert exc_info.value.template == "Bonjour, {0}"

    def test_malformed_template(self, tmp_path: Path) -> None:
        write_resource(tmp_path / "de.json", {"Broken": "Hallo {0"})
        localizer = make_localizer(JsonResourceManager(tmp_path, watch_files=False))
        with pytest.raises(LocalizationFormatError):
            localizer.format("Broken", "x", culture="de")

    @pytest.mark.parametrize("template", ["Hallo {0.missing}", "Hallo {0[1]}"])
    def test_attribute_and_item_access_failures(self, tmp_path: Path, template: str) -> None:
        write_resource(tmp_path / "de.json", {"Broken": template})
        localizer = make_localizer(JsonResourceManager(tmp_path, watch_files=False))
        with pytest.raises(LocalizationFormatError) as exc_info:
            localizer.format("Broken", 5, culture="de")
        assert exc_info.value.template == template


class TestMissingPolicy:
    """IGNORE, LOG_WARNING and THROW_EXCEPTION behavior."""

    def test_ignore(self, manager: JsonResourceManager, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            localized = make_localizer(manager).get("Missing", "fr-FR")
        assert localized.value == "Missing"
        assert localized.resource_not_found
        assert caplog.records == []

    def test_log_warning(
        self, manager: JsonResourceManager, caplog: pytest.LogCaptureFixture
    ) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.LOG_WARNING)
        with caplog.at_level(logging.WARNING):
            localized = localizer.get("Missing", "fr-FR")
        assert localized.value == "Missing"
        assert not localized.found
        assert "Localization for key 'Missing' was not found for culture 'fr-FR'" in caplog.text

    def test_log_warning_uses_injected_logger(self, manager: JsonResourceManager) -> None:
        records: list[logging.LogRecord] = []

        class Collect(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        custom = logging.getLogger("tests.custom_localizer")
        custom.addHandler(Collect())
        custom.setLevel(logging.WARNING)
        localizer = JsonStringLocalizer(
            manager,
            missing_localization_behavior=MissingLocalizationBehavior.LOG_WARNING,
            logger=custom,
        )
        localizer.get("Missing", "fr-FR")
        assert [record.levelno for record in records] == [logging.WARNING]

    def test_throw(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.THROW_EXCEPTION)
        with pytest.raises(MissingLocalizationError) as exc_info:
            localizer.get("Missing", "fr-FR")
        error = exc_info.value
        assert error.key == "Missing"
        assert error.culture == "fr-FR"
        assert error.searched_location == manager.describe_location("fr-FR")
        assert str(error) == (
            f"Localization for key 'Missing' was not found for culture 'fr-FR' "
            f"in '{error.searched_location}'."
        )

    def test_throw_repeats_on_negative_cache_hit(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.THROW_EXCEPTION)
        for _ in range(3):
            with pytest.raises(MissingLocalizationError):
                localizer.get("Missing", "fr-FR")

    def test_throw_from_format(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.THROW_EXCEPTION)
        with pytest.raises(MissingLocalizationError):
            localizer.format("Missing", 1, culture="fr-FR")

    def test_string_policy_value(self, manager: JsonResourceManager) -> None:
        localizer = JsonStringLocalizer(
            manager, missing_localization_behavior="log_warning"  # type: ignore[arg-type]
        )
        assert localizer.missing_localization_behavior is MissingLocalizationBehavior.LOG_WARNING


class TestNegativeCache:
    """Confirmed-missing keys skip the manager until a reload."""

    def test_miss_is_remembered(
        self, manager: JsonResourceManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        localizer = make_localizer(manager)
        localizer.get("Missing", "fr-FR")

        calls: list[str] = []
        original = JsonResourceManager.get_string

        def counting(
            self: JsonResourceManager, name: str, culture: str | None = None
        ) -> str | None:
            calls.append(name)
            return original(self, name, culture)

        monkeypatch.setattr(JsonResourceManager, "get_string", counting)
        localizer.get("Missing", "fr-FR")
        assert calls == []

    def test_miss_racing_a_reload_is_not_remembered(
        self,
        manager: JsonResourceManager,
        culture_resources: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        localizer = make_localizer(manager)
        calls: list[str] = []
        original = JsonResourceManager.get_string

        def reloading(
            self: JsonResourceManager, name: str, culture: str | None = None
        ) -> str | None:
            calls.append(name)
            if len(calls) == 1:
                self.notify_changed(culture_resources / "fr.json")
            return original(self, name, culture)

        monkeypatch.setattr(JsonResourceManager, "get_string", reloading)
        localizer.get("Missing", "fr")
        localizer.get("Missing", "fr")
        assert calls == ["Missing", "Missing"]

    def test_reload_clears_negative_cache(self, culture_resources: Path) -> None:
        manager = JsonResourceManager(culture_resources, watch_files=False)
        localizer = make_localizer(manager)
        assert not localizer.get("Thanks", "fr").found

        manager.notify_changed(
            write_resource(culture_resources / "fr.json", {"Yes": "Oui", "Thanks": "Merci"})
        )

        assert localizer.get("Thanks", "fr").value == "Merci"

    def test_new_file_clears_negative_cache(self, tmp_path: Path) -> None:
        manager = JsonResourceManager(tmp_path, watch_files=False)
        localizer = make_localizer(manager)
        assert not localizer.get("Hello", "de").found

        manager.notify_changed(write_resource(tmp_path / "de.json", {"Hello": "Hallo"}))

        assert localizer.get("Hello", "de").value == "Hallo"


class TestGetAllStrings:
    def test_exact_culture_only(self, manager: JsonResourceManager) -> None:
        strings = list(make_localizer(manager).get_all_strings(False, "fr-FR"))
        assert [s.name for s in strings] == [
            "Hello",
            "Greeting",
            "Book.Page.One",
            "Articles[0].Content",
            "Articles[1].Content",
            "Count",
            "Enabled",
        ]
        assert all(s.found for s in strings)

    def test_with_parent_cultures(self, manager: JsonResourceManager) -> None:
        strings = {s.name: s.value for s in make_localizer(manager).get_all_strings(True, "fr-FR")}
        assert len(strings) == 9
        assert strings["Hello"] == "Bonjour"
        assert strings["Yes"] == "Oui"
        assert strings["No"] == "Non"

    def test_parents_superset(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager)
        own = {s.name for s in localizer.get_all_strings(False, "fr-FR")}
        inherited = {s.name for s in localizer.get_all_strings(True, "fr-FR")}
        assert own <= inherited

    def test_ambient_culture(self, manager: JsonResourceManager) -> None:
        with culture_scope("fr"):
            names = [s.name for s in make_localizer(manager).get_all_strings(False)]
        assert names == ["Yes", "No", "Hello"]

    def test_values_resolved_lazily(
        self, manager: JsonResourceManager, culture_resources: Path
    ) -> None:
        localizer = make_localizer(manager)
        iterator = localizer.get_all_strings(False, "fr")
        manager.notify_changed(
            write_resource(
                culture_resources / "fr.json", {"Yes": "Oui!", "No": "Non", "Hello": "Salut"}
            )
        )
        assert next(iterator).value == "Oui!"

    def test_missing_manifest_ignored(self, manager: JsonResourceManager) -> None:
        assert list(make_localizer(manager).get_all_strings(False, "ja")) == []
        assert list(make_localizer(manager).get_all_strings(True, "ja")) == []

    def test_missing_manifest_raises_under_throw(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.THROW_EXCEPTION)
        with pytest.raises(MissingManifestError) as exc_info:
            localizer.get_all_strings(False, "ja")
        assert exc_info.value.culture == "ja"
        with pytest.raises(MissingManifestError):
            localizer.get_all_strings(True, "ja")

    def test_exact_manifest_missing_but_parent_present(self, manager: JsonResourceManager) -> None:
        localizer = make_localizer(manager, MissingLocalizationBehavior.THROW_EXCEPTION)
        with pytest.raises(MissingManifestError):
            localizer.get_all_strings(False, "fr-CA")
        names = {s.name for s in localizer.get_all_strings(True, "fr-CA")}
        assert names == {"Yes", "No", "Hello"}

    def test_shared_names_cache(self, manager: JsonResourceManager) -> None:
        cache = ResourceNamesCache()
        localizer = JsonStringLocalizer(manager, cache)
        list(localizer.get_all_strings(False, "fr"))
        assert len(cache) == 1


class TestRepr:
    def test_repr(self, manager: JsonResourceManager) -> None:
        assert repr(make_localizer(manager)) == (
            "JsonStringLocalizer(resource_name='', missing_localization_behavior='ignore')"
        )
