"""Shared pytest configuration: Hypothesis profiles, fuzz gating, resource fixtures.

Hypothesis profile selection, first match wins:
    HYPOTHESIS_PROFILE=dev|ci|verbose   explicit choice
    CI=true                             "ci" (50 derandomized examples)
    otherwise                           "dev" (500 examples)

Tests marked ``@pytest.mark.fuzz`` are skipped unless selected with
``pytest -m fuzz``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from jsonlocalization.cultures import clear_culture_cache
from tests.helpers.resource_files import write_resource

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

_PROFILES = ("dev", "ci", "verbose")
_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("dev", max_examples=500, phases=_ALL_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_ALL_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_ALL_PHASES, verbosity=Verbosity.verbose
)


def _select_profile() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: long-running property tests, run with -m fuzz")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip = pytest.mark.skip(reason="fuzz test; select with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _fresh_culture_cache() -> Iterator[None]:
    """Isolate memoized culture chains between tests."""
    yield
    clear_culture_cache()


@pytest.fixture
def culture_resources(tmp_path: Path) -> Path:
    """Culture-based resource root: Resources/{culture}.json."""
    root = tmp_path / "Resources"
    write_resource(root / "fr.json", {"Yes": "Oui", "No": "Non", "Hello": "Salut"})
    write_resource(
        root / "fr-FR.json",
        {
            "Hello": "Bonjour",
            "Greeting": "Bonjour, {0}",
            "Book": {"Page": {"One": "Page Un"}},
            "Articles": [{"Content": "Contenu 1"}, {"Content": "Contenu 2"}],
            "Count": 3,
            "Enabled": True,
        },
    )
    write_resource(root / "en-US.json", {"Hello": "Hello", "Greeting": "Hello, {0}"})
    return root


@pytest.fixture
def type_resources(tmp_path: Path) -> Path:
    """Type-based resource root for the resource name "Models.Foo"."""
    root = tmp_path / "Resources"
    write_resource(root / "Models" / "Foo.fr.json", {"Yes": "Oui", "Hello": "Salut"})
    write_resource(root / "Models" / "Foo.fr-FR.json", {"Hello": "Bonjour"})
    write_resource(root / "Models" / "Bar.fr-FR.json", {"Hello": "Bar bonjour"})
    return root
