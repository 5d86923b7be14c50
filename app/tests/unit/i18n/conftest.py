"""Feature-level fixtures for i18n system tests.

Provides translation directories, registries and fake loaders for
translation, negotiation and loading scenarios.
"""

import json

import pytest
import yaml

from translation_engine.i18n import FileTranslationLoader
from tests.factories.i18n import (
    FakeTranslationLoader,
    make_common_namespace,
    make_negotiator,
    make_registry,
)


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample translation documents.

    Returns a directory structure like:
    - en/common.yml
    - en/nav.yml
    - en/tools/ip-converter.yml
    - de/common.yml
    - fr/nav.json
    """
    (tmp_path / "en" / "tools").mkdir(parents=True)
    (tmp_path / "de").mkdir()
    (tmp_path / "fr").mkdir()

    with open(tmp_path / "en" / "common.yml", "w", encoding="utf-8") as f:
        yaml.dump(make_common_namespace(), f, allow_unicode=True)

    with open(tmp_path / "en" / "nav.yml", "w", encoding="utf-8") as f:
        yaml.dump({"home": "Home", "tools": "Tools"}, f)

    with open(tmp_path / "en" / "tools" / "ip-converter.yml", "w", encoding="utf-8") as f:
        yaml.dump({"title": "IP Address Converter"}, f)

    de_common = {
        "hello": "Hallo",
        "items": {"zero": "Keine Einträge", "one": "1 Eintrag", "other": "{count} Einträge"},
    }
    with open(tmp_path / "de" / "common.yml", "w", encoding="utf-8") as f:
        yaml.dump(de_common, f, allow_unicode=True)

    with open(tmp_path / "fr" / "nav.json", "w", encoding="utf-8") as f:
        json.dump({"home": "Accueil"}, f, ensure_ascii=False)

    return tmp_path


@pytest.fixture
def file_loader(temp_translations_dir):
    """Create FileTranslationLoader for the temporary translations directory."""
    return FileTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def registry():
    """Registry with the default "en" locale holding the common namespace."""
    return make_registry()


@pytest.fixture
def negotiator():
    """Negotiator for en (default), de, es and fr with nothing stored."""
    return make_negotiator()


@pytest.fixture
def fake_loader():
    """Fake loader serving German and French common namespaces."""
    return FakeTranslationLoader(
        documents={
            ("de", "common"): {"hello": "Hallo", "welcome": "Willkommen, {name}!"},
            ("fr", "common"): {"hello": "Bonjour"},
        }
    )
