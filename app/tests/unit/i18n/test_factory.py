"""Tests for translation_engine.i18n.factory module."""

import json
from unittest.mock import patch

import pytest

from translation_engine.configuration import I18nSettings, Settings
from translation_engine.i18n import (
    FileTranslationLoader,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    LanguageService,
    NamespaceCache,
    create_language_service,
    create_registry,
)
from translation_engine.i18n.factory import (
    BUNDLED_TRANSLATIONS_DIR,
    preload_default_locale,
)
from tests.factories.i18n import FakeTranslationLoader, make_registry


def make_settings(**i18n_overrides):
    return Settings(i18n=I18nSettings(**i18n_overrides))


class TestPreloadDefaultLocale:
    def test_registers_every_namespace(self, file_loader):
        registry = make_registry(namespaces={})
        cache = NamespaceCache(registry, file_loader)

        registered = preload_default_locale(registry, file_loader, cache)

        assert registered == ["common", "nav", "tools/ip-converter"]
        assert registry.translate("tools/ip-converter.title") == "IP Address Converter"
        assert cache.is_loaded("en", "nav")

    def test_skips_unreadable_documents(self, temp_translations_dir, file_loader):
        (temp_translations_dir / "en" / "broken.yml").write_text("a: [b\n")
        registry = make_registry(namespaces={})

        registered = preload_default_locale(registry, file_loader)

        assert "broken" not in registered
        assert registry.has("common.hello")


class TestCreateRegistry:
    def test_bundled_locales(self):
        registry = create_registry(settings=make_settings())

        assert registry.default_locale == "en"
        assert registry.translate("common.hello") == "Hello"
        assert registry.translate("common.items", {"count": 0}) == "No items"

    def test_custom_directory(self, temp_translations_dir):
        registry = create_registry(temp_translations_dir, settings=make_settings())
        assert registry.translate("nav.home") == "Home"

    def test_directory_from_settings(self, temp_translations_dir):
        settings = make_settings(translations_dir=str(temp_translations_dir))
        registry = create_registry(settings=settings)
        assert registry.has("tools/ip-converter.title")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ValueError):
            create_registry(tmp_path / "nowhere", settings=make_settings())


class TestCreateLanguageService:
    """Tests for create_language_service()."""

    def test_defaults(self):
        service = create_language_service(settings=make_settings())

        assert isinstance(service, LanguageService)
        assert isinstance(service.negotiator.preference_store, InMemoryPreferenceStore)
        assert service.namespaces == ["common", "nav", "settings", "tools"]
        assert service.cache.is_loaded("en", "common")
        assert service.t("nav.home") == "Home"

    def test_bundled_directory_exists(self):
        assert (BUNDLED_TRANSLATIONS_DIR / "en" / "common.yml").is_file()

    @pytest.mark.asyncio
    async def test_bundled_translations(self):
        service = create_language_service(settings=make_settings())

        await service.init_language(path="/de/tools")

        assert service.current_locale == "de"
        assert service.t("common.hello") == "Hallo"
        assert service.t("common.items", {"count": 2}) == "2 Einträge"
        assert service.t("settings.title") == "Settings"
        assert service.localized_path("/settings") == "/de/settings"

    def test_json_preference_store(self, tmp_path):
        preference_file = tmp_path / "preferences.json"
        settings = make_settings(
            preference_file=str(preference_file), preference_key="lang"
        )

        service = create_language_service(settings=settings)
        store = service.negotiator.preference_store

        assert isinstance(store, JsonFilePreferenceStore)
        assert store.key == "lang"

    @pytest.mark.asyncio
    async def test_json_preference_persists_across_services(self, tmp_path):
        settings = make_settings(preference_file=str(tmp_path / "preferences.json"))

        first = create_language_service(settings=settings)
        await first.set_language("fr")

        second = create_language_service(settings=settings)
        locale = await second.init_language(path="/de/")

        assert locale == "fr"
        assert json.loads((tmp_path / "preferences.json").read_text()) == {
            "ntb-language": "fr"
        }

    @pytest.mark.asyncio
    async def test_custom_loader(self, temp_translations_dir):
        loader = FakeTranslationLoader({("es", "common"): {"hello": "Hola"}})
        settings = make_settings(preload_namespaces=["common"])

        service = create_language_service(
            settings=settings,
            translations_dir=temp_translations_dir,
            loader=loader,
        )
        await service.set_language("es")

        assert service.t("common.hello") == "Hola"
        assert service.t("nav.home") == "Home"
        assert loader.calls == [("es", "common")]

    def test_explicit_preference_store(self):
        store = InMemoryPreferenceStore("de")
        service = create_language_service(settings=make_settings(), preference_store=store)
        assert service.negotiator.stored_locale() == "de"

    def test_prefix_default_locale(self):
        service = create_language_service(
            settings=make_settings(prefix_default_locale=True)
        )
        assert service.localized_path("/tools") == "/en/tools"

    def test_uses_file_loader_by_default(self):
        service = create_language_service(settings=make_settings())
        assert isinstance(service.cache.loader, FileTranslationLoader)


class TestInjectedLoader:
    """create_language_service() with a caller-supplied loader."""

    def test_file_loader_supplies_default_locale(self, tmp_path, file_loader):
        settings = make_settings(translations_dir=str(tmp_path / "missing"))

        service = create_language_service(settings=settings, loader=file_loader)

        assert service.cache.loader is file_loader
        assert service.t("tools/ip-converter.title") == "IP Address Converter"
        assert service.cache.is_loaded("en", "nav")

    def test_missing_default_directory_is_not_fatal(self, tmp_path):
        loader = FakeTranslationLoader({("de", "common"): {"hello": "Hallo"}})
        settings = make_settings(translations_dir=str(tmp_path / "missing"))

        with patch("translation_engine.i18n.factory.logger") as mock_logger:
            service = create_language_service(settings=settings, loader=loader)

        warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert "default_locale_source_unavailable" in warnings
        assert service.cache.loader is loader
        assert service.registry.locales() == []

    def test_missing_directory_without_loader_raises(self, tmp_path):
        settings = make_settings(translations_dir=str(tmp_path / "missing"))
        with pytest.raises(ValueError):
            create_language_service(settings=settings)


class TestLoggingBootstrap:
    def test_configures_logging_from_settings(self):
        settings = make_settings()

        with patch("translation_engine.i18n.factory.configure_logging") as mock_configure:
            create_language_service(settings=settings)

        mock_configure.assert_called_once_with(settings=settings)
