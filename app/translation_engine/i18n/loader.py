"""Translation document loading interface and implementations.

Defines the contract for fetching one document per (locale, namespace) and
provides a file-based loader reading YAML or JSON documents.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

import structlog
from translation_engine.i18n.exceptions import NamespaceLoadError

logger = structlog.get_logger()

DOCUMENT_SUFFIXES = (".yml", ".yaml", ".json")


class TranslationLoader(ABC):
    """Abstract base for translation document loaders.

    Implementations fetch the nested string tree for one (locale, namespace)
    pair from wherever translations are kept.
    """

    @abstractmethod
    async def load(self, locale: str, namespace: str) -> Mapping[str, Any]:
        """Load the document for a locale and namespace.

        Args:
            locale: Locale code (e.g., "de").
            namespace: Namespace name (e.g., "common", "tools/ip-converter").

        Returns:
            Nested mapping of the namespace's translations.

        Raises:
            NamespaceLoadError: If the document is missing or invalid.
        """
        pass

    def list_namespaces(self, locale: str) -> list[str]:
        """List namespaces available for a locale.

        Loaders that cannot enumerate their documents return an empty list.
        """
        return []

    def invalidate(self, locale: str, namespace: Optional[str] = None) -> None:
        """Drop anything held for a locale (or one of its namespaces).

        Loaders without their own cache have nothing to drop.
        """
        pass


class FileTranslationLoader(TranslationLoader):
    """Loader for translation documents on disk.

    Expects documents at ``<translations_dir>/<locale>/<namespace>.yml``
    (``.yaml`` and ``.json`` are also accepted). Namespaces containing "/"
    map to subdirectories.

    Attributes:
        translations_dir: Path to directory containing one folder per locale.
        cache: Cache of parsed documents keyed by (locale, namespace).
    """

    def __init__(
        self,
        translations_dir: Path,
        use_cache: bool = True,
    ):
        """Initialize file translation loader.

        Args:
            translations_dir: Path to directory with translation documents.
            use_cache: Whether to cache parsed documents in memory.

        Raises:
            ValueError: If translations_dir does not exist.
        """
        self.translations_dir = Path(translations_dir)
        self.use_cache = use_cache
        self.cache: Dict[Tuple[str, str], Dict[str, Any]] = {}

        if not self.translations_dir.is_dir():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )

        logger.info(
            "initialized_file_loader",
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    async def load(self, locale: str, namespace: str) -> Mapping[str, Any]:
        return await asyncio.to_thread(self.read, locale, namespace)

    def read(self, locale: str, namespace: str) -> Dict[str, Any]:
        """Synchronously read and parse a document.

        Args:
            locale: Locale code.
            namespace: Namespace name.

        Returns:
            Parsed document.

        Raises:
            NamespaceLoadError: If the document is missing, unparseable, not
                a mapping, or the names escape the translations directory.
        """
        cache_key = (locale, namespace)
        if self.use_cache and cache_key in self.cache:
            logger.debug("loaded_from_cache", locale=locale, namespace=namespace)
            return self.cache[cache_key]

        document_path = self._find_document(locale, namespace)
        try:
            with open(document_path, "r", encoding="utf-8") as f:
                if document_path.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("document_parse_error", file=str(document_path), error=str(e))
            raise NamespaceLoadError(locale, namespace, str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            logger.warning(
                "invalid_document_format", file=str(document_path), expected="dict"
            )
            raise NamespaceLoadError(locale, namespace, "document is not a mapping")

        logger.info(
            "loaded_translations",
            locale=locale,
            namespace=namespace,
            key_count=len(data),
        )

        if self.use_cache:
            self.cache[cache_key] = data

        return data

    def list_namespaces(self, locale: str) -> list[str]:
        """List namespaces available on disk for a locale, sorted."""
        try:
            locale_dir = self._locale_dir(locale)
        except NamespaceLoadError:
            return []
        if not locale_dir.is_dir():
            return []

        namespaces = set()
        for document in locale_dir.rglob("*"):
            if document.is_file() and document.suffix in DOCUMENT_SUFFIXES:
                relative = document.relative_to(locale_dir).with_suffix("")
                namespaces.add(relative.as_posix())
        return sorted(namespaces)

    def clear_cache(self) -> None:
        """Clear all cached documents."""
        self.cache.clear()
        logger.info("cleared_translation_cache")

    def invalidate(self, locale: str, namespace: Optional[str] = None) -> None:
        """Evict cached documents so the next read goes back to disk."""
        if namespace is None:
            stale = [key for key in self.cache if key[0] == locale]
        else:
            stale = [(locale, namespace)]
        for key in stale:
            self.cache.pop(key, None)

    def _locale_dir(self, locale: str) -> Path:
        if not _is_safe_name(locale) or "/" in locale:
            raise NamespaceLoadError(locale, "", "invalid locale name")
        return self.translations_dir / locale

    def _find_document(self, locale: str, namespace: str) -> Path:
        locale_dir = self._locale_dir(locale)
        if not _is_safe_name(namespace):
            raise NamespaceLoadError(locale, namespace, "invalid namespace name")

        for suffix in DOCUMENT_SUFFIXES:
            candidate = locale_dir / f"{namespace}{suffix}"
            if candidate.is_file():
                return candidate

        raise NamespaceLoadError(
            locale,
            namespace,
            f"no document found in {locale_dir}",
        )


def _is_safe_name(name: str) -> bool:
    """Check that a locale or namespace cannot address files outside its folder."""
    if not name or name.startswith("/") or "\\" in name or "\x00" in name:
        return False
    return all(part not in ("", ".", "..") for part in name.split("/"))
