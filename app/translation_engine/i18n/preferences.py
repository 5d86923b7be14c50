"""Persisted locale preference stores.

A preference store holds one string: the locale the user chose. Values are
validated by the negotiator on read, never here.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import structlog

from translation_engine.i18n.exceptions import PreferenceStoreError

logger = structlog.get_logger(component="i18n.preferences")

DEFAULT_PREFERENCE_KEY = "ntb-language"


class LocalePreferenceStore(ABC):
    """Abstract single-value store for the preferred locale."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the stored value, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            PreferenceStoreError: If the value cannot be persisted.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored value."""
        pass


class InMemoryPreferenceStore(LocalePreferenceStore):
    """Process-local preference store (development, testing)."""

    def __init__(self, value: Optional[str] = None):
        self._value = value

    def get(self) -> Optional[str]:
        return self._value

    def set(self, value: str) -> None:
        self._value = value

    def clear(self) -> None:
        self._value = None


class JsonFilePreferenceStore(LocalePreferenceStore):
    """Preference store backed by a JSON object on disk.

    The file may hold other keys; only ``key`` is read and written.

    Attributes:
        path: JSON file location.
        key: Name the preference is stored under.
    """

    def __init__(self, path: Path, key: str = DEFAULT_PREFERENCE_KEY):
        self.path = Path(path)
        self.key = key

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(
                "preference_read_failed", path=str(self.path), error=str(e)
            )
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "invalid_preference_format", path=str(self.path), expected="object"
            )
            return {}
        return data

    def get(self) -> Optional[str]:
        value = self._read_document().get(self.key)
        return value if isinstance(value, str) else None

    def set(self, value: str) -> None:
        document = self._read_document()
        document[self.key] = value
        self._write_document(document)

    def clear(self) -> None:
        document = self._read_document()
        if self.key in document:
            del document[self.key]
            self._write_document(document)

    def _write_document(self, document: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
        except OSError as e:
            logger.error("preference_write_failed", path=str(self.path), error=str(e))
            raise PreferenceStoreError(
                f"Failed to write locale preference to {self.path}: {e}"
            ) from e
