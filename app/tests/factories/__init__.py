"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    FakeTranslationLoader,
    make_common_namespace,
    make_negotiator,
    make_registry,
)

__all__ = [
    "FakeTranslationLoader",
    "make_common_namespace",
    "make_negotiator",
    "make_registry",
]
