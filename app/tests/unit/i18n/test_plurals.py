"""Tests for translation_engine.i18n.plurals module."""

import pytest

from translation_engine.i18n.models import PluralForms
from translation_engine.i18n.plurals import default_form, is_count, select_plural_form


@pytest.fixture
def item_forms():
    return PluralForms({"zero": "No items", "one": "1 item", "other": "{count} items"})


class TestSelectPluralForm:
    """Tests for zero/one/other selection."""

    def test_zero_form(self, item_forms):
        assert select_plural_form(item_forms, 0) == "No items"

    def test_one_form(self, item_forms):
        assert select_plural_form(item_forms, 1) == "1 item"

    def test_other_form(self, item_forms):
        """Counts other than 0 and 1 use the other form uninterpolated."""
        assert select_plural_form(item_forms, 5) == "{count} items"

    def test_zero_falls_back_to_other(self):
        """Without a zero form, count 0 uses other."""
        forms = PluralForms({"one": "1 item", "other": "{count} items"})
        assert select_plural_form(forms, 0) == "{count} items"

    def test_float_counts(self, item_forms):
        assert select_plural_form(item_forms, 1.0) == "1 item"
        assert select_plural_form(item_forms, 1.5) == "{count} items"

    def test_first_form_without_other(self):
        """Without other, the first form in document order is used."""
        forms = PluralForms({"few": "A few", "many": "Many"})
        assert select_plural_form(forms, 7) == "A few"

    def test_empty_forms(self):
        assert select_plural_form(PluralForms({}), 3) == ""


class TestDefaultForm:
    """Tests for count-less degradation."""

    def test_prefers_other(self, item_forms):
        assert default_form(item_forms) == "{count} items"

    def test_first_when_no_other(self):
        assert default_form(PluralForms({"one": "1 item"})) == "1 item"


class TestIsCount:
    """Tests for numeric count detection."""

    def test_numbers(self):
        assert is_count(3)
        assert is_count(0.5)

    def test_non_numbers(self):
        assert not is_count("3")
        assert not is_count(None)
        assert not is_count(True)
