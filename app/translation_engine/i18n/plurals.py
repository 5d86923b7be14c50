"""Simplified plural form selection (zero / one / other)."""

from numbers import Number

from translation_engine.i18n.models import PluralForms


def is_count(value) -> bool:
    """Check whether a value can drive plural selection."""
    return isinstance(value, Number) and not isinstance(value, bool)


def default_form(forms: PluralForms) -> str:
    """Form used when no count is available: other, else first, else empty."""
    other = forms.get("other")
    if other is not None:
        return other
    return next(iter(forms.forms.values()), "")


def select_plural_form(forms: PluralForms, count) -> str:
    """Select a plural variant for count.

    Selection order: zero (count == 0), one (count == 1), other, then the
    first form in document order, then "".

    The selected template is returned uninterpolated.
    """
    if count == 0 and forms.get("zero") is not None:
        return forms.get("zero")
    if count == 1 and forms.get("one") is not None:
        return forms.get("one")
    return default_form(forms)
