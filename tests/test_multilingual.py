"""Multilingual text resolution and request-language helpers."""

import pytest

from api.i18n import pick_best_translation, translation_fallback_chain
from languages.multilingual import resolve_text


# =============================================================================
# resolve_text
# =============================================================================


class TestResolveText:
    def test_plain_string_is_returned_as_is(self):
        assert resolve_text("Hallo", "fr", "nl") == "Hallo"

    def test_requested_language_wins(self):
        assert resolve_text({"nl": "Hallo", "fr": "Bonjour"}, "fr", "nl") == "Bonjour"

    def test_falls_back_to_default_language(self):
        assert resolve_text({"nl": "Hallo", "fr": "Bonjour"}, "de", "nl") == "Hallo"

    def test_empty_requested_value_falls_through(self):
        assert resolve_text({"nl": "Hallo", "fr": ""}, "fr", "nl") == "Hallo"

    def test_falls_back_to_first_available_entry(self):
        assert resolve_text({"fr": "", "en": "Hello"}, "de", "nl") == "Hello"

    @pytest.mark.parametrize("value", [{}, None, 42, ["nl"], {"nl": ""}, {"nl": None}])
    def test_never_raises_and_yields_empty_string(self, value):
        assert resolve_text(value, "nl", "nl") == ""

    def test_missing_language_codes(self):
        assert resolve_text({"fr": "Bonjour"}, None, None) == "Bonjour"
        assert resolve_text({"fr": "Bonjour"}, "", "") == "Bonjour"


# =============================================================================
# Fallback chain
# =============================================================================


class TestFallbackChain:
    def test_requested_then_default_then_others(self, languages):
        assert translation_fallback_chain("fr") == ["fr", "nl", "en"]

    def test_no_duplicates_when_requesting_default(self, languages):
        assert translation_fallback_chain("nl") == ["nl", "en", "fr"]

    def test_pick_best_translation_prefers_requested(self, languages):
        rows = [("nl", "A"), ("fr", "B")]
        best = pick_best_translation(rows, "fr", code_of=lambda r: r[0])
        assert best == ("fr", "B")

    def test_pick_best_translation_uses_default_when_missing(self, languages):
        rows = [("en", "C"), ("nl", "A")]
        best = pick_best_translation(rows, "fr", code_of=lambda r: r[0])
        assert best == ("nl", "A")

    def test_pick_best_translation_empty(self, languages):
        assert pick_best_translation([], "fr", code_of=lambda r: r[0]) is None
