"""Tests for the tokenizer and normalizer."""

import pytest
from reviewlens.core.tokenizer import clean_text, normalize, stem


class TestCleanText:
    """Test text cleaning."""

    def test_lowercases_and_strips_punctuation(self):
        assert clean_text("Great Taste!!!").split() == ["great", "taste"]

    def test_possessive_is_removed(self):
        assert clean_text("The box's lid").split() == ["the", "box", "lid"]

    def test_negated_contraction_is_collapsed(self):
        assert clean_text("I don't like it").split() == ["i", "dont", "like", "it"]

    def test_typographic_apostrophe(self):
        assert clean_text("Didn’t work").split() == ["didnt", "work"]

    def test_underscore_is_a_separator(self):
        assert clean_text("battery_life").split() == ["battery", "life"]

    def test_none_is_empty(self):
        assert clean_text(None) == ""


class TestStem:
    """Test the suffix-stripping stemmer."""

    @pytest.mark.parametrize("word,expected", [
        ("flavors", "flavor"),
        ("batteries", "battery"),
        ("boxes", "box"),
        ("classes", "class"),
        ("running", "run"),
        ("quickly", "quick"),
        ("status", "status"),
        ("glass", "glass"),
        ("bus", "bus"),
    ])
    def test_rules(self, word, expected):
        assert stem(word) == expected

    def test_stem_is_a_fixed_point(self):
        for word in ["flavors", "batteries", "charging", "crushed", "boxes", "speakers", "quickly"]:
            assert stem(stem(word)) == stem(word)

    def test_short_words_untouched(self):
        assert stem("was") == "was"


class TestNormalize:
    """Test normalize()."""

    def test_drops_stop_words_and_short_tokens(self):
        assert normalize("The flavors are so good on my TV") == ["flavor"]

    def test_keeps_order(self):
        assert normalize("Battery life and screen brightness") == ["battery", "life", "screen", "brightness"]

    def test_stem_collapsing_onto_stop_word_is_dropped(self):
        assert normalize("Great products") == []

    def test_custom_stop_words(self):
        assert normalize("the battery life", stop_words={"battery"}) == ["the", "life"]

    def test_empty(self):
        assert normalize("") == []
        assert normalize("   ...   ") == []

    def test_idempotent(self):
        texts = [
            "The flavor is absolutely delicious, very chocolatey but not too sweet.",
            "Bluetooth pairing took forever though; connection drops constantly!",
            "Customer service replaced my broken pair quickly.",
        ]
        for text in texts:
            once = normalize(text)
            assert normalize(" ".join(once)) == once


if __name__ == "__main__":
    pytest.main([__file__])
