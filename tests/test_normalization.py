"""Tests for string normalization and word filters.

This module tests the normalization modes provided by typeflow (lowercase,
strict, remove_punctuation, remove_whitespace and unicode_nfkd) and the
filters built on them.
"""

import pytest

import typeflow as tf
from typeflow.normalize import apply_filters


class TestNormalizeString:
    """Tests for normalize_string."""

    @pytest.mark.parametrize(
        "mode,text,expected",
        [
            ("lowercase", "Ireland", "ireland"),
            ("unicode_nfkd", "ﬁle", "file"),
            ("remove_punctuation", "Rep. of Ireland!", "Rep of Ireland"),
            ("remove_whitespace", "Rep of\tIreland\n", "RepofIreland"),
            ("strict", "Rep. of Ireland", "repofireland"),
        ],
    )
    def test_modes(self, mode, text, expected):
        assert tf.normalize_string(text, mode) == expected

    def test_enum_mode(self):
        assert tf.normalize_string("ABC", tf.NormalizationMode.LOWERCASE) == "abc"

    def test_mode_is_case_insensitive(self):
        assert tf.normalize_string("ABC", "LOWERCASE") == "abc"

    def test_nfkd_decomposes_accents(self):
        # e + combining acute accent
        assert tf.normalize_string("é", "unicode_nfkd") == "é"

    def test_unknown_mode_raises(self):
        with pytest.raises(tf.ValidationError):
            tf.normalize_string("abc", "uppercase")

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            tf.normalize_string(None, "lowercase")

    def test_normalize_pair(self):
        assert tf.normalize_pair("Hello", "HELLO", "lowercase") == ("hello", "hello")


class TestNormalizeParameter:
    """Tests for the normalize parameter on the distance functions."""

    def test_levenshtein_normalize_lowercase(self):
        assert tf.levenshtein("Hello", "HELLO") == 4
        assert tf.levenshtein("Hello", "HELLO", normalize="lowercase") == 0

    def test_levenshtein_normalize_strict(self):
        assert tf.levenshtein("Rep. of Ireland", "rep of ireland", normalize="strict") == 0

    def test_levenshtein_similarity_normalize(self):
        assert tf.levenshtein_similarity("Hello", "HELLO", normalize="lowercase") == 1.0
        assert tf.levenshtein_similarity("Hello", "HELLO") < 1.0


class TestFilters:
    """Tests for word filters and their chaining."""

    def test_lowercase_filter(self):
        assert tf.lowercase_filter("IreLand") == "ireland"

    def test_normalization_filter(self):
        strict = tf.normalization_filter("strict")
        assert strict("Ireland (Republic)") == "irelandrepublic"

    def test_normalization_filter_validates_mode_early(self):
        with pytest.raises(tf.ValidationError):
            tf.normalization_filter("nope")

    def test_skip_shorter_than(self):
        keep_long = tf.skip_shorter_than(3)
        assert keep_long("UK") is None
        assert keep_long("USA") == "USA"

    def test_apply_filters_in_order(self):
        filters = [tf.lowercase_filter, tf.normalization_filter("remove_whitespace")]
        assert apply_filters("Northern Ireland", filters) == "northernireland"

    def test_apply_filters_stops_on_skip(self):
        calls = []

        def record(word):
            calls.append(word)
            return word

        assert apply_filters("UK", [tf.skip_shorter_than(3), record]) is None
        assert calls == []

    def test_no_filters(self):
        assert apply_filters("Ireland", []) == "Ireland"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
