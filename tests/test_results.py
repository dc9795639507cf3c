"""Tests for the Match result type and ranking helper."""

import pytest

import typeflow as tf


class TestMatch:
    def test_fields(self):
        m = tf.Match("Ireland", 0.5)
        assert m.value == "Ireland"
        assert m.similarity == 0.5

    def test_equality_and_hashing(self):
        assert tf.Match("a", 1.0) == tf.Match("a", 1.0)
        assert tf.Match("a", 1.0) != tf.Match("a", 0.5)
        assert len({tf.Match("a", 1.0), tf.Match("a", 1.0), tf.Match("b", 1.0)}) == 2

    def test_frozen(self):
        m = tf.Match("a", 1.0)
        with pytest.raises(AttributeError):
            m.value = "b"

    def test_to_dict(self):
        assert tf.Match("Iceland", 0.75).to_dict() == {"value": "Iceland", "similarity": 0.75}


class TestSortMatches:
    @pytest.fixture
    def matches(self):
        return [
            tf.Match("finland", 0.5),
            tf.Match("iceland", 0.75),
            tf.Match("iran", 0.5),
            tf.Match("ireland", 1.0),
        ]

    def test_descending(self, matches):
        assert [m.value for m in tf.sort_matches(matches)] == [
            "ireland",
            "iceland",
            "finland",
            "iran",
        ]

    def test_stable_for_ties(self, matches):
        ordered = tf.sort_matches(list(reversed(matches)))
        assert [m.value for m in ordered][2:] == ["iran", "finland"]

    def test_limit(self, matches):
        assert [m.value for m in tf.sort_matches(matches, limit=2)] == ["ireland", "iceland"]
        assert tf.sort_matches(matches, limit=0) == []
        assert len(tf.sort_matches(matches, limit=10)) == 4

    def test_accepts_iterables(self, matches):
        assert len(tf.sort_matches(iter(matches))) == 4

    def test_negative_limit(self, matches):
        with pytest.raises(tf.ValidationError):
            tf.sort_matches(matches, limit=-1)

    def test_input_untouched(self, matches):
        before = list(matches)
        tf.sort_matches(matches)
        assert matches == before


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
