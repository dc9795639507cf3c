"""Tests for FuzzySearchEngine.

Covers source indexing with filters, threshold search over the country list,
the three pruning modes and result ordering.
"""

import logging

import pytest

import typeflow as tf
from typeflow.engine import best_reachable_similarity

ALL_PRUNING = list(tf.PruningMode)


def _values(matches):
    return [m.value for m in matches]


class TestCountrySearch:
    """Search scenarios over the country list fixture."""

    @pytest.mark.parametrize("pruning", ALL_PRUNING, ids=lambda p: p.value)
    def test_republic_of_ireland(self, country_names, strategy, pruning):
        engine = tf.FuzzySearchEngine(
            strategy=strategy, pruning=pruning, filters=[tf.lowercase_filter]
        )
        engine.set_source(country_names)

        matches = engine.find_match("rep of ireland", 0.32)
        by_value = {m.value: m.similarity for m in matches}
        assert "Ireland (Republic)" in by_value
        # 12 edits over 18 characters
        assert 0.30 <= by_value["Ireland (Republic)"] <= 0.35
        assert by_value["Ireland (Republic)"] == pytest.approx(1 / 3)
        assert all(m.similarity >= 0.32 for m in matches)

    def test_close_misspelling(self, country_engine):
        best = country_engine.find_best_matches("irland", 0.8)
        assert _values(best) == ["Ireland"]
        assert best[0].similarity == pytest.approx(6 / 7)

    def test_exact_match_scores_one(self, country_engine):
        best = country_engine.find_best_matches("iceland", 1.0)
        assert [(m.value, m.similarity) for m in best] == [("Iceland", 1.0)]

    def test_matches_equal_brute_force(self, country_names, country_engine):
        query = "nothern irland"
        expected = {
            name
            for name in country_names
            if tf.levenshtein_similarity(name.lower(), query) >= 0.5
        }
        found = {m.value for m in country_engine.find_match(query, 0.5)}
        assert found == expected
        assert "Northern Ireland" in found

    def test_threshold_zero_returns_everything(self, country_names, country_engine):
        matches = country_engine.find_match("xyz", 0.0)
        assert len(matches) == len(country_names)

    def test_discovery_order_is_key_order(self, country_engine):
        matches = country_engine.find_match("ir", 0.0)
        keys = [m.value.lower() for m in matches]
        assert keys == sorted(keys)


class TestPruning:
    """Tests for the pruning modes."""

    @pytest.mark.parametrize(
        "query,threshold",
        [("irland", 0.6), ("rep of ireland", 0.32), ("x", 0.0), ("united", 0.75), ("", 0.5)],
    )
    def test_exact_pruning_loses_nothing(self, country_names, strategy, query, threshold):
        results = {}
        for pruning in (tf.PruningMode.EXACT, tf.PruningMode.NONE):
            engine = tf.FuzzySearchEngine(
                strategy=strategy, pruning=pruning, filters=[tf.lowercase_filter]
            )
            engine.set_source(country_names)
            results[pruning] = engine.find_match(query, threshold)
        assert results[tf.PruningMode.EXACT] == results[tf.PruningMode.NONE]

    def test_heuristic_can_miss_longer_keys(self, strategy):
        words = ["a", "abcd"]
        exact = tf.FuzzySearchEngine(strategy=strategy, pruning="exact")
        exact.set_source(words)
        assert [(m.value, m.similarity) for m in exact.find_match("abcd", 0.5)] == [("abcd", 1.0)]

        # "a" scores 0.25, so the heuristic never looks below it
        heuristic = tf.FuzzySearchEngine(strategy=strategy, pruning="heuristic")
        heuristic.set_source(words)
        assert heuristic.find_match("abcd", 0.5) == []

    def test_heuristic_finds_prefix_matches(self, strategy):
        engine = tf.FuzzySearchEngine(strategy=strategy, pruning="heuristic")
        engine.set_source(["ireland", "ireland (republic)"])
        assert _values(engine.find_match("ireland", 0.9)) == ["ireland"]

    def test_exact_pruning_skips_subtrees(self, caplog):
        engine = tf.FuzzySearchEngine()
        engine.set_source(["zzzz" + str(i) for i in range(50)] + ["abc"])
        with caplog.at_level(logging.DEBUG, logger="typeflow.engine"):
            assert _values(engine.find_match("abc", 0.9)) == ["abc"]
        assert "pruned 1 subtrees" in caplog.text


class TestBestReachableSimilarity:
    def test_empty(self):
        assert best_reachable_similarity(0, 0, 0) == 1.0

    def test_query_longer_than_prefix(self):
        assert best_reachable_similarity(2, 3, 4) == pytest.approx(4 / 6)

    def test_prefix_longer_than_query(self):
        # the key is at least as long as the prefix
        assert best_reachable_similarity(1, 10, 4) == pytest.approx(4 / 10)

    def test_never_below_actual_similarity(self):
        query = "ireland"
        for key in ["ire", "ireland", "irelandia", "iran", "zz"]:
            state = tf.EditDistanceState(query)
            state.extend(key)
            bound = best_reachable_similarity(state.lower_bound(), len(key), len(query))
            for suffix in ["", "land", "xxxxxxxx"]:
                actual = tf.levenshtein_similarity(key + suffix, query)
                assert actual <= bound + 1e-12


class TestSetSource:
    """Tests for indexing candidates."""

    def test_returns_count(self):
        engine = tf.FuzzySearchEngine()
        assert engine.set_source(["Iran", "Iraq", "Ireland"]) == 3
        assert len(engine) == 3

    def test_replaces_previous_source(self):
        engine = tf.FuzzySearchEngine()
        engine.set_source(["Iran", "Iraq"])
        engine.set_source(["Ireland"])
        assert len(engine) == 1
        assert _values(engine.find_match("Iran", 0.9)) == []

    def test_aliases_all_reported(self, strategy):
        engine = tf.FuzzySearchEngine(strategy=strategy, filters=[tf.lowercase_filter])
        engine.set_source(["Ireland", "IRELAND", "ireland"])
        assert engine.index.key_count == 1
        matches = engine.find_match("ireland", 1.0)
        assert _values(matches) == ["Ireland", "IRELAND", "ireland"]

    def test_filters_chain_in_order(self):
        engine = tf.FuzzySearchEngine()
        count = engine.set_source(
            ["Chad", "Iran", "Ireland", "UK"],
            filters=[tf.lowercase_filter, tf.skip_shorter_than(4)],
        )
        assert count == 3
        assert engine.index.keys() == ["chad", "iran", "ireland"]

    def test_each_value_inserted_once(self):
        engine = tf.FuzzySearchEngine()
        engine.set_source(
            ["Ireland"], filters=[tf.lowercase_filter, tf.normalization_filter("strict")]
        )
        assert len(engine) == 1

    def test_empty_keys_are_indexed(self):
        engine = tf.FuzzySearchEngine(filters=[tf.normalization_filter("remove_punctuation")])
        assert engine.set_source(["...", "", "a.b"]) == 3
        assert engine.index.keys() == ["", "ab"]
        assert engine.index.get("") == ["...", ""]

    def test_explicit_filters_override_defaults(self):
        engine = tf.FuzzySearchEngine(filters=[tf.lowercase_filter])
        engine.set_source(["Ireland"], filters=[])
        assert engine.index.keys() == ["Ireland"]

    def test_non_string_value_raises(self):
        engine = tf.FuzzySearchEngine()
        with pytest.raises(TypeError):
            engine.set_source(["Ireland", None])


class TestFindMatch:
    """Tests for query validation and edge cases."""

    def test_empty_engine(self):
        assert tf.FuzzySearchEngine().find_match("anything", 0.0) == []

    def test_empty_query(self, strategy):
        engine = tf.FuzzySearchEngine(strategy=strategy)
        engine.set_source(["a", "ab", "abcd"])
        matches = engine.find_match("", 0.0)
        assert [(m.value, m.similarity) for m in matches] == [
            ("a", 0.0),
            ("ab", 0.0),
            ("abcd", 0.0),
        ]
        assert engine.find_match("", 0.1) == []

    @pytest.mark.parametrize("pruning", ALL_PRUNING, ids=lambda p: p.value)
    def test_empty_value_matches_empty_query(self, strategy, pruning):
        engine = tf.FuzzySearchEngine(strategy=strategy, pruning=pruning)
        engine.set_source(["", "xyz"])
        assert engine.find_match("", 0.0) == [tf.Match("", 1.0), tf.Match("xyz", 0.0)]
        assert engine.find_match("", 1.0) == [tf.Match("", 1.0)]

    @pytest.mark.parametrize("pruning", ALL_PRUNING, ids=lambda p: p.value)
    def test_empty_value_does_not_hide_other_keys(self, strategy, pruning):
        engine = tf.FuzzySearchEngine(strategy=strategy, pruning=pruning)
        engine.set_source(["", "abc", "abd"])
        # "" scores 0.0 against "abc", which must not stop the walk
        matches = engine.find_match("abc", 0.5)
        assert [m.value for m in matches] == ["abc", "abd"]
        assert matches[1].similarity == pytest.approx(2 / 3)

    def test_query_is_not_filtered(self):
        engine = tf.FuzzySearchEngine(filters=[tf.lowercase_filter])
        engine.set_source(["Ireland"])
        assert engine.find_match("IRELAND", 0.5) == []

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        engine = tf.FuzzySearchEngine()
        with pytest.raises(tf.ValidationError):
            engine.find_match("ireland", threshold)

    def test_threshold_wrong_type(self):
        engine = tf.FuzzySearchEngine()
        with pytest.raises(TypeError):
            engine.find_match("ireland", "0.5")

    def test_non_string_query(self):
        engine = tf.FuzzySearchEngine()
        with pytest.raises(TypeError):
            engine.find_match(None, 0.5)

    def test_repeated_searches_are_independent(self, country_engine):
        first = country_engine.find_match("irland", 0.6)
        country_engine.find_match("rep of ireland", 0.3)
        assert country_engine.find_match("irland", 0.6) == first


class TestFindBestMatches:
    def test_sorted_descending(self, country_engine):
        matches = country_engine.find_best_matches("irland", 0.6)
        scores = [m.similarity for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert matches[0].value == "Ireland"

    def test_ties_keep_discovery_order(self):
        engine = tf.FuzzySearchEngine()
        engine.set_source(["iceland", "finland", "ireland"])
        matches = engine.find_best_matches("irland", 0.7)
        # finland and iceland both score 5/7
        assert _values(matches) == ["ireland", "finland", "iceland"]

    def test_limit(self, country_engine):
        assert len(country_engine.find_best_matches("ir", 0.0, limit=3)) == 3
        assert country_engine.find_best_matches("ir", 0.0, limit=0) == []

    def test_negative_limit_raises(self, country_engine):
        with pytest.raises(tf.ValidationError):
            country_engine.find_best_matches("ir", 0.0, limit=-1)


class TestConfiguration:
    def test_string_options(self):
        engine = tf.FuzzySearchEngine(strategy="TWO_ROW", pruning="heuristic")
        assert engine.strategy is tf.DistanceStrategy.TWO_ROW
        assert engine.pruning is tf.PruningMode.HEURISTIC

    def test_defaults(self):
        engine = tf.FuzzySearchEngine()
        assert engine.strategy is tf.DistanceStrategy.FULL_MATRIX
        assert engine.pruning is tf.PruningMode.EXACT

    def test_unknown_options_raise(self):
        with pytest.raises(tf.ValidationError):
            tf.FuzzySearchEngine(pruning="aggressive")
        with pytest.raises(TypeError):
            tf.FuzzySearchEngine(strategy=3)

    def test_repr(self):
        engine = tf.FuzzySearchEngine()
        engine.set_source(["a", "b"])
        assert repr(engine) == "FuzzySearchEngine(strategy='full_matrix', pruning='exact', size=2)"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
