"""Fuzzy search over a prefix index.

:class:`FuzzySearchEngine` walks a :class:`~typeflow.PrefixIndex` depth-first
while keeping a single :class:`~typeflow.EditDistanceState` in step with the
walk: going down a branch appends the branch label to the state's source,
moving over to a sibling first rolls back whatever the two branches do not
share. Each stored key is therefore scored with work proportional to the
characters that are not shared with the previously visited key.

Example:
    >>> from typeflow import FuzzySearchEngine, lowercase_filter
    >>> engine = FuzzySearchEngine(filters=[lowercase_filter])
    >>> engine.set_source(["Iran", "Iraq", "Ireland", "Iceland"])
    4
    >>> [(m.value, round(m.similarity, 2)) for m in engine.find_best_matches("irland", 0.6)]
    [('Ireland', 0.86), ('Iceland', 0.71), ('Iran', 0.67)]
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Union

from typeflow._utils import ensure_str, normalize_option, validate_similarity
from typeflow.distance import similarity_from_distance
from typeflow.enums import DistanceStrategy, PruningMode, Visit
from typeflow.normalize import WordFilter, apply_filters
from typeflow.results import Match, sort_matches
from typeflow.state import EditDistanceState
from typeflow.trie import PrefixIndex, PrefixInfo

logger = logging.getLogger(__name__)

# Slack for float rounding when comparing a bound against the threshold.
_BOUND_EPSILON = 1e-9


def best_reachable_similarity(lower_bound: int, prefix_length: int, query_length: int) -> float:
    """Upper bound on the similarity of any key starting with the current prefix.

    A key of length ``L >= prefix_length`` is at least ``lower_bound`` edits
    and at least ``|L - query_length|`` edits away from the query. Maximizing
    ``1 - d / max(L, query_length)`` under both constraints gives
    ``query_length / max(query_length + lower_bound, prefix_length)``.
    """
    denominator = max(query_length + lower_bound, prefix_length)
    if denominator == 0:
        return 1.0
    return query_length / denominator


class FuzzySearchEngine:
    """
    Approximate string search driven by an incremental Levenshtein state.

    Args:
        strategy: Cost representation of the per-search EditDistanceState
            ("full_matrix" or "two_row").
        pruning: Subtree pruning rule ("exact", "heuristic" or "none").
        filters: Default word filters applied by ``set_source``.

    Thread safety:
        ``find_match`` only reads the index and owns its distance state, so
        concurrent searches are safe. ``set_source`` builds a new index and
        swaps it in; searches already running keep the index they started with.
    """

    def __init__(
        self,
        strategy: Union[str, DistanceStrategy] = DistanceStrategy.FULL_MATRIX,
        pruning: Union[str, PruningMode] = PruningMode.EXACT,
        filters: Optional[Sequence[WordFilter]] = None,
    ):
        self._strategy = normalize_option(strategy, DistanceStrategy, "strategy")
        self._pruning = normalize_option(pruning, PruningMode, "pruning")
        self._filters = list(filters) if filters else []
        self._index = PrefixIndex()

    @property
    def strategy(self) -> DistanceStrategy:
        return self._strategy

    @property
    def pruning(self) -> PruningMode:
        return self._pruning

    @property
    def index(self) -> PrefixIndex:
        return self._index

    def __len__(self) -> int:
        return len(self._index)

    def set_source(
        self,
        values: Iterable[str],
        filters: Optional[Sequence[WordFilter]] = None,
    ) -> int:
        """Index ``values``, replacing the current source.

        Each value is passed through the filter chain (``filters`` if given,
        otherwise the engine defaults) to obtain its key. Values that a filter
        skips are left out. An empty key is indexed like any other.

        Returns:
            Number of values indexed.
        """
        chain = self._filters if filters is None else list(filters)
        index = PrefixIndex()
        skipped = 0
        for value in values:
            ensure_str(value, "value")
            key = apply_filters(value, chain)
            if key is None:
                skipped += 1
                continue
            index.insert(key, value)

        self._index = index
        logger.debug(
            "Indexed %d values under %d keys (%d nodes, %d skipped)",
            len(index), index.key_count, index.node_count, skipped,
        )
        return len(index)

    def find_match(self, query: str, min_similarity: float) -> list[Match]:
        """Find every indexed value at least ``min_similarity`` similar to ``query``.

        Args:
            query: String to match. Compared as given, filters are not applied.
            min_similarity: Threshold in [0, 1].

        Returns:
            Matches in the order the walk discovered them (ascending key
            order). Use :meth:`find_best_matches` for ranked output.
        """
        ensure_str(query, "query")
        min_similarity = validate_similarity(min_similarity)

        index = self._index
        state = EditDistanceState(query, strategy=self._strategy)
        query_length = len(query)
        pruning = self._pruning
        cutoff = min_similarity - _BOUND_EPSILON
        matches: list[Match] = []
        visited = 0
        pruned = 0

        def _visit(info: PrefixInfo) -> Optional[Visit]:
            nonlocal visited, pruned
            visited += 1

            if not info.prefix:
                # values under the empty key; every other key lies below the root
                similarity = similarity_from_distance(query_length, 0, query_length)
                if similarity >= min_similarity:
                    matches.extend(Match(value, similarity) for value in info.values)
                return None

            stale = state.source_length - info.shared_length
            if stale:
                state.rollback_by(stale)
            state.extend(info.delta)

            if info.is_word:
                similarity = similarity_from_distance(
                    state.distance, len(info.prefix), query_length
                )
                if similarity >= min_similarity:
                    matches.extend(Match(value, similarity) for value in info.values)
                elif pruning is PruningMode.HEURISTIC:
                    pruned += 1
                    return Visit.SKIP_SUBTREE

            if pruning is PruningMode.EXACT:
                bound = best_reachable_similarity(
                    state.lower_bound(), len(info.prefix), query_length
                )
                if bound < cutoff:
                    pruned += 1
                    return Visit.SKIP_SUBTREE
            return None

        index.traverse(_visit)
        logger.debug(
            "find_match(%r, %.3f): visited %d nodes, pruned %d subtrees, %d matches",
            query, min_similarity, visited, pruned, len(matches),
        )
        return matches

    def find_best_matches(
        self,
        query: str,
        min_similarity: float = 0.0,
        limit: Optional[int] = None,
    ) -> list[Match]:
        """Like :meth:`find_match`, sorted by descending similarity.

        Ties keep discovery order. ``limit`` caps the number of results.
        """
        return sort_matches(self.find_match(query, min_similarity), limit=limit)

    def __repr__(self) -> str:
        return (
            f"FuzzySearchEngine(strategy={self._strategy.value!r}, "
            f"pruning={self._pruning.value!r}, size={len(self._index)})"
        )


__all__ = ["FuzzySearchEngine", "best_reachable_similarity"]
