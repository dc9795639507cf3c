"""Batch operations API for typeflow.

This module provides list-based helpers for one-off comparisons where building
and keeping a :class:`~typeflow.FuzzySearchEngine` is not worth it.

Example usage:
    >>> import typeflow.batch as batch

    # Compute similarity of query against all strings
    >>> results = batch.similarity(["hello", "hallo", "world"], "helo")
    >>> [(r.value, round(r.similarity, 2)) for r in results]
    [('hello', 0.8), ('hallo', 0.6), ('world', 0.2)]

    # Find top N best matches
    >>> matches = batch.best_matches(["apple", "apply", "banana"], "appel", limit=2)
    >>> [(m.value, m.similarity) for m in matches]
    [('apple', 0.6), ('apply', 0.6)]

    # Pairwise similarity between aligned lists
    >>> batch.pairwise(["hello", "world"], ["hallo", "word"])
    [0.8, 0.8]
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from typeflow.distance import levenshtein_similarity
from typeflow.engine import FuzzySearchEngine
from typeflow.errors import ValidationError
from typeflow.results import Match, sort_matches

if TYPE_CHECKING:
    from typeflow.enums import DistanceStrategy, PruningMode

__all__ = [
    "similarity",
    "best_matches",
    "pairwise",
    "similarity_matrix",
]


def similarity(strings: list[str], query: str) -> list[Match]:
    """Compute the Levenshtein similarity of a query against all strings.

    Args:
        strings: List of strings to compare against the query.
        query: The query string to match.

    Returns:
        List of Match objects in the same order as the input strings.

    Example:
        >>> results = similarity(["hello", "hallo", "world"], "helo")
        >>> for r in results:
        ...     print(f"{r.value}: {r.similarity:.2f}")
        hello: 0.80
        hallo: 0.60
        world: 0.20
    """
    return [Match(s, levenshtein_similarity(s, query)) for s in strings]


def best_matches(
    strings: list[str],
    query: str,
    limit: int = 5,
    min_similarity: float = 0.0,
    strategy: str | DistanceStrategy = "full_matrix",
    pruning: str | PruningMode = "exact",
) -> list[Match]:
    """Find the top N best matches for a query from a list of strings.

    Indexes the strings in a throwaway FuzzySearchEngine, so strings sharing
    prefixes are only compared once per shared prefix.

    Args:
        strings: List of strings to search.
        query: The query string to match.
        limit: Maximum number of results to return (default: 5).
        min_similarity: Minimum similarity score to include in results
            (default: 0.0, meaning all results are included).
        strategy: Distance strategy used by the search.
        pruning: Pruning rule used by the search.

    Returns:
        List of Match objects sorted by similarity descending.

    Example:
        >>> matches = best_matches(["apple", "apply", "banana"], "appel", limit=2)
        >>> for m in matches:
        ...     print(f"{m.value}: {m.similarity:.2f}")
        apple: 0.60
        apply: 0.60
    """
    engine = FuzzySearchEngine(strategy=strategy, pruning=pruning)
    engine.set_source(strings)
    return sort_matches(engine.find_match(query, min_similarity), limit=limit)


def pairwise(left: list[str], right: list[str]) -> list[float]:
    """Compute pairwise similarity between two equal-length lists.

    Raises:
        ValidationError: If left and right have different lengths.

    Example:
        >>> pairwise(["hello", "world"], ["hallo", "word"])
        [0.8, 0.8]
    """
    if len(left) != len(right):
        raise ValidationError(
            f"left and right must have the same length, got {len(left)} and {len(right)}"
        )
    return [levenshtein_similarity(a, b) for a, b in zip(left, right)]


def similarity_matrix(queries: list[str], choices: list[str]) -> list[list[float]]:
    """Compute the similarity between every query and every choice.

    Returns:
        2D list where result[i][j] is the similarity between queries[i]
        and choices[j].

    Example:
        >>> matrix = similarity_matrix(["hello", "world"], ["hallo", "word", "help"])
        >>> len(matrix), len(matrix[0])
        (2, 3)
    """
    return [[levenshtein_similarity(q, c) for c in choices] for q in queries]
