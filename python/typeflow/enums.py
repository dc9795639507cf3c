"""Enums for typeflow API."""

from enum import Enum


class DistanceStrategy(str, Enum):
    """Cost representations available to :class:`~typeflow.EditDistanceState`.

    Both strategies honour the same contract (extend, rollback, O(1) distance);
    they differ in what they keep in memory and what a call costs.

    Example:
        >>> from typeflow import EditDistanceState, DistanceStrategy
        >>> state = EditDistanceState("alex", strategy=DistanceStrategy.TWO_ROW)
        >>> state.extend("ales")
        >>> state.distance
        1
    """

    FULL_MATRIX = "full_matrix"
    """Keeps every row. Extending fills only the new rows, rollback truncates."""

    TWO_ROW = "two_row"
    """Rolls two rows of len(target) + 1 and keeps the last. Every extend or rollback recomputes from scratch."""


class PruningMode(str, Enum):
    """Subtree pruning rules used by :class:`~typeflow.FuzzySearchEngine`.

    Example:
        >>> from typeflow import FuzzySearchEngine, PruningMode
        >>> engine = FuzzySearchEngine(pruning=PruningMode.HEURISTIC)
    """

    EXACT = "exact"
    """Skip a subtree only when no key below it can reach the threshold (no false negatives)"""

    HEURISTIC = "heuristic"
    """Skip the subtree of any stored key scoring below the threshold (faster, may miss matches)"""

    NONE = "none"
    """Visit every node of the index"""


class Visit(str, Enum):
    """Signals a :meth:`~typeflow.PrefixIndex.traverse` visitor returns for each node."""

    CONTINUE = "continue"
    """Descend into the node's children"""

    SKIP_SUBTREE = "skip_subtree"
    """Do not visit any descendant of this node, continue with its next sibling"""

    HALT = "halt"
    """Stop the traversal immediately"""


class NormalizationMode(str, Enum):
    """String normalization modes.

    Used by normalization utilities and word filters to control how strings
    are preprocessed before they are indexed or compared.

    Example:
        >>> from typeflow import normalize_string, NormalizationMode
        >>> normalize_string("  Hello, World!  ", NormalizationMode.STRICT)
        'helloworld'
    """

    LOWERCASE = "lowercase"
    """Convert to lowercase only"""

    UNICODE_NFKD = "unicode_nfkd"
    """Apply Unicode NFKD normalization"""

    REMOVE_PUNCTUATION = "remove_punctuation"
    """Remove punctuation characters"""

    REMOVE_WHITESPACE = "remove_whitespace"
    """Remove all whitespace"""

    STRICT = "strict"
    """Apply all normalizations: lowercase + NFKD + remove punctuation + remove whitespace"""


__all__ = ["DistanceStrategy", "PruningMode", "Visit", "NormalizationMode"]
