"""
typeflow - Incremental Levenshtein fuzzy search

A Python library for approximate string matching over large word lists.
Candidates live in a prefix index, and a single incremental edit distance
state is extended and rolled back while the index is walked, so keys sharing
a prefix share the work of comparing it.

Example usage:
    >>> import typeflow as tf

    # One-shot distance and similarity
    >>> tf.levenshtein("kitten", "sitting")
    3
    >>> tf.levenshtein_similarity("hello", "hallo")
    0.8

    # Incremental distance with rollback
    >>> state = tf.EditDistanceState("alex")
    >>> state.extend("al")
    >>> state.extend("es")
    >>> state.distance
    1
    >>> state.rollback_by(2)
    >>> state.distance
    2

    # Fuzzy search over a word list
    >>> engine = tf.FuzzySearchEngine(filters=[tf.lowercase_filter])
    >>> engine.set_source(["Iran", "Iraq", "Ireland"])
    3
    >>> [m.value for m in engine.find_best_matches("irland", 0.6)]
    ['Ireland', 'Iran']
"""

from importlib.metadata import version as _get_version

from typeflow.distance import levenshtein, levenshtein_similarity, similarity_from_distance
from typeflow.engine import FuzzySearchEngine
from typeflow.enums import DistanceStrategy, NormalizationMode, PruningMode, Visit
from typeflow.errors import (
    EmptyStateError,
    FuzzyIndexError,
    OutOfRangeRollbackError,
    RollbackError,
    TypeflowError,
    ValidationError,
)
from typeflow.index import FuzzyIndex
from typeflow.normalize import (
    WordFilter,
    lowercase_filter,
    normalization_filter,
    normalize_pair,
    normalize_string,
    skip_shorter_than,
)
from typeflow.results import Match, sort_matches
from typeflow.state import UNSET_DISTANCE, EditDistanceState
from typeflow.trie import PrefixIndex, PrefixInfo

__version__ = _get_version("typeflow")
__all__ = [
    # Version
    "__version__",
    # Custom exceptions
    "TypeflowError",
    "ValidationError",
    "RollbackError",
    "OutOfRangeRollbackError",
    "EmptyStateError",
    "FuzzyIndexError",
    # Result types
    "Match",
    "sort_matches",
    # Enums
    "DistanceStrategy",
    "PruningMode",
    "Visit",
    "NormalizationMode",
    # Distance functions
    "levenshtein",
    "levenshtein_similarity",
    "similarity_from_distance",
    # Incremental state
    "EditDistanceState",
    "UNSET_DISTANCE",
    # Prefix index
    "PrefixIndex",
    "PrefixInfo",
    # Search
    "FuzzySearchEngine",
    "FuzzyIndex",
    # Normalization
    "WordFilter",
    "normalize_string",
    "normalize_pair",
    "lowercase_filter",
    "normalization_filter",
    "skip_shorter_than",
]


# Convenience alias
edit_distance = levenshtein
