"""FuzzyIndex for repeated fuzzy matching against a fixed set of strings.

This module provides a high-level interface for building reusable fuzzy
indices from Polars Series or Python lists, enabling efficient repeated
searches without rebuilding the underlying prefix index.

Warning:
    Searching one FuzzyIndex from several threads is safe. Rebuilding or
    loading one while it is being searched is not synchronized.
"""

import pickle
from pathlib import Path
from typing import List, Optional, Union

import polars as pl

from typeflow._utils import normalize_option
from typeflow.engine import FuzzySearchEngine
from typeflow.enums import DistanceStrategy, NormalizationMode, PruningMode
from typeflow.errors import FuzzyIndexError
from typeflow.normalize import normalization_filter
from typeflow.results import Match, sort_matches

_FORMAT_VERSION = 1


class FuzzyIndex:
    """
    A reusable fuzzy matching index for batch operations.

    FuzzyIndex wraps a FuzzySearchEngine and provides a convenient API for
    building it from Polars Series and running many searches.

    The index can be persisted to disk and reloaded for later use.

    Warning:
        Concurrent searches are thread-safe; building is not.

    Example:
        >>> import polars as pl
        >>> from typeflow import FuzzyIndex
        >>>
        >>> # Build index from a Series
        >>> names = pl.Series(["Ireland", "Iceland", "Finland"])
        >>> index = FuzzyIndex.from_series(names, normalize="lowercase")
        >>>
        >>> # Search for similar strings
        >>> queries = pl.Series(["irland", "fnland"])
        >>> results = index.search_series(queries, min_similarity=0.6)
        >>>
        >>> # Save for later reuse
        >>> index.save("names_index.pkl")
        >>> index = FuzzyIndex.load("names_index.pkl")
    """

    def __init__(
        self,
        items: List[str],
        normalize: Optional[Union[str, NormalizationMode]] = None,
        strategy: Union[str, DistanceStrategy] = DistanceStrategy.FULL_MATRIX,
        pruning: Union[str, PruningMode] = PruningMode.EXACT,
    ):
        """
        Create a FuzzyIndex from a list of strings.

        Args:
            items: List of strings to index
            normalize: Optional normalization applied to items and queries
                ("lowercase", "unicode_nfkd", "remove_punctuation",
                "remove_whitespace" or "strict")
            strategy: Edit distance strategy ("full_matrix" or "two_row")
            pruning: Subtree pruning rule ("exact", "heuristic" or "none")
        """
        self._items = list(items)
        self._normalize = (
            normalize_option(normalize, NormalizationMode, "normalize")
            if normalize is not None
            else None
        )
        self._normalizer = (
            normalization_filter(self._normalize) if self._normalize is not None else None
        )
        self._engine = self._build_engine(strategy, pruning)

    def _build_engine(self, strategy, pruning) -> FuzzySearchEngine:
        """Build the underlying search engine."""
        filters = [self._normalizer] if self._normalizer else []
        engine = FuzzySearchEngine(strategy=strategy, pruning=pruning, filters=filters)
        engine.set_source(self._items)
        return engine

    @classmethod
    def from_series(
        cls,
        series: "pl.Series",
        normalize: Optional[Union[str, NormalizationMode]] = None,
        strategy: Union[str, DistanceStrategy] = DistanceStrategy.FULL_MATRIX,
        pruning: Union[str, PruningMode] = PruningMode.EXACT,
    ) -> "FuzzyIndex":
        """
        Create a FuzzyIndex from a Polars Series.

        Null entries are left out of the index.

        Example:
            >>> names = pl.Series(["Apple", "Microsoft", "Google"])
            >>> index = FuzzyIndex.from_series(names, normalize="lowercase")
        """
        items = [str(x) for x in series.to_list() if x is not None]
        return cls(items, normalize=normalize, strategy=strategy, pruning=pruning)

    @classmethod
    def from_dataframe(
        cls,
        df: "pl.DataFrame",
        column: str,
        normalize: Optional[Union[str, NormalizationMode]] = None,
        strategy: Union[str, DistanceStrategy] = DistanceStrategy.FULL_MATRIX,
        pruning: Union[str, PruningMode] = PruningMode.EXACT,
    ) -> "FuzzyIndex":
        """Create a FuzzyIndex from a DataFrame column."""
        return cls.from_series(
            df[column], normalize=normalize, strategy=strategy, pruning=pruning
        )

    def _prepare_query(self, query: str) -> str:
        if self._normalizer is None:
            return query
        return self._normalizer(query)

    def search(
        self,
        query: str,
        min_similarity: float = 0.0,
        limit: Optional[int] = 10,
    ) -> List[Match]:
        """
        Search the index for strings similar to the query.

        Args:
            query: Query string to search for
            min_similarity: Minimum similarity score (0.0 to 1.0)
            limit: Maximum number of results to return (None for all)

        Returns:
            List of Match objects, best first
        """
        matches = self._engine.find_match(self._prepare_query(query), min_similarity)
        return sort_matches(matches, limit=limit)

    def search_series(
        self,
        queries: "pl.Series",
        min_similarity: float = 0.0,
        limit: int = 1,
        include_query: bool = True,
    ) -> "pl.DataFrame":
        """
        Search for each query in a Series, returning a DataFrame of results.

        Args:
            queries: Series of query strings
            min_similarity: Minimum similarity score (0.0 to 1.0)
            limit: Maximum matches per query (default: 1 for best match only)
            include_query: Include query column in results

        Returns:
            DataFrame with columns:
            - query_idx: Index of the query in the input Series
            - query: The query string (if include_query=True)
            - match: The matched string from the index
            - score: Similarity score
        """
        rows = []
        for query_idx, query in enumerate(queries.to_list()):
            if query is None:
                continue

            for match in self.search(str(query), min_similarity=min_similarity, limit=limit):
                row = {
                    "query_idx": query_idx,
                    "match": match.value,
                    "score": match.similarity,
                }
                if include_query:
                    row["query"] = str(query)
                rows.append(row)

        columns = ["query_idx", "query", "match", "score"] if include_query else [
            "query_idx", "match", "score"
        ]
        if not rows:
            schema = {"query_idx": pl.Int64, "query": pl.Utf8, "match": pl.Utf8, "score": pl.Float64}
            return pl.DataFrame(schema={c: schema[c] for c in columns})

        return pl.DataFrame(rows).select(columns)

    def batch_search(
        self,
        queries: List[str],
        min_similarity: float = 0.0,
        limit: Optional[int] = 1,
    ) -> List[List[Match]]:
        """
        Search for multiple queries, returning results for each.

        Returns:
            List of lists, where each inner list contains the Match objects
            for the corresponding query
        """
        return [self.search(q, min_similarity=min_similarity, limit=limit) for q in queries]

    def get_items(self) -> List[str]:
        """Return the list of indexed items."""
        return self._items.copy()

    def __len__(self) -> int:
        """Return the number of indexed items."""
        return len(self._engine)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the index to a file.

        Only the items and settings are stored; the prefix index is rebuilt
        on load.

        Example:
            >>> index.save("my_index.pkl")
        """
        data = {
            "version": _FORMAT_VERSION,
            "items": self._items,
            "normalize": self._normalize.value if self._normalize else None,
            "strategy": self._engine.strategy.value,
            "pruning": self._engine.pruning.value,
        }
        with open(path, "wb") as f:
            pickle.dump(data, f)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "FuzzyIndex":
        """
        Load an index from a file.

        Raises:
            FuzzyIndexError: If the file does not hold a saved FuzzyIndex.

        Example:
            >>> index = FuzzyIndex.load("my_index.pkl")
        """
        with open(path, "rb") as f:
            data = pickle.load(f)

        if not isinstance(data, dict) or data.get("version") != _FORMAT_VERSION:
            raise FuzzyIndexError(f"{path} does not contain a saved FuzzyIndex")

        return cls(
            items=data["items"],
            normalize=data["normalize"],
            strategy=data["strategy"],
            pruning=data["pruning"],
        )

    def __repr__(self) -> str:
        return (
            f"FuzzyIndex(strategy={self._engine.strategy.value!r}, "
            f"pruning={self._engine.pruning.value!r}, size={len(self)})"
        )
