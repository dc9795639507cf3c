"""Incremental Levenshtein state.

An :class:`EditDistanceState` holds one comparison between a ``source`` that
is built up character by character and a ``target`` (normally the query, fixed
for the whole search). Appending to either side only computes the part of the
matrix that changed, and any suffix appended earlier can be rolled back to get
the exact state seen before it was added.

Two cost representations are available, selected with
:class:`~typeflow.DistanceStrategy`:

``FULL_MATRIX``
    Every row of the ``(len(source) + 1) x (len(target) + 1)`` matrix is kept.
    ``extend`` fills only the new rows (and the new columns of existing rows
    when the target grows), costing O(len(delta) * len(target)). ``rollback_by``
    only truncates: rows past the new source length stay allocated and are
    overwritten by the next extension. Memory is O(len(source) * len(target)).

``TWO_ROW``
    A refill rolls two rows over the source and keeps only the last one, so
    memory is O(len(target)). The historical rows a delta-only refill would
    need are gone, so every ``extend`` and every ``rollback_by`` recomputes
    over the whole source: O(len(source) * len(target)) per call. Choose it when memory
    matters more than the cost of many small extensions.

Example:
    >>> state = EditDistanceState("alex")
    >>> state.extend("al")
    >>> state.distance
    2
    >>> state.extend("es")
    >>> state.distance
    1
    >>> state.rollback_by(2)
    >>> state.distance
    2
"""

from __future__ import annotations

import sys
from typing import Union

from typeflow._utils import ensure_str, normalize_option
from typeflow.distance import extend_row, next_row
from typeflow.enums import DistanceStrategy
from typeflow.errors import EmptyStateError, OutOfRangeRollbackError

# Reported by ``distance`` before the first extension.
UNSET_DISTANCE = sys.maxsize


class EditDistanceState:
    """Levenshtein distance between a growing source and a target.

    Args:
        target: Initial comparison target (usually the query).
        strategy: Cost representation, a DistanceStrategy or its string value.

    Warning:
        Instances are NOT thread-safe. Each search creates and owns its state.
    """

    __slots__ = ("_strategy", "_source", "_target", "_rows", "_current", "_started")

    def __init__(
        self,
        target: str = "",
        strategy: Union[str, DistanceStrategy] = DistanceStrategy.FULL_MATRIX,
    ):
        ensure_str(target, "target")
        self._strategy = normalize_option(strategy, DistanceStrategy, "strategy")
        self._source: list[str] = []
        self._target: list[str] = list(target)
        # FULL_MATRIX: rows[i] is matrix row i; entries past len(source) are spare capacity
        self._rows: list[list[int]] = []
        # TWO_ROW: row len(source); the row before it is only needed while refilling
        self._current: list[int] = []
        self._started = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> DistanceStrategy:
        return self._strategy

    @property
    def source(self) -> str:
        return "".join(self._source)

    @property
    def target(self) -> str:
        return "".join(self._target)

    @property
    def source_length(self) -> int:
        return len(self._source)

    @property
    def target_length(self) -> int:
        return len(self._target)

    @property
    def is_empty(self) -> bool:
        """True until the first non-empty extension."""
        return not self._started

    @property
    def distance(self) -> int:
        """Edit distance between the current source and target, in O(1).

        Returns ``UNSET_DISTANCE`` before the state has been extended.
        """
        if not self._started:
            return UNSET_DISTANCE
        return self._last_row()[-1]

    def lower_bound(self) -> int:
        """Smallest distance any extension of the current source can reach.

        Every alignment of a longer source passes through the current last
        row, and costs never decrease along an alignment, so the row minimum
        bounds the distance of every string that starts with ``source``.
        """
        if not self._started:
            return UNSET_DISTANCE
        return min(self._last_row())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def extend(self, source_delta: str, target_delta: str = "") -> None:
        """Append characters to the source and, optionally, to the target.

        Args:
            source_delta: Characters appended to the source.
            target_delta: Characters appended to the target.

        Both empty is a no-op.
        """
        ensure_str(source_delta, "source_delta")
        ensure_str(target_delta, "target_delta")
        if not source_delta and not target_delta:
            return

        if self._strategy is DistanceStrategy.FULL_MATRIX:
            self._extend_matrix(source_delta, target_delta)
        else:
            self._source.extend(source_delta)
            self._target.extend(target_delta)
            self._refill_rolling()
        self._started = True

    def rollback_by(self, count: int, target_count: int = 0) -> None:
        """Remove the last ``count`` source and ``target_count`` target characters.

        After rolling back exactly what an earlier ``extend`` added, ``distance``
        returns the value it had right before that ``extend``.

        Raises:
            EmptyStateError: If the state has never been extended.
            OutOfRangeRollbackError: If a count is negative or larger than the
                corresponding sequence.
        """
        if not self._started:
            raise EmptyStateError()
        if count < 0 or count > len(self._source):
            raise OutOfRangeRollbackError(count, len(self._source), "source")
        if target_count < 0 or target_count > len(self._target):
            raise OutOfRangeRollbackError(target_count, len(self._target), "target")
        if count == 0 and target_count == 0:
            return

        if count:
            del self._source[-count:]
        if target_count:
            del self._target[-target_count:]

        if self._strategy is DistanceStrategy.FULL_MATRIX:
            if target_count:
                width = len(self._target) + 1
                for row in self._rows[: len(self._source) + 1]:
                    del row[width:]
        else:
            self._refill_rolling()

    def reset(self, target: str | None = None) -> None:
        """Drop the source (and optionally replace the target), returning to the unset state."""
        if target is not None:
            ensure_str(target, "target")
            self._target = list(target)
        self._source.clear()
        self._rows.clear()
        self._current = []
        self._started = False

    # ------------------------------------------------------------------
    # FULL_MATRIX
    # ------------------------------------------------------------------

    def _extend_matrix(self, source_delta: str, target_delta: str) -> None:
        rows = self._rows
        old_height = len(self._source) + 1

        if not self._started:
            # row 0 is the first row ever filled; anything left in rows is stale
            rows.clear()
            rows.append(list(range(len(self._target) + 1)))

        if target_delta:
            start = len(self._target) + 1
            self._target.extend(target_delta)
            # new columns for the rows that are already live
            for i in range(old_height):
                above = rows[i - 1] if i else None
                char = self._source[i - 1] if i else None
                extend_row(rows[i], above, char, self._target, start)

        if source_delta:
            base = len(self._source)
            self._source.extend(source_delta)
            for offset, char in enumerate(source_delta, 1):
                i = base + offset
                row = next_row(rows[i - 1], char, self._target, i)
                if i < len(rows):
                    rows[i] = row
                else:
                    rows.append(row)

    # ------------------------------------------------------------------
    # TWO_ROW
    # ------------------------------------------------------------------

    def _refill_rolling(self) -> None:
        target = self._target
        current = list(range(len(target) + 1))
        for i, char in enumerate(self._source, 1):
            current = next_row(current, char, target, i)
        self._current = current

    def _last_row(self) -> list[int]:
        if self._strategy is DistanceStrategy.FULL_MATRIX:
            return self._rows[len(self._source)]
        return self._current

    def __repr__(self) -> str:
        return (
            f"EditDistanceState(source={self.source!r}, target={self.target!r}, "
            f"strategy={self._strategy.value!r}, distance={self.distance})"
        )


__all__ = ["EditDistanceState", "UNSET_DISTANCE"]
