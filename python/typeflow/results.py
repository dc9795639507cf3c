"""Result types."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from typeflow.errors import ValidationError


@dataclass(frozen=True)
class Match:
    """
    A stored value together with its similarity to the query.

    Attributes:
        value: The candidate string as it was given to ``set_source``.
        similarity: ``1 - distance / max(len(key), len(query))``, in [0, 1].

    Supports equality comparison and hashing for use in sets and as dict keys.
    """

    value: str
    similarity: float

    def to_dict(self) -> dict:
        return asdict(self)


def sort_matches(matches: Iterable[Match], limit: Optional[int] = None) -> list[Match]:
    """Order matches by descending similarity.

    The sort is stable: matches with equal similarity keep the order in which
    the search discovered them.

    Args:
        matches: Matches in discovery order.
        limit: Maximum number of matches to keep (None keeps all).
    """
    if limit is not None and limit < 0:
        raise ValidationError(f"limit must be non-negative, got {limit}")
    ordered = sorted(matches, key=lambda m: m.similarity, reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return ordered


__all__ = ["Match", "sort_matches"]
