"""One-shot Levenshtein distance and the row recurrence shared with the incremental state.

Strings are compared by code point, so a multi-byte character such as ``"é"``
or ``"日"`` counts as a single unit.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from typeflow._utils import ensure_str
from typeflow.enums import NormalizationMode
from typeflow.errors import ValidationError
from typeflow.normalize import normalize_pair


def next_row(previous: Sequence[int], char: str, target: Sequence[str], index: int) -> list[int]:
    """Compute row ``index`` of the edit distance matrix from row ``index - 1``.

    ``previous[j]`` must hold the distance between the first ``index - 1``
    source characters and ``target[:j]``; ``char`` is source character
    ``index - 1``.
    """
    row = [index]
    left = index
    for j, target_char in enumerate(target, 1):
        diagonal = previous[j - 1]
        if char == target_char:
            left = diagonal
        else:
            up = previous[j]
            best = diagonal if diagonal < up else up
            if left < best:
                best = left
            left = best + 1
        row.append(left)
    return row


def extend_row(row: list[int], above: Optional[Sequence[int]], char: Optional[str],
               target: Sequence[str], start: int) -> None:
    """Append cells ``start..len(target)`` to an existing matrix row in place.

    ``above`` is the row before ``row`` (None for row 0) and ``char`` the
    source character that row ``row`` consumes.
    """
    if above is None:
        row.extend(range(start, len(target) + 1))
        return
    for j in range(start, len(target) + 1):
        diagonal = above[j - 1]
        if char == target[j - 1]:
            row.append(diagonal)
        else:
            row.append(min(above[j], row[j - 1], diagonal) + 1)


def similarity_from_distance(distance: int, len_a: int, len_b: int) -> float:
    """Normalize an edit distance to a similarity in [0, 1].

    ``1 - distance / max(len_a, len_b)``; two empty strings are identical.
    """
    longest = max(len_a, len_b)
    if longest == 0:
        return 1.0
    return 1.0 - distance / longest


def levenshtein(
    a: str,
    b: str,
    max_distance: Optional[int] = None,
    normalize: Optional[Union[str, NormalizationMode]] = None,
) -> int:
    """Compute the Levenshtein (edit) distance between two strings.

    Uses two rolling rows sized after the shorter string, so memory is
    O(min(len(a), len(b))) and time O(len(a) * len(b)).

    Args:
        a: First string.
        b: Second string.
        max_distance: Optional cut-off. When the distance is certain to exceed
            it, ``max_distance + 1`` is returned without finishing the matrix.
        normalize: Optional normalization mode applied to both strings first.

    Returns:
        The minimum number of single-character insertions, deletions and
        substitutions turning ``a`` into ``b``.

    Example:
        >>> levenshtein("kitten", "sitting")
        3
        >>> levenshtein("abcdef", "ghijkl", max_distance=3)
        4
    """
    ensure_str(a, "a")
    ensure_str(b, "b")
    if max_distance is not None and max_distance < 0:
        raise ValidationError(f"max_distance must be non-negative, got {max_distance}")
    if normalize is not None:
        a, b = normalize_pair(a, b, normalize)

    if a == b:
        return 0
    # columns follow the shorter string
    if len(b) > len(a):
        a, b = b, a
    if not b:
        return _cap(len(a), max_distance)
    if max_distance is not None and len(a) - len(b) > max_distance:
        return max_distance + 1

    row = list(range(len(b) + 1))
    for i, char in enumerate(a, 1):
        row = next_row(row, char, b, i)
        if max_distance is not None and min(row) > max_distance:
            return max_distance + 1
    return _cap(row[-1], max_distance)


def levenshtein_similarity(
    a: str,
    b: str,
    normalize: Optional[Union[str, NormalizationMode]] = None,
) -> float:
    """Normalized Levenshtein similarity, ``1 - distance / max(len(a), len(b))``.

    Example:
        >>> levenshtein_similarity("hello", "hallo")
        0.8
    """
    ensure_str(a, "a")
    ensure_str(b, "b")
    if normalize is not None:
        a, b = normalize_pair(a, b, normalize)
    return similarity_from_distance(levenshtein(a, b), len(a), len(b))


def _cap(distance: int, max_distance: Optional[int]) -> int:
    if max_distance is not None and distance > max_distance:
        return max_distance + 1
    return distance


__all__ = [
    "levenshtein",
    "levenshtein_similarity",
    "similarity_from_distance",
    "next_row",
    "extend_row",
]
