"""String normalization and word filters.

Filters run over every candidate string before it is inserted into a
:class:`~typeflow.PrefixIndex`. A filter receives the current form of the word
and returns the transformed word, or ``None`` to drop the word from the
source altogether. Filters are applied in order, each one seeing the output of
the previous one.

Example:
    >>> from typeflow import FuzzySearchEngine, lowercase_filter, skip_shorter_than
    >>> engine = FuzzySearchEngine(filters=[lowercase_filter, skip_shorter_than(2)])
"""

from __future__ import annotations

import string
import unicodedata
from typing import Callable, Iterable, Optional, Union

from typeflow._utils import ensure_str, normalize_option
from typeflow.enums import NormalizationMode

WordFilter = Callable[[str], Optional[str]]

_PUNCTUATION = frozenset(string.punctuation)


def normalize_string(text: str, mode: Union[str, NormalizationMode]) -> str:
    """Normalize a string according to the given mode.

    Args:
        text: String to normalize.
        mode: A NormalizationMode or its string value:
            - "lowercase": Convert to lowercase
            - "unicode_nfkd": Apply Unicode NFKD normalization
            - "remove_punctuation": Remove ASCII punctuation
            - "remove_whitespace": Remove all whitespace
            - "strict": Apply all normalizations

    Returns:
        The normalized string.

    Example:
        >>> normalize_string("ﬁle", "unicode_nfkd")
        'file'
        >>> normalize_string("Rep. of Ireland", "strict")
        'repofireland'
    """
    ensure_str(text, "text")
    mode = normalize_option(mode, NormalizationMode, "normalization mode")

    if mode is NormalizationMode.LOWERCASE:
        return text.lower()
    if mode is NormalizationMode.UNICODE_NFKD:
        return unicodedata.normalize("NFKD", text)
    if mode is NormalizationMode.REMOVE_PUNCTUATION:
        return "".join(c for c in text if c not in _PUNCTUATION)
    if mode is NormalizationMode.REMOVE_WHITESPACE:
        return "".join(c for c in text if not c.isspace())

    # STRICT
    text = unicodedata.normalize("NFKD", text.lower())
    return "".join(c for c in text if c not in _PUNCTUATION and not c.isspace())


def normalize_pair(a: str, b: str, mode: Union[str, NormalizationMode]) -> tuple[str, str]:
    """Normalize two strings with the same mode."""
    return normalize_string(a, mode), normalize_string(b, mode)


def lowercase_filter(word: str) -> str:
    return word.lower()


def normalization_filter(mode: Union[str, NormalizationMode]) -> WordFilter:
    """Build a filter that applies :func:`normalize_string` with ``mode``."""
    mode = normalize_option(mode, NormalizationMode, "normalization mode")

    def _filter(word: str) -> str:
        return normalize_string(word, mode)

    return _filter


def skip_shorter_than(min_length: int) -> WordFilter:
    """Build a filter dropping words with fewer than ``min_length`` characters."""

    def _filter(word: str) -> Optional[str]:
        return word if len(word) >= min_length else None

    return _filter


def apply_filters(word: str, filters: Iterable[WordFilter]) -> Optional[str]:
    """Run ``word`` through ``filters`` in order.

    Returns:
        The final form of the word, or None as soon as one filter skips it.
    """
    for word_filter in filters:
        word = word_filter(word)
        if word is None:
            return None
    return word


__all__ = [
    "WordFilter",
    "normalize_string",
    "normalize_pair",
    "lowercase_filter",
    "normalization_filter",
    "skip_shorter_than",
    "apply_filters",
]
