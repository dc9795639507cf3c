"""Internal utilities for typeflow."""

from enum import Enum
from typing import Type, TypeVar, Union

from typeflow.errors import ValidationError

E = TypeVar("E", bound=Enum)


def normalize_option(value: Union[str, E], enum_cls: Type[E], name: str) -> E:
    """Convert a string or enum member into a member of ``enum_cls``.

    Args:
        value: Either a member of ``enum_cls`` or its (case-insensitive) string value.
        enum_cls: The str-valued enum to resolve against.
        name: Parameter name, used in error messages.

    Returns:
        The matching enum member.

    Raises:
        ValidationError: If the string does not name a known member.
        TypeError: If value is neither a string nor an ``enum_cls`` member.

    Example:
        >>> normalize_option("two_row", DistanceStrategy, "strategy")
        <DistanceStrategy.TWO_ROW: 'two_row'>
    """
    if isinstance(value, enum_cls):
        return value

    if isinstance(value, str):
        lowered = value.lower()
        for member in enum_cls:
            if member.value == lowered:
                return member
        raise ValidationError(
            f"Unknown {name}: '{value}'. "
            f"Valid options: {sorted(m.value for m in enum_cls)}"
        )

    raise TypeError(
        f"{name} must be str or {enum_cls.__name__} enum, got {type(value).__name__}"
    )


def ensure_str(value, name: str) -> str:
    """Reject non-string inputs the way the builtin string functions do."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    return value


def validate_similarity(min_similarity: float) -> float:
    """Check that a similarity threshold lies in [0, 1]."""
    if isinstance(min_similarity, bool) or not isinstance(min_similarity, (int, float)):
        raise TypeError(
            f"min_similarity must be a float, got {type(min_similarity).__name__}"
        )
    if not 0.0 <= min_similarity <= 1.0:
        raise ValidationError(
            f"min_similarity must be between 0.0 and 1.0, got {min_similarity}"
        )
    return float(min_similarity)


__all__ = ["normalize_option", "ensure_str", "validate_similarity"]
