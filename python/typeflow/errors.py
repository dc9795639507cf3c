"""Exception hierarchy for typeflow.

All errors raised by the library derive from :class:`TypeflowError`, so callers
can catch everything from this package with a single ``except`` clause while
still distinguishing validation problems from broken rollback contracts.
"""


class TypeflowError(Exception):
    """Base exception for all typeflow errors."""


class ValidationError(TypeflowError, ValueError):
    """Raised when input validation fails (invalid parameters, out of range values)."""


class RollbackError(TypeflowError):
    """Raised when an edit distance state cannot be rolled back as requested."""


class OutOfRangeRollbackError(RollbackError):
    """Raised when rolling back more characters than the state currently holds."""

    def __init__(self, requested: int, available: int, side: str = "source"):
        self.requested = requested
        self.available = available
        self.side = side
        super().__init__(
            f"Unexpected rollback: out of range "
            f"(asked for {requested} {side} characters, {available} available)"
        )


class EmptyStateError(RollbackError):
    """Raised when rolling back a state that has never been extended."""

    def __init__(self, message: str = "Unexpected: current state is empty"):
        super().__init__(message)


class FuzzyIndexError(TypeflowError):
    """Raised when index operations fail (construction, serialization)."""


__all__ = [
    "TypeflowError",
    "ValidationError",
    "RollbackError",
    "OutOfRangeRollbackError",
    "EmptyStateError",
    "FuzzyIndexError",
]
