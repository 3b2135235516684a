from __future__ import annotations


class KDTreeError(ValueError):
    """Base class for errors raised by kdtreex operations."""


class EmptyTreeError(KDTreeError):
    """Raised when querying a tree built from no points."""


class DimensionMismatchError(KDTreeError):
    """Raised when point dimensionality is inconsistent."""

    def __init__(self, expected: int, actual: int, *, context: str = "point") -> None:
        super().__init__(
            f"Expected {context} of dimension {expected}, received dimension {actual}."
        )
        self.expected = expected
        self.actual = actual


class InvalidKError(KDTreeError):
    """Raised for a neighbour count that cannot be served."""


__all__ = [
    "KDTreeError",
    "EmptyTreeError",
    "DimensionMismatchError",
    "InvalidKError",
]
