from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np

from kdtreex import config as kx_config
from kdtreex.errors import DimensionMismatchError

ArrayLike = Any


def _dimension_of(shape: Tuple[int, ...]) -> int:
    return int(shape[0]) if shape else 1


def _resolve_dtype(dtype: Any) -> np.dtype:
    if dtype is None:
        return kx_config.runtime_config().dtype
    return np.dtype(dtype)


def _check_rows(rows: Sequence[Any]) -> None:
    expected = np.shape(rows[0])
    for row in rows[1:]:
        actual = np.shape(row)
        if actual != expected:
            raise DimensionMismatchError(
                _dimension_of(expected), _dimension_of(actual), context="build point"
            )


def as_points(values: ArrayLike, *, dtype: Any = None) -> np.ndarray:
    """Coerce build input into a read-only ``(n, k)`` array.

    A flat sequence of scalars is read as ``n`` one-dimensional points. Empty
    input yields a ``(0, 0)`` array.
    """

    resolved = _resolve_dtype(dtype)
    if not isinstance(values, np.ndarray):
        rows = list(values)
        if not rows:
            return np.zeros((0, 0), dtype=resolved)
        _check_rows(rows)
        values = rows
    arr = np.array(values, dtype=resolved, copy=True)
    if arr.ndim == 0:
        arr = arr.reshape(1, 1)
    elif arr.ndim == 1:
        arr = arr.reshape(0, 0) if arr.size == 0 else arr.reshape(-1, 1)
    elif arr.ndim > 2:
        raise ValueError(f"Expected a 2-D point array, received shape {arr.shape}.")
    if arr.shape[0] > 0 and arr.shape[1] == 0:
        raise ValueError("Points must have at least one coordinate.")
    arr.setflags(write=False)
    return arr


def as_query(point: ArrayLike, dimension: int, *, dtype: Any = None) -> np.ndarray:
    """Coerce a single query point and check it against the tree dimension."""

    arr = np.asarray(point, dtype=_resolve_dtype(dtype))
    if arr.ndim == 0:
        arr = arr.reshape(1)
    elif arr.ndim > 1:
        raise ValueError(f"Expected a single query point, received shape {arr.shape}.")
    if arr.shape[0] != dimension:
        raise DimensionMismatchError(dimension, int(arr.shape[0]), context="query point")
    return arr


__all__ = ["as_points", "as_query"]
