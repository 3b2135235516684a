"""Exhaustive-scan reference for verifying and benchmarking k-d tree queries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from kdtreex.core.points import as_points, as_query
from kdtreex.errors import EmptyTreeError, InvalidKError


@dataclass(frozen=True)
class BruteForceBaseline:
    """Scan every point; ties at the k-th distance are returned like the tree does."""

    points: np.ndarray

    @classmethod
    def from_points(cls, points: Any) -> "BruteForceBaseline":
        return cls(points=as_points(points))

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])

    def squared_distances(self, point: Any) -> np.ndarray:
        query = as_query(point, int(self.points.shape[1]), dtype=self.points.dtype)
        # Row-wise sums match KDNode.squared_distance term for term.
        return np.asarray(
            [float(np.sum((query - row) * (query - row))) for row in self.points],
            dtype=np.float64,
        )

    def knn(self, point: Any, k: int) -> List[Tuple[np.ndarray, float]]:
        if self.num_points == 0:
            raise EmptyTreeError("Cannot query an empty point set.")
        if k <= 0:
            raise InvalidKError("k must be positive.")
        distances = self.squared_distances(point)
        order = np.argsort(distances, kind="stable")
        cutoff = distances[order[min(k, order.size) - 1]]
        keep = order[distances[order] <= cutoff]
        return [(self.points[idx], math.sqrt(float(distances[idx]))) for idx in keep]

    def nearest(self, point: Any) -> Tuple[np.ndarray, float]:
        return self.knn(point, 1)[0]


__all__ = ["BruteForceBaseline"]
