from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np

from kdtreex.algo.build import build_tree, rebalance
from kdtreex.core.node import KDNode
from kdtreex.errors import EmptyTreeError
from kdtreex.queries.knn import Neighbor, query as knn_query


def _stack_neighbors(
    neighbors: List[Neighbor], dimension: int
) -> Tuple[np.ndarray, np.ndarray]:
    if not neighbors:
        return np.empty((0, dimension)), np.empty((0,), dtype=np.float64)
    locations = np.stack([location for location, _ in neighbors], axis=0)
    distances = np.asarray([distance for _, distance in neighbors], dtype=np.float64)
    return locations, distances


@dataclass(frozen=True)
class KDTree:
    """Thin façade around tree construction + query helpers."""

    root: KDNode | None = None

    def fit(self, points: Any) -> "KDTree":
        return KDTree(root=build_tree(points))

    @property
    def num_points(self) -> int:
        return self._require_root().size()

    @property
    def dimension(self) -> int:
        return self._require_root().dimension

    def query(self, point: Any, k: int) -> List[Neighbor]:
        return knn_query(self._require_root(), point, k)

    def knn(
        self,
        point: Any,
        *,
        k: int,
        return_distances: bool = False,
    ) -> Any:
        root = self._require_root()
        locations, distances = _stack_neighbors(knn_query(root, point, k), root.dimension)
        if return_distances:
            return locations, distances
        return locations

    def nearest(self, point: Any, *, return_distances: bool = False) -> Any:
        locations, distances = self.knn(point, k=1, return_distances=True)
        if return_distances:
            return locations[0], float(distances[0])
        return locations[0]

    def height(self) -> int:
        return self._require_root().height()

    def is_balanced(self) -> bool:
        return self._require_root().is_balanced()

    def rebalance(self) -> "KDTree":
        return KDTree(root=rebalance(self._require_root()))

    def _require_root(self) -> KDNode:
        if self.root is None:
            raise EmptyTreeError("KDTree requires an existing tree; call fit() first.")
        return self.root
