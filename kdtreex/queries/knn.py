from __future__ import annotations

import math
from typing import Any, Dict, List, Set, Tuple

import numpy as np

from kdtreex import config as kx_config
from kdtreex.core.node import LEFT, KDNode
from kdtreex.core.points import as_query
from kdtreex.diagnostics import log_operation
from kdtreex.errors import EmptyTreeError, InvalidKError
from kdtreex.logging import get_logger
from kdtreex.queries.result_set import ResultSet


LOGGER = get_logger("queries.knn")

Neighbor = Tuple[np.ndarray, float]


class NeighborSearch:
    """Transient state for a single k-NN query.

    The child-to-parent map and the examined set live only for the duration of
    one call, so the tree itself stays free of back references and can be
    shared between concurrent readers.
    """

    __slots__ = ("root", "point", "k", "parents", "examined", "results")

    def __init__(self, root: KDNode, point: np.ndarray, k: int) -> None:
        self.root = root
        self.point = point
        self.k = k
        self.parents: Dict[KDNode, KDNode] = {}
        self.examined: Set[KDNode] = set()
        self.results = ResultSet(k)

    def run(self) -> ResultSet:
        node: KDNode | None = self.descend()
        while node is not None:
            if node not in self.examined:
                self.update(node)
            node = self.parents.get(node)
        return self.results

    def descend(self) -> KDNode:
        """Follow the splitting planes down to the leaf region holding the point."""

        node = self.root
        while not node.is_leaf():
            axis = node.axis
            if self.point[axis] < node.location[axis]:
                child = node.left_child
            else:
                child = node.right_child
            if child is None:
                # One-sided node: the sibling subtree is reached by pruning instead.
                break
            self.parents[child] = node
            node = child
        return node

    def update(self, node: KDNode) -> None:
        self.examined.add(node)
        self.results.offer(node, node.squared_distance(self.point))
        for child, side in node.children():
            if child in self.examined:
                continue
            if self._intersects(node, side):
                self.update(child)

    def _intersects(self, node: KDNode, side: int) -> bool:
        # Same arithmetic as squared_distance: points tied with the bound stay reachable.
        bound = self.results.bound()
        axis = node.axis
        diff = self.point[axis] - node.location[axis]
        if side == LEFT and diff <= 0:
            return True
        if side != LEFT and diff >= 0:
            return True
        return float(diff * diff) <= bound


def _validate_k(k: Any) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidKError(f"k must be an integer, received {k!r}.")
    return int(k)


def query(root: KDNode, point: Any, k: int) -> List[Neighbor]:
    """Return up to ``k`` ``(location, distance)`` pairs nearest to ``point``.

    Results are ordered by ascending Euclidean distance. Candidates exactly
    tied with the k-th distance are all returned, so the list may hold more
    than ``k`` entries.
    """

    with log_operation(LOGGER, "knn_query") as op_log:
        return _query_impl(op_log, root, point, k)


def _query_impl(op_log: Any, root: KDNode, point: Any, k: int) -> List[Neighbor]:
    if root.is_empty():
        raise EmptyTreeError("Cannot query an empty tree.")
    query_point = as_query(point, root.dimension, dtype=root.location.dtype)
    k = _validate_k(k)
    if k <= 0:
        if kx_config.runtime_config().raise_on_nonpositive_k:
            raise InvalidKError("k must be positive.")
        op_log.add_metadata(k=k, results=0, examined=0)
        return []

    search = NeighborSearch(root, query_point, k)
    results = search.run()
    neighbors = [
        (node.location, math.sqrt(distance))
        for node, distance in results.sorted_entries()
    ]
    op_log.add_metadata(k=k, results=len(neighbors), examined=len(search.examined))
    return neighbors


def search_nearest(root: KDNode, point: Any) -> List[Neighbor]:
    return query(root, point, 1)


__all__ = ["NeighborSearch", "query", "search_nearest"]
