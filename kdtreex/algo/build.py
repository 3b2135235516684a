from __future__ import annotations

from typing import Any, cast

import numpy as np

from kdtreex.core.node import KDNode
from kdtreex.core.points import as_points
from kdtreex.diagnostics import log_operation
from kdtreex.logging import get_logger

LOGGER = get_logger("algo.build")


def _construct(data: np.ndarray, indices: np.ndarray, depth: int) -> KDNode | None:
    if indices.size == 0:
        return None
    axis = depth % data.shape[1]
    # Stable so equal coordinates keep their relative order from the parent level.
    order = indices[np.argsort(data[indices, axis], kind="stable")]
    median = order.size // 2
    return KDNode(
        location=data[order[median]],
        axis=axis,
        left_child=_construct(data, order[:median], depth + 1),
        right_child=_construct(data, order[median + 1 :], depth + 1),
    )


def construct(points: Any, depth: int = 0) -> KDNode:
    """Recursively split ``points`` at the median of the depth-cycled axis.

    Returns the empty sentinel node when ``points`` is empty. Points sharing the
    median coordinate may end up on either side of the split.
    """

    data = as_points(points)
    if data.shape[0] == 0:
        return KDNode()
    return cast(KDNode, _construct(data, np.arange(data.shape[0]), int(depth)))


def build_tree(points: Any) -> KDNode:
    """Build a tree from ``points`` and log a ``build_tree`` operation record."""

    with log_operation(LOGGER, "build_tree") as op_log:
        data = as_points(points)
        root = construct(data)
        op_log.add_metadata(
            points=int(data.shape[0]),
            dimension=int(data.shape[1]),
            height=root.height(),
        )
    return root


def rebalance(node: KDNode) -> KDNode:
    """Rebuild from ``node`` and its immediate children only.

    Deeper descendants are not collected; the result holds at most three points.
    """

    if node.is_empty():
        return KDNode()
    locations = [node.location]
    locations.extend(child.location for child, _ in node.children())
    return construct(np.stack(locations))


__all__ = ["build_tree", "construct", "rebalance"]
