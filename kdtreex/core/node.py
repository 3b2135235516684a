from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

import numpy as np

from kdtreex.errors import DimensionMismatchError

LEFT = 0
RIGHT = 1


@dataclass(frozen=True, eq=False)
class KDNode:
    """Node of a k-d tree.

    ``location`` and ``axis`` are ``None`` only for the sentinel returned when
    building from no points. Children are owned exclusively by their parent and
    nodes carry no parent pointers; equality and hashing use object identity so
    duplicate coordinates remain distinct nodes.
    """

    location: Optional[np.ndarray] = None
    axis: Optional[int] = None
    left_child: Optional["KDNode"] = None
    right_child: Optional["KDNode"] = None

    def is_empty(self) -> bool:
        return self.location is None

    def is_leaf(self) -> bool:
        return self.left_child is None and self.right_child is None

    @property
    def dimension(self) -> int:
        if self.location is None:
            return 0
        return int(self.location.shape[0])

    def children(self) -> Iterator[Tuple["KDNode", int]]:
        """Yield ``(child, side)`` for existing children, left before right."""

        if self.left_child is not None:
            yield self.left_child, LEFT
        if self.right_child is not None:
            yield self.right_child, RIGHT

    def squared_distance(self, point: Any) -> float:
        if self.location is None:
            raise ValueError("The sentinel node has no location.")
        query = np.asarray(point, dtype=self.location.dtype)
        if query.shape != self.location.shape:
            raise DimensionMismatchError(
                self.dimension, int(query.size), context="query point"
            )
        diff = query - self.location
        return float(np.sum(diff * diff))

    def height(self) -> int:
        if self.is_leaf():
            return 0
        return 1 + max(child.height() for child, _ in self.children())

    def is_balanced(self) -> bool:
        """Compare the heights of the two subtrees of this node only."""

        left = self.left_child.height() if self.left_child is not None else 0
        right = self.right_child.height() if self.right_child is not None else 0
        return abs(left - right) <= 1

    def walk(self) -> Iterator["KDNode"]:
        """Pre-order iteration over every non-sentinel node of the subtree."""

        if self.is_empty():
            return
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.right_child is not None:
                stack.append(node.right_child)
            if node.left_child is not None:
                stack.append(node.left_child)

    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def __repr__(self) -> str:
        if self.location is None:
            return "KDNode(<empty>)"
        return f"KDNode(location={self.location.tolist()!r}, axis={self.axis})"


__all__ = ["KDNode", "LEFT", "RIGHT"]
