"""Core data structures for the k-d tree."""

from .node import LEFT, RIGHT, KDNode
from .points import as_points, as_query

__all__ = [
    "KDNode",
    "LEFT",
    "RIGHT",
    "as_points",
    "as_query",
]
