"""kdtreex: k-d tree spatial index with exact k-NN queries.

Quick Start
-----------
>>> import numpy as np
>>> from kdtreex import KDTree
>>>
>>> points = np.random.randn(1000, 3)
>>> tree = KDTree().fit(points)
>>> neighbors, distances = tree.knn(points[0], k=5, return_distances=True)

Functional API
--------------
>>> from kdtreex import build_tree, query
>>> root = build_tree([(0, 0), (1, 1), (2, 2), (3, 3)])
>>> query(root, (1.5, 1.5), 2)  # [(array([1., 1.]), 0.707...), (array([2., 2.]), 0.707...)]

Classes
-------
KDTree : Façade bundling construction, queries and diagnostics.
KDNode : Immutable tree node (sentinel when built from no points).
BruteForceBaseline : Exhaustive reference with identical result semantics.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("kdtreex")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .api import KDTree
from .algo import build_tree, construct, rebalance
from .baseline import BruteForceBaseline
from .core import KDNode
from .errors import (
    DimensionMismatchError,
    EmptyTreeError,
    InvalidKError,
    KDTreeError,
)
from .queries import NeighborSearch, ResultSet, query, search_nearest

__all__ = [
    "__version__",
    "KDTree",
    "KDNode",
    "BruteForceBaseline",
    "NeighborSearch",
    "ResultSet",
    "build_tree",
    "construct",
    "rebalance",
    "query",
    "search_nearest",
    "KDTreeError",
    "EmptyTreeError",
    "DimensionMismatchError",
    "InvalidKError",
]
