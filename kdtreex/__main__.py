#!/usr/bin/env python
"""Quick-start guide for kdtreex library usage.

Run with: python -m kdtreex

This module intentionally avoids importing kdtreex internals to provide
a fast, clean startup for displaying help text.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                 KDTREEX
              k-d tree spatial index with exact k-NN queries
================================================================================

BASIC USAGE
-----------
    import numpy as np
    from kdtreex import KDTree

    # Build once; the tree is immutable afterwards
    points = np.random.randn(10000, 3)
    tree = KDTree().fit(points)

    # k nearest locations, ascending by distance
    neighbors = tree.knn(points[0], k=10)

    # With distances
    neighbors, distances = tree.knn(points[0], k=10, return_distances=True)

    # Single nearest neighbour
    location, distance = tree.nearest(points[0], return_distances=True)

TIES
----
Candidates exactly tied with the k-th distance are all returned, so a query
may yield more than k entries:

    tree = KDTree().fit([(0, 0), (1, 1), (2, 2), (3, 3)])
    tree.query((1.5, 1.5), k=1)   # both (1, 1) and (2, 2)

DIAGNOSTICS
-----------
    tree.height()        # longest root-to-leaf edge count
    tree.is_balanced()   # compares the root's two subtrees only
    tree.rebalance()     # new tree from the root and its direct children

CONFIGURATION (environment)
---------------------------
    KDTREEX_PRECISION=float32|float64      stored point dtype (default float64)
    KDTREEX_NONPOSITIVE_K=empty|raise      k <= 0 returns [] or raises
    KDTREEX_ENABLE_DIAGNOSTICS=0|1         CPU/RSS sampling in operation logs
    KDTREEX_LOG_LEVEL=INFO                 level of the "kdtreex" logger

BENCHMARKING CLI
----------------
    python -m cli.queries --dimension 3 --tree-points 8192 --queries 256 --k 10

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
