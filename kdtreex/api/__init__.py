"""Public ergonomic façade for kdtreex."""

from .kdtree import KDTree

__all__ = [
    "KDTree",
]
