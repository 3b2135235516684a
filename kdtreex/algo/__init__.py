from .build import build_tree, construct, rebalance

__all__ = [
    "build_tree",
    "construct",
    "rebalance",
]
