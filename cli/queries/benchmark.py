from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from numpy.random import default_rng

from kdtreex.algo import build_tree
from kdtreex.core.node import KDNode
from kdtreex.queries.knn import Neighbor, query
from tests.utils.datasets import gaussian_points


@dataclass(frozen=True)
class QueryBenchmarkResult:
    elapsed_seconds: float
    queries: int
    k: int
    latency_ms: float
    queries_per_second: float
    build_seconds: float | None = None
    tree_height: int | None = None


def _build_tree(
    *,
    dimension: int,
    tree_points: int,
    seed: int,
    prebuilt_points: np.ndarray | None = None,
) -> Tuple[KDNode, np.ndarray, float]:
    if prebuilt_points is not None:
        points_np = np.asarray(prebuilt_points, dtype=np.float64)
    else:
        points_np = gaussian_points(default_rng(seed), tree_points, dimension, dtype=np.float64)
    start = time.perf_counter()
    root = build_tree(points_np)
    build_seconds = time.perf_counter() - start
    return root, points_np, build_seconds


def benchmark_knn_latency(
    *,
    dimension: int,
    tree_points: int,
    query_count: int,
    k: int,
    seed: int,
    prebuilt_points: np.ndarray | None = None,
    prebuilt_queries: np.ndarray | None = None,
) -> Tuple[KDNode, List[List[Neighbor]], QueryBenchmarkResult]:
    root, _, build_seconds = _build_tree(
        dimension=dimension,
        tree_points=tree_points,
        seed=seed,
        prebuilt_points=prebuilt_points,
    )
    if prebuilt_queries is None:
        queries = gaussian_points(default_rng(seed + 1), query_count, dimension, dtype=np.float64)
    else:
        queries = np.asarray(prebuilt_queries, dtype=np.float64)

    start = time.perf_counter()
    answers = [query(root, point, k) for point in queries]
    elapsed = time.perf_counter() - start
    count = int(queries.shape[0])
    qps = count / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / count) * 1e3 if count else 0.0
    result = QueryBenchmarkResult(
        elapsed_seconds=elapsed,
        queries=count,
        k=k,
        latency_ms=latency,
        queries_per_second=qps,
        build_seconds=build_seconds,
        tree_height=root.height(),
    )
    return root, answers, result


__all__ = ["QueryBenchmarkResult", "_build_tree", "benchmark_knn_latency"]
