from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from kdtreex.baseline import BruteForceBaseline
from kdtreex.queries.knn import Neighbor


@dataclass(frozen=True)
class BaselineComparison:
    name: str
    build_seconds: float
    elapsed_seconds: float
    latency_ms: float
    queries_per_second: float
    mismatches: int


def _same_distances(lhs: Sequence[Neighbor], rhs: Sequence[Neighbor]) -> bool:
    if len(lhs) != len(rhs):
        return False
    return all(a == b for (_, a), (_, b) in zip(lhs, rhs))


def run_bruteforce_baseline(
    points: np.ndarray,
    queries: np.ndarray,
    *,
    k: int,
    answers: Sequence[Sequence[Neighbor]] | None = None,
) -> BaselineComparison:
    """Time the exhaustive scan and count queries whose distances differ."""

    start_build = time.perf_counter()
    baseline = BruteForceBaseline.from_points(points)
    build_seconds = time.perf_counter() - start_build
    start = time.perf_counter()
    expected: List[List[Neighbor]] = [baseline.knn(point, k) for point in queries]
    elapsed = time.perf_counter() - start
    mismatches = 0
    if answers is not None:
        mismatches = sum(
            0 if _same_distances(got, want) else 1
            for got, want in zip(answers, expected)
        )
    qps = queries.shape[0] / elapsed if elapsed > 0 else float("inf")
    latency = (elapsed / queries.shape[0]) * 1e3 if queries.shape[0] else 0.0
    return BaselineComparison(
        name="bruteforce",
        build_seconds=build_seconds,
        elapsed_seconds=elapsed,
        latency_ms=latency,
        queries_per_second=qps,
        mismatches=mismatches,
    )


__all__ = ["BaselineComparison", "run_bruteforce_baseline"]
