from __future__ import annotations

from .app import QueryCLIOptions, main, run_queries
from .baselines import BaselineComparison, run_bruteforce_baseline
from .benchmark import QueryBenchmarkResult, _build_tree, benchmark_knn_latency

__all__ = [
    "BaselineComparison",
    "QueryBenchmarkResult",
    "_build_tree",
    "benchmark_knn_latency",
    "run_bruteforce_baseline",
    "QueryCLIOptions",
    "run_queries",
    "main",
]
