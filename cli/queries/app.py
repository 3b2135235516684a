from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np
from numpy.random import default_rng
import typer
from typing_extensions import Annotated

from kdtreex import config as kx_config
from tests.utils.datasets import gaussian_points

from .baselines import run_bruteforce_baseline
from .benchmark import benchmark_knn_latency


@dataclass
class QueryCLIOptions:
    dimension: int = 3
    tree_points: int = 8_192
    queries: int = 256
    k: int = 8
    seed: int = 0
    precision: str | None = None
    diagnostics: bool | None = None
    log_level: str | None = None
    baseline: str = "none"


app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Benchmark exact k-NN queries against the k-d tree.",
)

_SHAPE_PANEL = "Benchmark shape"
_RUNTIME_PANEL = "Runtime controls"
_BASELINE_PANEL = "Baselines"


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    dimension: Annotated[
        int,
        typer.Option(
            "--dimension",
            help="Dimensionality of tree/query points.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 3,
    tree_points: Annotated[
        int,
        typer.Option(
            "--tree-points",
            help="Number of points the tree is built from.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 8_192,
    queries: Annotated[
        int,
        typer.Option(
            "--queries",
            help="Number of query points per run.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 256,
    k: Annotated[
        int,
        typer.Option(
            "--k",
            help="Number of neighbours requested per query.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 8,
    seed: Annotated[
        int,
        typer.Option(
            "--seed",
            help="Base random seed for point/query generation.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 0,
    precision: Annotated[
        Optional[str],
        typer.Option(
            "--precision",
            help="Stored point precision (float32 or float64).",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    diagnostics: Annotated[
        Optional[bool],
        typer.Option(
            "--diagnostics/--no-diagnostics",
            help="Sample CPU and RSS around build and query operations.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Level of the kdtreex logger.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    baseline: Annotated[
        Literal["none", "bruteforce"],
        typer.Option(
            "--baseline",
            help="Run the exhaustive-scan baseline and compare results.",
            rich_help_panel=_BASELINE_PANEL,
        ),
    ] = "none",
) -> None:
    options = QueryCLIOptions(
        dimension=dimension,
        tree_points=tree_points,
        queries=queries,
        k=k,
        seed=seed,
        precision=precision,
        diagnostics=diagnostics,
        log_level=log_level,
        baseline=baseline,
    )
    ctx.obj = options
    if ctx.invoked_subcommand is None:
        run_queries(options)


def _apply_runtime_overrides(options: QueryCLIOptions) -> None:
    if options.precision is not None:
        os.environ["KDTREEX_PRECISION"] = options.precision
    if options.diagnostics is not None:
        os.environ["KDTREEX_ENABLE_DIAGNOSTICS"] = "1" if options.diagnostics else "0"
    if options.log_level is not None:
        os.environ["KDTREEX_LOG_LEVEL"] = options.log_level
    kx_config.reset_runtime_config_cache()


def run_queries(options: QueryCLIOptions) -> None:
    args = options
    _apply_runtime_overrides(args)
    runtime = kx_config.describe_runtime()
    print(
        f"runtime | precision={runtime['precision']} "
        f"diagnostics={runtime['enable_diagnostics']} "
        f"log_level={runtime['log_level']}"
    )

    points_np = gaussian_points(default_rng(args.seed), args.tree_points, args.dimension, dtype=np.float64)
    queries_np = gaussian_points(default_rng(args.seed + 1), args.queries, args.dimension, dtype=np.float64)

    _, answers, result = benchmark_knn_latency(
        dimension=args.dimension,
        tree_points=args.tree_points,
        query_count=args.queries,
        k=args.k,
        seed=args.seed,
        prebuilt_points=points_np,
        prebuilt_queries=queries_np,
    )
    print(
        f"kdtree | build={result.build_seconds:.4f}s "
        f"height={result.tree_height} "
        f"queries={result.queries} k={result.k} "
        f"time={result.elapsed_seconds:.4f}s "
        f"latency={result.latency_ms:.4f}ms "
        f"throughput={result.queries_per_second:,.1f} q/s"
    )

    if args.baseline == "bruteforce":
        comparison = run_bruteforce_baseline(points_np, queries_np, k=args.k, answers=answers)
        print(
            f"{comparison.name} | build={comparison.build_seconds:.4f}s "
            f"time={comparison.elapsed_seconds:.4f}s "
            f"latency={comparison.latency_ms:.4f}ms "
            f"throughput={comparison.queries_per_second:,.1f} q/s "
            f"mismatches={comparison.mismatches}"
        )
        if comparison.mismatches:
            raise typer.Exit(code=1)


def main() -> None:
    app()


__all__ = ["QueryCLIOptions", "app", "main", "run_queries"]
