from __future__ import annotations

import numpy as np
import pytest
from typer.testing import CliRunner

from cli.queries.app import QueryCLIOptions, app
from cli.queries.baselines import run_bruteforce_baseline
from cli.queries.benchmark import benchmark_knn_latency
from kdtreex import config as kx_config


def test_cli_forwards_options(monkeypatch: pytest.MonkeyPatch) -> None:
    runner = CliRunner()
    invoked = {}

    def fake_run_queries(opts) -> None:  # type: ignore[override]
        invoked["options"] = opts

    monkeypatch.setattr("cli.queries.app.run_queries", fake_run_queries)
    result = runner.invoke(
        app,
        [
            "--dimension",
            "2",
            "--tree-points",
            "16",
            "--queries",
            "4",
            "--k",
            "3",
            "--seed",
            "5",
            "--baseline",
            "bruteforce",
        ],
    )

    assert result.exit_code == 0
    options = invoked["options"]
    assert isinstance(options, QueryCLIOptions)
    assert (options.dimension, options.tree_points, options.queries, options.k) == (2, 16, 4, 3)
    assert options.baseline == "bruteforce"


def test_cli_runs_and_matches_bruteforce(monkeypatch: pytest.MonkeyPatch) -> None:
    # Registered so the overrides written by the CLI are rolled back afterwards.
    monkeypatch.setenv("KDTREEX_ENABLE_DIAGNOSTICS", "1")
    monkeypatch.setenv("KDTREEX_LOG_LEVEL", "WARNING")
    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "--dimension",
            "3",
            "--tree-points",
            "128",
            "--queries",
            "8",
            "--k",
            "4",
            "--no-diagnostics",
            "--log-level",
            "WARNING",
            "--baseline",
            "bruteforce",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "kdtree | build=" in result.output
    assert "mismatches=0" in result.output
    assert "diagnostics=False" in result.output

    monkeypatch.undo()
    kx_config.reset_runtime_config_cache()
    kx_config.runtime_config()


def test_benchmark_and_baseline_agree() -> None:
    kx_config.reset_runtime_config_cache()
    rng = np.random.default_rng(3)
    points = rng.normal(size=(64, 2))
    queries = rng.normal(size=(5, 2))

    _, answers, result = benchmark_knn_latency(
        dimension=2,
        tree_points=64,
        query_count=5,
        k=3,
        seed=0,
        prebuilt_points=points,
        prebuilt_queries=queries,
    )
    comparison = run_bruteforce_baseline(points, queries, k=3, answers=answers)

    assert result.queries == 5
    assert result.tree_height == 6
    assert len(answers) == 5
    assert comparison.mismatches == 0
