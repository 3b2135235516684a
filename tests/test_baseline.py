import math

import numpy as np
import pytest

from kdtreex import BruteForceBaseline, DimensionMismatchError, EmptyTreeError, InvalidKError


def _random_points(n: int, d: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.normal(size=(n, d)).astype(np.float64)


def test_baseline_nearest_matches_argmin():
    points = _random_points(64, 3, seed=7)
    baseline = BruteForceBaseline.from_points(points)

    query = _random_points(1, 3, seed=11)[0]
    location, dist = baseline.nearest(query)
    dists = np.linalg.norm(points - query, axis=1)
    ref_idx = int(np.argmin(dists))

    assert np.array_equal(location, points[ref_idx])
    assert pytest.approx(dist, rel=1e-12, abs=1e-12) == float(dists[ref_idx])


def test_baseline_knn_orders_by_distance():
    points = _random_points(128, 4, seed=13)
    baseline = BruteForceBaseline.from_points(points)
    query = _random_points(1, 4, seed=19)[0]

    result = baseline.knn(query, 5)
    ref_order = np.argsort(np.linalg.norm(points - query, axis=1))[:5]

    assert len(result) == 5
    for (location, _), idx in zip(result, ref_order):
        assert np.array_equal(location, points[idx])


def test_baseline_keeps_ties_at_kth_distance():
    baseline = BruteForceBaseline.from_points([(0, 0), (1, 1), (2, 2), (3, 3)])

    result = baseline.knn((1.5, 1.5), 1)

    assert [d for _, d in result] == [math.sqrt(0.5), math.sqrt(0.5)]


def test_baseline_rejects_invalid_inputs():
    baseline = BruteForceBaseline.from_points(_random_points(10, 2, seed=31))

    with pytest.raises(InvalidKError):
        baseline.knn((0.0, 0.0), 0)
    with pytest.raises(DimensionMismatchError):
        baseline.knn((0.0, 0.0, 0.0), 1)
    with pytest.raises(EmptyTreeError):
        BruteForceBaseline.from_points([]).knn((0.0,), 1)
