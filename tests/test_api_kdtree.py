import math

import numpy as np
import pytest

from kdtreex import EmptyTreeError, KDTree
from tests.utils.datasets import gaussian_dataset


def test_fit_returns_new_facade_with_root():
    empty = KDTree()
    tree = empty.fit([(0, 0), (1, 1), (2, 2), (3, 3)])

    assert empty.root is None
    assert tree.root is not None
    assert tree.num_points == 4
    assert tree.dimension == 2


def test_knn_returns_stacked_locations_and_distances():
    tree = KDTree().fit([(0, 0), (1, 1), (2, 2), (3, 3)])

    locations, distances = tree.knn((0.2, 0.1), k=2, return_distances=True)

    assert locations.shape == (2, 2)
    assert locations.tolist() == [[0.0, 0.0], [1.0, 1.0]]
    assert distances.shape == (2,)
    assert distances[0] == pytest.approx(math.hypot(0.2, 0.1))


def test_knn_without_distances_returns_locations_only():
    tree = KDTree().fit([(0, 0), (1, 1), (2, 2), (3, 3)])

    locations = tree.knn((2.9, 3.1), k=1)

    assert locations.tolist() == [[3.0, 3.0]]


def test_knn_with_nonpositive_k_returns_empty_arrays():
    tree = KDTree().fit([(0, 0), (1, 1)])

    locations, distances = tree.knn((0.0, 0.0), k=0, return_distances=True)

    assert locations.shape == (0, 2)
    assert distances.shape == (0,)


def test_nearest_handles_single_query_vector():
    rng = np.random.default_rng(9)
    points, queries = gaussian_dataset(rng, tree_points=50, queries=1, dimension=3)
    tree = KDTree().fit(points)

    location, distance = tree.nearest(queries[0], return_distances=True)
    dists = np.linalg.norm(points - queries[0], axis=1)

    assert location.shape == (3,)
    assert distance == pytest.approx(float(dists.min()))
    assert np.array_equal(tree.nearest(queries[0]), location)


def test_query_returns_pairs_with_ties():
    tree = KDTree().fit([(0, 0), (1, 1), (2, 2), (3, 3)])

    result = tree.query((1.5, 1.5), 1)

    assert len(result) == 2


def test_diagnostics_forward_to_root():
    rng = np.random.default_rng(12)
    points, _ = gaussian_dataset(rng, tree_points=31, queries=0, dimension=2)
    tree = KDTree().fit(points)

    assert tree.height() == 4
    assert tree.is_balanced()
    rebuilt = tree.rebalance()
    assert isinstance(rebuilt, KDTree)
    assert rebuilt.num_points == 3
    assert tree.num_points == 31


def test_unfitted_facade_raises():
    with pytest.raises(EmptyTreeError):
        KDTree().knn((0.0, 0.0), k=1)
    with pytest.raises(EmptyTreeError):
        KDTree().height()


def test_fit_on_empty_input_raises_on_query():
    tree = KDTree().fit([])

    assert tree.num_points == 0
    assert tree.height() == 0
    with pytest.raises(EmptyTreeError):
        tree.knn((0.0,), k=1)
