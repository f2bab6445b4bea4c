import numpy as np
import pytest

from groovy_ca.metrics import RunMetrics, activity_clusters, density, mean_density


@pytest.mark.parametrize(
    "arr,expected",
    [
        ([], 0.0),
        ([0, 0, 0, 0], 0.0),
        ([1, 1, 1], 1.0),
        ([1, 0, 1, 0], 0.5),
        ([[1, 0], [0, 0]], 0.25),
        (np.zeros((0, 3)), 0.0),
    ],
)
def test_density(arr, expected):
    assert density(arr) == pytest.approx(expected)


def test_density_bounds(rng):
    for _ in range(20):
        arr = (rng.random(rng.integers(1, 50)) < rng.random()).astype(np.uint8)
        assert 0.0 <= density(arr) <= 1.0


def test_mean_density_averages_per_step():
    history = [np.array([1, 1]), np.array([0, 0, 0, 1])]
    # mean of 1.0 and 0.25, not 3/6
    assert mean_density(history) == pytest.approx(0.625)


def test_mean_density_empty():
    assert mean_density([]) == 0.0


@pytest.mark.parametrize(
    "arr,expected",
    [
        ([], 0),
        ([0, 0, 0], 0),
        ([1, 1, 0, 1], 2),
        ([[1, 0], [0, 1]], 2),
        ([[1, 1, 0], [0, 1, 0], [0, 0, 1]], 2),
    ],
)
def test_activity_clusters(arr, expected):
    assert activity_clusters(arr) == expected


def test_run_metrics_to_dict():
    m = RunMetrics(derivative_density=0.5, groovy_density=0.25)
    assert m.to_dict() == {
        "derivative_density": 0.5,
        "groovy_density": 0.25,
        "second_order_density": None,
    }
