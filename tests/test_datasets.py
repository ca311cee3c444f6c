"""Dataset generators: shapes, ranges, determinism under a seeded RNG."""

from __future__ import annotations

import numpy as np
import pytest

from shellbench.datasets import SUPPORTED_DISTS, make_dataset


def _rng(seed: int = 123) -> np.random.Generator:
    return np.random.default_rng(seed)


@pytest.mark.parametrize("dist", sorted(SUPPORTED_DISTS))
def test_length_and_type(dist):
    out = make_dataset(50, {"dist": dist, "params": {}}, _rng())
    assert len(out) == 50
    assert all(isinstance(v, int) for v in out)


@pytest.mark.parametrize("dist", sorted(SUPPORTED_DISTS))
def test_empty(dist):
    assert make_dataset(0, {"dist": dist}, _rng()) == []


def test_random_default_range_and_determinism():
    a = make_dataset(1000, {"dist": "random"}, _rng(7))
    b = make_dataset(1000, {"dist": "random"}, _rng(7))
    assert a == b
    assert min(a) >= 0 and max(a) <= 999


def test_random_custom_range_inclusive():
    out = make_dataset(2000, {"dist": "random", "params": {"range": [-2, 2]}}, _rng())
    assert set(out) == {-2, -1, 0, 1, 2}


def test_sorted_and_reversed():
    assert make_dataset(5, {"dist": "sorted"}, _rng()) == [0, 1, 2, 3, 4]
    assert make_dataset(5, {"dist": "reversed"}, _rng()) == [5, 4, 3, 2, 1]


def test_nearly_sorted_is_a_permutation_with_few_displacements():
    n = 1000
    out = make_dataset(n, {"dist": "nearly_sorted", "params": {"swap_frac": 0.05}}, _rng())
    assert sorted(out) == list(range(n))
    displaced = sum(1 for i, v in enumerate(out) if i != v)
    # 50 swaps touch at most 100 positions.
    assert displaced <= 100


def test_nearly_sorted_zero_frac_is_sorted():
    out = make_dataset(30, {"dist": "nearly_sorted", "params": {"swap_frac": 0.0}}, _rng())
    assert out == list(range(30))


def test_few_uniques():
    out = make_dataset(500, {"dist": "few_uniques", "params": {"k": 4, "range": [10, 20]}}, _rng())
    assert len(set(out)) <= 4
    assert all(10 <= v <= 20 for v in out)


@pytest.mark.parametrize(
    "n, spec",
    [
        (-1, {"dist": "random"}),
        (3, {"dist": "gaussian"}),
        (3, "random"),
        (3, {"dist": "random", "params": {"range": [5, 1]}}),
        (3, {"dist": "random", "params": {"range": [1]}}),
        (3, {"dist": "nearly_sorted", "params": {"swap_frac": 1.5}}),
        (3, {"dist": "nearly_sorted", "params": {"swap_frac": "lots"}}),
        (3, {"dist": "few_uniques", "params": {"k": 0}}),
    ],
)
def test_invalid_specs(n, spec):
    with pytest.raises(ValueError):
        make_dataset(n, spec, _rng())
