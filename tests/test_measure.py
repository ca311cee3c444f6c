"""Timing harness: sample schema, input isolation, GC restore, error/timeout paths."""

from __future__ import annotations

import gc

import pytest

from shellbench.algorithms import Strategy
from shellbench.bench.measure import BUILTIN_NAME, measure_strategy, plain_sorter, time_plain_sort


def test_measure_strategy_samples_and_counts():
    a = [5, 3, 8, 1, 9, 2]
    res = measure_strategy(strategy=Strategy.SEDGEWICK, a=a, repeats=3)
    assert res["status"] == "ok"
    assert res["algo"] == "sedgewick"
    assert len(res["samples"]) == 3
    assert a == [5, 3, 8, 1, 9, 2], "harness must sort copies"
    counts = {(s["comparisons"], s["moves"]) for s in res["samples"]}
    assert len(counts) == 1, "counts are deterministic across repeats"
    for s in res["samples"]:
        assert s["time_ns"] >= 0
        assert 0 <= s["moves"] <= s["comparisons"]


def test_gc_state_restored():
    assert gc.isenabled()
    measure_strategy(strategy="knuth", a=list(range(50, 0, -1)), repeats=2, disable_gc=True)
    assert gc.isenabled()


def test_zero_repeats():
    res = measure_strategy(strategy="original", a=[2, 1], repeats=0)
    assert res["status"] == "ok"
    assert res["samples"] == []


@pytest.mark.parametrize("name", ["original", "knuth", "sedgewick", BUILTIN_NAME])
def test_plain_sorters(name):
    data = [4, 2, 3, 1]
    plain_sorter(name)(data)
    assert data == [1, 2, 3, 4]


def test_time_plain_sort_reports_zero_counts():
    res = time_plain_sort(algo_name=BUILTIN_NAME, sort_fn=plain_sorter(BUILTIN_NAME), a=[3, 2, 1], repeats=2)
    assert res["status"] == "ok"
    assert [(s["comparisons"], s["moves"]) for s in res["samples"]] == [(0, 0), (0, 0)]


def test_broken_sort_is_caught_by_validation():
    def not_a_sort(arg):
        arg.reverse()

    res = time_plain_sort(algo_name="broken", sort_fn=not_a_sort, a=[1, 2, 3], repeats=2, warmup=False)
    assert res["status"] == "error"
    assert "repeat 0" in res["error"]
    assert res["samples"] == []


def test_raising_sort_in_warmup():
    def boom(arg):
        raise RuntimeError("nope")

    res = time_plain_sort(algo_name="boom", sort_fn=boom, a=[1], repeats=1, warmup=True)
    assert res["status"] == "error"
    assert res["error"].startswith("warmup failed")


def test_timeout_stops_sampling():
    res = measure_strategy(
        strategy="original",
        a=list(range(2000, 0, -1)),
        repeats=5,
        warmup=False,
        timeout_seconds=1e-9,
    )
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0
    assert len(res["samples"]) == 1


@pytest.mark.parametrize("kwargs", [{"repeats": -1}, {"timeout_seconds": 0}])
def test_invalid_harness_args(kwargs):
    base = {"strategy": "knuth", "a": [1], "repeats": 1}
    base.update(kwargs)
    with pytest.raises(ValueError):
        measure_strategy(**base)
