"""
Timing harness for the Shell Sort engine.

Each sample sorts a fresh copy of the input. Copying, validation, GC and
warmup all happen outside the timed region.

Two entry points:
- measure_strategy: metered path. The engine times itself (gap generation
  included) and reports comparisons/moves.
- time_plain_sort: plain in-place sort callables (the engine's `sort` for a
  strategy, or the `list.sort` baseline), timed around the call with the same
  clock. For the engine this also includes gap generation, so both entry
  points follow one timing convention.

Public API (stable):
    measure_strategy(...) -> dict
    time_plain_sort(...) -> dict
    plain_sorter(name) -> Callable[[list[int]], None]

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples": list[dict],              # {"time_ns", "comparisons", "moves"}
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import time
from functools import partial
from typing import Any, Callable, Dict, List, Sequence, Union

from shellbench.algorithms import Strategy, resolve_strategy, sort, sort_with_metrics
from shellbench.validate import check_sorted_result

BUILTIN_NAME = "builtin"

__all__ = ["BUILTIN_NAME", "measure_strategy", "time_plain_sort", "plain_sorter"]

Sample = Dict[str, int]


def measure_strategy(
    *,
    strategy: Union[Strategy, str],
    a: Sequence[int],
    repeats: int,
    warmup: bool = True,
    disable_gc: bool = True,
    timeout_seconds: float = 60.0,
    validate: bool = True,
) -> Dict[str, Any]:
    """
    Run `sort_with_metrics(strategy, copy_of_a)` `repeats` times.

    Parameters
    ----------
    strategy : Strategy | str
        Gap-sequence strategy.
    a : sequence of int
        Input; never mutated (each sample sorts its own copy).
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable Python GC during the sample loop; restore afterward.
    timeout_seconds : float
        If a single sample exceeds this, mark status="timeout" and stop sampling.
    validate : bool
        If True, check every sorted copy against the input (untimed).
    """
    strategy = resolve_strategy(strategy)

    def _one(arg: List[int]) -> Sample:
        rec = sort_with_metrics(strategy, arg)
        return {"time_ns": rec.elapsed_ns, "comparisons": rec.comparisons, "moves": rec.moves}

    return _sample_loop(
        algo_name=strategy.value,
        run_once=_one,
        a=a,
        repeats=repeats,
        warmup=warmup,
        disable_gc=disable_gc,
        timeout_seconds=timeout_seconds,
        validate=validate,
    )


def time_plain_sort(
    *,
    algo_name: str,
    sort_fn: Callable[[List[int]], None],
    a: Sequence[int],
    repeats: int,
    warmup: bool = True,
    disable_gc: bool = True,
    timeout_seconds: float = 60.0,
    validate: bool = True,
) -> Dict[str, Any]:
    """
    Time an in-place sort callable. Comparisons and moves are reported as 0
    since the plain path does not count them.
    """

    def _one(arg: List[int]) -> Sample:
        t0 = time.perf_counter_ns()
        sort_fn(arg)
        t1 = time.perf_counter_ns()
        return {"time_ns": t1 - t0, "comparisons": 0, "moves": 0}

    return _sample_loop(
        algo_name=algo_name,
        run_once=_one,
        a=a,
        repeats=repeats,
        warmup=warmup,
        disable_gc=disable_gc,
        timeout_seconds=timeout_seconds,
        validate=validate,
    )


def plain_sorter(name: str) -> Callable[[List[int]], None]:
    """Return the in-place plain sort for a strategy name or "builtin"."""
    if name == BUILTIN_NAME:
        return list.sort
    return partial(sort, resolve_strategy(name))


# ------------------------- helpers ------------------------- #


def _sample_loop(
    *,
    algo_name: str,
    run_once: Callable[[List[int]], Sample],
    a: Sequence[int],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    validate: bool,
) -> Dict[str, Any]:
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples": [],
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    # ---- Warmup (outside GC disable) ----
    if warmup and repeats > 0:
        try:
            run_once(list(a))
        except Exception as e:
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                arg = list(a)
                sample = run_once(arg)
                if validate:
                    check_sorted_result(a, arg)
            except Exception as e:
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            result["samples"].append(sample)
            if sample["time_ns"] > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break

    finally:
        # Leave GC disabled if the caller had it disabled.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
