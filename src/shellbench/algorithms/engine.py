"""
Instrumented Shell Sort engine.

One driver serves every strategy and both execution modes: it generates the
gap sequence, walks it largest to smallest and runs a gapped insertion pass per
gap. The `metered` flag only chooses which pass kernel runs, so the plain path
carries no counter arithmetic in its inner loop and the two paths cannot drift.

Public API (stable):
    sort(strategy, data) -> None
    sort_with_metrics(strategy, data) -> MetricsRecord
    insertion_pass(data, gap) -> tuple[int, int]
    metered_insertion_pass(data, gap) -> tuple[int, int]

Conventions:
- `data` is sorted in place and never retained after the call returns.
- Counters are locals of each call, so concurrent calls on *different*
  sequences are safe. Sorting one sequence from several threads is not.
- `elapsed_ns` covers gap generation plus all passes, for every strategy.
- A move is one shift `a[j] = a[j - gap]`; dropping `temp` into its final slot
  is not counted. Every comparison `a[j - gap] > temp` is counted, including
  the one that fails and ends the walk, so `moves <= comparisons` always.
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Set
from dataclasses import dataclass
from typing import Any, Callable, List, MutableSequence, Tuple, Union

from .gaps import gap_sequence
from .strategy import Strategy

__all__ = [
    "InvalidInputError",
    "MetricsRecord",
    "insertion_pass",
    "metered_insertion_pass",
    "sort",
    "sort_with_metrics",
]

PassFn = Callable[[MutableSequence[Any], int], Tuple[int, int]]


class InvalidInputError(ValueError):
    """Raised when the sequence handed to the engine is absent or not mutable."""


@dataclass(frozen=True)
class MetricsRecord:
    """Elapsed wall time in nanoseconds plus comparison and move counts of one sort."""

    elapsed_ns: int
    comparisons: int
    moves: int

    def __post_init__(self) -> None:
        for field_name in ("elapsed_ns", "comparisons", "moves"):
            value = getattr(self, field_name)
            if value < 0:
                raise ValueError(f"{field_name} must be nonnegative; got {value}")


# ------------------------- pass kernels ------------------------- #


def insertion_pass(data: MutableSequence[Any], gap: int) -> Tuple[int, int]:
    """Gapped insertion pass over [gap, n). Uncounted; always returns (0, 0)."""
    n = len(data)
    for i in range(gap, n):
        temp = data[i]
        j = i
        while j >= gap and data[j - gap] > temp:
            data[j] = data[j - gap]
            j -= gap
        data[j] = temp
    return 0, 0


def metered_insertion_pass(data: MutableSequence[Any], gap: int) -> Tuple[int, int]:
    """Same pass as `insertion_pass`, returning (comparisons, moves) for it."""
    n = len(data)
    comparisons = 0
    moves = 0
    for i in range(gap, n):
        temp = data[i]
        j = i
        while j >= gap:
            comparisons += 1
            if data[j - gap] > temp:
                data[j] = data[j - gap]
                moves += 1
                j -= gap
            else:
                break
        data[j] = temp
    return comparisons, moves


# ------------------------- engine ------------------------- #


def sort(strategy: Union[Strategy, str], data: MutableSequence[Any]) -> None:
    """
    Sort `data` in place with the gap sequence named by `strategy`.

    Raises
    ------
    InvalidInputError
        If `data` is None or not a mutable sized sequence.
    ValueError
        If `strategy` is unknown.
    """
    _run(strategy, data, insertion_pass)


def sort_with_metrics(
    strategy: Union[Strategy, str], data: MutableSequence[Any]
) -> MetricsRecord:
    """
    Sort `data` in place and return elapsed time, comparison and move counts.

    Empty and single-element inputs are valid and report zero comparisons
    and zero moves.
    """
    t0 = time.perf_counter_ns()
    comparisons, moves = _run(strategy, data, metered_insertion_pass)
    t1 = time.perf_counter_ns()
    return MetricsRecord(elapsed_ns=t1 - t0, comparisons=comparisons, moves=moves)


def _run(
    strategy: Union[Strategy, str], data: MutableSequence[Any], pass_fn: PassFn
) -> Tuple[int, int]:
    _check_data(data)
    gaps: List[int] = gap_sequence(strategy, len(data))

    comparisons = 0
    moves = 0
    # Generators already yield largest first; non-positive gaps are skipped
    # rather than trusted.
    for gap in gaps:
        if gap <= 0:
            continue
        c, m = pass_fn(data, gap)
        comparisons += c
        moves += m
    return comparisons, moves


def _check_data(data: Any) -> None:
    if data is None:
        raise InvalidInputError("data must be a mutable sequence, not None")
    if isinstance(data, (str, bytes, tuple, Mapping, Set)) or not (
        hasattr(data, "__len__") and hasattr(data, "__setitem__")
    ):
        raise InvalidInputError(
            f"data must be a mutable sequence; got {type(data).__name__}"
        )
