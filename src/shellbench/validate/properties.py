"""
Property helpers for validating in-place sort results.

Used by the test suite and, when `validate` is on, by the benchmark harness
after every timed sample (outside the timed block).

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_nondecreasing_violation_index(xs) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict[int, int]
    check_sorted_result(before, after) -> None

Notes
-----
- Stability cannot be inferred from bare integers. Shell Sort is not globally
  stable anyway, so no stability check is offered.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional, Sequence

__all__ = [
    "SortValidationError",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "check_sorted_result",
]


class SortValidationError(AssertionError):
    """A sort produced out-of-order output or changed the multiset of values."""


def is_nondecreasing(xs: Sequence[int]) -> bool:
    """Return True iff xs[i] <= xs[i+1] for all i."""
    return first_nondecreasing_violation_index(xs) is None


def first_nondecreasing_violation_index(xs: Sequence[int]) -> Optional[int]:
    """Return the first index i where xs[i] > xs[i+1], or None."""
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """Return True iff `a` and `b` hold exactly the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Return value -> (count in a - count in b) for every value whose counts differ.

    Empty dict means identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[int, int] = {}
    for k in set(ca) | set(cb):
        d = ca[k] - cb[k]
        if d != 0:
            diff[k] = d
    return diff


def check_sorted_result(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Raise SortValidationError unless `after` is a nondecreasing rearrangement
    of `before`.
    """
    i = first_nondecreasing_violation_index(after)
    if i is not None:
        raise SortValidationError(
            f"not nondecreasing at i={i}: {after[i]} > {after[i + 1]}"
        )
    if len(before) != len(after):
        raise SortValidationError(
            f"length changed from {len(before)} to {len(after)}"
        )
    diff = permutation_counter_diff(before, after)
    if diff:
        raise SortValidationError(f"multiset changed (before - after): {diff}")
