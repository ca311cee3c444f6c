"""
Oracle for sorting correctness.

Python's built-in `sorted()` is the ground truth: every Shell Sort strategy
must reproduce it exactly, since integers have a unique nondecreasing
arrangement.

Public API (stable):
    oracle_sort(a: Sequence[int]) -> list[int]
    equals_oracle(a: Sequence[int], out: Sequence[int]) -> bool
"""

from __future__ import annotations

from typing import List, Sequence

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(a: Sequence[int]) -> List[int]:
    """Return a new sorted list; `a` is not mutated."""
    return sorted(a)


def equals_oracle(a: Sequence[int], out: Sequence[int]) -> bool:
    """True iff `out` equals `oracle_sort(a)` element for element."""
    return list(out) == oracle_sort(a)
