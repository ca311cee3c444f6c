"""
Gap sequences for Shell Sort.

Every generator is a pure function of the input length `n` and returns a
fresh list of strictly positive, strictly decreasing gaps (largest first)
ending in 1.

Public API (stable):
    halving_gaps(n: int) -> list[int]
    knuth_gaps(n: int) -> list[int]
    sedgewick_gaps(n: int) -> list[int]
    gap_sequence(strategy, n: int) -> list[int]

Notes
-----
- Python integers never overflow, so the Sedgewick terms are exact for any n.
  The loop stops as soon as both terms reach n, i.e. after O(log n) rounds.
- halving_gaps returns [] for n <= 1; the other two return [1]. Both mean
  "nothing to do", since a gap-1 pass over fewer than two items never compares.
"""

from __future__ import annotations

from typing import List, Union

from .strategy import Strategy, resolve_strategy

__all__ = ["halving_gaps", "knuth_gaps", "sedgewick_gaps", "gap_sequence"]


def halving_gaps(n: int) -> List[int]:
    """Shell's original sequence: n//2, n//4, ..., 1."""
    _validate_n(n)
    gaps: List[int] = []
    gap = n // 2
    while gap > 0:
        gaps.append(gap)
        gap //= 2
    return gaps


def knuth_gaps(n: int) -> List[int]:
    """Knuth's (3^k - 1) / 2 sequence: ..., 40, 13, 4, 1."""
    _validate_n(n)
    gap = 1
    while gap < n // 3:
        gap = 3 * gap + 1

    gaps: List[int] = []
    while gap >= 1:
        gaps.append(gap)
        gap = (gap - 1) // 3
    return gaps


def sedgewick_gaps(n: int) -> List[int]:
    """
    Sedgewick's 1986 sequence, interleaving the two families

        g1(k) = 9 * 4^k - 9 * 2^k + 1        (1, 19, 109, 505, ...)
        g2(k) = 4^(k+1) - 3 * 2^(k+1) + 1    (-1, 5, 41, 209, ...)

    Terms are admitted when 0 < g < n (g2 also when it differs from g1).
    Generation order is ascending in k but not monotone in value, so the
    result is sorted largest first. Falls back to [1] if nothing qualifies.
    """
    _validate_n(n)
    found = set()
    k = 0
    while True:
        g1 = 9 * 4**k - 9 * 2**k + 1
        g2 = 4 ** (k + 1) - 3 * 2 ** (k + 1) + 1

        if 0 < g1 < n:
            found.add(g1)
        if 0 < g2 < n and g2 != g1:
            found.add(g2)

        if g1 >= n and g2 >= n:
            break
        k += 1

    if not found:
        return [1]
    return sorted(found, reverse=True)


def gap_sequence(strategy: Union[Strategy, str], n: int) -> List[int]:
    """
    Return the gap list for `strategy` (a Strategy or its string value).

    Raises
    ------
    ValueError
        If the strategy is unknown or n is negative.
    """
    strategy = resolve_strategy(strategy)
    if strategy is Strategy.ORIGINAL:
        return halving_gaps(n)
    if strategy is Strategy.KNUTH:
        return knuth_gaps(n)
    return sedgewick_gaps(n)


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError(f"n must be an int; got {n!r}")
    if n < 0:
        raise ValueError(f"n must be nonnegative; got {n}")
