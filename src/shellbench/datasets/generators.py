"""
Input distributions for Shell Sort benchmarks.

Implemented:
- dist == "random":
    Integers drawn uniformly from an inclusive range (default [0, 999]).
- dist == "sorted":
    [0, 1, ..., n-1].
- dist == "reversed":
    [n, n-1, ..., 1]. Worst case for the halving gaps' early passes.
- dist == "nearly_sorted":
    [0, ..., n-1] followed by floor(swap_frac * n) random pair swaps
    (default swap_frac 0.05, i.e. one swap per 20 elements).
- dist == "few_uniques":
    n draws from k distinct values picked in an inclusive range.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Ranges in params["range"] are inclusive on both ends.
- Returns a plain Python `list[int]`; the engine sorts lists in place.
- The caller owns and seeds the RNG. "sorted" and "reversed" never touch it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sorted",
    "reversed",
    "nearly_sorted",
    "few_uniques",
}
DEFAULT_RANGE: Tuple[int, int] = (0, 999)

__all__ = ["SUPPORTED_DISTS", "DEFAULT_RANGE", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        {"dist": <one of SUPPORTED_DISTS>, "params": {...}}

        random:         {"range": [lo, hi]}      # optional, default [0, 999]
        nearly_sorted:  {"swap_frac": 0.05}      # optional, in [0.0, 1.0]
        few_uniques:    {"k": 10, "range": [lo, hi]}
        sorted, reversed: params ignored
    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If inputs are invalid or the distribution is unsupported.
    """
    _validate_n(n)
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n, 0, -1))

    if dist == "random":
        lo, hi = _parse_range(dist, params)
        if n == 0:
            return []
        # Generator.integers is half-open; +1 makes hi inclusive.
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        num_swaps = int(np.floor(swap_frac * n))
        if n == 0 or num_swaps == 0:
            return arr
        pairs = rng.integers(0, n, size=(num_swaps, 2))
        for i, j in pairs.tolist():
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    # few_uniques
    k = _parse_k(params)
    lo, hi = _parse_range(dist, params)
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    # Sampling offsets without replacement keeps every draw tied to `rng`.
    offsets = rng.choice(hi - lo + 1, size=actual_k, replace=False)
    values = [lo + int(v) for v in offsets]
    picks = rng.integers(0, actual_k, size=n)
    return [values[int(t)] for t in picks]


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_range(dist: str, params: Dict[str, Any]) -> Tuple[int, int]:
    if "range" not in params:
        return DEFAULT_RANGE
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    k = params.get("k", 10)
    if not _is_int_like(k) or int(k) < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
