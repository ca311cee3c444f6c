"""
Shell Sort engine public API.

Re-exports so callers can write:
    from shellbench.algorithms import Strategy, sort, sort_with_metrics
"""

from .engine import (
    InvalidInputError,
    MetricsRecord,
    insertion_pass,
    metered_insertion_pass,
    sort,
    sort_with_metrics,
)
from .gaps import gap_sequence, halving_gaps, knuth_gaps, sedgewick_gaps
from .strategy import SUPPORTED_STRATEGIES, Strategy, resolve_strategy

__all__ = [
    "Strategy",
    "SUPPORTED_STRATEGIES",
    "resolve_strategy",
    "MetricsRecord",
    "InvalidInputError",
    "sort",
    "sort_with_metrics",
    "insertion_pass",
    "metered_insertion_pass",
    "gap_sequence",
    "halving_gaps",
    "knuth_gaps",
    "sedgewick_gaps",
]
