"""Gap-sequence strategy identifiers shared by the engine, harness and reports."""

from __future__ import annotations

from enum import Enum
from typing import Union

__all__ = ["Strategy", "resolve_strategy", "SUPPORTED_STRATEGIES"]


class Strategy(str, Enum):
    ORIGINAL = "original"
    KNUTH = "knuth"
    SEDGEWICK = "sedgewick"

    @property
    def label(self) -> str:
        """Name used in CSV reports and console tables."""
        return _LABELS[self]


_LABELS = {
    Strategy.ORIGINAL: "Shell's Original",
    Strategy.KNUTH: "Knuth's",
    Strategy.SEDGEWICK: "Sedgewick's",
}

SUPPORTED_STRATEGIES = tuple(s.value for s in Strategy)


def resolve_strategy(strategy: Union[Strategy, str]) -> Strategy:
    """Accept a Strategy or its (case-insensitive) string value."""
    if isinstance(strategy, Strategy):
        return strategy
    if isinstance(strategy, str):
        try:
            return Strategy(strategy.strip().lower())
        except ValueError:
            pass
    raise ValueError(
        f"Unsupported strategy: {strategy!r}. Supported: {list(SUPPORTED_STRATEGIES)}"
    )
