"""
CSV export and summaries for benchmark samples.

A row is one sorted copy:

    ArraySize, Algorithm, ExecutionTime(ns), Comparisons, Swaps

"Swaps" holds the engine's move count; the column keeps the name the
benchmark CSVs have always used. Two column orders exist in the wild
(size-first for sweeps, algorithm-first for per-algorithm trackers); both are
supported when writing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List

import pandas as pd
from rich.console import Console
from rich.table import Table

COL_SIZE = "ArraySize"
COL_ALGO = "Algorithm"
COL_TIME = "ExecutionTime(ns)"
COL_COMPARISONS = "Comparisons"
COL_SWAPS = "Swaps"

SIZE_FIRST_COLUMNS = [COL_SIZE, COL_ALGO, COL_TIME, COL_COMPARISONS, COL_SWAPS]
ALGO_FIRST_COLUMNS = [COL_ALGO, COL_SIZE, COL_TIME, COL_COMPARISONS, COL_SWAPS]

SUMMARY_COLUMNS = [
    COL_ALGO,
    COL_SIZE,
    "runs",
    "mean_ns",
    "median_ns",
    "min_ns",
    "max_ns",
    "mean_comparisons",
    "mean_swaps",
]

__all__ = [
    "SIZE_FIRST_COLUMNS",
    "ALGO_FIRST_COLUMNS",
    "SUMMARY_COLUMNS",
    "make_row",
    "records_to_frame",
    "write_results_csv",
    "summarize",
    "render_summary",
]


def make_row(size: int, algorithm: str, sample: Dict[str, int]) -> Dict[str, Any]:
    """Build one report row from a harness sample (see bench.measure)."""
    return {
        COL_SIZE: int(size),
        COL_ALGO: algorithm,
        COL_TIME: int(sample["time_ns"]),
        COL_COMPARISONS: int(sample["comparisons"]),
        COL_SWAPS: int(sample["moves"]),
    }


def records_to_frame(rows: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(rows), columns=SIZE_FIRST_COLUMNS)
    for col in (COL_SIZE, COL_TIME, COL_COMPARISONS, COL_SWAPS):
        df[col] = df[col].astype("int64")
    return df


def write_results_csv(df: pd.DataFrame, path: Path, *, size_first: bool = True) -> Path:
    """Write per-sample rows with either column order; returns `path`."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = SIZE_FIRST_COLUMNS if size_first else ALGO_FIRST_COLUMNS
    df[columns].to_csv(path, index=False)
    return path


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Average the samples of every (Algorithm, ArraySize) pair.

    Algorithms keep their first-seen order; sizes ascend within each.
    """
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    agg = df.groupby([COL_ALGO, COL_SIZE], as_index=False, sort=False).agg(
        runs=(COL_TIME, "count"),
        mean_ns=(COL_TIME, "mean"),
        median_ns=(COL_TIME, "median"),
        min_ns=(COL_TIME, "min"),
        max_ns=(COL_TIME, "max"),
        mean_comparisons=(COL_COMPARISONS, "mean"),
        mean_swaps=(COL_SWAPS, "mean"),
    )
    order = {name: i for i, name in enumerate(pd.unique(df[COL_ALGO]))}
    agg["_order"] = agg[COL_ALGO].map(order)
    agg = agg.sort_values(["_order", COL_SIZE], ignore_index=True).drop(columns="_order")
    return agg[SUMMARY_COLUMNS]


def render_summary(summary: pd.DataFrame, console: Console, *, title: str = "Performance Summary") -> None:
    """Print one row per (algorithm, size) with averaged time and counts."""
    table = Table(title=title)
    table.add_column("Algorithm", style="bold")
    table.add_column("n", justify="right")
    table.add_column("runs", justify="right")
    table.add_column("mean ms", justify="right")
    table.add_column("median ms", justify="right")
    table.add_column("avg comparisons", justify="right")
    table.add_column("avg swaps", justify="right")

    if summary.empty:
        console.print("(no samples)")
        return

    for row in summary.itertuples(index=False):
        r = row._asdict()
        table.add_row(
            str(r[COL_ALGO]),
            str(int(r[COL_SIZE])),
            str(int(r["runs"])),
            f"{r['mean_ns'] / 1e6:.3f}",
            f"{r['median_ns'] / 1e6:.3f}",
            f"{r['mean_comparisons']:.2f}",
            f"{r['mean_swaps']:.2f}",
        )
    console.print()
    console.print(table)
    console.print()
