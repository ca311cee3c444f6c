"""CSV export and averaged summaries."""

from __future__ import annotations

import pandas as pd
from rich.console import Console

from shellbench.bench.report import (
    ALGO_FIRST_COLUMNS,
    SIZE_FIRST_COLUMNS,
    make_row,
    records_to_frame,
    render_summary,
    summarize,
    write_results_csv,
)


def _frame() -> pd.DataFrame:
    rows = [
        make_row(100, "Knuth's", {"time_ns": 10, "comparisons": 4, "moves": 2}),
        make_row(100, "Knuth's", {"time_ns": 30, "comparisons": 6, "moves": 2}),
        make_row(100, "Shell's Original", {"time_ns": 50, "comparisons": 9, "moves": 5}),
        make_row(10, "Knuth's", {"time_ns": 1, "comparisons": 1, "moves": 0}),
    ]
    return records_to_frame(rows)


def test_csv_headers_in_both_orders(tmp_path):
    df = _frame()
    p1 = write_results_csv(df, tmp_path / "a.csv")
    p2 = write_results_csv(df, tmp_path / "nested" / "b.csv", size_first=False)
    assert p1.read_text().splitlines()[0] == "ArraySize,Algorithm,ExecutionTime(ns),Comparisons,Swaps"
    assert p2.read_text().splitlines()[0] == "Algorithm,ArraySize,ExecutionTime(ns),Comparisons,Swaps"
    assert list(pd.read_csv(p1).columns) == SIZE_FIRST_COLUMNS
    assert list(pd.read_csv(p2).columns) == ALGO_FIRST_COLUMNS
    assert p1.read_text().splitlines()[1] == "100,Knuth's,10,4,2"


def test_summary_averages():
    s = summarize(_frame())
    assert list(s["Algorithm"]) == ["Knuth's", "Knuth's", "Shell's Original"]
    assert list(s["ArraySize"]) == [10, 100, 100]
    knuth_100 = s[(s["Algorithm"] == "Knuth's") & (s["ArraySize"] == 100)].iloc[0]
    assert knuth_100["runs"] == 2
    assert knuth_100["mean_ns"] == 20
    assert knuth_100["mean_comparisons"] == 5
    assert knuth_100["mean_swaps"] == 2


def test_empty_summary_and_render():
    empty = records_to_frame([])
    s = summarize(empty)
    assert s.empty
    console = Console(record=True, width=120)
    render_summary(s, console)
    assert "(no samples)" in console.export_text()


def test_render_table():
    console = Console(record=True, width=160)
    render_summary(summarize(_frame()), console, title="T")
    text = console.export_text()
    assert "Shell's Original" in text
    assert "0.000" in text
