"""
Command-line entry point.

    shellbench benchmark [--min 100] [--max 10000] [--step 100] [--iterations 5]
                         [--output benchmark_results.csv] [--dist random] [--seed N]
    shellbench compare   [--sizes 100,500,1000,2000,5000,10000]
                         [--output comparison_results.csv] [--seed N]
    shellbench run CONFIG.yaml

`benchmark` sorts fresh random arrays through the metered path and records
time, comparisons and swaps for every strategy. `compare` times the plain
path of each strategy against the built-in list.sort (counts reported as 0).
Both write ArraySize,Algorithm,ExecutionTime(ns),Comparisons,Swaps rows.

There is no `help` subcommand: `shellbench -h` lists the commands and
`shellbench <command> -h` lists that command's options and defaults.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
from rich.console import Console

from shellbench.algorithms import SUPPORTED_STRATEGIES
from shellbench.bench.measure import BUILTIN_NAME
from shellbench.bench.report import render_summary, summarize, write_results_csv
from shellbench.bench.runner import ExperimentConfig, records_to_report, run_experiment, sweep
from shellbench.datasets import SUPPORTED_DISTS

_console = Console()

DEFAULT_COMPARE_SIZES = [100, 500, 1000, 2000, 5000, 10000]


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def _size_list(text: str) -> List[int]:
    parts = [p.strip() for p in text.split(",") if p.strip()]
    if not parts:
        raise argparse.ArgumentTypeError("expected a comma-separated list of sizes")
    return [_positive_int(p) for p in parts]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="shellbench", description="Shell Sort gap-sequence benchmark runner.")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("benchmark", help="Metered sweep over a range of sizes")
    b.add_argument("--min", dest="min_size", type=_positive_int, default=100, help="Minimum array size (default: 100)")
    b.add_argument("--max", dest="max_size", type=_positive_int, default=10000, help="Maximum array size (default: 10000)")
    b.add_argument("--step", type=_positive_int, default=100, help="Step size (default: 100)")
    b.add_argument("--iterations", type=_positive_int, default=5, help="Arrays per size (default: 5)")
    b.add_argument("--output", default="benchmark_results.csv", help="Output CSV file")
    b.add_argument("--dist", choices=sorted(SUPPORTED_DISTS), default="random", help="Input distribution")
    b.add_argument("--seed", type=int, default=None, help="RNG seed (default: fresh entropy)")
    b.add_argument("--warmup", action=argparse.BooleanOptionalAction, default=False)
    b.add_argument("--disable-gc", action=argparse.BooleanOptionalAction, default=False)
    b.add_argument("--algo-first", action="store_true", help="Write Algorithm,ArraySize,... column order")

    c = sub.add_parser("compare", help="Plain-path timing against the built-in sort")
    c.add_argument("--sizes", type=_size_list, default=DEFAULT_COMPARE_SIZES, help="Comma-separated list of sizes")
    c.add_argument("--output", default="comparison_results.csv", help="Output CSV file")
    c.add_argument("--seed", type=int, default=None, help="RNG seed (default: fresh entropy)")

    r = sub.add_parser("run", help="Run a YAML experiment config")
    r.add_argument("config", type=str, help="Path to YAML experiment config")

    return p


def _benchmark(args: argparse.Namespace) -> Path:
    sizes = list(range(args.min_size, args.max_size + 1, args.step))
    _console.print(f"Running benchmark: sizes {args.min_size}..{args.max_size} step {args.step}, "
                   f"{args.iterations} iterations per size -> {args.output}")

    cfg = ExperimentConfig(
        experiment_name="benchmark",
        output_dir=str(Path(args.output).parent),
        sizes=sizes,
        algorithms=list(SUPPORTED_STRATEGIES),
        dataset={"dist": args.dist, "params": {}},
        seed=args.seed,
        iterations=args.iterations,
        repeats=1,
        metered=True,
        warmup=args.warmup,
        disable_gc=args.disable_gc,
    )
    df = records_to_report(sweep(cfg, np.random.default_rng(cfg.seed)))
    out = write_results_csv(df, Path(args.output), size_first=not args.algo_first)
    render_summary(summarize(df), _console)
    _console.print(f"[bold green]Benchmark completed.[/bold green] Results saved to {out}")
    return out


def _compare(args: argparse.Namespace) -> Path:
    _console.print(f"Running comparison: sizes {args.sizes} -> {args.output}")
    cfg = ExperimentConfig(
        experiment_name="compare",
        output_dir=str(Path(args.output).parent),
        sizes=list(args.sizes),
        algorithms=list(SUPPORTED_STRATEGIES) + [BUILTIN_NAME],
        seed=args.seed,
        metered=False,
        warmup=False,
        disable_gc=False,
    )
    df = records_to_report(sweep(cfg, np.random.default_rng(cfg.seed)))
    out = write_results_csv(df, Path(args.output))
    render_summary(summarize(df), _console, title="Comparison (plain path)")
    _console.print(f"[bold green]Comparison completed.[/bold green] Results saved to {out}")
    return out


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = None
    if args.command == "run":
        config_path = Path(args.config).resolve()
        if not config_path.exists():
            parser.error(f"Config file not found: {config_path}")
    elif args.command == "benchmark" and args.min_size > args.max_size:
        parser.error(f"--min must not exceed --max ({args.min_size} > {args.max_size})")

    try:
        if config_path is not None:
            run_experiment(config_path)
        elif args.command == "benchmark":
            _benchmark(args)
        else:
            _compare(args)
    except Exception as e:
        _console.print(f"[bold red]{args.command} failed:[/bold red] {e!r}")
        raise
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
