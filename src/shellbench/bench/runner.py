"""
Experiment runner: sweeps sizes x strategies and records metrics.

Usage (from repo root):
    shellbench run experiments/configs/01_random_scaling.yaml
    python -m shellbench.bench.runner experiments/configs/01_random_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used (defaults filled in)
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per sample, plus timeout/error lines
    - results.csv             # ArraySize,Algorithm,ExecutionTime(ns),Comparisons,Swaps
    - summary.csv             # per (algorithm, size) averages
    - (console) rich/tqdm summaries

Design notes:
- For each size and iteration we generate ONE dataset and give the same input
  to every algorithm.
- Metered sweeps go through sort_with_metrics; plain sweeps time the in-place
  `sort` path and may include the "builtin" list.sort baseline.
- On timeout/error for an algorithm at size n, we skip larger sizes for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import os
import platform
import subprocess
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from tqdm import tqdm

from shellbench.algorithms import SUPPORTED_STRATEGIES, Strategy
from shellbench.bench.measure import BUILTIN_NAME, measure_strategy, plain_sorter, time_plain_sort
from shellbench.bench.report import (
    make_row,
    records_to_frame,
    render_summary,
    summarize,
    write_results_csv,
)
from shellbench.datasets import make_dataset

_console = Console()

__all__ = ["ExperimentConfig", "load_config", "algo_label", "sweep", "run_experiment", "main"]


# ------------------------- config ------------------------- #

@dataclass(frozen=True)
class ExperimentConfig:
    experiment_name: str
    output_dir: str
    sizes: List[int]
    algorithms: List[str] = field(default_factory=lambda: list(SUPPORTED_STRATEGIES))
    dataset: Dict[str, Any] = field(default_factory=lambda: {"dist": "random", "params": {}})
    seed: Optional[int] = None
    iterations: int = 1
    repeats: int = 1
    metered: bool = True
    warmup: bool = True
    disable_gc: bool = True
    timeout_seconds: float = 60.0
    validate: bool = True

    def __post_init__(self) -> None:
        if not self.sizes:
            raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
        for n in self.sizes:
            if not isinstance(n, int) or isinstance(n, bool) or n < 0:
                raise ValueError(f"Config 'sizes' entries must be nonnegative integers; got {n!r}")
        if not self.algorithms:
            raise ValueError("Config 'algorithms' must name at least one algorithm")
        if len(set(self.algorithms)) != len(self.algorithms):
            raise ValueError(f"Duplicate algorithm name in config: {self.algorithms}")
        allowed = set(SUPPORTED_STRATEGIES)
        if not self.metered:
            allowed.add(BUILTIN_NAME)
        for name in self.algorithms:
            if name not in allowed:
                raise ValueError(
                    f"Unknown algorithm {name!r} (metered={self.metered}). Allowed: {sorted(allowed)}"
                )
        if self.iterations < 1:
            raise ValueError("iterations must be >= 1")
        if self.repeats < 1:
            raise ValueError("repeats must be >= 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


def load_config(path: Path) -> ExperimentConfig:
    cfg = _load_yaml(path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    required = ["experiment_name", "output_dir", "sizes"]
    missing = [k for k in required if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    known = set(ExperimentConfig.__dataclass_fields__)
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    kwargs = dict(cfg)
    if "algorithms" in kwargs:
        # Accept both [original, knuth] and [{name: original}, ...]
        kwargs["algorithms"] = [
            a["name"] if isinstance(a, dict) else a for a in (kwargs["algorithms"] or [])
        ]
    if "sizes" in kwargs:
        kwargs["sizes"] = list(kwargs["sizes"] or [])
    return ExperimentConfig(**kwargs)


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _write_jsonl(records: Sequence[Dict[str, Any]], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        for obj in records:
            f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
            f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def algo_label(name: str) -> str:
    """Report label: "Shell's Original", "Knuth's", "Sedgewick's" or "builtin"."""
    if name == BUILTIN_NAME:
        return BUILTIN_NAME
    return Strategy(name).label


# ------------------------- core sweep ------------------------- #

def sweep(
    cfg: ExperimentConfig,
    rng: np.random.Generator,
    *,
    progress: bool = True,
) -> List[Dict[str, Any]]:
    """
    Run every (size, iteration, algorithm) cell of `cfg`.

    Returns a list of JSON-ready records. Sample records carry
    time_ns/comparisons/moves; failure records carry "status".
    """
    records: List[Dict[str, Any]] = []
    per_algo_skip = {name: False for name in cfg.algorithms}

    size_iter: Any = cfg.sizes
    if progress:
        size_iter = tqdm(cfg.sizes, desc="Sizes", unit="n")

    for n in size_iter:
        for iteration in range(cfg.iterations):
            base_a = make_dataset(int(n), cfg.dataset, rng)

            for name in cfg.algorithms:
                if per_algo_skip[name]:
                    continue

                common = dict(
                    a=base_a,
                    repeats=cfg.repeats,
                    warmup=cfg.warmup,
                    disable_gc=cfg.disable_gc,
                    timeout_seconds=cfg.timeout_seconds,
                    validate=cfg.validate,
                )
                if cfg.metered:
                    res = measure_strategy(strategy=name, **common)
                else:
                    res = time_plain_sort(algo_name=name, sort_fn=plain_sorter(name), **common)

                for trial_idx, sample in enumerate(res["samples"]):
                    records.append(
                        {
                            "algo": name,
                            "n": int(n),
                            "iteration": iteration,
                            "trial": trial_idx,
                            **sample,
                        }
                    )

                status = res["status"]
                if status != "ok":
                    per_algo_skip[name] = True
                    records.append(
                        {
                            "algo": name,
                            "n": int(n),
                            "iteration": iteration,
                            "status": status,
                            "error": res["error"],
                            "timed_out_on_repeat": res["timed_out_on_repeat"],
                        }
                    )
                    _console.print(f"[yellow]{name}[/yellow] {status} at n={n}; skipping larger sizes")

    return records


def records_to_report(records: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    """Keep sample records only and convert them to report rows."""
    rows = [make_row(r["n"], algo_label(r["algo"]), r) for r in records if "status" not in r]
    return records_to_frame(rows)


# ------------------------- experiment ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = load_config(config_path)

    run_dir = _ensure_run_dir(Path(cfg.output_dir), cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    csv_path = run_dir / "results.csv"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(asdict(cfg), cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(cfg.seed)

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {cfg.experiment_name}")
    _console.print(f"[bold]Algorithms:[/bold] {', '.join(cfg.algorithms)}")
    _console.print()

    records = sweep(cfg, rng)
    _write_jsonl(records, results_path)

    df = records_to_report(records)
    write_results_csv(df, csv_path)
    summary = summarize(df)
    summary.to_csv(summary_path, index=False)

    render_summary(summary, _console, title=f"{cfg.experiment_name} (averages)")

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, csv_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")

    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a Shell Sort benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    return p.parse_args()


def main() -> None:
    args = _parse_args()
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
