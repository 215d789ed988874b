"""Run the explorer over several ``n`` values and write tabular results."""

from __future__ import annotations

import argparse
import json
import os
import platform
import sys
from pathlib import Path
from typing import Iterable

import matplotlib
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
import pandas as pd

from moo_search.search.explorer import Explorer, ExplorerConfig
from moo_search.search.observers import ConsoleObserver, SearchObserver

matplotlib.use("Agg")

RESULT_COLUMNS = [
    "n",
    "repeat",
    "longest_path",
    "states_explored",
    "states_admitted",
    "goals_reached",
    "first_goal_moves",
    "tracked_keys",
    "max_frontier",
    "runtime_s",
    "aborted",
    "abort_reason",
]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ns", type=int, nargs="+", default=[1, 2], help="Values of n to run.")
    parser.add_argument("--repeats", type=int, default=1, help="Runs per n (determinism check).")
    parser.add_argument("--max-states", type=int, help="Per-run cap on explored states.")
    parser.add_argument("--max-tracked-keys", type=int, help="Per-run cap on best-map size.")
    parser.add_argument(
        "--progress-every",
        type=int,
        default=0,
        help="Print a progress line every this many explored states (0 disables).",
    )
    parser.add_argument(
        "--out", type=Path, default=Path("artifacts/sweep"), help="Output directory."
    )
    parser.add_argument("--no-plot", action="store_true", help="Skip the summary figure.")
    return parser.parse_args(argv)


def run_sweep(
    ns: Iterable[int],
    *,
    repeats: int = 1,
    config: ExplorerConfig | None = None,
    observer: SearchObserver | None = None,
) -> pd.DataFrame:
    """Return one row per (n, repeat) run."""
    if repeats < 1:
        msg = f"repeats must be at least 1, got {repeats}"
        raise ValueError(msg)
    rows: list[dict[str, object]] = []
    for n in ns:
        for repeat in range(repeats):
            result = Explorer(config, observer).explore(n)
            record = result.as_record()
            record["repeat"] = repeat
            rows.append(record)
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def summarize_sweep(df: pd.DataFrame) -> pd.DataFrame:
    """Per-``n`` aggregates of a :func:`run_sweep` table."""
    required = {"n", "longest_path", "states_explored", "tracked_keys", "runtime_s", "aborted"}
    missing = required - set(df.columns)
    if missing:
        msg = f"results missing required columns: {sorted(missing)}"
        raise ValueError(msg)
    return (
        df.groupby("n")
        .agg(
            runs=("longest_path", "count"),
            longest_path_max=("longest_path", "max"),
            longest_path_min=("longest_path", "min"),
            states_explored_mean=("states_explored", "mean"),
            tracked_keys_max=("tracked_keys", "max"),
            runtime_s_mean=("runtime_s", "mean"),
            runtime_s_std=("runtime_s", "std"),
            aborted_any=("aborted", "any"),
        )
        .reset_index()
    )


def _collect_metadata() -> dict[str, object]:
    return {
        "python_version": sys.version,
        "networkx_version": nx.__version__,
        "pandas_version": pd.__version__,
        "platform": platform.platform(),
        "machine": platform.machine(),
        "cpu_count": os.cpu_count(),
    }


def _plot_sweep(summary: pd.DataFrame, out_dir: Path) -> None:
    x = np.arange(len(summary))
    labels = [str(n) for n in summary["n"]]
    fig, (ax_len, ax_states) = plt.subplots(1, 2, figsize=(9, 4))
    ax_len.bar(x, summary["longest_path_max"].to_numpy(), color="#4c78a8")
    ax_len.set_xticks(x)
    ax_len.set_xticklabels(labels)
    ax_len.set_xlabel("n")
    ax_len.set_ylabel("L(n)")
    ax_len.set_title("Longest path to goal")

    states = summary["states_explored_mean"].to_numpy(dtype=float)
    ax_states.bar(x, np.maximum(states, 1.0), color="#f58518")
    ax_states.set_xticks(x)
    ax_states.set_xticklabels(labels)
    ax_states.set_yscale("log")
    ax_states.set_xlabel("n")
    ax_states.set_ylabel("States explored (mean)")
    ax_states.set_title("Search effort")
    fig.tight_layout()
    out_dir.mkdir(parents=True, exist_ok=True)
    for ext in ("png", "pdf"):
        fig.savefig(out_dir / f"sweep.{ext}", dpi=200)
    plt.close(fig)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    bad = [n for n in args.ns if n < 1]
    if bad:
        print(f"[sweep] n must be at least 1, got {bad}")
        return 1

    config = ExplorerConfig(
        progress_every=args.progress_every or None,
        max_states=args.max_states,
        max_tracked_keys=args.max_tracked_keys,
    )
    observer = ConsoleObserver(show_progress=True, show_goals=False, tag="sweep")
    df = run_sweep(args.ns, repeats=args.repeats, config=config, observer=observer)
    summary = summarize_sweep(df)

    out_dir = args.out.expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)
    results_path = out_dir / "results.csv"
    df.to_csv(results_path, index=False)
    payload = {
        "metadata": _collect_metadata(),
        "ns": list(args.ns),
        "repeats": args.repeats,
        "max_states": args.max_states,
        "max_tracked_keys": args.max_tracked_keys,
        "per_n": json.loads(summary.to_json(orient="records")),
    }
    summary_path = out_dir / "summary.json"
    summary_path.write_text(json.dumps(payload, indent=2))
    if not args.no_plot:
        _plot_sweep(summary, out_dir)

    for _, row in summary.iterrows():
        print(f"[sweep] L({int(row['n'])}) = {int(row['longest_path_max'])}")
    print(f"[sweep] wrote {len(df)} rows to {results_path}")
    print(f"[sweep] wrote summary to {summary_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
