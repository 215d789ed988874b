"""Invariant checks over sweep results (determinism, metric sanity, schema)."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

import pandas as pd

COUNT_COLS = [
    "longest_path",
    "states_explored",
    "states_admitted",
    "goals_reached",
    "tracked_keys",
    "max_frontier",
]
REQUIRED_COLS = ["n", "repeat", *COUNT_COLS, "first_goal_moves", "aborted"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--results", type=Path, required=True, help="Path to results.csv.")
    parser.add_argument(
        "--out",
        type=Path,
        help="Output directory (defaults to results parent / invariants).",
    )
    return parser.parse_args(argv)


def _schema(df: pd.DataFrame) -> list[dict]:
    missing = [col for col in REQUIRED_COLS if col not in df.columns]
    if missing:
        return [{"type": "schema", "detail": f"missing columns {missing}"}]
    return []


def _determinism(df: pd.DataFrame) -> list[dict]:
    issues = []
    for n, group in df.groupby("n"):
        for col in [*COUNT_COLS, "first_goal_moves"]:
            vals = group[col].dropna()
            if vals.empty:
                continue
            if vals.max() != vals.min():
                issues.append({"type": "determinism", "n": int(n), "metric": col})
                break
    return issues


def _metric_sanity(df: pd.DataFrame) -> list[dict]:
    issues = []
    negative = (df[COUNT_COLS].fillna(0) < 0).any(axis=1)
    for _, row in df[negative].iterrows():
        issues.append(
            {"type": "metric_sanity", "n": int(row["n"]), "detail": "negative metric"}
        )
    phantom = df[(df["goals_reached"] == 0) & (df["longest_path"] != 0)]
    for _, row in phantom.iterrows():
        issues.append(
            {"type": "metric_sanity", "n": int(row["n"]), "detail": "length without goal"}
        )
    first = df["first_goal_moves"]
    late_first = df[first.notna() & (first > df["longest_path"])]
    for _, row in late_first.iterrows():
        issues.append(
            {
                "type": "metric_sanity",
                "n": int(row["n"]),
                "detail": "first goal deeper than longest path",
            }
        )
    return issues


def _summarize(issues: Iterable[dict]) -> dict:
    issues_list = list(issues)
    grouped: dict[str, int] = {}
    for item in issues_list:
        grouped[item["type"]] = grouped.get(item["type"], 0) + 1
    return {"issues": issues_list, "counts": grouped, "passed": len(issues_list) == 0}


def _write_report(out_dir: Path, summary: dict) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    report_lines = ["# Invariants Report", ""]
    if summary["passed"]:
        report_lines.append("- All invariants passed.")
    else:
        report_lines.append(f"- Issues found: {summary['counts']}")
        for issue in summary["issues"]:
            parts = [issue["type"]]
            for key, val in issue.items():
                if key == "type":
                    continue
                parts.append(f"{key}={val}")
            report_lines.append(f"  - {'; '.join(parts)}")
    (out_dir / "report.md").write_text("\n".join(report_lines))
    (out_dir / "summary.json").write_text(json.dumps(summary, indent=2))


def check_results(df: pd.DataFrame) -> dict:
    """Run every check and return the summary dict."""
    issues = _schema(df)
    if not issues:
        issues.extend(_determinism(df))
        issues.extend(_metric_sanity(df))
    return _summarize(issues)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    results_path = args.results.expanduser()
    out_dir = args.out or results_path.parent / "invariants"
    df = pd.read_csv(results_path)
    summary = check_results(df)
    _write_report(out_dir, summary)
    print(f"[invariants] wrote report to {out_dir}")
    return 0 if summary["passed"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
