"""Cross-platform task runner for moo-search.

All commands use the currently active Python interpreter (sys.executable) so they work
on POSIX and Windows without Make.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ARTIFACTS_ENV = "ARTIFACTS"
DEFAULT_ARTIFACTS = "artifacts"


class RunError(Exception):
    """Raised when an invoked command fails."""


def _log(msg: str) -> None:
    print(f"[run] {msg}")


def _run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    _log("$ " + " ".join(cmd))
    result = subprocess.run(cmd, env=env)
    if result.returncode != 0:
        raise RunError(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")


def _artifacts_root() -> Path:
    return Path(os.environ.get(ARTIFACTS_ENV, DEFAULT_ARTIFACTS))


def cmd_lint(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "check", "."])
    _run([sys.executable, "-m", "ruff", "format", "--check", "."])


def cmd_format(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "format", "."])
    _run([sys.executable, "-m", "ruff", "check", "--fix", "."])


def cmd_test(args: argparse.Namespace) -> None:
    pytest_cmd = [sys.executable, "-m", "pytest"]
    if args.quiet:
        pytest_cmd.append("-q")
    _run(pytest_cmd)


def cmd_sweep(args: argparse.Namespace) -> None:
    out_dir = args.out or (_artifacts_root() / "sweep")
    cmd = [
        sys.executable,
        "-m",
        "moo_search.eval.sweep",
        "--ns",
        *[str(n) for n in args.ns],
        "--repeats",
        str(args.repeats),
        "--out",
        str(out_dir),
    ]
    if args.max_states is not None:
        cmd += ["--max-states", str(args.max_states)]
    if args.max_tracked_keys is not None:
        cmd += ["--max-tracked-keys", str(args.max_tracked_keys)]
    if args.no_plot:
        cmd.append("--no-plot")
    _run(cmd)
    _log(f"sweep outputs in {out_dir}")


def cmd_invariants(args: argparse.Namespace) -> None:
    results = args.results or (_artifacts_root() / "sweep" / "results.csv")
    if not results.exists():
        raise RunError("Could not locate sweep results CSV; run sweep or pass --results")
    out_dir = args.out or (results.parent / "invariants")
    _run(
        [
            sys.executable,
            "-m",
            "moo_search.eval.invariants",
            "--results",
            str(results),
            "--out",
            str(out_dir),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    lint_p = sub.add_parser("lint", help="Run ruff checks")
    lint_p.set_defaults(func=cmd_lint)

    fmt_p = sub.add_parser("format", help="Apply ruff format and fixes")
    fmt_p.set_defaults(func=cmd_format)

    test_p = sub.add_parser("test", help="Run pytest")
    test_p.add_argument("--quiet", action="store_true", help="Quiet pytest output")
    test_p.set_defaults(func=cmd_test)

    sweep = sub.add_parser("sweep", help="Compute L(n) for several n")
    sweep.add_argument("--ns", type=int, nargs="+", default=[1, 2])
    sweep.add_argument("--repeats", type=int, default=2)
    sweep.add_argument("--max-states", type=int, help="Per-run cap on explored states")
    sweep.add_argument("--max-tracked-keys", type=int, help="Per-run cap on best-map size")
    sweep.add_argument("--no-plot", action="store_true")
    sweep.add_argument("--out", type=Path, help="Output directory (defaults to $ARTIFACTS/sweep)")
    sweep.set_defaults(func=cmd_sweep)

    inv = sub.add_parser("invariants", help="Run invariant checks on sweep results")
    inv.add_argument(
        "--results", type=Path, help="Path to results CSV (defaults to latest sweep results)"
    )
    inv.add_argument("--out", type=Path, help="Output directory for report")
    inv.set_defaults(func=cmd_invariants)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except RunError as exc:  # pragma: no cover - simple CLI error
        _log(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
