"""Command-line entry point: compute ``L(n)`` for one ``n``."""

from __future__ import annotations

import argparse
import json

from moo_search.search.explorer import Explorer, ExplorerConfig
from moo_search.search.observers import ConsoleObserver

BANNER = "MOO System with periodic flips + injection cycles"


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--n", type=int, help="Number of slots (prompted when omitted).")
    parser.add_argument(
        "--progress-every",
        type=int,
        default=10_000,
        help="Print a progress line every this many explored states (0 disables).",
    )
    parser.add_argument("--max-states", type=int, help="Stop after exploring this many states.")
    parser.add_argument(
        "--max-tracked-keys",
        type=int,
        help="Stop once the best-depth map holds this many configurations.",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress and goal lines.")
    parser.add_argument("--json", action="store_true", help="Print the result record as JSON.")
    return parser.parse_args(argv)


def _prompt_n() -> int | None:
    raw = input("Enter n (number of states): ")
    try:
        return int(raw.strip())
    except ValueError:
        return None


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    print(BANNER)
    print("=" * len(BANNER))

    n = args.n if args.n is not None else _prompt_n()
    if n is None or n < 1:
        print("n must be at least 1")
        return 1

    config = ExplorerConfig(
        progress_every=args.progress_every or None,
        max_states=args.max_states,
        max_tracked_keys=args.max_tracked_keys,
    )
    observer = ConsoleObserver(show_progress=not args.quiet, show_goals=not args.quiet)
    print(f"\nComputing L({n})...")
    try:
        result = Explorer(config, observer).explore(n)
    except KeyboardInterrupt:
        print("[moo] interrupted")
        return 130

    print(f"\nFINAL RESULT: L({n}) = {result.longest_path}")
    if result.terminated:
        print("SUCCESS! The system terminated.")
    else:
        print("No terminating sequence found.")
    if args.json:
        print(json.dumps(result.as_record(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
