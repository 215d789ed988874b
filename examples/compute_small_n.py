"""Minimal example: compute L(n) for the smallest line and replay a path."""

from __future__ import annotations

from moo_search import SMALL_MOVE, Explorer, ExplorerConfig, MooEnv


def main() -> None:
    result = Explorer(ExplorerConfig(progress_every=None)).explore(1)
    print("MOO search on a single slot")
    print(f"  L(1): {result.longest_path}")
    print(f"  states_explored: {result.states_explored}")
    print(f"  tracked_keys: {result.tracked_keys}")

    env = MooEnv(1)
    for state in env.replay([(SMALL_MOVE, 0), (SMALL_MOVE, 0)]):
        print(f"  {state.render()} goal={state.is_goal()}")


if __name__ == "__main__":
    main()
