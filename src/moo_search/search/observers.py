"""Observer hooks invoked by :class:`~moo_search.search.explorer.Explorer`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from moo_search.env.state import MooState

if TYPE_CHECKING:
    from moo_search.search.explorer import SearchResult


@dataclass(frozen=True)
class ProgressEvent:
    """Snapshot of the search loop, emitted every ``progress_every`` pops."""

    n: int
    states_explored: int
    frontier_size: int
    depth: int
    tracked_keys: int
    best_so_far: int


class SearchObserver:
    """No-op base; override the hooks you need.

    Hooks are observational only. Nothing they return or do feeds back into
    the search.
    """

    def on_start(self, n: int) -> None:
        pass

    def on_progress(self, event: ProgressEvent) -> None:
        pass

    def on_goal(self, state: MooState, best_so_far: int) -> None:
        pass

    def on_finish(self, result: "SearchResult") -> None:
        pass


class ConsoleObserver(SearchObserver):
    """Print progress and goal lines to stdout."""

    def __init__(
        self, *, show_progress: bool = True, show_goals: bool = True, tag: str = "explore"
    ):
        self.show_progress = show_progress
        self.show_goals = show_goals
        self.tag = tag

    def _log(self, msg: str) -> None:
        print(f"[{self.tag}] {msg}")

    def on_progress(self, event: ProgressEvent) -> None:
        if not self.show_progress:
            return
        self._log(
            f"States explored: {event.states_explored}, Queue: {event.frontier_size}, "
            f"Current depth: {event.depth}"
        )

    def on_goal(self, state: MooState, best_so_far: int) -> None:
        if self.show_goals:
            self._log(f"GOAL REACHED! L({state.n}) = {state.total_moves}")

    def on_finish(self, result: "SearchResult") -> None:
        self._log(f"Total states explored: {result.states_explored}")
        if result.aborted:
            self._log(f"search stopped early ({result.abort_reason})")
