"""Depth-first, dominance-pruned exhaustive search for ``L(n)``."""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from moo_search.env.moo_env import MooEnv
from moo_search.env.rules import TransitionRules
from moo_search.env.state import MooState
from moo_search.search.observers import ProgressEvent, SearchObserver

ABORT_MAX_STATES = "max_states"
ABORT_MAX_TRACKED_KEYS = "max_tracked_keys"


@dataclass
class ExplorerConfig:
    """Configuration knobs for :class:`Explorer`.

    ``max_states`` and ``max_tracked_keys`` are optional stop hooks. They end
    the run early but never change which states are admitted.
    """

    rules: TransitionRules = field(default_factory=TransitionRules)
    progress_every: int | None = 10_000
    max_states: int | None = None
    max_tracked_keys: int | None = None


@dataclass
class SearchResult:
    """Outcome and bookkeeping of one exploration."""

    n: int
    longest_path: int
    states_explored: int
    states_admitted: int
    goals_reached: int
    first_goal_moves: int | None
    tracked_keys: int
    max_frontier: int
    runtime_s: float
    aborted: bool = False
    abort_reason: str | None = None

    @property
    def terminated(self) -> bool:
        """True when at least one goal was reached."""
        return self.longest_path > 0

    def as_record(self) -> dict[str, Any]:
        """Flatten into a dictionary suitable for CSV/JSON logging."""
        return asdict(self)


class Explorer:
    """Explores the state graph with a LIFO frontier and a best-depth map.

    A candidate successor is admitted when its configuration has never been
    recorded, or was recorded at a strictly smaller depth. The map is keyed by
    :class:`MooState` structural identity (``total_moves`` excluded) and is
    never evicted during a run.
    """

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        observer: SearchObserver | None = None,
    ):
        self.config = config or ExplorerConfig()
        self.observer = observer or SearchObserver()
        self._frontier: List[MooState] = []
        self._best: Dict[MooState, int] = {}

    # ------------------------------------------------------------------ API --
    def compute_longest_path(self, n: int) -> int:
        """Largest ``total_moves`` of any goal reached, 0 when none is."""
        return self.explore(n).longest_path

    def explore(self, n: int) -> SearchResult:
        env = MooEnv(n, self.config.rules)
        initial = env.reset()
        self._frontier = [initial]
        self._best = {initial: 0}
        self.observer.on_start(n)

        progress_every = self.config.progress_every
        longest = 0
        explored = 0
        admitted = 0
        goals = 0
        first_goal: int | None = None
        max_frontier = 1
        abort_reason: str | None = None
        start = time.perf_counter()

        frontier = self._frontier
        while frontier:
            abort_reason = self._abort_reason(explored)
            if abort_reason is not None:
                break

            current = frontier.pop()
            explored += 1

            if current.is_goal():
                goals += 1
                if first_goal is None:
                    first_goal = current.total_moves
                longest = max(longest, current.total_moves)
                self.observer.on_goal(current, longest)
                continue

            if progress_every and explored % progress_every == 0:
                self.observer.on_progress(
                    ProgressEvent(
                        n=n,
                        states_explored=explored,
                        frontier_size=len(frontier),
                        depth=current.total_moves,
                        tracked_keys=len(self._best),
                        best_so_far=longest,
                    )
                )

            for candidate in env.successors(current):
                if self._admit(candidate):
                    frontier.append(candidate)
                    admitted += 1
            max_frontier = max(max_frontier, len(frontier))

        result = SearchResult(
            n=n,
            longest_path=longest,
            states_explored=explored,
            states_admitted=admitted,
            goals_reached=goals,
            first_goal_moves=first_goal,
            tracked_keys=len(self._best),
            max_frontier=max_frontier,
            runtime_s=time.perf_counter() - start,
            aborted=abort_reason is not None,
            abort_reason=abort_reason,
        )
        self.observer.on_finish(result)
        return result

    def recorded_depth(self, state: MooState) -> int | None:
        """Deepest recorded arrival at ``state``'s configuration, if any."""
        return self._best.get(state)

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    @property
    def tracked_keys(self) -> int:
        return len(self._best)

    # ------------------------------------------------------------- Helpers --
    def _admit(self, candidate: MooState) -> bool:
        recorded = self._best.get(candidate)
        if recorded is not None and recorded >= candidate.total_moves:
            return False
        self._best[candidate] = candidate.total_moves
        return True

    def _abort_reason(self, explored: int) -> str | None:
        cfg = self.config
        if cfg.max_states is not None and explored >= cfg.max_states:
            return ABORT_MAX_STATES
        if cfg.max_tracked_keys is not None and len(self._best) >= cfg.max_tracked_keys:
            return ABORT_MAX_TRACKED_KEYS
        return None


def compute_longest_path(
    n: int,
    *,
    config: ExplorerConfig | None = None,
    observer: SearchObserver | None = None,
) -> int:
    """Convenience wrapper around :meth:`Explorer.compute_longest_path`."""
    return Explorer(config, observer).compute_longest_path(n)


__all__ = ["Explorer", "ExplorerConfig", "SearchResult", "compute_longest_path"]
