import pytest

from moo_search.env.state import MooState
from moo_search.search.explorer import (
    ABORT_MAX_STATES,
    ABORT_MAX_TRACKED_KEYS,
    Explorer,
    ExplorerConfig,
    compute_longest_path,
)
from moo_search.search.observers import SearchObserver


class _Recorder(SearchObserver):
    def __init__(self):
        self.started: list[int] = []
        self.progress = []
        self.goals: list[tuple[int, int]] = []
        self.finished = []

    def on_start(self, n):
        self.started.append(n)

    def on_progress(self, event):
        self.progress.append(event)

    def on_goal(self, state, best_so_far):
        self.goals.append((state.total_moves, best_so_far))

    def on_finish(self, result):
        self.finished.append(result)


def test_single_slot_longest_path():
    assert compute_longest_path(1) == 2
    assert Explorer().compute_longest_path(1) == 2


def test_single_slot_bookkeeping():
    recorder = _Recorder()
    result = Explorer(observer=recorder).explore(1)

    assert result.longest_path == 2
    assert result.terminated
    assert result.states_explored == 3
    assert result.states_admitted == 2
    assert result.goals_reached == 1
    assert result.first_goal_moves == 2
    assert result.tracked_keys == 3
    assert result.max_frontier == 1
    assert not result.aborted
    assert result.abort_reason is None

    assert recorder.started == [1]
    assert recorder.goals == [(2, 2)]
    assert recorder.finished == [result]


def test_progress_events_on_cadence():
    recorder = _Recorder()
    Explorer(ExplorerConfig(progress_every=1), recorder).explore(1)
    # the third pop is the goal, which is not reported as progress
    assert [e.states_explored for e in recorder.progress] == [1, 2]
    assert [e.depth for e in recorder.progress] == [0, 1]
    assert all(e.frontier_size == 0 for e in recorder.progress)
    assert [e.tracked_keys for e in recorder.progress] == [1, 2]


def test_progress_disabled():
    recorder = _Recorder()
    Explorer(ExplorerConfig(progress_every=None), recorder).explore(1)
    assert recorder.progress == []


def test_admission_keeps_deepest_arrival():
    explorer = Explorer()
    first = MooState((1, 1), position=1, total_moves=3)

    assert explorer._admit(first)
    assert explorer.recorded_depth(first) == 3
    assert not explorer._admit(MooState((1, 1), position=1, total_moves=2))
    assert not explorer._admit(MooState((1, 1), position=1, total_moves=3))
    assert explorer.recorded_depth(first) == 3
    assert explorer._admit(MooState((1, 1), position=1, total_moves=7))
    assert explorer.recorded_depth(first) == 7
    assert explorer.tracked_keys == 1


def test_max_states_stops_search():
    result = Explorer(ExplorerConfig(max_states=10, progress_every=None)).explore(3)
    assert result.aborted
    assert result.abort_reason == ABORT_MAX_STATES
    assert result.states_explored == 10


def test_max_tracked_keys_stops_search():
    explorer = Explorer(ExplorerConfig(max_tracked_keys=50, progress_every=None))
    result = explorer.explore(3)
    assert result.aborted
    assert result.abort_reason == ABORT_MAX_TRACKED_KEYS
    assert result.tracked_keys >= 50
    assert explorer.frontier_size > 0


def test_admitted_states_keep_invariants():
    explorer = Explorer(ExplorerConfig(max_states=3000, progress_every=None))
    explorer.explore(3)
    for state in [*explorer._best, *explorer._frontier]:
        assert state.is_valid_ordering()
        assert all(0 <= mag <= 3 for mag in state.magnitudes)
        assert 0 <= state.position < 3
    for state in explorer._frontier:
        assert explorer.recorded_depth(state) >= state.total_moves


def test_exploration_is_deterministic():
    config = ExplorerConfig(max_states=2000, progress_every=None)
    first = Explorer(config).explore(3)
    second = Explorer(config).explore(3)
    skip = {"runtime_s"}
    a = {k: v for k, v in first.as_record().items() if k not in skip}
    b = {k: v for k, v in second.as_record().items() if k not in skip}
    assert a == b


def test_explore_rejects_non_positive_n():
    with pytest.raises(ValueError):
        Explorer().explore(0)
