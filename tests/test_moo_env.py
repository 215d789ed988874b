import pytest

from moo_search.env.moo_env import MooEnv, apply_trigger
from moo_search.env.rules import LARGE_MOVE, SMALL_MOVE, TransitionRules
from moo_search.env.state import MooState


def test_env_rejects_non_positive_n():
    with pytest.raises(ValueError):
        MooEnv(0)


def test_movement_targets_at_boundaries():
    env = MooEnv(3)
    assert env.movement_targets(0) == (1,)
    assert env.movement_targets(2) == (1,)
    assert env.movement_targets(1) == (0, 2)


def test_initial_successor_flips_on_first_move():
    env = MooEnv(3)
    successors = env.successors(env.reset())
    # small move -> (1, 0, 0), step to slot 1, move 1 triggers a flip
    assert successors == [MooState((2, 3, 3), position=1, since_boost=1)]
    assert successors[0].total_moves == 1


def test_large_move_only_after_two_small_moves():
    env = MooEnv(3)
    ready = MooState((0, 0, 0), position=1, since_boost=2, total_moves=10)
    successors = env.successors(ready)
    assert [(s.magnitudes, s.position, s.since_boost) for s in successors] == [
        ((0, 1, 0), 0, 3),
        ((0, 1, 0), 2, 3),
        ((1, 1, 0), 0, 0),
        ((1, 1, 0), 2, 0),
    ]
    assert all(s.total_moves == 11 for s in successors)

    not_ready = MooState((0, 0, 0), position=1, since_boost=1, total_moves=10)
    assert len(env.successors(not_ready)) == 2


def test_small_move_saturates_at_n():
    env = MooEnv(2)
    state = MooState((2, 2), position=0, since_boost=0)
    assert env.small_move(state).magnitudes == (2, 2)
    assert env.small_move(state).since_boost == 1


def test_trigger_moves_unit_from_max_to_min():
    assert apply_trigger((2, 0, 1), 3) == (1, 1, 1)
    assert apply_trigger((0, 0), 2) == (1, 0)


def test_trigger_rescans_after_decrement():
    # slot 0 drops from 2 to 1 and is then the first slot holding the old minimum
    assert apply_trigger((2, 1, 1), 3) == (2, 1, 1)
    # all equal: the decremented slot no longer matches, the next one is capped
    assert apply_trigger((3, 3, 3), 3) == (2, 3, 3)
    assert apply_trigger((1,), 1) == (0,)


def test_flip_schedule_with_base_period():
    rules = TransitionRules()
    assert [m for m in range(1, 21) if rules.flip_due(m)] == [1, 5, 9, 13, 17]


def test_flip_period_grows_and_caps():
    rules = TransitionRules()
    assert rules.flip_period(0) == 4
    assert rules.flip_period(49_999) == 4
    assert rules.flip_period(50_000) == 5
    assert rules.flip_due(50_001)
    assert rules.flip_period(4_800_000) == 100
    assert rules.flip_period(10_000_000) == 100


def test_injection_schedule():
    rules = TransitionRules()
    assert not rules.injection_due(0)
    assert not rules.injection_due(130)
    assert [m for m in range(1, 400) if rules.injection_due(m)] == [131, 262, 393]


def test_injection_alone():
    env = MooEnv(3)
    state = MooState((0, 1, 3), total_moves=262)
    after = env.apply_periodic_effects(state)
    assert after.magnitudes == (1, 2, 3)
    assert after.injection_cycle == 1


def test_flip_then_injection_on_same_move():
    env = MooEnv(3)
    state = MooState((0, 1, 2), total_moves=393)
    after = env.apply_periodic_effects(state)
    assert after.magnitudes == (3, 3, 2)
    assert after.injection_cycle == 1


def test_invalid_ordering_prunes_branch():
    env = MooEnv(2)
    state = MooState((0, 1), position=1, since_boost=0, total_moves=1)
    # small move gives (0, 2), which the left slot cannot support
    assert env.successors(state) == []
    assert env.step(state, SMALL_MOVE, 0) is None


def test_step_rejects_illegal_requests():
    env = MooEnv(3)
    state = env.reset()
    with pytest.raises(ValueError):
        env.step(state, "huge", 1)
    with pytest.raises(ValueError):
        env.step(state, LARGE_MOVE, 1)
    with pytest.raises(ValueError):
        env.step(state, SMALL_MOVE, 2)


def test_replay_single_slot_reaches_goal():
    env = MooEnv(1)
    trajectory = env.replay([(SMALL_MOVE, 0), (SMALL_MOVE, 0)])
    assert [s.magnitudes for s in trajectory] == [(0,), (0,), (1,)]
    assert [s.total_moves for s in trajectory] == [0, 1, 2]
    assert trajectory[-1].is_goal()


def test_replay_raises_on_pruned_move():
    env = MooEnv(2)
    start = MooState((0, 1), position=1, total_moves=1)
    with pytest.raises(ValueError):
        env.replay([(SMALL_MOVE, 0)], start=start)


def test_generated_states_keep_invariants():
    env = MooEnv(3)
    stack = [env.reset()]
    expanded = 0
    while stack and expanded < 2000:
        state = stack.pop()
        expanded += 1
        for nxt in env.successors(state):
            assert nxt.is_valid_ordering()
            assert all(0 <= mag <= 3 for mag in nxt.magnitudes)
            assert 0 <= nxt.position < 3
            assert nxt.since_boost >= 0
            assert nxt.total_moves == state.total_moves + 1
            stack.append(nxt)
