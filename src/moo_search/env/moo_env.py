"""Transition generator for the MOO exploration graph."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence, Tuple

from moo_search.env.rules import LARGE_MOVE, MOVE_KINDS, SMALL_MOVE, TransitionRules
from moo_search.env.state import Magnitudes, MooState
from moo_search.env.topology import neighbor_table

Move = Tuple[str, int]


class MooEnv:
    """Generates every lawful successor of a state.

    A successor is one move (small or large) on the active slot, followed by a
    step of the active position to a neighbouring slot, followed by the
    move-counter schedules (flip, injection). Branches that break the slot
    ordering are dropped.
    """

    def __init__(self, n: int, rules: TransitionRules | None = None):
        if n < 1:
            msg = f"n must be at least 1, got {n}"
            raise ValueError(msg)
        self.n = n
        self.rules = rules or TransitionRules()
        self._neighbors = neighbor_table(n)

    # ------------------------------------------------------------------ API --
    def reset(self) -> MooState:
        return MooState.initial(self.n)

    def successors(self, state: MooState) -> List[MooState]:
        """Small-move branches first, then large-move branches."""
        next_states: List[MooState] = []
        next_states.extend(self._movements(self.small_move(state)))
        if state.since_boost >= self.rules.boost_threshold:
            next_states.extend(self._movements(self.large_move(state)))
        return next_states

    def movement_targets(self, position: int) -> Tuple[int, ...]:
        return self._neighbors[position]

    def step(self, state: MooState, move: str, target: int) -> MooState | None:
        """Apply one explicit move and movement; ``None`` when the branch is pruned."""
        if move not in MOVE_KINDS:
            msg = f"Unknown move {move!r}; expected one of {MOVE_KINDS}."
            raise ValueError(msg)
        if move == LARGE_MOVE and state.since_boost < self.rules.boost_threshold:
            msg = (
                f"Large move needs since_boost >= {self.rules.boost_threshold}, "
                f"got {state.since_boost}."
            )
            raise ValueError(msg)
        if target not in self.movement_targets(state.position):
            msg = f"Position {target} is not reachable from {state.position}."
            raise ValueError(msg)
        moved = self.small_move(state) if move == SMALL_MOVE else self.large_move(state)
        return self._move_to(moved, target)

    def replay(self, moves: Iterable[Move], start: MooState | None = None) -> List[MooState]:
        """Apply ``(move, target)`` pairs in order and return the trajectory."""
        state = start or self.reset()
        trajectory = [state]
        for idx, (move, target) in enumerate(moves):
            next_state = self.step(state, move, target)
            if next_state is None:
                msg = f"Move {idx} ({move}, {target}) breaks the slot ordering."
                raise ValueError(msg)
            trajectory.append(next_state)
            state = next_state
        return trajectory

    # ---------------------------------------------------------------- moves --
    def small_move(self, state: MooState) -> MooState:
        mags = _bumped(state.magnitudes, state.position, self.rules.small_increment, self.n)
        return replace(state, magnitudes=mags, since_boost=state.since_boost + 1)

    def large_move(self, state: MooState) -> MooState:
        mags = _bumped(state.magnitudes, state.position, self.rules.large_increment, self.n)
        return replace(state, magnitudes=apply_trigger(mags, self.n), since_boost=0)

    def apply_periodic_effects(self, state: MooState) -> MooState:
        """Flip and injection schedules keyed on ``state.total_moves``."""
        moves = state.total_moves
        if self.rules.flip_due(moves):
            state = state.flipped()
        if self.rules.injection_due(moves):
            n = self.n
            state = replace(
                state,
                magnitudes=tuple(min(n, mag + 1) for mag in state.magnitudes),
                injection_cycle=state.injection_cycle + 1,
            )
        return state

    # -------------------------------------------------------------- Helpers --
    def _movements(self, state: MooState) -> List[MooState]:
        moved: List[MooState] = []
        for target in self.movement_targets(state.position):
            next_state = self._move_to(state, target)
            if next_state is not None:
                moved.append(next_state)
        return moved

    def _move_to(self, state: MooState, target: int) -> MooState | None:
        next_state = replace(state, position=target, total_moves=state.total_moves + 1)
        next_state = self.apply_periodic_effects(next_state)
        if not next_state.is_valid_ordering():
            return None
        return next_state


def apply_trigger(magnitudes: Sequence[int], n: int) -> Magnitudes:
    """Move one unit from the largest slot to the smallest.

    Both extremes are taken from the input. The decrement lands first and the
    search for the minimum then runs over the decremented values, so when the
    only slot holding the minimum was the one just decremented, no slot is
    incremented.
    """
    mags = list(magnitudes)
    max_val = max(mags)
    min_val = min(mags)
    for i, mag in enumerate(mags):
        if mag == max_val:
            mags[i] = max(0, mag - 1)
            break
    for i, mag in enumerate(mags):
        if mag == min_val:
            mags[i] = min(n, mag + 1)
            break
    return tuple(mags)


def _bumped(magnitudes: Magnitudes, position: int, increment: int, cap: int) -> Magnitudes:
    mags = list(magnitudes)
    mags[position] = min(cap, mags[position] + increment)
    return tuple(mags)
