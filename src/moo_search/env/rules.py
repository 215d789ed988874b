"""Transition constants for the MOO environment."""

from __future__ import annotations

from dataclasses import dataclass

SMALL_MOVE = "small"
LARGE_MOVE = "large"
MOVE_KINDS = (SMALL_MOVE, LARGE_MOVE)


@dataclass(frozen=True)
class TransitionRules:
    """Knobs shaping the move set and the move-counter schedules.

    The defaults define the graph whose longest path is ``L(n)``; any change
    produces a different graph and different answers.
    """

    small_increment: int = 1
    large_increment: int = 2
    boost_threshold: int = 2
    flip_base_period: int = 4
    flip_growth_interval: int = 50_000
    flip_max_period: int = 100
    injection_interval: int = 131

    def __post_init__(self) -> None:
        if self.flip_base_period < 1 or self.flip_max_period < 1:
            msg = "flip periods must be positive."
            raise ValueError(msg)
        if self.flip_growth_interval < 1 or self.injection_interval < 1:
            msg = "flip_growth_interval and injection_interval must be positive."
            raise ValueError(msg)

    def flip_period(self, total_moves: int) -> int:
        """Flip period in force at ``total_moves``; grows slowly, then caps."""
        period = self.flip_base_period + total_moves // self.flip_growth_interval
        return min(self.flip_max_period, period)

    def flip_due(self, total_moves: int) -> bool:
        return total_moves % self.flip_period(total_moves) == 1

    def injection_due(self, total_moves: int) -> bool:
        return total_moves > 0 and total_moves % self.injection_interval == 0
