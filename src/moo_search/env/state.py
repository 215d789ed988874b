"""State container for the MOO exploration graph."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Tuple

Magnitudes = Tuple[int, ...]
StateKey = Tuple[Magnitudes, int, int, int]


@dataclass(frozen=True, order=True)
class MooState:
    """One configuration of the search.

    Equality, hashing and ordering use ``(magnitudes, position, since_boost,
    injection_cycle)`` only. ``total_moves`` is the depth at which this value was
    reached and does not take part in identity, so arrivals at the same
    configuration from different depths collide in a dict.
    """

    magnitudes: Magnitudes
    position: int = 0
    since_boost: int = 0
    injection_cycle: int = 0
    total_moves: int = field(default=0, compare=False)

    @classmethod
    def initial(cls, n: int) -> "MooState":
        """All-zero configuration with the active slot at 0."""
        return cls(magnitudes=(0,) * n)

    @property
    def n(self) -> int:
        return len(self.magnitudes)

    @property
    def key(self) -> StateKey:
        return (self.magnitudes, self.position, self.since_boost, self.injection_cycle)

    def is_goal(self) -> bool:
        """True once every slot has reached ``n``."""
        n = self.n
        return all(mag >= n for mag in self.magnitudes)

    def is_valid_ordering(self) -> bool:
        """A non-empty slot may exceed its left neighbour by at most one."""
        mags = self.magnitudes
        for i in range(1, len(mags)):
            if mags[i] > 0 and mags[i - 1] < mags[i] - 1:
                return False
        return True

    def flipped(self) -> "MooState":
        n = self.n
        return replace(self, magnitudes=tuple(n - mag for mag in self.magnitudes))

    def render(self) -> str:
        """Single-line textual snapshot helpful for debugging."""
        mags = "".join(f"{mag}," for mag in self.magnitudes)
        return (
            f"Pos:{self.position} Moves:{self.total_moves} +2:{self.since_boost} "
            f"Cycle:{self.injection_cycle} Mag:[{mags}]"
        )
