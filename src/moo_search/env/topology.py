"""Slot topology: the line of slots the active position walks along."""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

import networkx as nx


def slot_graph(n: int) -> nx.Graph:
    """Line graph ``0 - 1 - ... - n-1``."""
    if n < 1:
        msg = f"n must be at least 1, got {n}"
        raise ValueError(msg)
    return nx.path_graph(n)


@lru_cache(maxsize=32)
def neighbor_table(n: int) -> Tuple[Tuple[int, ...], ...]:
    """Movement targets per position, ascending.

    A single slot has no neighbours, so the active position stays put.
    """
    graph = slot_graph(n)
    table: list[tuple[int, ...]] = []
    for pos in range(n):
        targets = tuple(sorted(graph.neighbors(pos)))
        table.append(targets or (pos,))
    return tuple(table)
