"""moo-search package."""

from moo_search.env.moo_env import MooEnv, apply_trigger
from moo_search.env.rules import LARGE_MOVE, SMALL_MOVE, TransitionRules
from moo_search.env.state import MooState
from moo_search.search.explorer import (
    Explorer,
    ExplorerConfig,
    SearchResult,
    compute_longest_path,
)
from moo_search.search.observers import ConsoleObserver, ProgressEvent, SearchObserver

__all__ = [
    "ConsoleObserver",
    "Explorer",
    "ExplorerConfig",
    "LARGE_MOVE",
    "MooEnv",
    "MooState",
    "ProgressEvent",
    "SMALL_MOVE",
    "SearchObserver",
    "SearchResult",
    "TransitionRules",
    "apply_trigger",
    "compute_longest_path",
]
