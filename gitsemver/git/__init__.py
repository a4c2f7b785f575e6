"""
Git access for gitsemver.

    graph.py    immutable commit graph and reachability queries
    history.py  one-shot snapshot of a repository through GitPython
"""

from .graph import Commit, CommitGraph, Tag
from .history import HistorySnapshot, read_graph, read_history

__all__ = [
    "Commit",
    "CommitGraph",
    "Tag",
    "HistorySnapshot",
    "read_graph",
    "read_history",
]
