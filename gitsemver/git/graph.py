"""
In-memory commit graph.

The graph is built once per invocation from a single bulk read of the
repository and never mutated afterwards. All reachability questions are
answered from one breadth-first traversal starting at HEAD.
"""

from collections import deque
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List, Mapping, Optional, Tuple

from gitsemver.versioning.version import SemVer


@dataclass(frozen=True)
class Commit:
    """A commit id and the ids of its parents, in parent order."""

    id: str
    parents: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Tag:
    """A tag name, the commit it points to and the version it denotes, if any."""

    name: str
    target: str
    version: Optional[SemVer] = None


@dataclass(frozen=True)
class CommitGraph:
    """
    Commits reachable from HEAD plus the repository's tags.

    Args:
        head: Id of the HEAD commit, None for a repository without commits
        commits: Mapping of commit id to Commit
        tags: All tags of the repository; tags on unreachable commits are kept
            but never reported as reachable
        shallow: Whether the history was truncated by a shallow clone
    """

    head: Optional[str]
    commits: Mapping[str, Commit] = field(default_factory=dict)
    tags: Tuple[Tag, ...] = ()
    shallow: bool = False

    @classmethod
    def from_parents(
        cls,
        head: Optional[str],
        parents: Mapping[str, Tuple[str, ...]],
        tags: Tuple[Tag, ...] = (),
        shallow: bool = False,
    ) -> "CommitGraph":
        """Build a graph from a ``{commit: (parent, ...)}`` mapping."""
        commits = {sha: Commit(sha, tuple(ps)) for sha, ps in parents.items()}
        return cls(head=head, commits=commits, tags=tuple(tags), shallow=shallow)

    @property
    def is_empty(self) -> bool:
        return self.head is None

    @cached_property
    def distances(self) -> Dict[str, int]:
        """Shortest parent-edge distance from HEAD to every reachable commit."""
        if self.head is None:
            return {}

        distances = {self.head: 0}
        queue = deque([self.head])
        while queue:
            sha = queue.popleft()
            commit = self.commits.get(sha)
            # Parents missing from the graph lie beyond a shallow boundary
            if commit is None:
                continue
            for parent in commit.parents:
                if parent not in distances:
                    distances[parent] = distances[sha] + 1
                    queue.append(parent)
        return distances

    def commit_count(self) -> int:
        """Number of commits reachable from HEAD, HEAD included."""
        return sum(1 for sha in self.distances if sha in self.commits)

    def commits_between(self, ancestor: str) -> int:
        """
        Count commits strictly after ``ancestor`` up to and including HEAD.

        The count follows the shortest parent path from HEAD.

        Raises:
            ValueError: If ``ancestor`` is not reachable from HEAD
        """
        try:
            return self.distances[ancestor]
        except KeyError:
            raise ValueError(f"Commit {ancestor} is not reachable from HEAD")

    def reachable_tags(self) -> List[Tuple[Tag, int]]:
        """
        Tags on commits reachable from HEAD, with their distance.

        Sorted nearest first, then by tag name.
        """
        found = [
            (tag, self.distances[tag.target])
            for tag in self.tags
            if tag.target in self.distances
        ]
        return sorted(found, key=lambda item: (item[1], item[0].name))
