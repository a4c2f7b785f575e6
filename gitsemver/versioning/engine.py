"""
Version calculation.

The engine is a pure function of (commit graph, config, branch): it finds the
base version among the tags reachable from HEAD, measures how far HEAD is from
it and applies the branch rules:

===========  ==================  ========================  =====================
branch       HEAD on base tag    N commits after base tag  untagged history
===========  ==================  ========================  =====================
main/Release base                base + patch              initial, then +patch
main/Pre     base                (base + patch)-pre.N-1    initial-pre.N-1
feature      base                (base + patch)-label.N-1  as tagged at root
===========  ==================  ========================  =====================

On untagged history the root commit stands in for the missing tag, except in
Pre mode where nothing is final until a tag says so.

When the base tag is itself a prerelease, see ``next_prerelease``: a tag
``1.0.1-pre.0`` followed by two commits gives ``1.0.1-pre.2`` on main/Pre,
and a feature branch never emits a version below its base.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from gitsemver.constants import PRE_KIND, MainBranchBehavior
from gitsemver.git.graph import CommitGraph, Tag

from .branches import BranchContext
from .exceptions import EmptyHistoryError
from .version import SemVer

if TYPE_CHECKING:
    from gitsemver.config import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedVersion:
    """
    Base version and distance, before branch rules are applied.

    Args:
        base: Version of the selected tag, or the initial version
        commits_since_tag: Commits after the tag up to HEAD; on untagged
            history, the number of commits reachable from HEAD
        context: The classified branch
        tag: The selected tag, None on untagged history
    """

    base: SemVer
    commits_since_tag: int
    context: BranchContext
    tag: Optional[Tag] = None

    @property
    def tagged(self) -> bool:
        return self.tag is not None


def find_base_tag(graph: CommitGraph) -> Optional[Tuple[Tag, int]]:
    """
    Select the reachable version tag with the highest precedence.

    When several tags share the highest precedence, the one closest to HEAD
    wins.

    Returns:
        (tag, distance) or None when no reachable tag denotes a version
    """
    best: Optional[Tuple[Tag, int]] = None
    # nearest first, so a strict comparison keeps the closest of equal versions
    for tag, distance in graph.reachable_tags():
        if tag.version is None:
            continue
        if best is None or tag.version > best[0].version:
            best = (tag, distance)
    return best


def next_prerelease(base: SemVer, kind: str, distance: int) -> SemVer:
    """
    The ``kind`` prerelease ``distance`` commits after ``base``.

    A release base targets the next patch. A prerelease base of the same kind
    continues its index, so tagging an emitted version never yields the same
    version on the next commit. A prerelease base of another kind keeps its
    core when the new label sorts above it, and moves to the next patch
    otherwise.
    """
    current = base.prerelease
    if current is None:
        return base.increment_patch().with_prerelease(kind, distance - 1)
    if current.kind == kind:
        return base.with_prerelease(kind, current.index + distance)

    candidate = base.with_prerelease(kind, distance - 1)
    if candidate > base:
        return candidate
    bumped = SemVer(base.major, base.minor, base.patch + 1)
    return bumped.with_prerelease(kind, distance - 1)


class VersionEngine:
    """Computes the version for one repository snapshot under a fixed config."""

    def __init__(self, config: "Config"):
        self.config = config

    def discover_base(
        self, graph: CommitGraph, context: BranchContext
    ) -> ResolvedVersion:
        """
        Find the base version and the distance from it to HEAD.

        Raises:
            EmptyHistoryError: If the graph has no commits
        """
        if graph.is_empty:
            raise EmptyHistoryError("HEAD")

        found = find_base_tag(graph)
        if found is None:
            count = graph.commit_count()
            logger.debug(
                f"No version tag reachable, starting from "
                f"{self.config.initial_version} with {count} commit(s)"
            )
            return ResolvedVersion(
                base=self.config.initial_version,
                commits_since_tag=count,
                context=context,
            )

        tag, distance = found
        logger.debug(f"Base tag {tag.name} ({tag.version}), {distance} commit(s) ago")
        return ResolvedVersion(
            base=tag.version,
            commits_since_tag=distance,
            context=context,
            tag=tag,
        )

    def apply_branch_mode(self, resolved: ResolvedVersion) -> SemVer:
        """Turn a base version and distance into the version of HEAD."""
        base = resolved.base
        distance = resolved.commits_since_tag
        context = resolved.context
        pre_mode = self.config.main_branch_behavior == MainBranchBehavior.Pre

        if not resolved.tagged:
            if context.is_main and pre_mode:
                return base.with_prerelease(PRE_KIND, distance - 1)
            distance -= 1

        if distance == 0:
            return base

        if context.is_main and not pre_mode:
            return base.increment_patch()
        kind = PRE_KIND if context.is_main else context.label
        return next_prerelease(base, kind, distance)

    def calculate(self, graph: CommitGraph, context: BranchContext) -> SemVer:
        """
        Calculate the version of HEAD.

        Raises:
            EmptyHistoryError: If the graph has no commits
        """
        version = self.apply_branch_mode(self.discover_base(graph, context))
        logger.debug(f"Calculated {version} for branch {context.name}")
        return version


def calculate_version(
    graph: CommitGraph, config: "Config", context: BranchContext
) -> SemVer:
    """Calculate the version of HEAD; see VersionEngine."""
    return VersionEngine(config).calculate(graph, context)
