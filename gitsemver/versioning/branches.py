"""
Branch classification.

A branch is "main" when its name exactly matches one of the configured main
branch names. Every other branch is a feature branch and gets a label that is
legal as a SemVer prerelease identifier:

    feature/Add-Login   ->  add-login
    jdoe/fix_#42        ->  jdoe-fix-42
    feature/1234        ->  branch-1234
    ???                 ->  BranchNameError
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from gitsemver.constants import (
    BRANCH_TYPE_PREFIXES,
    MAX_LABEL_LENGTH,
    NUMERIC_LABEL_PREFIX,
)

from .exceptions import BranchNameError

_DISALLOWED = re.compile(r"[^0-9a-z-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")


@dataclass(frozen=True)
class BranchContext:
    """The current branch and how it is versioned."""

    name: str
    is_main: bool
    label: Optional[str] = None


def sanitize_branch_label(branch: str) -> str:
    """
    Turn a branch name into a prerelease identifier segment.

    Raises:
        BranchNameError: If nothing usable remains
    """
    label = branch.lower()

    head, sep, rest = label.partition("/")
    if sep and head in BRANCH_TYPE_PREFIXES and rest:
        label = rest

    label = _DISALLOWED.sub("-", label)
    label = _HYPHEN_RUNS.sub("-", label).strip("-")
    label = label[:MAX_LABEL_LENGTH].rstrip("-")

    if not label:
        raise BranchNameError(branch)
    if label.isdigit():
        label = NUMERIC_LABEL_PREFIX + label
    return label


def classify_branch(branch: str, main_branches: Iterable[str]) -> BranchContext:
    """
    Classify ``branch`` against the configured main branch names.

    Matching is exact and case-sensitive.

    Raises:
        BranchNameError: If the branch is empty, or is a feature branch whose
            name sanitizes to nothing
    """
    if not branch or not branch.strip():
        raise BranchNameError(branch or "", "Branch name is empty")

    if branch in set(main_branches):
        return BranchContext(name=branch, is_main=True)
    return BranchContext(
        name=branch, is_main=False, label=sanitize_branch_label(branch)
    )
