from enum import Enum


class MainBranchBehavior(str, Enum):
    """How commits on a main branch are versioned."""

    Release = "Release"
    Pre = "Pre"


DEFAULT_MAIN_BRANCHES = ("main", "master")
DEFAULT_INITIAL_VERSION = "1.0.0"
DEFAULT_CONFIG_FILES = (".gitsemver.yml", ".gitsemver.yaml")

# Prerelease kind used on main branches in Pre mode
PRE_KIND = "pre"

# Branch label sanitization
BRANCH_TYPE_PREFIXES = (
    "feature",
    "feat",
    "bugfix",
    "fix",
    "hotfix",
    "release",
    "chore",
    "task",
)
MAX_LABEL_LENGTH = 40
NUMERIC_LABEL_PREFIX = "branch-"

# Emitted when resolution fails and fail-on-error is disabled
SENTINEL_VERSION = "0.0.0"
