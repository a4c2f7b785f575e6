"""
Versioning module for gitsemver.

All version logic lives here: parsing and precedence, branch classification,
the version engine and the exception hierarchy shared by every component.

LAYERS:
=======

1. **Core version logic** (version.py):
   - SemVer: immutable semantic version with SemVer 2.0.0 precedence
   - Prerelease: structured ``kind.index`` label

2. **Branch classification** (branches.py):
   - classify_branch: main vs. feature, feature branch label sanitization

3. **Version engine** (engine.py):
   - VersionEngine: base tag discovery and branch rules. Import it from
     ``gitsemver.versioning.engine``; it depends on the commit graph in
     ``gitsemver.git`` which itself builds on the core version logic.

4. **Exception hierarchy** (exceptions.py):
   - One exception type per failing component, all deriving from
     VersioningError
"""

from .branches import BranchContext, classify_branch, sanitize_branch_label
from .exceptions import (
    VersioningError,
    RepositoryError,
    ConfigError,
    BranchNameError,
    EmptyHistoryError,
    VersionFormatError,
)
from .version import (
    SemVer,
    Prerelease,
    parse_version,
    parse_tag_version,
)

__all__ = [
    # Core version utilities
    "SemVer",
    "Prerelease",
    "parse_version",
    "parse_tag_version",
    # Branch classification
    "BranchContext",
    "classify_branch",
    "sanitize_branch_label",
    # Centralized exception hierarchy
    "VersioningError",
    "RepositoryError",
    "ConfigError",
    "BranchNameError",
    "EmptyHistoryError",
    "VersionFormatError",
]
