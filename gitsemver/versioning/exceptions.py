"""
Exception classes for the versioning module.

Every error carries the name of the component that raised it so the CLI can
tell the user where resolution stopped.
"""

from typing import Optional


class VersioningError(Exception):
    """Base exception for all versioning-related errors."""

    component = "engine"


class VersionFormatError(VersioningError, ValueError):
    """Raised when a version string has an invalid format."""

    def __init__(
        self, version_string: str, expected_format: str = "MAJOR.MINOR.PATCH"
    ):
        self.version_string = version_string
        self.expected_format = expected_format
        super().__init__(
            f"Invalid version format: '{version_string}'. "
            f"Expected format: {expected_format}"
        )


class RepositoryError(VersioningError):
    """Raised when the repository cannot be read or its history is too shallow."""

    component = "history"

    def __init__(self, path, message: str):
        self.path = str(path)
        super().__init__(f"{self.path}: {message}")


class EmptyHistoryError(VersioningError):
    """Raised when the repository has no commits."""

    component = "history"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(
            f"{self.path}: repository has no commits, there is no version to assign"
        )


class ConfigError(VersioningError):
    """Raised when the configuration document is malformed or invalid."""

    component = "config"

    def __init__(self, message: str, field: Optional[str] = None, path=None):
        self.field = field
        self.path = str(path) if path is not None else None
        parts = []
        if self.path:
            parts.append(f"{self.path}:")
        if field:
            parts.append(f"invalid value for '{field}':")
        parts.append(message)
        super().__init__(" ".join(parts))


class BranchNameError(VersioningError):
    """Raised when a branch name cannot be turned into a prerelease label."""

    component = "branch"

    def __init__(self, branch: str, message: str = ""):
        self.branch = branch
        super().__init__(
            message
            or f"Branch name '{branch}' does not contain any character usable "
            "in a prerelease label"
        )
