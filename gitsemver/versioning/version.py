"""
Semantic version representation.

Versions follow SemVer 2.0.0 precedence. Prerelease labels are structured as
``kind.index`` (``rc.1``, ``pre.0``, ``my-branch.3``), which is the only
shape this project ever produces; build metadata is accepted when parsing and
ignored everywhere else.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .exceptions import VersionFormatError

_NUMERIC = r"0|[1-9]\d*"
_IDENTIFIER = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"

SEMVER_PATTERN = re.compile(
    rf"^(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_IDENTIFIER}(?:\.{_IDENTIFIER})*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)
_KIND_PATTERN = re.compile(rf"^{_IDENTIFIER}(?:\.{_IDENTIFIER})*$")

EXPECTED_FORMAT = "MAJOR.MINOR.PATCH[-kind.index]"


def _identifier_key(identifier: str) -> Tuple[int, Union[int, str]]:
    # Numeric identifiers sort before alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier))
    return (1, identifier)


@dataclass(frozen=True)
class Prerelease:
    """A ``kind.index`` prerelease label."""

    kind: str
    index: int

    def __post_init__(self):
        if not _KIND_PATTERN.match(self.kind):
            raise VersionFormatError(
                f"{self.kind}.{self.index}",
                "prerelease kind of [0-9A-Za-z-] identifiers",
            )
        if self.index < 0:
            raise VersionFormatError(
                f"{self.kind}.{self.index}", "non-negative prerelease index"
            )

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return tuple(self.kind.split(".")) + (str(self.index),)

    def sort_key(self) -> tuple:
        return tuple(_identifier_key(i) for i in self.identifiers)

    def __str__(self) -> str:
        return f"{self.kind}.{self.index}"


class SemVer:
    """
    An immutable semantic version.

    Two versions that differ only in build metadata are equal. A version with
    a prerelease sorts strictly before the same MAJOR.MINOR.PATCH without one.
    """

    __slots__ = ("_major", "_minor", "_patch", "_prerelease")

    def __init__(
        self,
        major: int,
        minor: int,
        patch: int,
        prerelease: Optional[Prerelease] = None,
    ):
        for name, value in (("major", major), ("minor", minor), ("patch", patch)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise VersionFormatError(
                    f"{major}.{minor}.{patch}",
                    f"non-negative integer {name} component",
                )
        self._major = major
        self._minor = minor
        self._patch = patch
        self._prerelease = prerelease

    @property
    def major(self) -> int:
        return self._major

    @property
    def minor(self) -> int:
        return self._minor

    @property
    def patch(self) -> int:
        return self._patch

    @property
    def prerelease(self) -> Optional[Prerelease]:
        return self._prerelease

    @property
    def is_prerelease(self) -> bool:
        return self._prerelease is not None

    def core(self) -> Tuple[int, int, int]:
        """Return the (major, minor, patch) triplet."""
        return (self._major, self._minor, self._patch)

    def _key(self) -> tuple:
        if self._prerelease is None:
            return self.core() + (1, ())
        return self.core() + (0, self._prerelease.sort_key())

    def __str__(self) -> str:
        text = f"{self._major}.{self._minor}.{self._patch}"
        if self._prerelease is not None:
            text += f"-{self._prerelease}"
        return text

    def __repr__(self) -> str:
        return f"SemVer('{self}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return False
        return self._key() == other._key()

    def __lt__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def release(self) -> "SemVer":
        """Return this version without its prerelease label."""
        return SemVer(self._major, self._minor, self._patch)

    def with_prerelease(self, kind: str, index: int) -> "SemVer":
        """Return this version's core with a ``kind.index`` prerelease."""
        return SemVer(self._major, self._minor, self._patch, Prerelease(kind, index))

    def increment_patch(self) -> "SemVer":
        """
        Return the next patch release.

        A prerelease is finalised instead of bumped: the release that follows
        ``2.0.0-rc.1`` is ``2.0.0``.
        """
        if self._prerelease is not None:
            return self.release()
        return SemVer(self._major, self._minor, self._patch + 1)


def parse_version(version_string: str, prefix: str = "") -> SemVer:
    """
    Parse a version string into a SemVer.

    Args:
        version_string: Version string, e.g. "1.2.3" or "v1.2.3-rc.1"
        prefix: Literal prefix that must be present and is stripped first

    Returns:
        SemVer object

    Raises:
        VersionFormatError: If the string is not a valid version
    """
    text = str(version_string).strip()
    if prefix:
        if not text.startswith(prefix):
            raise VersionFormatError(text, f"{prefix}{EXPECTED_FORMAT}")
        text = text[len(prefix) :]

    match = SEMVER_PATTERN.match(text)
    if not match:
        raise VersionFormatError(str(version_string), EXPECTED_FORMAT)

    prerelease = None
    if match.group("prerelease"):
        *kind, index = match.group("prerelease").split(".")
        if not kind or not index.isdigit():
            raise VersionFormatError(str(version_string), EXPECTED_FORMAT)
        prerelease = Prerelease(".".join(kind), int(index))

    return SemVer(
        int(match.group("major")),
        int(match.group("minor")),
        int(match.group("patch")),
        prerelease,
    )


def parse_tag_version(tag_name: str, prefix: str = "") -> Optional[SemVer]:
    """Return the version a tag name denotes, or None if it is not a version tag."""
    try:
        return parse_version(tag_name, prefix)
    except VersionFormatError:
        return None
