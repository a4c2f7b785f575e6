"""Render a calculated version into the named outputs consumed by CI."""

import json
from dataclasses import dataclass
from typing import Dict

import yaml

from gitsemver.constants import SENTINEL_VERSION
from gitsemver.versioning.version import SemVer, parse_version

OUTPUT_FORMATS = ("text", "json", "yaml")


def format_version(version: SemVer, version_prefix: str = "") -> str:
    """Render ``{prefix}{major}.{minor}.{patch}[-{kind}.{index}]``."""
    return f"{version_prefix}{version}"


@dataclass(frozen=True)
class VersionOutputs:
    """The output record, one field per named output."""

    version: str
    major: int
    minor: int
    patch: int
    prerelease: str
    is_prerelease: bool

    @classmethod
    def from_version(
        cls, version: SemVer, version_prefix: str = ""
    ) -> "VersionOutputs":
        return cls(
            version=format_version(version, version_prefix),
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=str(version.prerelease) if version.prerelease else "",
            is_prerelease=version.is_prerelease,
        )

    @classmethod
    def sentinel(cls, version_prefix: str = "") -> "VersionOutputs":
        """Record emitted in place of a version when resolution failed."""
        return cls.from_version(parse_version(SENTINEL_VERSION), version_prefix)

    def as_dict(self) -> Dict[str, str]:
        """Outputs as strings, keyed by their published names."""
        return {
            "version": self.version,
            "major": str(self.major),
            "minor": str(self.minor),
            "patch": str(self.patch),
            "prerelease": self.prerelease,
            "is-prerelease": "true" if self.is_prerelease else "false",
        }


def render_outputs(outputs: VersionOutputs, format: str = "text") -> str:
    """
    Serialize the output record.

    Args:
        outputs: The record to render
        format: ``text`` for key=value lines, ``json`` or ``yaml``

    Raises:
        ValueError: If the format is unknown
    """
    values = outputs.as_dict()
    if format == "text":
        return "\n".join(f"{key}={value}" for key, value in values.items())
    elif format == "json":
        return json.dumps(values, indent=2)
    elif format == "yaml":
        return yaml.safe_dump(values, sort_keys=False).rstrip("\n")
    raise ValueError(
        f"Unsupported output format: {format}. Choose from {', '.join(OUTPUT_FORMATS)}"
    )
