"""Load and validate the versioning policy document."""

import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from gitsemver.constants import (
    DEFAULT_CONFIG_FILES,
    DEFAULT_INITIAL_VERSION,
    DEFAULT_MAIN_BRANCHES,
    MainBranchBehavior,
)
from gitsemver.versioning.exceptions import ConfigError, VersionFormatError
from gitsemver.versioning.version import SemVer, parse_version

logger = logging.getLogger(__name__)


def _validate_plain_string(v: Any) -> str:
    if v is None:
        return ""
    if not isinstance(v, str):
        raise ValueError("must be a string")
    if any(c.isspace() for c in v):
        raise ValueError(f"must not contain whitespace: {v!r}")
    return v


class Config(BaseModel):
    """
    Versioning policy.

    Field names follow the YAML document (camelCase aliases); the snake_case
    attribute names are used in code. Instances are immutable.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    main_branches: Tuple[str, ...] = Field(
        default=DEFAULT_MAIN_BRANCHES,
        alias="mainBranches",
        description="Branch names treated as release lines",
    )
    main_branch_behavior: MainBranchBehavior = Field(
        default=MainBranchBehavior.Release,
        alias="mainBranchBehavior",
        description="Whether untagged main commits are releases or prereleases",
    )
    tag_prefix: str = Field(default="", alias="tagPrefix")
    version_prefix: str = Field(default="", alias="versionPrefix")
    initial_version: SemVer = Field(
        default_factory=lambda: parse_version(DEFAULT_INITIAL_VERSION),
        alias="initialVersion",
    )

    @field_validator("main_branches", mode="before")
    @classmethod
    def validate_main_branches(cls, v):
        if v is None:
            return DEFAULT_MAIN_BRANCHES
        if isinstance(v, str) or not isinstance(v, (list, tuple, set)):
            raise ValueError("must be a list of branch names")
        for name in v:
            if not isinstance(name, str) or not name.strip():
                raise ValueError(
                    f"branch names must be non-empty strings, got {name!r}"
                )
        return tuple(v)

    @field_validator("main_branch_behavior", mode="before")
    @classmethod
    def validate_behavior(cls, v):
        if isinstance(v, MainBranchBehavior):
            return v
        if isinstance(v, str):
            for behavior in MainBranchBehavior:
                if behavior.value.lower() == v.strip().lower():
                    return behavior
        allowed = ", ".join(b.value for b in MainBranchBehavior)
        raise ValueError(f"must be one of {allowed}, got {v!r}")

    @field_validator("tag_prefix", "version_prefix", mode="before")
    @classmethod
    def validate_prefix(cls, v):
        return _validate_plain_string(v)

    @field_validator("initial_version", mode="before")
    @classmethod
    def validate_initial_version(cls, v):
        if isinstance(v, SemVer):
            return v
        if v is None or isinstance(v, bool):
            raise ValueError("must be a version string like 1.0.0")
        try:
            return parse_version(str(v))
        except VersionFormatError as e:
            raise ValueError(str(e))

    def to_document(self) -> dict:
        """Return the config as it would be written in a YAML document."""
        return {
            "mainBranches": list(self.main_branches),
            "mainBranchBehavior": self.main_branch_behavior.value,
            "tagPrefix": self.tag_prefix,
            "versionPrefix": self.version_prefix,
            "initialVersion": str(self.initial_version),
        }


def config_from_dict(data: Optional[dict], path: Optional[Path] = None) -> Config:
    """
    Build a Config from a parsed document.

    Raises:
        ConfigError: naming the first offending field
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"expected a mapping at the top level, got {type(data).__name__}",
            path=path,
        )

    try:
        return Config.model_validate(data)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        message = error["msg"]
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        raise ConfigError(message, field=field, path=path) from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load the configuration document at ``config_path``.

    A missing path (or None) yields the default configuration.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    if config_path is None:
        logger.debug("No configuration file, using defaults")
        return Config()

    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Configuration file {path} not found, using defaults")
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse YAML: {e}", path=path) from e
    except OSError as e:
        raise ConfigError(f"could not read file: {e}", path=path) from e

    logger.debug(f"Loaded configuration from {path}")
    return config_from_dict(data, path=path)


def find_config_file(repo_root: Union[str, Path]) -> Optional[Path]:
    """Return the first default configuration file present in ``repo_root``."""
    for name in DEFAULT_CONFIG_FILES:
        candidate = Path(repo_root) / name
        if candidate.is_file():
            return candidate
    return None


def resolve_config(
    config_path: Optional[Union[str, Path]], repo_root: Union[str, Path]
) -> Config:
    """Load an explicit config file, else a default file from ``repo_root``."""
    if config_path is None:
        config_path = find_config_file(repo_root)
    return load_config(config_path)
