"""End-to-end version calculation for a repository on disk."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from gitsemver.config import Config, resolve_config
from gitsemver.git.history import HistorySnapshot, read_history, repository_root
from gitsemver.output import VersionOutputs
from gitsemver.versioning.branches import classify_branch
from gitsemver.versioning.engine import ResolvedVersion, VersionEngine
from gitsemver.versioning.version import SemVer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Calculation:
    """Every intermediate result of one calculation, for reporting."""

    config: Config
    snapshot: HistorySnapshot
    resolved: ResolvedVersion
    version: SemVer

    @property
    def outputs(self) -> VersionOutputs:
        return VersionOutputs.from_version(self.version, self.config.version_prefix)


def calculate(
    repo_path: Union[str, Path] = ".",
    config_path: Optional[Union[str, Path]] = None,
    branch: Optional[str] = None,
    config: Optional[Config] = None,
) -> Calculation:
    """
    Calculate the version of HEAD in the repository at ``repo_path``.

    Args:
        repo_path: Path inside the repository
        config_path: Configuration file; defaults to a config file in the
            repository root, then to the built-in defaults
        branch: Branch name overriding the checked-out branch
        config: Already resolved configuration, skips config loading

    Raises:
        VersioningError: Any of its subclasses, depending on the failing step
    """
    root = repository_root(repo_path)
    if config is None:
        config = resolve_config(config_path, root)

    snapshot = read_history(root, tag_prefix=config.tag_prefix, branch=branch)
    context = classify_branch(snapshot.branch, config.main_branches)

    engine = VersionEngine(config)
    resolved = engine.discover_base(snapshot.graph, context)
    version = engine.apply_branch_mode(resolved)

    logger.debug(
        f"{snapshot.path} on {context.name} "
        f"({'main' if context.is_main else 'feature'}): {version}"
    )
    return Calculation(
        config=config, snapshot=snapshot, resolved=resolved, version=version
    )
