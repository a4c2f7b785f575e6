"""CLI command listing the version tags reachable from HEAD."""

import click

from gitsemver.cli.error_formatting import format_versioning_error
from gitsemver.cli.utils.logging import logger
from gitsemver.config import resolve_config
from gitsemver.git.history import read_history, repository_root
from gitsemver.versioning.engine import find_base_tag
from gitsemver.versioning.exceptions import VersioningError


@click.command(name="tags")
@click.option(
    "--repo",
    "-r",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Path inside the git repository.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Configuration file (defaults to .gitsemver.yml in the repository root).",
    envvar="GITSEMVER_CONFIG",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    default=False,
    help="Also list reachable tags that are not versions.",
)
@click.pass_context
def tags(ctx, repo: str, config_path: str, show_all: bool):
    """List tags reachable from HEAD, nearest first.

    The tag the version is calculated from is marked with '*'.
    """
    try:
        root = repository_root(repo)
        resolved = resolve_config(config_path, root)
        # The branch is irrelevant here; skip detached HEAD detection
        snapshot = read_history(root, tag_prefix=resolved.tag_prefix, branch="")
    except VersioningError as e:
        logger.error(format_versioning_error(e))
        ctx.exit(1)

    graph = snapshot.graph
    base = find_base_tag(graph)
    base_name = base[0].name if base else None

    listed = 0
    for tag, distance in graph.reachable_tags():
        if tag.version is None and not show_all:
            continue
        marker = "*" if tag.name == base_name else " "
        version = str(tag.version) if tag.version is not None else "-"
        click.echo(f"{marker} {tag.name:<24} {version:<20} {distance:>6}")
        listed += 1

    if not listed:
        logger.info("No version tags reachable from HEAD")
