"""CLI command showing the resolved configuration."""

import click
import yaml

from gitsemver.cli.error_formatting import format_versioning_error
from gitsemver.cli.utils.logging import logger
from gitsemver.config import find_config_file, load_config
from gitsemver.git.history import repository_root
from gitsemver.versioning.exceptions import VersioningError


@click.command(name="config")
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
@click.pass_context
def config(ctx, repo: str, config_path: str):
    """Print the configuration in effect, defaults included."""
    try:
        if config_path is None:
            config_path = find_config_file(repository_root(repo))
        resolved = load_config(config_path)
    except VersioningError as e:
        logger.error(format_versioning_error(e))
        ctx.exit(1)

    logger.info(f"# source: {config_path or 'built-in defaults'}")
    click.echo(yaml.safe_dump(resolved.to_document(), sort_keys=False).rstrip("\n"))
