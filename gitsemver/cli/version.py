"""CLI command computing the version of a repository."""

import click

from gitsemver.cli.error_formatting import format_versioning_error
from gitsemver.cli.utils.logging import logger
from gitsemver.output import OUTPUT_FORMATS, VersionOutputs, render_outputs
from gitsemver.pipeline import calculate
from gitsemver.versioning.exceptions import VersioningError


@click.command(name="version")
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
    "--branch",
    "-b",
    help="Branch name to version for, instead of the checked-out branch.",
    envvar="GITSEMVER_BRANCH",
)
@click.option(
    "--fail-on-error/--no-fail-on-error",
    default=True,
    show_default=True,
    help="Exit non-zero when no version can be resolved, instead of emitting 0.0.0.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--out",
    type=click.Path(dir_okay=False),
    help="Output file to write results to.",
)
@click.pass_context
def version(
    ctx,
    repo: str,
    config_path: str,
    branch: str,
    fail_on_error: bool,
    format: str,
    out: str,
):
    """Calculate the semantic version of the repository's HEAD.

    Prints version, major, minor, patch, prerelease and is-prerelease.
    """
    try:
        result = calculate(repo, config_path=config_path, branch=branch)
        outputs = result.outputs
    except VersioningError as e:
        if fail_on_error:
            logger.error(format_versioning_error(e))
            ctx.exit(1)
        logger.warning(format_versioning_error(e))
        logger.warning("Emitting fallback version")
        outputs = VersionOutputs.sentinel()

    rendered = render_outputs(outputs, format.lower())

    if out:
        try:
            with open(out, "w", encoding="utf-8") as f:
                f.write(rendered + "\n")
            logger.info(f"Output written to {out}")
        except OSError as e:
            logger.error(f"Failed to write output file: {e}")
            ctx.exit(1)
    else:
        click.echo(rendered)
