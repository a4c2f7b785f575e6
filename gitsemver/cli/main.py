"""gitsemver CLI"""

import click

from gitsemver import __version__
from gitsemver.cli.config import config
from gitsemver.cli.tags import tags
from gitsemver.cli.version import version

from .debug import add_debug_option


def format_recursive_help(ctx, param, value):
    """Custom help formatter that lists every command with its summary"""
    if not value or ctx.resilient_parsing:
        return

    click.echo("Usage: gitsemver [OPTIONS] COMMAND [ARGS]...")
    click.echo("")
    click.echo("  Semantic versions from git history.")
    click.echo("")
    click.echo("Options:")
    click.echo("  --debug / --no-debug  Enable debug logging.")
    click.echo("  --version             Show the version and exit.")
    click.echo("  --help                Show this message and exit.")
    click.echo("")
    click.echo("Commands:")

    main_cli = ctx.find_root().command
    for name, command in main_cli.commands.items():
        click.echo(f"  {name:<12} {command.get_short_help_str(60)}")

    ctx.exit()


@click.group()
@click.version_option(__version__, prog_name="gitsemver")
@click.option(
    "--help",
    "-h",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=format_recursive_help,
    help="Show this message and exit.",
)
@click.pass_context
def cli(ctx):
    """
    Semantic versions from git history.
    """
    ctx.ensure_object(dict)


cli.add_command(add_debug_option(version))
cli.add_command(add_debug_option(tags))
cli.add_command(add_debug_option(config))

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
