import click

from .utils.logging import configure_logging


def add_debug_option(cmd: click.Command) -> click.Command:
    """Attach a --debug/--no-debug option to a command or group."""
    if not any(param.name == "debug" for param in cmd.params):
        cmd.params.insert(
            0,
            click.Option(
                ["--debug/--no-debug"],
                is_eager=True,
                expose_value=False,
                callback=_set_debug,
                help="Enable debug logging.",
            ),
        )
    return cmd


def _set_debug(ctx: click.Context, param, value: bool):
    """Callback for the debug flag"""
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    # A --debug given on the group stays on for the subcommand
    debug = bool(value) or root_ctx.obj.get("DEBUG", False)
    root_ctx.obj["DEBUG"] = debug

    configure_logging(debug)
    return debug
