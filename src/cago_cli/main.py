"""cago CLI entry point."""

from pathlib import Path

import click

from . import __version__
from .commands import (
    choose_profile,
    env,
    exclude,
    get_profile_key,
    list_cmd,
    refresh,
    setup,
    update,
)
from .lib.log import setup_logger
from .lib.paths import RC_ENV_VAR


@click.group()
@click.version_option(version=__version__, prog_name="cago")
@click.option(
    "--rc",
    "rc_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=RC_ENV_VAR,
    default=None,
    help="Settings file (default: ~/.cagorc)",
)
@click.option("--debug", "-d", is_flag=True, help="Enable debug output")
@click.pass_context
def cli(ctx: click.Context, rc_path: Path | None, debug: bool) -> None:
    """cago - temporary AWS credentials from a SAML identity provider."""
    setup_logger(debug)
    ctx.ensure_object(dict)
    ctx.obj["rc_path"] = rc_path


# Register subcommands
cli.add_command(update)
cli.add_command(refresh)
cli.add_command(exclude)
cli.add_command(list_cmd)
cli.add_command(setup)
cli.add_command(env)
cli.add_command(get_profile_key)
cli.add_command(choose_profile)


if __name__ == "__main__":
    cli()
