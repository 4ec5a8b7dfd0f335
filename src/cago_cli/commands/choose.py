"""Choose-profile command - print a picked profile name for shell wrappers."""

import click

from cago_cli.commands.common import handle_result, load_options
from cago_cli.lib.console import ClickConsole
from cago_cli.workflows import pick_profile


@click.command("choose-profile")
@click.pass_context
def choose_profile(ctx: click.Context) -> None:
    """Choose a stored profile and print its name.

    The menu is shown on stderr. The name is printed and also written to
    ~/.cago/cago.profile.txt for wrapper scripts.

    \b
    Examples:
      cago choose-profile && export AWS_PROFILE="$(cat ~/.cago/cago.profile.txt)"
    """
    options = load_options(ctx)
    name = handle_result(pick_profile(options, ClickConsole(err=True)))
    click.echo(name)
