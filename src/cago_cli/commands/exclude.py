"""Exclude command - choose profiles to skip on refresh."""

import click

from cago_cli.commands.common import handle_result, load_options
from cago_cli.lib.console import ClickConsole
from cago_cli.workflows import exclude as exclude_workflow


@click.command()
@click.pass_context
def exclude(ctx: click.Context) -> None:
    """Exclude profiles from automatic refresh."""
    options = load_options(ctx)
    result = handle_result(exclude_workflow(options, ClickConsole()))

    if not result.profiles:
        click.secho("No profiles found.", fg="yellow")
        return

    click.secho(f"Updated {options.config_file}", fg="green")
    if result.excluded:
        click.echo(f"Excluded: {', '.join(result.excluded)}")
    else:
        click.echo("Excluded: (none)")
