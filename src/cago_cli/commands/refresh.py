"""Refresh command - renew expiring profiles."""

import click

from cago_cli.commands.common import (
    env_hint,
    handle_result,
    load_options,
    load_registry,
    make_context,
)
from cago_cli.lib.console import ClickConsole
from cago_cli.workflows import refresh as refresh_workflow


@click.command()
@click.pass_context
def refresh(ctx: click.Context) -> None:
    """Refresh all expired profiles.

    Profiles whose credentials expire within the "refreshMinutes" setting are
    refreshed; excluded profiles are skipped.
    """
    options = load_options(ctx)
    registry = load_registry(options)

    result = handle_result(
        refresh_workflow(options, registry, make_context(options), ClickConsole())
    )

    if not result.refreshed:
        click.secho("All profiles have valid tokens.", fg="green")
        return

    click.echo()
    for name in result.refreshed:
        click.echo(f"  {name}")
    click.secho(f"... Done! Refreshed {len(result.refreshed)} profile(s).", fg="green")
    click.echo(f"Note: to set the environment variables, run {env_hint()}")
