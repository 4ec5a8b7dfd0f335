"""List command - show available and excluded profiles."""

import click

from cago_cli.commands.common import echo_section, env_hint, handle_result, load_options
from cago_cli.workflows import list_profiles


@click.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List available and excluded profiles."""
    options = load_options(ctx)
    listing = handle_result(list_profiles(options))

    echo_section(f"Excluded ({len(listing.excluded)})")
    if listing.excluded:
        for profile in listing.excluded:
            click.secho(f"  {profile.name}", fg="yellow")
    else:
        click.echo("  (none)")

    echo_section(f"Available ({len(listing.available)})")
    if listing.available:
        for profile in listing.available:
            click.secho(f"  {profile.name}", fg="green")
            click.echo(f"    {env_hint(profile.name)}")
    else:
        click.echo("  (none)")

    click.echo()
