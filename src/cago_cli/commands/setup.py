"""Setup command - create the files cago needs."""

import click

from cago_cli.commands.common import handle_result, rc_path
from cago_cli.workflows import setup as setup_workflow


@click.command()
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Set up the settings, credentials and config files.

    Safe to run again: existing files are left untouched.
    """
    report = handle_result(setup_workflow(rc_path(ctx)))

    if report.created:
        click.echo("Created:")
        for path in report.created:
            click.echo(f"  {path}")
    else:
        click.echo("All paths already exist.")

    if report.missing_plugins:
        click.echo()
        click.secho("Missing plugin(s):", fg="yellow")
        for name in report.missing_plugins:
            requirement = report.options.plugins.get(name) or name
            click.echo(f"  {name}  (install with: pip install '{requirement}')")
        return

    click.secho("Setup complete.", fg="green", bold=True)
