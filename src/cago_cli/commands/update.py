"""Update command - assume a role into one profile."""

import click

from cago_cli.commands.common import (
    RULE,
    env_hint,
    handle_result,
    load_options,
    load_registry,
    make_context,
)
from cago_cli.lib.console import ClickConsole
from cago_cli.workflows import update as update_workflow


@click.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Update the selected profile with a fresh AWS token.

    \b
    Examples:
      cago update
    """
    options = load_options(ctx)
    registry = load_registry(options)

    result = handle_result(
        update_workflow(options, registry, make_context(options), ClickConsole())
    )

    name = result.profile_name
    expiration = result.write.credentials.expiration.astimezone()
    click.echo()
    click.secho(RULE, fg="yellow")
    click.secho(
        f"Your new access key pair has been stored in {options.credentials_file} "
        f"under the {name} profile.",
        fg="yellow",
    )
    click.secho(f"Note that it will expire at {expiration:%A, %B %d, %Y %I:%M %p %z}.", fg="yellow")
    click.secho(
        "After this time, you may safely rerun this command to refresh your access key pair.",
        fg="yellow",
    )
    click.secho(
        "To use this credential, call the AWS CLI with the --profile option "
        f"(e.g. aws --profile {name} iam list-account-aliases).",
        fg="yellow",
    )
    click.secho(RULE, fg="yellow")
    click.echo(f"To set the environment variables, run {env_hint(name)}")
    click.secho(RULE, fg="yellow")
    click.echo()
    click.secho("... Done!", fg="green")
