"""Env commands - use stored profiles from the shell."""

import os
import platform
import shlex
from importlib.metadata import version

import click

from cago_cli import __version__
from cago_cli.commands.common import echo_key_value, handle_result, load_options
from cago_cli.workflows import get_profile_key as get_profile_key_workflow
from cago_cli.workflows import profile_exports
from cago_cli.workflows.env import PROXY_VARS


@click.group()
def env() -> None:
    """Environment helpers."""
    pass


@env.command("export")
@click.argument("profile")
@click.pass_context
def env_export(ctx: click.Context, profile: str) -> None:
    """Print export lines for PROFILE.

    \b
    Examples:
      eval "$(cago env export dev)"
    """
    options = load_options(ctx)
    for var, value in handle_result(profile_exports(options, profile)):
        click.echo(f"export {var}={shlex.quote(value)}")


@env.command("proxy")
def env_proxy() -> None:
    """Show the proxy settings."""
    for var in PROXY_VARS:
        echo_key_value(var, os.environ.get(var, ""))


@env.command("versions")
def env_versions() -> None:
    """Show the versions of different components."""
    echo_key_value("cago", __version__)
    echo_key_value("python", platform.python_version())
    echo_key_value("boto3", version("boto3"))
    echo_key_value("botocore", version("botocore"))
    echo_key_value("click", version("click"))
    echo_key_value("loguru", version("loguru"))
    echo_key_value("os platform", platform.system())
    echo_key_value("cpu arch", platform.machine())
    echo_key_value("os info", platform.platform())


@click.command("get-profile-key")
@click.argument("profile")
@click.argument("key")
@click.pass_context
def get_profile_key(ctx: click.Context, profile: str, key: str) -> None:
    """Print the value of KEY from PROFILE.

    \b
    Examples:
      cago get-profile-key dev aws_access_key_id
    """
    options = load_options(ctx)
    click.echo(handle_result(get_profile_key_workflow(options, profile, key)))
