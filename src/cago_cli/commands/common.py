"""Shared CLI utilities.

Options loading, context creation, error handling, output formatting.
"""

import sys
from pathlib import Path
from typing import Any, TypeVar

import click

from cago_cli.lib import options as options_module
from cago_cli.lib.aws import StsContext
from cago_cli.lib.errors import (
    AssumeRoleError,
    EmptyRoleListError,
    MalformedArnError,
    MissingPluginsError,
    MissingRolesConfigError,
    NoProfilesError,
    OptionsLoadError,
    OutdatedOptionsError,
    ProfileKeyNotFoundError,
    ProfileNotFoundError,
    RoleSourceError,
    SetupError,
    StoreLoadError,
    StoreSaveError,
)
from cago_cli.lib.options import Options
from cago_cli.lib.plugins import RoleSourceRegistry, build_registry
from cago_cli.lib.result import Cancelled, Err, Ok, Outcome

RULE = "-" * 80

T = TypeVar("T")


def rc_path(ctx: click.Context) -> Path | None:
    """--rc value from the root group, if given."""
    return (ctx.find_root().obj or {}).get("rc_path")


def load_options(ctx: click.Context) -> Options:
    """Load the rc file or exit."""
    return handle_result(options_module.load(rc_path(ctx)))


def load_registry(options: Options) -> RoleSourceRegistry:
    """Build the role source registry or exit."""
    return handle_result(build_registry(options))


def make_context(options: Options) -> StsContext:
    """Create StsContext from options."""
    return StsContext(region=options.region, use_https_proxy=options.use_https_proxy)


def handle_result(result: Outcome[T, Any], success_message: str | None = None) -> T:
    """Handle a Result, exiting on error or cancellation.

    On Ok: returns the value, optionally prints success message
    On Cancelled: prints the reason and exits with code 0
    On Err: prints error and exits with code 1
    """
    match result:
        case Ok(value):
            if success_message:
                click.secho(success_message, fg="green", bold=True)
            return value
        case Cancelled(reason):
            click.secho(reason, fg="yellow")
            sys.exit(0)
        case Err(error):
            handle_error(error)
            sys.exit(1)  # Should never reach here, but for type checker


def handle_error(error: Any) -> None:
    """Print error message and exit."""
    message = _format_error(error)
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _format_error(error: Any) -> str:
    """Format error for display."""
    match error:
        case MalformedArnError(role_arn):
            return f"Malformed role ARN '{role_arn}'. Expected arn:aws:iam::<account>:role/<name>."

        case EmptyRoleListError(source):
            return f"No roles found (roles source: {source})."

        case MissingRolesConfigError(path):
            return f"Missing roles from the settings {path}."

        case RoleSourceError(hook, reason):
            return f"Error occurred while fetching roles ({hook}): {reason}"

        case MissingPluginsError(plugins):
            plugins_str = ", ".join(plugins)
            return f"Missing plugin(s): {plugins_str}. Please run 'cago setup' first."

        case AssumeRoleError(role_arn, reason):
            return f"Error contacting AWS API while assuming '{role_arn}': {reason}"

        case OptionsLoadError(path, reason):
            return f"Could not load settings from {path}: {reason}. Run 'cago setup' to create it."

        case OutdatedOptionsError(path, found, required):
            return (
                f"Please update the rc_version in {path} to {required} "
                f"(found {found or 'none'})."
            )

        case StoreLoadError(path, reason):
            return f"Failed to read {path}: {reason}"

        case StoreSaveError(path, reason):
            return f"Failed to write {path}: {reason}"

        case NoProfilesError(path):
            return f"No profiles found in {path}. Run 'cago update' to create one."

        case ProfileNotFoundError(profile):
            return f"Profile '{profile}' not found."

        case ProfileKeyNotFoundError(profile, key):
            return f"Unable to find key '{key}' in profile '{profile}'."

        case SetupError(path, reason):
            return f"Setup failed at {path}: {reason}"

        case _:
            return str(error)


def echo_key_value(key: str, value: Any, indent: int = 0) -> None:
    """Print a key-value pair with optional indentation."""
    prefix = "  " * indent
    click.echo(f"{prefix}{key}: {value}")


def echo_section(title: str) -> None:
    """Print a section header."""
    click.echo()
    click.secho(title, bold=True)
    click.echo("-" * len(title))


def env_hint(profile: str | None = None) -> str:
    """Shell command that exports a profile's credentials."""
    target = profile or "<profile>"
    return f'eval "$(cago env export {target})"'
