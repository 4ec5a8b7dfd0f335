"""Update workflow - assume one role into a chosen or new profile."""

from dataclasses import dataclass

from cago_cli.lib import store as store_module
from cago_cli.lib.aws import StsContext
from cago_cli.lib.console import Console
from cago_cli.lib.errors import UpdateError
from cago_cli.lib.options import Options
from cago_cli.lib.plugins import RoleSourceRegistry
from cago_cli.lib.result import Cancelled, Err, Ok, Outcome
from cago_cli.lib.store import ProfileStore
from cago_cli.models import CatalogEntry, ProfileWrite
from cago_cli.operations.catalog import get_catalog
from cago_cli.operations.writer import write_profiles

NEW_PROFILE = "--cago-new--"


@dataclass(frozen=True)
class UpdateResult:
    profile_name: str
    entry: CatalogEntry
    write: ProfileWrite


def choose_profile(store: ProfileStore, console: Console) -> str | None:
    """Pick an existing profile or name a new one. None if the name is left empty."""
    choices = [(name, name) for name in store.profile_names()]
    choices.append(("Create new profile", NEW_PROFILE))
    selected = console.choose("Select a profile name for the new credentials:", choices)
    if selected != NEW_PROFILE:
        return selected
    name = console.text("Enter a name for the new profile")
    return name or None


def update(
    options: Options,
    registry: RoleSourceRegistry,
    ctx: StsContext,
    console: Console,
) -> Outcome[UpdateResult, UpdateError]:
    """Assume a role the user picks and store it under a profile they pick.

    1. Build the role catalog
    2. Prompt for a role
    3. Load the profile store
    4. Assume the role
    5. Prompt for the profile and write it
    """
    match get_catalog(options, registry):
        case Err() as e:
            return e
        case Ok(catalog):
            pass

    role_arn = console.choose(
        "Please choose the AWS account and role combination that you would like to assume:",
        catalog.choices(),
    )
    entry = catalog.entries[role_arn]

    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass

    console.message("Assuming AWS account and role..")
    match ctx.assume_role_with_saml(entry.role_arn, entry.principal_arn, catalog.saml_response):
        case Err() as e:
            return e
        case Ok(credentials):
            pass

    profile_name = choose_profile(store, console)
    if profile_name is None:
        return Cancelled("No profile name given")

    write = ProfileWrite(
        role_arn=entry.role_arn,
        principal_arn=entry.principal_arn,
        credentials=credentials,
        region=entry.region,
    )
    match write_profiles(store, {profile_name: write}, options):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return Ok(UpdateResult(profile_name=profile_name, entry=entry, write=write))
