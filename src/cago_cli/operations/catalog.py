"""Role catalog - turn role descriptors into display-ready entries."""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from cago_cli.lib.errors import (
    CatalogError,
    EmptyRoleListError,
    MalformedArnError,
    MissingRolesConfigError,
    RoleSourceError,
)
from cago_cli.lib.options import ROLES_SOURCE_SETTINGS, Options
from cago_cli.lib.plugins import GET_ROLES, RoleSourceRegistry
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import CatalogEntry, RoleCatalog, RoleDescriptor
from cago_cli.operations.arn import parse_role_arn

# Extra spacing between the account column and the role name
PAD_EXTRA = 4


def account_name(options: Options, account_id: str) -> str:
    """Display name override for an account, or the id itself."""
    return options.accounts.get(account_id, account_id)


def account_region(options: Options, account_id: str) -> str:
    """Region override for an account, or the default region."""
    return options.regions.get(account_id, options.region)


def build_catalog(
    options: Options,
    roles: Sequence[RoleDescriptor],
    saml_response: str | None = None,
) -> Result[RoleCatalog, MalformedArnError | EmptyRoleListError]:
    """Build the catalog. One malformed ARN rejects the whole list."""
    entries: dict[str, CatalogEntry] = {}
    longest = 0

    for role in roles:
        match parse_role_arn(role.role_arn):
            case Err() as e:
                logger.debug("Rejecting role list: malformed ARN {}", role.role_arn)
                return e
            case Ok(parsed):
                pass

        name = account_name(options, parsed.account_id)
        longest = max(longest, len(name))
        entries[role.role_arn] = CatalogEntry(
            role_arn=role.role_arn,
            account_name=name,
            role_name=parsed.role_name,
            principal_arn=role.principal_arn,
            region=account_region(options, parsed.account_id),
        )

    if not entries:
        return Err(EmptyRoleListError(options.roles_source))

    return Ok(RoleCatalog(entries=entries, pad_width=longest + PAD_EXTRA, saml_response=saml_response))


def _descriptors(hook: str, raw: dict[str, Any]) -> Result[list[RoleDescriptor], RoleSourceError]:
    try:
        return Ok([RoleDescriptor.from_dict(r) for r in raw.get("roles") or []])
    except KeyError as e:
        return Err(RoleSourceError(hook, f"Malformed role entry, missing {e}"))
    except TypeError as e:
        return Err(RoleSourceError(hook, f"Malformed role entry, {e}"))


def get_catalog(options: Options, registry: RoleSourceRegistry) -> Result[RoleCatalog, CatalogError]:
    """Fetch roles from the configured source and build the catalog."""
    if options.roles_source == ROLES_SOURCE_SETTINGS and options.roles is None:
        return Err(MissingRolesConfigError(options.rc_path))

    match registry.run(GET_ROLES, options):
        case Err() as e:
            return e
        case Ok(raw):
            pass

    match _descriptors(GET_ROLES, raw):
        case Err() as e:
            return e
        case Ok(descriptors):
            pass

    return build_catalog(options, descriptors, raw.get("SAMLResponse"))
