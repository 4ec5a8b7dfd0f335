"""Refresh workflow - renew every profile that is about to expire."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from cago_cli.lib import store as store_module
from cago_cli.lib.aws import StsContext
from cago_cli.lib.console import Console
from cago_cli.lib.errors import RefreshError
from cago_cli.lib.options import Options
from cago_cli.lib.plugins import RoleSourceRegistry
from cago_cli.lib.result import Cancelled, Err, Ok, Outcome
from cago_cli.models import ProfileWrite, RoleCatalog
from cago_cli.operations.assume import assume_all
from cago_cli.operations.catalog import get_catalog
from cago_cli.operations.expiry import build_requests, select_expired
from cago_cli.operations.reconcile import Reconciliation, apply_selections, reconcile
from cago_cli.operations.writer import write_profiles

RULE = "-" * 80


@dataclass(frozen=True)
class RefreshResult:
    """Profiles that got new credentials. Empty when nothing was due."""

    refreshed: dict[str, ProfileWrite] = field(default_factory=dict)


def _show_reused(reconciliation: Reconciliation, catalog: RoleCatalog, console: Console) -> None:
    if not reconciliation.auto_resolved:
        return
    width = max(len(item.profile_name) for item in reconciliation.auto_resolved) + 2
    console.message(RULE)
    console.message("Using last AWS account and role combination(s) for the profile(s) listed below")
    console.message(RULE)
    for item in reconciliation.auto_resolved:
        console.message(f"\t{item.profile_name.ljust(width)} - {item.entry.label(catalog.pad_width)}")
    console.message(RULE)
    console.message("Note: to change the role used, run 'cago update' and select the profile.")
    console.message(RULE)


def refresh(
    options: Options,
    registry: RoleSourceRegistry,
    ctx: StsContext,
    console: Console,
    now: datetime | None = None,
) -> Outcome[RefreshResult, RefreshError]:
    """Refresh expired profiles.

    1. Load the profile store and pick the expired, non-excluded profiles
    2. Confirm with the user
    3. Build the role catalog and reuse each profile's last role where possible
    4. Prompt for a role for the remaining profiles
    5. Assume all roles concurrently, then write every profile at once
    """
    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass

    expired = select_expired(store, options.refresh_minutes, now or datetime.now(UTC))
    if not expired:
        return Ok(RefreshResult())

    requests = build_requests(store, expired, options)

    console.warning("Refreshing the following expired profiles:")
    for name in expired:
        console.message(f"\t{name}")
    if not console.confirm("Proceed with refresh?"):
        return Cancelled("Refresh cancelled")

    match get_catalog(options, registry):
        case Err() as e:
            return e
        case Ok(catalog):
            pass

    reconciliation = reconcile(requests, catalog)
    _show_reused(reconciliation, catalog, console)

    selections: dict[str, str] = {}
    for name in reconciliation.needs_selection:
        selections[name] = console.choose(
            "Please choose the AWS account and role combination that you would like "
            f"to use for {name}:",
            catalog.choices(),
        )

    resolved = apply_selections(requests, reconciliation, catalog, selections)

    console.message("Assuming AWS account(s) and role(s)..")
    match assume_all(ctx, resolved, catalog.saml_response):
        case Err() as e:
            return e
        case Ok(writes):
            pass

    match write_profiles(store, writes, options):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return Ok(RefreshResult(refreshed=writes))
