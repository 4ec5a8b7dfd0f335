"""Match expired profiles against the current role catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, replace

from cago_cli.models import CatalogEntry, ExpiredProfileRequest, RoleCatalog


@dataclass(frozen=True, slots=True)
class AutoResolved:
    """A profile that keeps the role it used last time."""

    profile_name: str
    entry: CatalogEntry


@dataclass(frozen=True, slots=True)
class Reconciliation:
    auto_resolved: tuple[AutoResolved, ...]
    needs_selection: tuple[str, ...]


def reconcile(
    requests: Mapping[str, ExpiredProfileRequest], catalog: RoleCatalog
) -> Reconciliation:
    """Split profiles into those with a known, still-available role and the rest."""
    auto: list[AutoResolved] = []
    pending: list[str] = []
    for name in sorted(requests):
        request = requests[name]
        entry = catalog.entries.get(request.role_arn or "")
        if request.has_role and entry is not None:
            auto.append(AutoResolved(name, entry))
        else:
            pending.append(name)
    return Reconciliation(auto_resolved=tuple(auto), needs_selection=tuple(pending))


def _from_entry(request: ExpiredProfileRequest, entry: CatalogEntry) -> ExpiredProfileRequest:
    # Catalog values win: the role may have moved region since last use
    return replace(
        request,
        role_arn=entry.role_arn,
        principal_arn=entry.principal_arn,
        region=entry.region,
    )


def apply_selections(
    requests: Mapping[str, ExpiredProfileRequest],
    reconciliation: Reconciliation,
    catalog: RoleCatalog,
    selections: Mapping[str, str],
) -> dict[str, ExpiredProfileRequest]:
    """Final requests: auto-resolved profiles plus the user's picks.

    `selections` maps profile name -> catalog key for every profile in
    `reconciliation.needs_selection`.
    """
    resolved: dict[str, ExpiredProfileRequest] = {}
    for item in reconciliation.auto_resolved:
        resolved[item.profile_name] = _from_entry(requests[item.profile_name], item.entry)
    for name in reconciliation.needs_selection:
        resolved[name] = _from_entry(requests[name], catalog.entries[selections[name]])
    return dict(sorted(resolved.items()))
