"""Expired profile selection."""

from datetime import datetime, timedelta

from cago_cli.lib.options import Options
from cago_cli.lib.result import Ok
from cago_cli.lib.store import PRINCIPAL_ARN, ROLE_ARN, ProfileStore
from cago_cli.models import ExpiredProfileRequest
from cago_cli.operations.arn import parse_role_arn
from cago_cli.operations.catalog import account_region


def is_expired(expires_at: datetime | None, threshold: timedelta, now: datetime) -> bool:
    """Remaining lifetime below the threshold. No timestamp counts as expired."""
    if expires_at is None:
        return True
    return expires_at - now < threshold


def select_expired(store: ProfileStore, threshold_minutes: int, now: datetime) -> list[str]:
    """Names of profiles due for refresh, sorted. Excluded profiles never are."""
    threshold = timedelta(minutes=threshold_minutes)
    return [
        name
        for name in store.profile_names()
        if not store.is_excluded(name) and is_expired(store.expires_at(name), threshold, now)
    ]


def build_requests(
    store: ProfileStore, names: list[str], options: Options
) -> dict[str, ExpiredProfileRequest]:
    """Refresh requests carrying the last role each profile used, if any."""
    requests: dict[str, ExpiredProfileRequest] = {}
    for name in names:
        conf = store.config.get(name, {})
        role_arn = conf.get(ROLE_ARN) or None
        region = options.region
        if role_arn is not None:
            match parse_role_arn(role_arn):
                case Ok(parsed):
                    region = account_region(options, parsed.account_id)
                case _:
                    pass
        requests[name] = ExpiredProfileRequest(
            profile_name=name,
            role_arn=role_arn,
            principal_arn=conf.get(PRINCIPAL_ARN) or None,
            region=region,
        )
    return requests
