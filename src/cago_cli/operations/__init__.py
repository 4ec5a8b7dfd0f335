"""Operations layer - the role and profile logic, returning Result types."""

from cago_cli.operations.arn import parse_role_arn
from cago_cli.operations.assume import assume_all, assume_for_profile
from cago_cli.operations.catalog import build_catalog, get_catalog
from cago_cli.operations.expiry import build_requests, select_expired
from cago_cli.operations.reconcile import apply_selections, reconcile
from cago_cli.operations.writer import merge_profiles, write_profiles

__all__ = [
    # roles
    "parse_role_arn",
    "build_catalog",
    "get_catalog",
    # profiles
    "select_expired",
    "build_requests",
    "reconcile",
    "apply_selections",
    # credentials
    "assume_all",
    "assume_for_profile",
    "merge_profiles",
    "write_profiles",
]
