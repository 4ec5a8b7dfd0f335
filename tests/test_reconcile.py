"""Tests for operations/reconcile.py - matching profiles to catalog roles."""

from conftest import OTHER_PRINCIPAL_ARN, OTHER_ROLE_ARN, PRINCIPAL_ARN, ROLE_ARN

from cago_cli.lib.options import Options
from cago_cli.lib.result import Ok
from cago_cli.models import ExpiredProfileRequest, RoleCatalog, RoleDescriptor
from cago_cli.operations.catalog import build_catalog
from cago_cli.operations.reconcile import apply_selections, reconcile


def _catalog(options: Options, *roles: RoleDescriptor) -> RoleCatalog:
    result = build_catalog(options, list(roles))
    assert isinstance(result, Ok)
    return result.value


class TestReconcile:
    def test_known_role_is_reused(self, options: Options) -> None:
        catalog = _catalog(options, RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN))
        requests = {"dev": ExpiredProfileRequest("dev", ROLE_ARN, PRINCIPAL_ARN, "us-east-1")}

        result = reconcile(requests, catalog)

        assert [item.profile_name for item in result.auto_resolved] == ["dev"]
        assert result.auto_resolved[0].entry == catalog.entries[ROLE_ARN]
        assert result.needs_selection == ()

    def test_profile_without_role_needs_selection(self, options: Options) -> None:
        catalog = _catalog(options, RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN))
        requests = {"new": ExpiredProfileRequest("new", None, None, "us-east-1")}

        result = reconcile(requests, catalog)

        assert result.auto_resolved == ()
        assert result.needs_selection == ("new",)

    def test_role_gone_from_catalog_needs_selection(self, options: Options) -> None:
        catalog = _catalog(options, RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN))
        requests = {
            "old": ExpiredProfileRequest("old", OTHER_ROLE_ARN, OTHER_PRINCIPAL_ARN, "us-east-1")
        }

        result = reconcile(requests, catalog)

        assert result.needs_selection == ("old",)

    def test_missing_principal_needs_selection(self, options: Options) -> None:
        catalog = _catalog(options, RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN))
        requests = {"half": ExpiredProfileRequest("half", ROLE_ARN, None, "us-east-1")}

        assert reconcile(requests, catalog).needs_selection == ("half",)

    def test_idempotent(self, options: Options) -> None:
        catalog = _catalog(
            options,
            RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN),
            RoleDescriptor(OTHER_ROLE_ARN, OTHER_PRINCIPAL_ARN),
        )
        requests = {
            "b": ExpiredProfileRequest("b", ROLE_ARN, PRINCIPAL_ARN, "us-east-1"),
            "a": ExpiredProfileRequest("a", None, None, "us-east-1"),
        }

        assert reconcile(requests, catalog) == reconcile(requests, catalog)


class TestApplySelections:
    def test_catalog_values_win(self, options: Options) -> None:
        catalog = _catalog(
            options,
            RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN),
            RoleDescriptor(OTHER_ROLE_ARN, OTHER_PRINCIPAL_ARN),
        )
        requests = {
            "kept": ExpiredProfileRequest("kept", ROLE_ARN, "stale-principal", "stale-region"),
            "picked": ExpiredProfileRequest("picked", None, None, "us-east-1"),
        }
        reconciliation = reconcile(requests, catalog)
        # "stale-principal" still matches by role ARN, so "kept" is reused
        assert reconciliation.needs_selection == ("picked",)

        resolved = apply_selections(requests, reconciliation, catalog, {"picked": OTHER_ROLE_ARN})

        assert list(resolved) == ["kept", "picked"]
        assert resolved["kept"].principal_arn == PRINCIPAL_ARN
        assert resolved["kept"].region == "us-east-1"
        assert resolved["picked"].role_arn == OTHER_ROLE_ARN
        assert resolved["picked"].principal_arn == OTHER_PRINCIPAL_ARN
