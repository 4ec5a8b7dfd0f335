"""Tests for lib/aws.py - STS client and AssumeRoleWithSAML."""

import base64
from datetime import datetime
from unittest.mock import patch

import boto3
import pytest
from botocore.stub import Stubber
from moto import mock_aws

from cago_cli.lib.aws import StsContext, https_proxy_from_env
from cago_cli.lib.errors import AssumeRoleError
from cago_cli.lib.result import Err, Ok
from cago_cli.models import ExpiredProfileRequest
from cago_cli.operations.assume import assume_all

ROLE_ARN = "arn:aws:iam::123456789012:role/Test"
PRINCIPAL_ARN = "arn:aws:iam::123456789012:saml-provider/IdP"


def saml_assertion(role_arn: str = ROLE_ARN, principal_arn: str = PRINCIPAL_ARN) -> str:
    """Minimal base64 SAML response carrying the AWS role attributes."""
    xml = f"""<?xml version="1.0"?>
<samlp:Response xmlns:samlp="urn:oasis:names:tc:SAML:2.0:protocol" ID="_resp" Version="2.0">
  <saml:Assertion xmlns:saml="urn:oasis:names:tc:SAML:2.0:assertion" ID="_assertion" Version="2.0">
    <saml:Issuer>https://idp.example.com</saml:Issuer>
    <saml:AttributeStatement>
      <saml:Attribute Name="https://aws.amazon.com/SAML/Attributes/RoleSessionName">
        <saml:AttributeValue>someone@example.com</saml:AttributeValue>
      </saml:Attribute>
      <saml:Attribute Name="https://aws.amazon.com/SAML/Attributes/Role">
        <saml:AttributeValue>{role_arn},{principal_arn}</saml:AttributeValue>
      </saml:Attribute>
      <saml:Attribute Name="https://aws.amazon.com/SAML/Attributes/SessionDuration">
        <saml:AttributeValue>900</saml:AttributeValue>
      </saml:Attribute>
    </saml:AttributeStatement>
  </saml:Assertion>
</samlp:Response>"""
    return base64.b64encode(xml.encode()).decode()


class TestAssumeRoleWithSaml:
    @mock_aws
    def test_returns_credentials(self, aws_credentials: None) -> None:
        ctx = StsContext(region="us-east-1")

        result = ctx.assume_role_with_saml(ROLE_ARN, PRINCIPAL_ARN, saml_assertion())

        assert isinstance(result, Ok)
        creds = result.value
        assert creds.access_key_id
        assert creds.secret_access_key
        assert creds.session_token
        assert isinstance(creds.expiration, datetime)
        assert creds.expiration.tzinfo is not None

    def test_missing_assertion(self) -> None:
        ctx = StsContext(region="us-east-1")

        result = ctx.assume_role_with_saml(ROLE_ARN, PRINCIPAL_ARN, None)

        assert result == Err(
            AssumeRoleError(ROLE_ARN, "No SAML assertion was provided by the role source")
        )

    def test_client_error(self, aws_credentials: None) -> None:
        ctx = StsContext(region="us-east-1")
        assertion = saml_assertion()

        with Stubber(ctx.sts) as stubber:
            stubber.add_client_error(
                "assume_role_with_saml",
                service_error_code="InvalidIdentityToken",
                service_message="Invalid SAML assertion",
                expected_params={
                    "RoleArn": ROLE_ARN,
                    "PrincipalArn": PRINCIPAL_ARN,
                    "SAMLAssertion": assertion,
                },
            )
            result = ctx.assume_role_with_saml(ROLE_ARN, PRINCIPAL_ARN, assertion)

        assert isinstance(result, Err)
        assert result.error.role_arn == ROLE_ARN
        assert "InvalidIdentityToken" in result.error.reason


class TestProxyConfig:
    def test_proxy_disabled_overrides_environment(
        self, aws_credentials: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HTTPS_PROXY", "http://proxy:8080")

        ctx = StsContext(region="us-east-1", use_https_proxy=False)

        assert ctx.config.proxies == {"http": "", "https": ""}

    def test_proxy_from_environment(
        self, aws_credentials: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HTTPS_PROXY", "https://proxy:8443")

        ctx = StsContext(region="us-east-1")

        assert ctx.config.proxies == {"https": "https://proxy:8443"}

    def test_no_proxy(self, aws_credentials: None) -> None:
        assert StsContext(region="us-east-1").config.proxies is None

    def test_scheme_added(self, aws_credentials: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("https_proxy", "proxy:3128")

        assert https_proxy_from_env() == "http://proxy:3128"

    def test_client_region(self, aws_credentials: None) -> None:
        ctx = StsContext(region="eu-west-1")

        assert ctx.sts.meta.region_name == "eu-west-1"


class TestConcurrentAssume:
    def test_prepare_builds_client(self, aws_credentials: None) -> None:
        ctx = StsContext(region="us-east-1")

        ctx.prepare()

        assert "sts" in vars(ctx)
        assert "session" in vars(ctx)

    @mock_aws
    def test_fan_out_on_fresh_context(self, aws_credentials: None) -> None:
        ctx = StsContext(region="us-east-1")
        requests = {
            f"profile-{i:02d}": ExpiredProfileRequest(
                f"profile-{i:02d}", ROLE_ARN, PRINCIPAL_ARN, "eu-west-1"
            )
            for i in range(12)
        }

        with patch("boto3.Session", wraps=boto3.Session) as session_cls:
            result = assume_all(ctx, requests, saml_assertion())

        assert isinstance(result, Ok)
        assert list(result.value) == sorted(requests)
        assert all(write.credentials.session_token for write in result.value.values())
        session_cls.assert_called_once_with(region_name="us-east-1")
