"""AWS session and STS client management.

StsContext is created once at CLI entry and passed to the operations that
call AWS. The session and client are cached_property values; call prepare()
before handing the context to worker threads, which then only share the
finished client.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from cago_cli.lib.errors import AssumeRoleError
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import AssumedCredentials

if TYPE_CHECKING:
    from mypy_boto3_sts import STSClient

PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy")


def https_proxy_from_env() -> str | None:
    """HTTPS proxy from the environment, with http:// added if no scheme is given."""
    for name in PROXY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            if "//" not in value:
                logger.warning(
                    "Proxy missing protocol - assuming 'http://', please update your proxy settings"
                )
                return f"http://{value}"
            return value
    return None


@dataclass
class StsContext:
    """STS session and client. Created once at CLI entry.

    Example:
        ctx = StsContext(region="us-east-1")
        ctx.assume_role_with_saml(role_arn, principal_arn, assertion)
    """

    region: str
    use_https_proxy: bool = True

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session. No profile: AssumeRoleWithSAML is an unsigned call."""
        return boto3.Session(region_name=self.region)

    @cached_property
    def config(self) -> Config:
        if not self.use_https_proxy:
            # Empty proxy URLs override the environment
            return Config(proxies={"http": "", "https": ""})
        proxy = https_proxy_from_env()
        if proxy:
            return Config(proxies={"https": proxy})
        return Config()

    @cached_property
    def sts(self) -> STSClient:
        """STS client."""
        return self.session.client("sts", config=self.config)

    def prepare(self) -> None:
        """Build the session and client now, on the calling thread."""
        _ = self.sts

    def assume_role_with_saml(
        self,
        role_arn: str,
        principal_arn: str,
        saml_assertion: str | None,
    ) -> Result[AssumedCredentials, AssumeRoleError]:
        """Exchange a SAML assertion for temporary credentials."""
        if not saml_assertion:
            return Err(AssumeRoleError(role_arn, "No SAML assertion was provided by the role source"))

        logger.debug("Assuming {} via {}", role_arn, principal_arn)
        try:
            response = self.sts.assume_role_with_saml(
                RoleArn=role_arn,
                PrincipalArn=principal_arn,
                SAMLAssertion=saml_assertion,
            )
        except ClientError as e:
            return Err(AssumeRoleError(role_arn, str(e)))
        except BotoCoreError as e:
            return Err(AssumeRoleError(role_arn, str(e)))

        return Ok(AssumedCredentials.from_response(response["Credentials"]))
