"""Role ARN parsing."""

import re

from cago_cli.lib.errors import MalformedArnError
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import ParsedRoleArn

# arn:aws:iam::123456789012:role/path/role-name
ROLE_ARN_PATTERN = re.compile(r"^arn:aws:iam::(.+?):role/(.+)$")


def parse_role_arn(role_arn: str) -> Result[ParsedRoleArn, MalformedArnError]:
    """Split a role ARN into account id and role name (path included)."""
    if not isinstance(role_arn, str):
        return Err(MalformedArnError(str(role_arn)))
    match = ROLE_ARN_PATTERN.match(role_arn)
    if not match:
        return Err(MalformedArnError(role_arn))
    return Ok(ParsedRoleArn(account_id=match.group(1), role_name=match.group(2)))
