"""Role assumption for one or many profiles."""

import concurrent.futures
from collections.abc import Mapping

from loguru import logger

from cago_cli.lib.aws import StsContext
from cago_cli.lib.errors import AssumeRoleError
from cago_cli.lib.result import Err, Ok, Result, collect
from cago_cli.models import ExpiredProfileRequest, ProfileWrite

MAX_WORKERS = 10


def assume_for_profile(
    ctx: StsContext, request: ExpiredProfileRequest, saml_assertion: str | None
) -> Result[tuple[str, ProfileWrite], AssumeRoleError]:
    assert request.role_arn is not None and request.principal_arn is not None
    match ctx.assume_role_with_saml(request.role_arn, request.principal_arn, saml_assertion):
        case Err() as e:
            return e
        case Ok(credentials):
            return Ok(
                (
                    request.profile_name,
                    ProfileWrite(
                        role_arn=request.role_arn,
                        principal_arn=request.principal_arn,
                        credentials=credentials,
                        region=request.region,
                    ),
                )
            )


def assume_all(
    ctx: StsContext,
    requests: Mapping[str, ExpiredProfileRequest],
    saml_assertion: str | None,
) -> Result[dict[str, ProfileWrite], AssumeRoleError]:
    """Assume every profile's role concurrently and wait for all of them.

    Any failure fails the whole batch.
    """
    ordered = [requests[name] for name in sorted(requests)]
    if not ordered:
        return Ok({})

    logger.debug("Assuming {} role(s)", len(ordered))
    ctx.prepare()
    with concurrent.futures.ThreadPoolExecutor(
        max_workers=min(MAX_WORKERS, len(ordered))
    ) as executor:
        results = list(
            executor.map(lambda request: assume_for_profile(ctx, request, saml_assertion), ordered)
        )

    match collect(results):
        case Err() as e:
            return e
        case Ok(pairs):
            return Ok(dict(pairs))
