"""Credential writer - merge new credentials into the profile store and persist."""

from collections.abc import Mapping

from loguru import logger

from cago_cli.lib import store as store_module
from cago_cli.lib.errors import StoreSaveError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Result
from cago_cli.lib.store import ProfileStore
from cago_cli.models import ProfileWrite


def merge_profiles(
    store: ProfileStore, profiles: Mapping[str, ProfileWrite], options: Options
) -> ProfileStore:
    """Set the managed keys of each profile. Every other key and profile is left alone."""
    for name, profile in profiles.items():
        creds = store.credentials.setdefault(name, {})
        conf = store.config.setdefault(name, {})
        token = profile.credentials

        creds[store_module.OUTPUT] = options.output_format
        creds[store_module.REGION] = profile.region or options.region
        creds[store_module.ACCESS_KEY_ID] = token.access_key_id.strip()
        creds[store_module.SECRET_ACCESS_KEY] = token.secret_access_key.strip()
        creds[store_module.SESSION_TOKEN] = token.session_token.strip()
        creds[store_module.EXPIRE] = store_module.format_timestamp(token.expiration)

        # Last used role wins
        conf[store_module.ROLE_ARN] = profile.role_arn
        conf[store_module.PRINCIPAL_ARN] = profile.principal_arn
    return store


def write_profiles(
    store: ProfileStore, profiles: Mapping[str, ProfileWrite], options: Options
) -> Result[None, StoreSaveError]:
    """Merge and persist: credentials file first, then the config file.

    A failed config write leaves the credentials file already updated.
    """
    merge_profiles(store, profiles, options)
    logger.debug("Writing profiles: {}", ", ".join(profiles))
    return store_module.save(store, options.credentials_file, options.config_file)
