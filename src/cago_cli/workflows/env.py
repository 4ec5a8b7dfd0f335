"""Env workflow - expose a stored profile to the shell."""

from cago_cli.lib import store as store_module
from cago_cli.lib.errors import EnvError, ProfileKeyNotFoundError, ProfileNotFoundError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.lib.store import ACCESS_KEY_ID, REGION, SECRET_ACCESS_KEY, SESSION_TOKEN

# Environment variable -> credentials key
ENV_KEYS = {
    "AWS_ACCESS_KEY_ID": ACCESS_KEY_ID,
    "AWS_SECRET_ACCESS_KEY": SECRET_ACCESS_KEY,
    "AWS_SESSION_TOKEN": SESSION_TOKEN,
    "AWS_DEFAULT_REGION": REGION,
}

PROXY_VARS = ("http_proxy", "https_proxy", "no_proxy", "HTTP_PROXY", "HTTPS_PROXY", "NO_PROXY")


def _section(options: Options, profile: str) -> Result[dict[str, str], EnvError]:
    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass
    if profile not in store.credentials:
        return Err(ProfileNotFoundError(profile))
    return Ok(store.credentials[profile])


def get_profile_key(options: Options, profile: str, key: str) -> Result[str, EnvError]:
    """Value of one key in a profile's credentials section."""
    match _section(options, profile):
        case Err() as e:
            return e
        case Ok(section):
            pass
    if key not in section:
        return Err(ProfileKeyNotFoundError(profile, key))
    return Ok(section[key])


def profile_exports(options: Options, profile: str) -> Result[list[tuple[str, str]], EnvError]:
    """(variable, value) pairs for a profile, AWS_PROFILE first.

    AWS_DEFAULT_REGION is skipped when the profile has no region; the
    credential keys are required.
    """
    match _section(options, profile):
        case Err() as e:
            return e
        case Ok(section):
            pass

    exports = [("AWS_PROFILE", profile)]
    for var, key in ENV_KEYS.items():
        if key in section:
            exports.append((var, section[key]))
        elif key != REGION:
            return Err(ProfileKeyNotFoundError(profile, key))
    return Ok(exports)
