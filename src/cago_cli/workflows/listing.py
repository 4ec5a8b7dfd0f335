"""List workflow - which profiles are available and which are excluded."""

from dataclasses import dataclass

from cago_cli.lib import store as store_module
from cago_cli.lib.errors import StoreLoadError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import StoredProfile


@dataclass(frozen=True)
class ProfileListing:
    available: tuple[StoredProfile, ...]
    excluded: tuple[StoredProfile, ...]


def list_profiles(options: Options) -> Result[ProfileListing, StoreLoadError]:
    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass

    available: list[StoredProfile] = []
    excluded: list[StoredProfile] = []
    for name in store.profile_names():
        profile = store.profile(name)
        assert profile is not None
        (excluded if profile.excluded else available).append(profile)

    return Ok(ProfileListing(available=tuple(available), excluded=tuple(excluded)))
