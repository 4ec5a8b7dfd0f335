"""Exclude workflow - keep chosen profiles out of refresh."""

from collections.abc import Collection
from dataclasses import dataclass

from cago_cli.lib import store as store_module
from cago_cli.lib.console import Console
from cago_cli.lib.errors import ExcludeError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.lib.store import EXCLUDE, ProfileStore


@dataclass(frozen=True)
class ExcludeResult:
    """Excluded profiles after the change. `profiles` is empty if there were none."""

    profiles: tuple[str, ...]
    excluded: tuple[str, ...]


def apply_exclusions(store: ProfileStore, selected: Collection[str]) -> ProfileStore:
    """Mark selected profiles excluded and clear the flag on the others.

    A config section left empty after clearing the flag is removed.
    """
    for name in store.profile_names():
        if name in selected:
            store.config.setdefault(name, {})[EXCLUDE] = "true"
        elif store.is_excluded(name):
            del store.config[name][EXCLUDE]
            if not store.config[name]:
                del store.config[name]
    return store


def exclude(options: Options, console: Console) -> Result[ExcludeResult, ExcludeError]:
    """Prompt for the excluded set and persist it to the config file only."""
    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass

    names = store.profile_names()
    if not names:
        return Ok(ExcludeResult(profiles=(), excluded=()))

    selected = console.choose_many(
        "Please choose the AWS profile(s) you wish to exclude from refresh:",
        [(name, name) for name in names],
        checked=[name for name in names if store.is_excluded(name)],
    )

    apply_exclusions(store, set(selected))
    match store_module.save_config(store, options.config_file):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return Ok(
        ExcludeResult(
            profiles=tuple(names),
            excluded=tuple(name for name in names if store.is_excluded(name)),
        )
    )
