"""Choose-profile workflow - pick one stored profile for wrapper scripts."""

from pathlib import Path

from loguru import logger

from cago_cli.lib import paths
from cago_cli.lib import store as store_module
from cago_cli.lib.console import Console
from cago_cli.lib.errors import ChooseError, NoProfilesError, StoreSaveError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Err, Ok, Result


def save_selection(name: str, path: Path) -> Result[None, StoreSaveError]:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(name, encoding="utf-8")
    except OSError as e:
        return Err(StoreSaveError(path, str(e)))
    return Ok(None)


def pick_profile(
    options: Options, console: Console, selection_path: Path | None = None
) -> Result[str, ChooseError]:
    """Prompt for a profile and record the choice.

    1. Load the profile store
    2. Prompt for one of its profiles, excluded ones included
    3. Write the name to the selection file (~/.cago/cago.profile.txt)
    """
    match store_module.load(options.credentials_file, options.config_file):
        case Err() as e:
            return e
        case Ok(store):
            pass

    names = store.profile_names()
    if not names:
        return Err(NoProfilesError(options.credentials_file))

    name = console.choose("Choose a profile:", [(n, n) for n in names])

    path = selection_path or paths.selection_file()
    logger.debug("Writing selected profile to {}", path)
    match save_selection(name, path):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return Ok(name)
