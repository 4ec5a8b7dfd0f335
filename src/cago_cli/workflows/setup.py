"""Setup workflow - create local files and check plugins."""

from dataclasses import dataclass
from pathlib import Path

from cago_cli.lib import options as options_module
from cago_cli.lib import paths
from cago_cli.lib import store as store_module
from cago_cli.lib.errors import OptionsLoadError, OutdatedOptionsError, SetupError
from cago_cli.lib.options import ROLES_SOURCE_SETTINGS, Options
from cago_cli.lib.plugins import missing_plugins
from cago_cli.lib.result import Err, Ok, Result

type SetupFailure = SetupError | OptionsLoadError | OutdatedOptionsError


@dataclass(frozen=True)
class SetupReport:
    options: Options
    created: tuple[Path, ...]
    missing_plugins: tuple[str, ...]


def _create_rc(path: Path) -> Result[bool, SetupError]:
    if path.exists():
        return Ok(False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(options_module.default_rc(), encoding="utf-8")
    except OSError as e:
        return Err(SetupError(path, str(e)))
    return Ok(True)


def _create_file(path: Path) -> Result[bool, SetupError]:
    if path.exists():
        return Ok(False)
    try:
        store_module.ensure_file(path)
    except OSError as e:
        return Err(SetupError(path, str(e)))
    return Ok(True)


def _create_dir(path: Path) -> Result[bool, SetupError]:
    if path.is_dir():
        return Ok(False)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(SetupError(path, str(e)))
    return Ok(True)


def setup(rc_path: Path | None = None) -> Result[SetupReport, SetupFailure]:
    """Idempotent: only missing paths are created.

    1. Write a default rc file if there is none
    2. Load options from it
    3. Create the credentials and config files and the plugin directory
    4. Report configured plugins that are not installed
    """
    rc = rc_path or paths.rc_path()
    created: list[Path] = []

    match _create_rc(rc):
        case Err() as e:
            return e
        case Ok(True):
            created.append(rc)
        case Ok(False):
            pass

    match options_module.load(rc):
        case Err() as e:
            return e
        case Ok(options):
            pass

    steps = [
        (_create_file, options.credentials_file),
        (_create_file, options.config_file),
        (_create_dir, paths.plugin_dir()),
    ]
    for step, path in steps:
        match step(path):
            case Err() as e:
                return e
            case Ok(True):
                created.append(path)
            case Ok(False):
                pass

    missing = () if options.roles_source == ROLES_SOURCE_SETTINGS else missing_plugins(options)
    return Ok(SetupReport(options=options, created=tuple(created), missing_plugins=missing))
