"""Filesystem locations used by the CLI."""

import os
from pathlib import Path

APP_NAME = "cago"
RC_ENV_VAR = "CAGO_RC"


def rc_path() -> Path:
    """~/.cagorc, unless CAGO_RC points elsewhere."""
    override = os.environ.get(RC_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / f".{APP_NAME}rc"


def plugin_dir() -> Path:
    """~/.cago/"""
    return Path.home() / f".{APP_NAME}"


def resolve(path: str) -> Path:
    """Expand a leading ~ in a configured path."""
    return Path(path).expanduser()


def selection_file() -> Path:
    """~/.cago/cago.profile.txt, the last profile picked by choose-profile."""
    return plugin_dir() / f"{APP_NAME}.profile.txt"
