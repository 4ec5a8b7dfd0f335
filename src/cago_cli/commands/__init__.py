"""Commands layer - CLI facade over workflows."""

from cago_cli.commands.choose import choose_profile
from cago_cli.commands.env import env, get_profile_key
from cago_cli.commands.exclude import exclude
from cago_cli.commands.listing import list_cmd
from cago_cli.commands.refresh import refresh
from cago_cli.commands.setup import setup
from cago_cli.commands.update import update

__all__ = [
    "update",
    "refresh",
    "exclude",
    "list_cmd",
    "setup",
    "env",
    "get_profile_key",
    "choose_profile",
]
