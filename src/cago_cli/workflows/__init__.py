"""Workflows layer - orchestrate operations into user intents."""

from cago_cli.workflows.choose import pick_profile
from cago_cli.workflows.env import get_profile_key, profile_exports
from cago_cli.workflows.exclude import exclude
from cago_cli.workflows.listing import list_profiles
from cago_cli.workflows.refresh import refresh
from cago_cli.workflows.setup import setup
from cago_cli.workflows.update import update

__all__ = [
    "update",
    "refresh",
    "exclude",
    "list_profiles",
    "setup",
    "profile_exports",
    "get_profile_key",
    "pick_profile",
]
