"""Role sources and the registry that runs them.

A role source answers a hook (only "get-roles" today) with a dict shaped like

    {"roles": [{"roleArn": ..., "principalArn": ...}], "SAMLResponse": "..."}

Plugins are installed Python distributions exposing an object in the
`cago.plugins` entry point group. The object needs a `hook` attribute and a
`run(options, previous)` method. Several sources on one hook are chained: each
receives the previous source's result.

The registry is built once per process and handed to the workflows that
need it; tests build their own with fake sources.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from importlib.metadata import EntryPoint, entry_points
from typing import Any, Protocol

from loguru import logger

from cago_cli.lib.errors import MissingPluginsError, RoleSourceError
from cago_cli.lib.options import ROLES_SOURCE_SETTINGS, Options
from cago_cli.lib.result import Err, Ok, Result

ENTRY_POINT_GROUP = "cago.plugins"
GET_ROLES = "get-roles"


class RoleSource(Protocol):
    hook: str

    def run(self, options: Options, previous: dict[str, Any]) -> dict[str, Any]: ...


@dataclass(frozen=True)
class SettingsRoleSource:
    """Serves the static `roles` list from the rc file."""

    hook: str = GET_ROLES

    def run(self, options: Options, previous: dict[str, Any]) -> dict[str, Any]:
        roles = [
            {"roleArn": r.role_arn, "principalArn": r.principal_arn}
            for r in (options.roles or ())
        ]
        return {**previous, "roles": roles}


@dataclass
class RoleSourceRegistry:
    """Hook name -> ordered list of (name, source)."""

    sources: dict[str, list[tuple[str, RoleSource]]] = field(default_factory=dict)

    def register(self, name: str, source: RoleSource) -> None:
        self.sources.setdefault(source.hook, []).append((name, source))
        logger.debug("Registered role source {} for hook {}", name, source.hook)

    def names(self, hook: str) -> list[str]:
        return [name for name, _ in self.sources.get(hook, [])]

    def run(self, hook: str, options: Options) -> Result[dict[str, Any], RoleSourceError]:
        """Run every source registered for the hook, in registration order."""
        registered = self.sources.get(hook, [])
        if not registered:
            return Err(RoleSourceError(hook, f"No plugin setup for hook: {hook}"))

        results: dict[str, Any] = {}
        for name, source in registered:
            logger.debug("Running role source {}", name)
            try:
                results = source.run(options, dict(results))
            except Exception as e:  # third-party code
                logger.opt(exception=True).debug("Role source {} failed", name)
                return Err(RoleSourceError(hook, f"{name}: {e}"))
            if not isinstance(results, dict):
                return Err(RoleSourceError(hook, f"{name}: expected a dict, got {type(results).__name__}"))
        return Ok(results)


def _installed(group: str = ENTRY_POINT_GROUP) -> dict[str, EntryPoint]:
    return {ep.name: ep for ep in entry_points(group=group)}


def missing_plugins(options: Options, installed: Iterable[str] | None = None) -> tuple[str, ...]:
    """Configured plugin names with no installed entry point."""
    available = set(installed if installed is not None else _installed())
    return tuple(sorted(name for name in options.plugins if name not in available))


def build_registry(options: Options) -> Result[RoleSourceRegistry, MissingPluginsError | RoleSourceError]:
    """Registry for this process: the settings source, or the configured plugins."""
    registry = RoleSourceRegistry()

    if options.roles_source == ROLES_SOURCE_SETTINGS:
        registry.register("settings", SettingsRoleSource())
        return Ok(registry)

    installed = _installed()
    missing = missing_plugins(options, installed)
    if missing:
        return Err(MissingPluginsError(missing))

    for name in options.plugins:
        try:
            source = installed[name].load()
        except Exception as e:  # third-party import
            return Err(RoleSourceError(GET_ROLES, f"Could not load plugin {name}: {e}"))
        registry.register(name, source)

    return Ok(registry)
