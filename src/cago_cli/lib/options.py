"""User options - the JSON rc file (~/.cagorc).

Example:

    {
      "rc_version": "1.0.1",
      "aws": {
        "region": "us-east-1",
        "outputFormat": "json",
        "credentialsPath": "~/.aws/credentials",
        "cagoConfigPath": "~/.aws/cagoConfig",
        "rolesSource": "settings",
        "useHttpsProxy": true,
        "refreshMinutes": 10
      },
      "plugins": {"cago-okta": "cago-okta>=1.0"},
      "config": {"cago-okta": {"org": "example"}},
      "roles": [{"roleArn": "...", "principalArn": "..."}],
      "accounts": {"123456789012": "prod"},
      "regions": {"123456789012": "eu-west-1"}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from loguru import logger

from cago_cli.lib import paths
from cago_cli.lib.errors import OptionsLoadError, OutdatedOptionsError
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import RoleDescriptor

RC_VERSION = "1.0.1"

ROLES_SOURCE_SETTINGS = "settings"
ROLES_SOURCE_PLUGIN = "plugin"

# rc key -> Options field, for the "aws" block
_AWS_KEYS = {
    "region": "region",
    "outputFormat": "output_format",
    "credentialsPath": "credentials_path",
    "cagoConfigPath": "config_path",
    "rolesSource": "roles_source",
    "useHttpsProxy": "use_https_proxy",
    "refreshMinutes": "refresh_minutes",
}


def _aws_value(key: str, value: Any) -> Any:
    """Check one value of the "aws" block. refreshMinutes also accepts a numeric string."""
    if key == "useHttpsProxy":
        if not isinstance(value, bool):
            raise TypeError(f"aws.{key} must be true or false")
        return value
    if key == "refreshMinutes":
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"aws.{key} must be a whole number of minutes")
        return value
    if not isinstance(value, str):
        raise TypeError(f"aws.{key} must be a string")
    return value


def _string_map(key: str, value: Any) -> dict[str, str]:
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise TypeError(f"{key} must map names to strings")
    return dict(value)


@dataclass(frozen=True)
class Options:
    """Effective options. Defaults apply to anything the rc file omits."""

    rc_path: Path
    rc_version: str | None = RC_VERSION
    region: str = "us-east-1"
    output_format: str = "json"
    credentials_path: str = "~/.aws/credentials"
    config_path: str = "~/.aws/cagoConfig"
    roles_source: str = ROLES_SOURCE_PLUGIN
    use_https_proxy: bool = True
    refresh_minutes: int = 10
    plugins: dict[str, str] = field(default_factory=dict)
    plugin_config: dict[str, Any] = field(default_factory=dict)
    roles: tuple[RoleDescriptor, ...] | None = None
    accounts: dict[str, str] = field(default_factory=dict)
    regions: dict[str, str] = field(default_factory=dict)

    @property
    def credentials_file(self) -> Path:
        return paths.resolve(self.credentials_path)

    @property
    def config_file(self) -> Path:
        return paths.resolve(self.config_path)

    @classmethod
    def from_dict(cls, rc_path: Path, raw: dict[str, Any]) -> Self:
        """Build from the parsed rc file. Raises TypeError for a value of the wrong type."""
        kwargs: dict[str, Any] = {"rc_path": rc_path, "rc_version": raw.get("rc_version")}
        aws = raw.get("aws") or {}
        if not isinstance(aws, dict):
            raise TypeError("aws must be an object")
        for key, name in _AWS_KEYS.items():
            if key in aws:
                kwargs[name] = _aws_value(key, aws[key])
        if raw.get("plugins"):
            kwargs["plugins"] = _string_map("plugins", raw["plugins"])
        if raw.get("config"):
            if not isinstance(raw["config"], dict):
                raise TypeError("config must be an object")
            kwargs["plugin_config"] = dict(raw["config"])
        if raw.get("roles") is not None:
            if not isinstance(raw["roles"], list):
                raise TypeError("roles must be a list")
            kwargs["roles"] = tuple(RoleDescriptor.from_dict(r) for r in raw["roles"])
        if raw.get("accounts"):
            kwargs["accounts"] = _string_map("accounts", raw["accounts"])
        if raw.get("regions"):
            kwargs["regions"] = _string_map("regions", raw["regions"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the rc file shape."""
        data: dict[str, Any] = {
            "rc_version": self.rc_version,
            "aws": {key: getattr(self, name) for key, name in _AWS_KEYS.items()},
            "plugins": self.plugins,
            "config": self.plugin_config,
            "accounts": self.accounts,
            "regions": self.regions,
        }
        if self.roles is not None:
            data["roles"] = [
                {"roleArn": r.role_arn, "principalArn": r.principal_arn} for r in self.roles
            ]
        return data


def _version_tuple(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in version.split("-")[0].split("."))


def _is_current(version: str | None) -> bool:
    if not isinstance(version, str) or not version:
        return False
    try:
        return _version_tuple(version) >= _version_tuple(RC_VERSION)
    except ValueError:
        return False


def load(rc_path: Path | None = None) -> Result[Options, OptionsLoadError | OutdatedOptionsError]:
    """Load and validate the rc file."""
    path = rc_path or paths.rc_path()
    logger.debug("Loading options from {}", path)

    if not path.is_file():
        return Err(OptionsLoadError(path, "No configuration file found"))

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return Err(OptionsLoadError(path, str(e)))

    if not isinstance(raw, dict):
        return Err(OptionsLoadError(path, "Top-level value must be an object"))

    try:
        options = Options.from_dict(path, raw)
    except (KeyError, TypeError, AttributeError) as e:
        return Err(OptionsLoadError(path, f"Invalid setting: {e}"))

    if not _is_current(options.rc_version):
        return Err(OutdatedOptionsError(path, options.rc_version, RC_VERSION))

    return Ok(options)


def default_rc() -> str:
    """Contents of a fresh rc file, as written by `cago setup`."""
    return json.dumps(Options(rc_path=paths.rc_path()).to_dict(), indent=2) + "\n"
