"""Shared pytest fixtures for cago-cli tests."""

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from cago_cli.lib.errors import AssumeRoleError
from cago_cli.lib.options import ROLES_SOURCE_SETTINGS, Options
from cago_cli.lib.plugins import GET_ROLES, RoleSourceRegistry, SettingsRoleSource
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import AssumedCredentials, RoleDescriptor

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)

ROLE_ARN = "arn:aws:iam::123456789012:role/Test"
PRINCIPAL_ARN = "arn:aws:iam::123456789012:saml-provider/IdP"
OTHER_ROLE_ARN = "arn:aws:iam::111111111111:role/Admin"
OTHER_PRINCIPAL_ARN = "arn:aws:iam::111111111111:saml-provider/IdP"


@pytest.fixture
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for var in ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def temp_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point HOME (and so ~) at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("CAGO_RC", raising=False)
    return home


def make_options(tmp_path: Path, **overrides: Any) -> Options:
    """Options pointing at files under tmp_path, roles served from settings."""
    values: dict[str, Any] = {
        "rc_path": tmp_path / ".cagorc",
        "credentials_path": str(tmp_path / "aws" / "credentials"),
        "config_path": str(tmp_path / "aws" / "cagoConfig"),
        "roles_source": ROLES_SOURCE_SETTINGS,
        "roles": (RoleDescriptor(ROLE_ARN, PRINCIPAL_ARN),),
    }
    values.update(overrides)
    return Options(**values)


@pytest.fixture
def options(tmp_path: Path) -> Options:
    return make_options(tmp_path)


SAML_ASSERTION = "PHNhbWw+"


class AssertionSource:
    """Adds a SAML assertion on top of whatever ran before it."""

    hook = GET_ROLES

    def run(self, options: Options, previous: dict[str, Any]) -> dict[str, Any]:
        return {**previous, "SAMLResponse": SAML_ASSERTION}


@pytest.fixture
def registry() -> RoleSourceRegistry:
    """Settings roles followed by a SAML assertion."""
    reg = RoleSourceRegistry()
    reg.register("settings", SettingsRoleSource())
    reg.register("assertion", AssertionSource())
    return reg


def write_ini(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def make_credentials(
    expiration: datetime | None = None, key: str = "AKIAEXAMPLE"
) -> AssumedCredentials:
    return AssumedCredentials(
        access_key_id=f" {key} ",
        secret_access_key=" secret\n",
        session_token=" token ",
        expiration=expiration or NOW + timedelta(hours=1),
    )


@dataclass
class FakeSts:
    """Stands in for StsContext. Fails for role ARNs listed in `failing`."""

    failing: set[str] = field(default_factory=set)
    calls: list[tuple[str, str, str | None]] = field(default_factory=list)
    prepared: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def prepare(self) -> None:
        self.prepared = True

    def assume_role_with_saml(
        self, role_arn: str, principal_arn: str, saml_assertion: str | None
    ) -> Result[AssumedCredentials, AssumeRoleError]:
        with self._lock:
            self.calls.append((role_arn, principal_arn, saml_assertion))
        if role_arn in self.failing:
            return Err(AssumeRoleError(role_arn, "AccessDenied"))
        return Ok(make_credentials(key=f"AKIA{role_arn.split('::')[1][:12]}"))


@dataclass
class FakeConsole:
    """Scripted answers for workflows.

    `choices` maps a substring of the question to the value to return, or to a
    callable receiving the offered choices.
    """

    choices: dict[str, str | Callable[[Sequence[tuple[str, str]]], str]] = field(
        default_factory=dict
    )
    many: list[str] = field(default_factory=list)
    confirm_answer: bool = True
    text_answer: str = ""
    messages: list[str] = field(default_factory=list)
    asked: list[str] = field(default_factory=list)
    offered_checked: list[str] = field(default_factory=list)

    def message(self, text: str) -> None:
        self.messages.append(text)

    def warning(self, text: str) -> None:
        self.messages.append(text)

    def confirm(self, question: str, default: bool = True) -> bool:
        self.asked.append(question)
        return self.confirm_answer

    def choose(self, question: str, choices: Sequence[tuple[str, str]]) -> str:
        self.asked.append(question)
        for fragment, answer in self.choices.items():
            if fragment in question:
                return answer(choices) if callable(answer) else answer
        raise AssertionError(f"Unexpected question: {question}")

    def choose_many(
        self, question: str, choices: Sequence[tuple[str, str]], checked: Sequence[str] = ()
    ) -> list[str]:
        self.asked.append(question)
        self.offered_checked = list(checked)
        return list(self.many)

    def text(self, question: str) -> str:
        self.asked.append(question)
        return self.text_answer
