"""cago data models.

Pure data structures. No storage coupling: the ini store and the STS client
convert to and from these.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class RoleDescriptor:
    """A role the user may assume, as supplied by a role source."""

    role_arn: str
    principal_arn: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build from the camelCase shape role sources and the rc file use.

        Raises KeyError for a missing key and TypeError for a non-string value.
        """
        role_arn, principal_arn = data["roleArn"], data["principalArn"]
        for key, value in (("roleArn", role_arn), ("principalArn", principal_arn)):
            if not isinstance(value, str):
                raise TypeError(f"{key} must be a string, got {type(value).__name__}")
        return cls(role_arn=role_arn, principal_arn=principal_arn)


@dataclass(frozen=True, slots=True)
class ParsedRoleArn:
    """Account id and role name extracted from a role ARN."""

    account_id: str
    role_name: str


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Display-ready metadata for one assumable role."""

    role_arn: str
    account_name: str
    role_name: str
    principal_arn: str
    region: str

    def label(self, pad_width: int) -> str:
        """Account name padded to a column, then the role name."""
        return f"{self.account_name.ljust(pad_width)} {self.role_name}"


@dataclass(frozen=True)
class RoleCatalog:
    """Roles available for this invocation, keyed by role ARN.

    Built fresh on every run from whatever role source is configured.
    """

    entries: dict[str, CatalogEntry]
    pad_width: int
    saml_response: str | None = None

    def choices(self) -> list[tuple[str, str]]:
        """(label, role_arn) pairs sorted by label."""
        return sorted(
            ((entry.label(self.pad_width), arn) for arn, entry in self.entries.items()),
            key=lambda choice: choice[0],
        )


@dataclass(frozen=True, slots=True)
class StoredProfile:
    """A named profile from the credentials file plus its config section."""

    name: str
    access_key_id: str | None
    secret_access_key: str | None
    session_token: str | None
    expires_at: datetime | None
    region: str | None
    output_format: str | None
    role_arn: str | None = None
    principal_arn: str | None = None
    excluded: bool = False


@dataclass(frozen=True, slots=True)
class ExpiredProfileRequest:
    """A profile that needs fresh credentials, with the role to use if known."""

    profile_name: str
    role_arn: str | None
    principal_arn: str | None
    region: str

    @property
    def has_role(self) -> bool:
        return bool(self.role_arn) and bool(self.principal_arn)


@dataclass(frozen=True, slots=True)
class AssumedCredentials:
    """Temporary credentials returned by AssumeRoleWithSAML."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime

    @classmethod
    def from_response(cls, credentials: dict[str, Any]) -> Self:
        """Build from the `Credentials` member of an STS response."""
        return cls(
            access_key_id=credentials["AccessKeyId"],
            secret_access_key=credentials["SecretAccessKey"],
            session_token=credentials["SessionToken"],
            expiration=credentials["Expiration"],
        )


@dataclass(frozen=True, slots=True)
class ProfileWrite:
    """Everything the credential writer needs for one profile."""

    role_arn: str
    principal_arn: str
    credentials: AssumedCredentials
    region: str | None = None
