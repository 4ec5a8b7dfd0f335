"""Error types for the cago CLI.

All errors are frozen dataclasses - no exceptions in business logic.
Pattern match on these in the CLI layer to provide user-friendly messages.
"""

from dataclasses import dataclass
from pathlib import Path

# =============================================================================
# Role Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class MalformedArnError:
    """Role ARN does not look like arn:aws:iam::<account>:role/<name>."""

    role_arn: str


@dataclass(frozen=True, slots=True)
class EmptyRoleListError:
    """The role source returned no roles."""

    source: str


@dataclass(frozen=True, slots=True)
class MissingRolesConfigError:
    """Roles source is 'settings' but the rc file has no roles."""

    rc_path: Path


# =============================================================================
# Role Source Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class RoleSourceError:
    """A role source for a hook failed or nothing is registered for it."""

    hook: str
    reason: str


@dataclass(frozen=True, slots=True)
class MissingPluginsError:
    """Plugins named in the rc file are not installed."""

    plugins: tuple[str, ...]


# =============================================================================
# Federation Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class AssumeRoleError:
    """AssumeRoleWithSAML failed."""

    role_arn: str
    reason: str


# =============================================================================
# Options Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class OptionsLoadError:
    """The rc file is missing or could not be parsed."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class OutdatedOptionsError:
    """The rc file predates the supported rc_version."""

    path: Path
    found: str | None
    required: str


# =============================================================================
# Store Errors
# =============================================================================


@dataclass(frozen=True, slots=True)
class StoreLoadError:
    """Failed to read or parse a credentials/config file."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class StoreSaveError:
    """Failed to write a credentials/config file."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class NoProfilesError:
    """The credentials file holds no profiles to choose from."""

    path: Path


@dataclass(frozen=True, slots=True)
class ProfileNotFoundError:
    """Profile does not exist in the credentials file."""

    profile: str


@dataclass(frozen=True, slots=True)
class ProfileKeyNotFoundError:
    """Profile exists but has no such key."""

    profile: str
    key: str


@dataclass(frozen=True, slots=True)
class SetupError:
    """Creating local files or directories failed."""

    path: Path
    reason: str


# =============================================================================
# Type Aliases for Error Unions
# =============================================================================

type CatalogError = (
    MalformedArnError
    | EmptyRoleListError
    | MissingRolesConfigError
    | RoleSourceError
)
type UpdateError = CatalogError | StoreLoadError | StoreSaveError | AssumeRoleError
type RefreshError = CatalogError | StoreLoadError | StoreSaveError | AssumeRoleError
type ExcludeError = StoreLoadError | StoreSaveError
type EnvError = StoreLoadError | ProfileNotFoundError | ProfileKeyNotFoundError
type ChooseError = StoreLoadError | StoreSaveError | NoProfilesError
