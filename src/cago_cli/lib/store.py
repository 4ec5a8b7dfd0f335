"""Local profile store - the AWS credentials file and the cago config file.

Both are flat ini files with one section per profile. Sections are kept as
plain string dicts so keys this tool does not own survive a load/save cycle.

Writes go to a temporary file in the same directory which then replaces the
target, so a single file is never left half-written. The two files are still
written one after the other: if the config write fails, the credentials
write has already happened.
"""

import configparser
import os
import tempfile
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from cago_cli.lib.errors import StoreLoadError, StoreSaveError
from cago_cli.lib.result import Err, Ok, Result
from cago_cli.models import StoredProfile

# Credentials files hold secrets
FILE_MODE = 0o600
DIR_MODE = 0o700

# Credentials section keys
OUTPUT = "output"
REGION = "region"
ACCESS_KEY_ID = "aws_access_key_id"
SECRET_ACCESS_KEY = "aws_secret_access_key"
SESSION_TOKEN = "aws_session_token"
EXPIRE = "expire"

# Config section keys
ROLE_ARN = "role_arn"
PRINCIPAL_ARN = "principal_arn"
EXCLUDE = "exclude"

# A profile literally named "DEFAULT" must stay an ordinary section
_NO_DEFAULT_SECTION = "\x00cago-no-default\x00"

type Sections = dict[str, dict[str, str]]


@dataclass
class ProfileStore:
    """In-memory view of both files."""

    credentials: Sections = field(default_factory=dict)
    config: Sections = field(default_factory=dict)

    def profile_names(self) -> list[str]:
        """Profiles are whatever has a credentials section, sorted."""
        return sorted(self.credentials)

    def is_excluded(self, name: str) -> bool:
        return parse_bool(self.config.get(name, {}).get(EXCLUDE))

    def expires_at(self, name: str) -> datetime | None:
        return parse_timestamp(self.credentials.get(name, {}).get(EXPIRE))

    def profile(self, name: str) -> StoredProfile | None:
        if name not in self.credentials:
            return None
        creds = self.credentials[name]
        conf = self.config.get(name, {})
        return StoredProfile(
            name=name,
            access_key_id=creds.get(ACCESS_KEY_ID),
            secret_access_key=creds.get(SECRET_ACCESS_KEY),
            session_token=creds.get(SESSION_TOKEN),
            expires_at=parse_timestamp(creds.get(EXPIRE)),
            region=creds.get(REGION),
            output_format=creds.get(OUTPUT),
            role_arn=conf.get(ROLE_ARN),
            principal_arn=conf.get(PRINCIPAL_ARN),
            excluded=parse_bool(conf.get(EXCLUDE)),
        )


def parse_bool(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp. Naive values are taken as UTC.

    Returns None for missing or unparseable values.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Canonical form: UTC, millisecond precision, trailing Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def _parser() -> configparser.RawConfigParser:
    parser = configparser.RawConfigParser(default_section=_NO_DEFAULT_SECTION)
    # Keep key case as written
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def ensure_file(path: Path) -> None:
    """Create an empty file (and its directory) if missing."""
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
    path.touch(mode=FILE_MODE)
    logger.debug("Created empty {}", path)


def read_sections(path: Path) -> Result[Sections, StoreLoadError]:
    """Read one ini file, creating it empty if it does not exist."""
    parser = _parser()
    try:
        ensure_file(path)
        with path.open(encoding="utf-8") as f:
            parser.read_file(f, source=str(path))
    except (OSError, configparser.Error) as e:
        return Err(StoreLoadError(path, str(e)))
    return Ok({section: dict(parser.items(section)) for section in parser.sections()})


def write_sections(path: Path, sections: Sections) -> Result[None, StoreSaveError]:
    """Replace one ini file with the given sections."""
    parser = _parser()
    for name, values in sections.items():
        parser.add_section(name)
        for key, value in values.items():
            parser.set(name, key, value)

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            parser.write(f)
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        return Err(StoreSaveError(path, str(e)))

    logger.debug("Wrote {} section(s) to {}", len(sections), path)
    return Ok(None)


def load(credentials_path: Path, config_path: Path) -> Result[ProfileStore, StoreLoadError]:
    """Load both files."""
    match read_sections(credentials_path):
        case Err() as e:
            return e
        case Ok(credentials):
            pass

    match read_sections(config_path):
        case Err() as e:
            return e
        case Ok(config):
            pass

    return Ok(ProfileStore(credentials=credentials, config=config))


def save(
    store: ProfileStore, credentials_path: Path, config_path: Path
) -> Result[None, StoreSaveError]:
    """Write the credentials file, then the config file."""
    match write_sections(credentials_path, store.credentials):
        case Err() as e:
            return e
        case Ok(_):
            pass

    return save_config(store, config_path)


def save_config(store: ProfileStore, config_path: Path) -> Result[None, StoreSaveError]:
    """Write only the config file."""
    return write_sections(config_path, store.config)
