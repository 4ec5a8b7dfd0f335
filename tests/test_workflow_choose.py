"""Tests for workflows/choose.py - choose-profile."""

from collections.abc import Sequence
from pathlib import Path

from conftest import FakeConsole, write_ini

from cago_cli.lib.errors import NoProfilesError, StoreSaveError
from cago_cli.lib.options import Options
from cago_cli.lib.result import Err, Ok
from cago_cli.workflows.choose import pick_profile, save_selection


class TestPickProfile:
    def test_writes_selection(self, options: Options, tmp_path: Path) -> None:
        write_ini(options.credentials_file, "[dev]\n\n[prod]\n")
        write_ini(options.config_file, "[prod]\nexclude = true\n")
        offered: list[tuple[str, str]] = []

        def pick(choices: Sequence[tuple[str, str]]) -> str:
            offered.extend(choices)
            return "prod"

        console = FakeConsole(choices={"Choose a profile": pick})
        selection = tmp_path / "cago" / "cago.profile.txt"

        result = pick_profile(options, console, selection)

        assert result == Ok("prod")
        # Excluded profiles are still offered
        assert offered == [("dev", "dev"), ("prod", "prod")]
        assert selection.read_text() == "prod"

    def test_default_selection_file(self, options: Options, temp_home: Path) -> None:
        write_ini(options.credentials_file, "[dev]\n")
        console = FakeConsole(choices={"Choose a profile": "dev"})

        assert pick_profile(options, console) == Ok("dev")
        assert (temp_home / ".cago" / "cago.profile.txt").read_text() == "dev"

    def test_no_profiles(self, options: Options, tmp_path: Path) -> None:
        console = FakeConsole()

        result = pick_profile(options, console, tmp_path / "selection.txt")

        assert result == Err(NoProfilesError(options.credentials_file))
        assert console.asked == []
        assert not (tmp_path / "selection.txt").exists()


class TestSaveSelection:
    def test_unwritable_path(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        path = blocker / "cago.profile.txt"

        result = save_selection("dev", path)

        assert isinstance(result, Err)
        assert isinstance(result.error, StoreSaveError)
        assert result.error.path == path
