"""Tests for the command-line front-end.

Test Categories:
- Habit management commands (add, edit, delete)
- Completion commands (done, undo, toggle)
- Views (today, week, stats, achievements, categories)
- Export / import
- Theme
- Exit codes for user errors
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names

from __future__ import annotations

from collections.abc import Callable, Iterator
import json
from pathlib import Path

from freezegun import freeze_time
import pytest

from habitquest import const
from habitquest.__main__ import main
from tests.helpers import make_habit

RunCli = Callable[..., int]


@pytest.fixture(autouse=True)
def frozen_clock() -> Iterator[None]:
    """Pin the CLI to Wednesday 2026-01-14."""
    with freeze_time("2026-01-14 12:00:00"):
        yield


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(const.ENV_CONFIG_PATH, raising=False)
    monkeypatch.delenv(const.ENV_LOG_LEVEL, raising=False)


@pytest.fixture
def storage(tmp_path: Path) -> Path:
    return tmp_path / "storage.json"


@pytest.fixture
def run(storage: Path) -> RunCli:
    """Run the CLI against the temporary storage file."""

    def _run(*argv: str) -> int:
        return main(["--storage", str(storage), *argv])

    return _run


def stored(storage: Path) -> list[dict]:
    return json.loads(json.loads(storage.read_text(encoding="utf-8"))["habits"])


class TestManageHabits:
    """add / edit / delete."""

    def test_add(self, run: RunCli, storage: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("add", "Read", "--xp", "15", "--category", "Mind") == 0
        assert "Added habit" in capsys.readouterr().out

        habit = stored(storage)[0]
        assert habit["name"] == "Read"
        assert habit["xp"] == 15
        assert habit["category"] == "Mind"

    def test_add_custom_days(self, run: RunCli, storage: Path) -> None:
        assert run("add", "Gym", "--schedule", "custom", "--days", "mon,wed,5") == 0
        assert stored(storage)[0]["customDays"] == [1, 3, 5]

    def test_add_custom_without_days_fails(
        self, run: RunCli, storage: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run("add", "Gym", "--schedule", "custom") == 1
        assert "customDays" in capsys.readouterr().err
        assert not storage.exists()

    def test_add_bad_xp_fails(self, run: RunCli) -> None:
        assert run("add", "Read", "--xp", "0") == 1

    def test_edit(self, run: RunCli, storage: Path) -> None:
        run("add", "Read")
        assert run("edit", "read", "--name", "Read books", "--xp", "20") == 0
        habit = stored(storage)[0]
        assert habit["name"] == "Read books"
        assert habit["xp"] == 20

    def test_edit_without_changes_fails(self, run: RunCli) -> None:
        run("add", "Read")
        assert run("edit", "Read") == 1

    def test_delete_by_id_prefix(self, run: RunCli, storage: Path) -> None:
        run("add", "Read")
        habit_id = stored(storage)[0]["id"]
        assert run("delete", habit_id[:6]) == 0
        assert stored(storage) == []

    def test_unknown_habit_fails(
        self, run: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run("done", "Nothing") == 1
        assert "No habit matches" in capsys.readouterr().err


class TestCompletionCommands:
    """done / undo / toggle."""

    def test_done_and_undo(
        self, run: RunCli, storage: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run("add", "Read")
        assert run("done", "Read") == 0
        assert "Completed Read (streak 1)" in capsys.readouterr().out
        assert stored(storage)[0]["completions"] == {"2026-01-14": True}

        assert run("done", "Read") == 0
        assert "already completed" in capsys.readouterr().out

        assert run("undo", "Read") == 0
        assert stored(storage)[0]["completions"] == {}

    def test_done_not_scheduled(
        self, run: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run("add", "Gym", "--schedule", "custom", "--days", "mon")
        assert run("done", "Gym") == 0
        assert "not scheduled today" in capsys.readouterr().out

    def test_toggle(self, run: RunCli, storage: Path, capsys: pytest.CaptureFixture[str]) -> None:
        run("add", "Read")
        assert run("toggle", "Read", "2026-01-13") == 0
        assert "2026-01-13: completed" in capsys.readouterr().out
        assert stored(storage)[0]["completions"] == {"2026-01-13": True}

    def test_toggle_bad_date(self, run: RunCli) -> None:
        run("add", "Read")
        assert run("toggle", "Read", "yesterday") == 1

    def test_streak_refreshed_on_start(self, run: RunCli, storage: Path) -> None:
        """A stale stored streak is corrected when the CLI loads."""
        storage.write_text(
            json.dumps({"habits": json.dumps([make_habit(streak=9)])}), encoding="utf-8"
        )
        assert run("today") == 0
        assert stored(storage)[0]["streak"] == 0


class TestViews:
    """today / week / stats / achievements / categories."""

    def test_today_lists_due_habits(
        self, run: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run("add", "Read")
        run("add", "Gym", "--schedule", "custom", "--days", "mon")
        capsys.readouterr()

        assert run("today") == 0
        out = capsys.readouterr().out
        assert "Read" in out
        assert "Gym" not in out

    def test_today_empty(self, run: RunCli, capsys: pytest.CaptureFixture[str]) -> None:
        assert run("today") == 0
        assert "No habits scheduled today." in capsys.readouterr().out

    def test_week(self, run: RunCli, capsys: pytest.CaptureFixture[str]) -> None:
        run("add", "Read")
        run("done", "Read")
        capsys.readouterr()

        assert run("week") == 0
        out = capsys.readouterr().out
        assert "Sun Mon Tue Wed Thu Fri Sat" in out
        assert "Week of 2026-01-11: 14% complete, 10 XP" in out

    def test_stats(self, run: RunCli, capsys: pytest.CaptureFixture[str]) -> None:
        run("add", "Read", "--xp", "15")
        run("done", "Read")
        capsys.readouterr()

        assert run("stats") == 0
        out = capsys.readouterr().out
        assert "Total XP:        15 (85 to next level)" in out
        assert "Level:           1" in out

    def test_achievements(self, run: RunCli, capsys: pytest.CaptureFixture[str]) -> None:
        run("add", "Read")
        capsys.readouterr()

        assert run("achievements") == 0
        out = capsys.readouterr().out
        assert "[*] Getting Started" in out
        assert "[ ] Week Warrior" in out

    def test_categories(self, run: RunCli, capsys: pytest.CaptureFixture[str]) -> None:
        run("add", "Read", "--category", "Mind")
        run("add", "Gym", "--category", "Health")
        run("add", "Walk", "--category", "Health")
        capsys.readouterr()

        assert run("categories") == 0
        assert capsys.readouterr().out.splitlines() == ["Mind", "Health"]


class TestExportImport:
    """export / import."""

    def test_export_to_directory(self, run: RunCli, tmp_path: Path) -> None:
        run("add", "Read")
        out_dir = tmp_path / "exports"
        out_dir.mkdir()

        assert run("export", "--output", str(out_dir)) == 0

        document = json.loads(
            (out_dir / "habit_tracker_backup_2026-01-14.json").read_text(encoding="utf-8")
        )
        assert document["version"] == "1.0"
        assert document["habits"][0]["name"] == "Read"

    def test_import_replaces_collection(
        self, run: RunCli, storage: Path, tmp_path: Path
    ) -> None:
        run("add", "Old")
        backup = tmp_path / "backup.json"
        backup.write_text(json.dumps([make_habit("n1", name="New")]), encoding="utf-8")

        assert run("import", str(backup), "--yes") == 0
        assert [habit["name"] for habit in stored(storage)] == ["New"]

    def test_import_declined(
        self,
        run: RunCli,
        storage: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        run("add", "Old")
        backup = tmp_path / "backup.json"
        backup.write_text(json.dumps([make_habit("n1", name="New")]), encoding="utf-8")
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert run("import", str(backup)) == 0
        assert "Import cancelled." in capsys.readouterr().out
        assert [habit["name"] for habit in stored(storage)] == ["Old"]

    def test_import_invalid_record(
        self,
        run: RunCli,
        storage: Path,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        run("add", "Old")
        broken = make_habit()
        del broken["xp"]
        backup = tmp_path / "backup.json"
        backup.write_text(json.dumps([broken]), encoding="utf-8")

        assert run("import", str(backup), "--yes") == 1
        assert "xp" in capsys.readouterr().err
        assert [habit["name"] for habit in stored(storage)] == ["Old"]

    def test_import_wrong_extension(self, run: RunCli, tmp_path: Path) -> None:
        backup = tmp_path / "backup.txt"
        backup.write_text("[]", encoding="utf-8")
        assert run("import", str(backup)) == 1

    def test_import_missing_file(self, run: RunCli, tmp_path: Path) -> None:
        assert run("import", str(tmp_path / "absent.json")) == 1

    def test_import_binary_file(
        self, run: RunCli, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        backup = tmp_path / "backup.json"
        backup.write_bytes(b"\xff\xfe[]")

        assert run("import", str(backup), "--yes") == 1
        assert "not a UTF-8 text file" in capsys.readouterr().err


class TestThemeAndConfig:
    """theme command and configuration handling."""

    def test_theme_toggle_persists(
        self, run: RunCli, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run("theme", "toggle") == 0
        assert run("theme") == 0
        assert capsys.readouterr().out.splitlines() == ["dark", "dark"]

    def test_default_theme_from_config(
        self, storage: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "habitquest.yaml"
        config.write_text("default_theme: dark\n", encoding="utf-8")
        assert main(["--config", str(config), "--storage", str(storage), "theme"]) == 0
        assert capsys.readouterr().out.strip() == "dark"

    def test_invalid_config_fails(
        self, storage: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "habitquest.yaml"
        config.write_text("log_level: LOUD\n", encoding="utf-8")
        assert main(["--config", str(config), "--storage", str(storage), "today"]) == 1
        assert "log_level" in capsys.readouterr().err

    def test_storage_path_from_config(
        self, tmp_path: Path
    ) -> None:
        target = tmp_path / "from-config.json"
        config = tmp_path / "habitquest.yaml"
        config.write_text(f"storage_path: {target}\n", encoding="utf-8")
        assert main(["--config", str(config), "add", "Read"]) == 0
        assert target.exists()
