"""CLI tests via click's CliRunner, one SQLite file per test."""

import pytest
from click.testing import CliRunner

from config import ENV_CLEAR_MODE, ENV_DB, ENV_LOG_LEVEL
from core.errors import ValidationError
from services.session_service import SessionService
from ui.cli import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    for var in (ENV_DB, ENV_CLEAR_MODE, ENV_LOG_LEVEL):
        monkeypatch.delenv(var, raising=False)
    db_path = str(tmp_path / "cli.db")
    runner = CliRunner()

    def _run(*args, extra=()):
        return runner.invoke(cli, ["--db", db_path, *extra, *args])

    return _run


class TestLifecycle:
    def test_full_round(self, run):
        assert run("add", "buy milk").exit_code == 0
        assert run("add", "call mom").exit_code == 0

        result = run("start")
        assert result.exit_code == 0
        assert "running" in result.output

        assert run("check", "1").exit_code == 0

        result = run("done")
        assert result.exit_code == 0, result.output
        assert "Diamond Achiever!" in result.output
        assert "1 done" in result.output

        result = run("trophies")
        assert "Total: 1" in result.output
        assert "Diamond" in result.output

        result = run("reset")
        assert "planning" in result.output
        result = run("list")
        assert "call mom" in result.output
        assert "buy milk" not in result.output

    def test_start_without_tasks_fails(self, run):
        result = run("start")
        assert result.exit_code == 1
        assert "add a task first" in result.output
        assert "planning" in run("status").output

    def test_done_without_checked_task_fails(self, run):
        run("add", "a")
        run("start")
        result = run("done")
        assert result.exit_code == 1
        assert "running" in run("status").output

    def test_check_while_planning_fails(self, run):
        run("add", "a")
        result = run("check", "1")
        assert result.exit_code == 1
        assert "only be checked while running" in result.output

    def test_clear_mode_all(self, run):
        run("add", "a")
        run("add", "b")
        run("reset", extra=("--clear-mode", "all"))
        assert "No tasks." in run("list").output

    def test_clear_mode_from_env(self, run, monkeypatch):
        monkeypatch.setenv(ENV_CLEAR_MODE, "all")
        run("add", "a")
        run("reset")
        assert "No tasks." in run("list").output

    def test_bad_clear_mode_env(self, run, monkeypatch):
        monkeypatch.setenv(ENV_CLEAR_MODE, "some")
        result = run("status")
        assert result.exit_code == 1
        assert "Invalid clear mode" in result.output


class TestEditing:
    def test_edit_rm_reorder(self, run):
        run("add", "a")
        run("add", "b")
        run("edit", "1", "alpha")
        result = run("reorder", "2", "1")
        assert result.exit_code == 0
        lines = [line for line in run("list").output.splitlines() if line.strip()]
        assert "b" in lines[0]
        assert "alpha" in lines[1]

        assert run("rm", "2").exit_code == 0
        assert run("rm", "2").exit_code == 1

    def test_empty_task_rejected(self, run):
        result = run("add", "   ")
        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_title_and_colors(self, run):
        assert "Groceries" in run("title", "Groceries").output
        result = run("colors", "--paper", "#ffffff")
        assert "paper #ffffff" in result.output
        assert run("colors", "--background", "blue").exit_code == 1


class TestLifecycleErrors:
    def test_done_reports_domain_error_cleanly(self, run, monkeypatch):
        def broken(self):
            raise ValidationError("End time is before start time.")

        run("add", "a")
        run("start")
        run("check", "1")
        monkeypatch.setattr(SessionService, "complete_session", broken)
        result = run("done")
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)
        assert "End time is before start time." in result.output

    def test_start_reports_domain_error_cleanly(self, run, monkeypatch):
        def broken(self):
            raise ValidationError("bad clock")

        run("add", "a")
        monkeypatch.setattr(SessionService, "start_session", broken)
        result = run("start")
        assert result.exit_code == 1
        assert "bad clock" in result.output
