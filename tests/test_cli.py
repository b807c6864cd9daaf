"""Tests for the click command-line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from prog_cli.cli import main
from prog_cli.storage import TaskStorage


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tasks_path, monkeypatch):
    monkeypatch.delenv("PROG_TASKS_FILE", raising=False)

    def _invoke(*args):
        return runner.invoke(main, ["--tasks-file", str(tasks_path), *args])
    return _invoke


class TestAddCommand:

    def test_add_prints_table_and_saves(self, invoke, tasks_path):
        result = invoke("add", "392 exam", "in 2 days")

        assert result.exit_code == 0, result.output
        assert "392 exam" in result.output
        assert "Medium" in result.output
        records = json.loads(tasks_path.read_text(encoding="utf-8"))
        assert records[0]["name"] == "392 exam"
        assert records[0]["weight"] == "Medium"

    def test_add_with_weight(self, invoke, tasks_path):
        result = invoke("add", "thesis", "in 10 days", "ultra-heavy")

        assert result.exit_code == 0, result.output
        assert TaskStorage(tasks_path).load()[0].weight.value == "UltraHeavy"

    def test_add_rejects_unknown_weight(self, invoke, tasks_path):
        result = invoke("add", "thesis", "tomorrow", "huge")

        assert result.exit_code != 0
        assert not tasks_path.exists()

    def test_add_with_bad_date_fails(self, invoke, tasks_path):
        result = invoke("add", "x", "zzqx")

        assert result.exit_code == 1
        assert "Could not understand date: 'zzqx'" in result.output
        assert not tasks_path.exists()


class TestListCommand:

    def test_list_empty(self, invoke):
        result = invoke("list")

        assert result.exit_code == 0
        assert "No tasks found." in result.output

    def test_list_after_add(self, invoke):
        invoke("add", "alpha", "in 3 days")
        invoke("add", "bravo", "tomorrow")

        result = invoke("list")

        assert result.exit_code == 0
        assert result.output.index("bravo") < result.output.index("alpha")

    def test_list_sort_option(self, invoke):
        invoke("add", "alpha", "in 3 days")
        invoke("add", "bravo", "tomorrow")

        result = invoke("list", "--sort", "alphabetical")

        assert result.exit_code == 0
        assert result.output.index("alpha") < result.output.index("bravo")

    def test_list_corrupt_file_fails(self, invoke, tasks_path):
        tasks_path.parent.mkdir(parents=True)
        tasks_path.write_text("{{{", encoding="utf-8")

        result = invoke("list")

        assert result.exit_code == 1
        assert "Could not parse task file" in result.output
        assert tasks_path.read_text(encoding="utf-8") == "{{{"


class TestResetCommand:

    def test_reset_then_list(self, invoke):
        invoke("add", "alpha", "tomorrow")

        reset = invoke("reset")
        listed = invoke("list")

        assert reset.exit_code == 0
        assert "Tasks cleared." in reset.output
        assert "No tasks found." in listed.output


class TestGroupOptions:

    def test_tasks_file_from_environment(self, runner, tmp_path):
        path = tmp_path / "env-tasks.json"

        result = runner.invoke(main, ["add", "env task", "tomorrow"], env={"PROG_TASKS_FILE": str(path)})

        assert result.exit_code == 0, result.output
        assert TaskStorage(path).load()[0].name == "env task"

    def test_tasks_file_from_config(self, runner, tmp_path, monkeypatch):
        monkeypatch.delenv("PROG_TASKS_FILE", raising=False)
        path = tmp_path / "configured.json"
        config = tmp_path / "config.yaml"
        config.write_text(f"tasks_file: {path}\n", encoding="utf-8")

        result = runner.invoke(main, ["--config", str(config), "add", "configured", "tomorrow"])

        assert result.exit_code == 0, result.output
        assert TaskStorage(path).load()[0].name == "configured"

    def test_missing_config_file_fails(self, invoke, tmp_path):
        result = invoke("--config", str(tmp_path / "nope.yaml"), "list")

        assert result.exit_code != 0

    def test_invalid_config_fails(self, runner, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("log_level: LOUD\n", encoding="utf-8")

        result = runner.invoke(main, ["--config", str(config), "list"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_verbose_flag(self, invoke):
        result = invoke("-v", "list")

        assert result.exit_code == 0
