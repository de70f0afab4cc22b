"""Unit tests for the board-runner CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from board_runner import cli as cli_module
from board_runner.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text("queue:\n  order: created\n")
    return path


@pytest.fixture
def tasks_path(tmp_path: Path) -> Path:
    """Snapshot with one open epic, one closable epic and a loose task."""
    tasks = [
        {"id": "E1", "name": "Auth", "type": "Epic", "status": "In Progress",
         "createdTime": "2026-01-01T00:00:00Z"},
        {"id": "C1", "name": "Login", "status": "Not Started", "parentId": "E1",
         "createdTime": "2026-01-02T00:00:00Z"},
        {"id": "E2", "name": "Docs", "status": "In Progress",
         "createdTime": "2026-01-01T00:00:00Z"},
        {"id": "C2", "name": "Readme", "status": "Done", "parentId": "E2"},
        {"id": "T1", "name": "Cleanup", "status": "Not Started",
         "createdTime": "2026-01-03T00:00:00Z"},
    ]
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"tasks": tasks}))
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment overrides out of the tests."""
    for name in ("NOTION_STATUS_NOT_STARTED", "NOTION_STATUS_IN_PROGRESS", "NOTION_STATUS_DONE",
                 "NOTION_TYPE_EPIC", "NOTION_PROP_STATUS", "QUEUE_ORDER", "MAX_TASKS_PER_RUN",
                 "QUEUE_POLL_INTERVAL_MS", "QUEUE_DEBOUNCE_MS", "QUEUE_RUN_ON_STARTUP"):
        monkeypatch.delenv(name, raising=False)


class TestNextCommand:
    """Tests for the next command."""

    def test_next_task(self, runner, config_path, tasks_path):
        result = runner.invoke(cli, ["--config", str(config_path), "next", str(tasks_path)], obj={})

        assert result.exit_code == 0, result.output
        assert "C1" in result.output
        assert "not_started" in result.output

    def test_next_epic_flow(self, runner, config_path, tasks_path):
        result = runner.invoke(
            cli, ["--config", str(config_path), "next", "--epics", str(tasks_path)], obj={}
        )

        assert result.exit_code == 0, result.output
        assert "E1" in result.output
        assert "C1" in result.output

    def test_nothing_eligible(self, runner, config_path, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")

        result = runner.invoke(cli, ["--config", str(config_path), "next", str(path)], obj={})

        assert result.exit_code == 0
        assert "No eligible task" in result.output

    def test_invalid_json(self, runner, config_path, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(cli, ["--config", str(config_path), "next", str(path)], obj={})

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_non_utf8_file(self, runner, config_path, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe[]")

        result = runner.invoke(cli, ["--config", str(config_path), "next", str(path)], obj={})

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_task(self, runner, config_path, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"name": "no id"}]))

        result = runner.invoke(cli, ["--config", str(config_path), "next", str(path)], obj={})

        assert result.exit_code == 1
        assert "Invalid task" in result.output

    def test_invalid_config(self, runner, tmp_path, tasks_path):
        path = tmp_path / "bad.yaml"
        path.write_text("queue:\n  order: random\n")

        result = runner.invoke(cli, ["--config", str(path), "next", str(tasks_path)], obj={})

        assert result.exit_code == 1
        assert "Error loading config" in result.output


class TestEpicsCommand:
    """Tests for the epics command."""

    def test_lists_epics(self, runner, config_path, tasks_path):
        result = runner.invoke(cli, ["--config", str(config_path), "epics", str(tasks_path)], obj={})

        assert result.exit_code == 0, result.output
        assert "E1" in result.output
        assert "E2" in result.output
        assert "T1" not in result.output
        assert "Total: 2 epic(s)" in result.output

    def test_closable_column(self, runner, config_path, tasks_path):
        """Test only the epic whose children are all done is closable."""
        result = runner.invoke(cli, ["--config", str(config_path), "epics", str(tasks_path)], obj={})

        lines = result.output.splitlines()
        open_row = next(line for line in lines if " E1 " in line)
        closable_row = next(line for line in lines if " E2 " in line)
        assert "no" in open_row.split()
        assert "yes" in closable_row.split()

    def test_builds_one_hierarchy(self, runner, config_path, tasks_path, monkeypatch):
        """Test the child index is built once for the whole table."""
        built = []

        class CountingHierarchy(cli_module.TaskHierarchy):
            def __init__(self, *args, **kwargs):
                built.append(1)
                super().__init__(*args, **kwargs)

        monkeypatch.setattr(cli_module, "TaskHierarchy", CountingHierarchy)

        result = runner.invoke(cli, ["--config", str(config_path), "epics", str(tasks_path)], obj={})

        assert result.exit_code == 0, result.output
        assert len(built) == 1


class TestWebhookCommand:
    """Tests for the webhook command."""

    def test_json_summary(self, runner, config_path, tmp_path):
        path = tmp_path / "payload.json"
        path.write_text(json.dumps({
            "type": "page.properties_updated",
            "entity": {"id": "task-1"},
            "property_value": {"status": {"name": "Done"}},
        }))

        result = runner.invoke(
            cli, ["--config", str(config_path), "webhook", "--json", str(path)], obj={}
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "event_type": "page.properties_updated",
            "task_id": "task-1",
            "status": "Done",
        }

    def test_custom_status_property(self, runner, tmp_path):
        path = tmp_path / "payload.json"
        path.write_text(json.dumps({"property_value": {"Estado": {"name": "Done"}}}))

        result = runner.invoke(
            cli, ["webhook", "--status-property", "Estado", "--json", str(path)], obj={}
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["status"] == "Done"


class TestCheckConfigCommand:
    """Tests for the check-config command."""

    def test_valid(self, runner, config_path):
        result = runner.invoke(cli, ["--config", str(config_path), "check-config"], obj={})

        assert result.exit_code == 0, result.output
        assert "Configuration is valid" in result.output

    def test_unknown_key(self, runner, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("queue:\n  ordr: alphabetical\n")

        result = runner.invoke(cli, ["--config", str(path), "check-config"], obj={})

        assert result.exit_code == 1
        assert "Error loading config" in result.output
        assert "ordr" in result.output

    def test_bad_millisecond_env(self, runner, config_path, monkeypatch):
        monkeypatch.setenv("QUEUE_POLL_INTERVAL_MS", "soon")

        result = runner.invoke(cli, ["--config", str(config_path), "check-config"], obj={})

        assert result.exit_code == 1
        assert "QUEUE_POLL_INTERVAL_MS" in result.output
