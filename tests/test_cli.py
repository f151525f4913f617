"""
Tests for the tb command line: headless add/enrich, focus output, passthrough.
"""

# Path setup handled by conftest.py
import importlib
import json

import pytest
from typer.testing import CliRunner

from taskbeacon.cli.main import app, __version__
from taskbeacon.core import repository
from taskbeacon.core.exceptions import ProviderError, UserAbort
from conftest import FakeStore, FakeProvider

# The package re-exports command functions under the module names
enrich_cmd = importlib.import_module("taskbeacon.cli.commands.enrich")
focus_cmd = importlib.import_module("taskbeacon.cli.commands.focus")

runner = CliRunner()


@pytest.fixture
def fake_store(monkeypatch):
    store = FakeStore()
    monkeypatch.setattr(enrich_cmd, "repository", store)
    monkeypatch.setattr(focus_cmd, "repository", store)
    return store


@pytest.fixture
def fake_provider(monkeypatch):
    provider = FakeProvider()
    monkeypatch.setattr(enrich_cmd, "create_provider", lambda settings: provider)
    return provider


def test_no_args_prints_help():
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "Commands:" in result.output
    assert "focus" in result.output

    print("✓ Bare tb shows help")


def test_help_lists_review_keys():
    result = runner.invoke(app, ["help"])

    assert result.exit_code == 0
    assert "Review keys:" in result.output
    assert "only ctrl+c cancels" in result.output


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"taskbeacon v{__version__}" in result.output


def test_add_yes_creates_enriched_task(fake_store, fake_provider):
    fake_provider.responses["fix the login thing"] = {
        "description": "Fix login bug",
        "beacons": ["b.great.dev"],
        "project": "work",
    }

    result = runner.invoke(app, ["add", "fix", "the", "login", "thing", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Created task" in result.output
    assert "uuid-new-1" in result.output
    task = fake_store.created[0]
    assert task.description == "Fix login bug"
    assert task.tags == ["b.great.dev"]

    print("✓ tb add --yes creates the suggested task")


def test_add_without_terminal_fails(fake_store, fake_provider):
    result = runner.invoke(app, ["add", "something"])

    assert result.exit_code == 1
    assert "interactive terminal" in result.output
    assert fake_provider.calls == []
    assert fake_store.created == []


def test_add_blank_description_fails(fake_store, fake_provider):
    result = runner.invoke(app, ["add", "  ", "--yes"])

    assert result.exit_code == 1
    assert "cannot be empty" in result.output


def test_add_provider_failure_exits_1(fake_store, fake_provider):
    fake_provider.responses["x"] = ProviderError("API error (401): invalid x-api-key", "fake")

    result = runner.invoke(app, ["add", "x", "--yes"])

    assert result.exit_code == 1
    assert "invalid x-api-key" in result.output
    assert fake_store.created == []


def test_interactive_cancel_exits_130(fake_store, fake_provider, monkeypatch):
    def cancelled(flow, provider, store, config=None, console=None):
        raise UserAbort()

    monkeypatch.setattr(enrich_cmd, "require_terminal", lambda command: None)
    monkeypatch.setattr(enrich_cmd, "run_flow", cancelled)

    result = runner.invoke(app, ["add", "x"])

    assert result.exit_code == 130
    assert "Cancelled" in result.output

    print("✓ Cancelling exits with 130")


def test_missing_explicit_config_exits_1(tmp_path, fake_store, fake_provider):
    result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "add", "x", "--yes"])

    assert result.exit_code == 1
    assert "config file not found" in result.output


def test_enrich_yes_processes_untagged(fake_store, fake_provider, make_task):
    fake_store.tasks = [
        make_task("Set up monitoring"),
        make_task("Already aligned", tags=["b.healthy"]),
        make_task("Rotate certificates", project="ops"),
    ]
    fake_provider.responses["Rotate certificates"] = {"project": "home", "beacons": ["b.great.devops"]}

    result = runner.invoke(app, ["enrich", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Enriched 2 tasks, skipped 0" in result.output
    assert [uuid for uuid, _ in fake_store.modified] == ["uuid-1", "uuid-3"]
    assert fake_store.get("uuid-3").project == "ops"

    print("✓ tb enrich --yes enriches untagged pending tasks")


def test_enrich_passes_filter(fake_store, fake_provider):
    result = runner.invoke(app, ["enrich", "project:work", "+inbox", "--yes"])

    assert result.exit_code == 0, result.output
    assert fake_store.exports == ["project:work +inbox"]
    assert "No tasks to enrich" in result.output


def test_focus_json(fake_store, make_task):
    fake_store.tasks = [
        make_task("w9", project="work", urgency=9),
        make_task("w7", project="work", urgency=7),
        make_task("w5", project="work", urgency=5),
        make_task("h1", urgency=1),
    ]

    result = runner.invoke(app, ["focus", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [t["description"] for t in data["tasks"]] == ["w9", "w7", "h1"]
    assert data["tasks"][0]["group"] == "work"
    assert {g["name"]: g["total"] for g in data["groups"]} == {"(no project)": 1, "work": 3}
    assert fake_store.exports == ["status:pending"]

    print("✓ tb focus --json emits the balanced list")


def test_focus_raw_uses_config_quotas(fake_store, make_task, tmp_path):
    path = tmp_path / "tb.yaml"
    path.write_text("projects:\n  - name: work\n    quota: 1\n", encoding="utf-8")
    fake_store.tasks = [
        make_task("w9", project="work", urgency=9),
        make_task("w7", project="work", urgency=7),
        make_task("h3", project="home", urgency=3),
    ]

    result = runner.invoke(app, ["--config", str(path), "focus", "--raw"])

    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0] == "--- work ---"
    assert "w9" in lines[1]
    assert lines[2] == "--- home ---"
    assert "w7" not in result.stdout


def test_focus_store_error_exits_1(fake_store):
    fake_store.fail_export = True

    result = runner.invoke(app, ["focus"])

    assert result.exit_code == 1
    assert "export failed" in result.output


def test_task_passthrough_keeps_exit_code(monkeypatch):
    seen = []

    def fake_passthrough(args):
        seen.append(list(args))
        return 3

    monkeypatch.setattr(repository, "passthrough", fake_passthrough)

    result = runner.invoke(app, ["task", "project:work", "list"])

    assert result.exit_code == 3
    assert seen == [["project:work", "list"]]

    print("✓ tb task forwards arguments and exit code")
