"""
Tests for the Taskwarrior repository: argument building and export parsing.
"""

# Path setup handled by conftest.py
import json
import subprocess

import pytest

from taskbeacon.core import repository
from taskbeacon.core.models import Task, TaskDelta
from taskbeacon.core.exceptions import StoreError


TASK_COMMANDS = ("add", "modify", "export")


EXPORT = [
    {
        "id": 3,
        "uuid": "aaaa-1111",
        "description": "Set up monitoring",
        "status": "pending",
        "urgency": 7.25,
        "tags": ["b.great.devops", "d.cloud"],
        "est": "2h",
        "blocks": "2",
    },
    {
        "id": 4,
        "uuid": "bbbb-2222",
        "description": "Rotate certificates",
        "project": "ops",
        "status": "pending",
        "urgency": 3,
        "priority": "H",
    },
]


class FakeTask:
    """Records `task` invocations and answers from a script."""

    def __init__(self, outputs=None):
        self.outputs = dict(outputs or {})
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        args = cmd[1:]
        # Key on the subcommand; filters and attributes may surround it
        key = next((a for a in args if a in TASK_COMMANDS), args[-1] if args else "")
        returncode, stdout, stderr = self.outputs.get(key, (0, "", ""))
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_task(monkeypatch):
    fake = FakeTask()
    monkeypatch.setattr(repository.subprocess, "run", fake)
    return fake


def test_add_args_skip_empty_values():
    task = Task(
        description="Fix login bug",
        project="work",
        priority="H",
        estimate="1h",
        tags=["b.great.dev", "waste"],
    )

    assert repository.add_args(task) == [
        "add",
        "Fix login bug",
        "project:work",
        "priority:H",
        "est:1h",
        "+b.great.dev",
        "+waste",
    ]

    print("✓ add arguments only carry set attributes")


def test_modify_args_never_touch_description():
    delta = TaskDelta(project=None, effort="D", impact="H", fun="L", due="eow",
                      scheduled="monday", blocks=3, tags=["b.healthy"])

    args = repository.modify_args("uuid-7", delta)

    assert args == [
        "uuid-7",
        "modify",
        "due:eow",
        "scheduled:monday",
        "effort:D",
        "impact:H",
        "fun:L",
        "blocks:3",
        "+b.healthy",
    ]
    assert not any(a.startswith("description:") for a in args)

    print("✓ modify arguments exclude description and empty project")


@pytest.mark.parametrize("blocks", [0, -1])
def test_blocks_only_sent_when_positive(blocks):
    args = repository.modify_args("u", TaskDelta(blocks=blocks))
    assert args == ["u", "modify"]


def test_export_parses_tasks(fake_task):
    fake_task.outputs["export"] = (0, json.dumps(EXPORT), "")

    tasks = repository.export("project:ops +next")

    assert fake_task.calls[0] == ["task", "project:ops", "+next", "export"]
    assert [t.uuid for t in tasks] == ["aaaa-1111", "bbbb-2222"]
    first, second = tasks
    assert first.project is None
    assert first.estimate == "2h"
    assert first.blocks == 2
    assert first.urgency == 7.25
    assert first.has_beacon()
    assert second.project == "ops"
    assert second.urgency == 3.0
    assert not second.has_beacon()

    print("✓ Export output becomes Task objects")


def test_untagged_pending_filters_beacon_tags(fake_task):
    fake_task.outputs["export"] = (0, json.dumps(EXPORT), "")

    tasks = repository.untagged_pending()

    assert fake_task.calls[0] == ["task", "status:pending", "export"]
    assert [t.uuid for t in tasks] == ["bbbb-2222"]


@pytest.mark.parametrize("stdout", ["", "   \n"])
def test_empty_export_is_empty_list(fake_task, stdout):
    fake_task.outputs["export"] = (0, stdout, "")
    assert repository.export() == []


@pytest.mark.parametrize("stdout", ["not json", '{"id": 1}'])
def test_bad_export_is_store_error(fake_task, stdout):
    fake_task.outputs["export"] = (0, stdout, "")

    with pytest.raises(StoreError):
        repository.export()


def test_create_task_reads_back_latest_uuid(fake_task):
    fake_task.outputs["export"] = (0, json.dumps([{"id": 9, "uuid": "new-uuid"}]), "")

    uuid = repository.create_task(Task(description="Buy milk", tags=["waste"]))

    assert uuid == "new-uuid"
    assert fake_task.calls == [
        ["task", "add", "Buy milk", "+waste"],
        ["task", "+LATEST", "export"],
    ]

    print("✓ create_task returns the new UUID")


def test_create_task_without_latest_is_error(fake_task):
    with pytest.raises(StoreError, match="LATEST"):
        repository.create_task(Task(description="x"))


def test_nonzero_exit_carries_stderr(fake_task):
    fake_task.outputs["modify"] = (2, "", "No tasks specified.\n")

    with pytest.raises(StoreError) as excinfo:
        repository.modify_task("uuid-1", TaskDelta(priority="H"))

    assert excinfo.value.stderr == "No tasks specified."
    assert "task modify failed (exit 2)" in str(excinfo.value)
    assert "No tasks specified." in str(excinfo.value)

    print("✓ Failed commands report stderr")


def test_failed_add_names_the_subcommand(fake_task):
    fake_task.outputs["add"] = (1, "", "Unrecognized attribute.\n")

    with pytest.raises(StoreError, match=r"task add failed \(exit 1\)"):
        repository.create_task(Task(description="x", priority="H"))

    # Nothing is read back after a failed add
    assert len(fake_task.calls) == 1


def test_modify_without_uuid_is_error(fake_task):
    with pytest.raises(StoreError):
        repository.modify_task("", TaskDelta())
    assert fake_task.calls == []


def test_missing_binary(monkeypatch):
    def missing(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(repository.subprocess, "run", missing)

    with pytest.raises(StoreError, match="not on PATH"):
        repository.export()
    with pytest.raises(StoreError, match="not on PATH"):
        repository.passthrough(["list"])


def test_timeout(monkeypatch):
    def slow(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(repository.subprocess, "run", slow)

    with pytest.raises(StoreError, match="timed out"):
        repository.export()


def test_passthrough_returns_exit_code(fake_task):
    fake_task.outputs["list"] = (1, "", "")

    assert repository.passthrough(["project:work", "list"]) == 1
    assert fake_task.calls[0] == ["task", "project:work", "list"]


def test_task_from_export_tolerates_bad_values():
    task = Task.from_export({"uuid": " u ", "urgency": "high", "blocks": "lots", "tags": "a b a"})

    assert task.uuid == "u"
    assert task.urgency == 0.0
    assert task.blocks == 0
    assert task.tags == ["a", "b"]
    assert task.status == "pending"
