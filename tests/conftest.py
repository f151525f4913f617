"""Shared pytest configuration and fixtures for tests."""

import sys
import io
import copy
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskbeacon.core import config as config_module
from taskbeacon.core.config import parse_config
from taskbeacon.core.exceptions import StoreError
from taskbeacon.core.models import Task, Suggestion
from taskbeacon.core.service import filter_untagged


SAMPLE_CONFIG = {
    "llm": {"provider": "anthropic", "api_key_env": "TB_TEST_KEY"},
    "projects": [
        {"name": "work", "keywords": ["jira", "deploy"], "quota": 2},
        {"name": "home", "keywords": ["garden"], "quota": 1},
    ],
    "beacons": [
        {
            "name": "Be a Great Software Developer",
            "tag": "b.great.dev",
            "description": "Excel in software development",
            "directions": [
                {"name": "Software design", "tag": "d.sw.design", "description": "Architecture"},
                {"name": "Test writing", "tag": "d.test.write", "description": "Testing"},
            ],
        },
        {
            "name": "Be Healthy",
            "tag": "b.healthy",
            "description": "Physical and mental health",
            "directions": [
                {"name": "Healthy habits", "tag": "d.healthy.habits", "description": "Sleep, diet"},
            ],
        },
    ],
    "default_quota": 2,
}


class FakeStore:
    """In-memory stand-in for the Taskwarrior repository module."""

    def __init__(self, tasks=None):
        self.tasks = list(tasks or [])
        self.created = []
        self.modified = []
        self.exports = []
        self.fail_create = False
        self.fail_export = False
        self.fail_modify = set()
        self._next = 1

    def export(self, filter_text=""):
        if self.fail_export:
            raise StoreError("export failed", stderr="boom")
        self.exports.append(filter_text)
        return list(self.tasks)

    def untagged_pending(self):
        if self.fail_export:
            raise StoreError("export failed", stderr="boom")
        self.exports.append("")
        return filter_untagged(self.tasks)

    def create_task(self, task):
        if self.fail_create:
            raise StoreError("add failed", stderr="disk full")
        task = copy.deepcopy(task)
        task.uuid = f"uuid-new-{self._next}"
        task.id = 100 + self._next
        self._next += 1
        self.created.append(task)
        self.tasks.append(task)
        return task.uuid

    def modify_task(self, uuid, delta):
        if uuid in self.fail_modify:
            raise StoreError(f"modify {uuid} failed")
        self.modified.append((uuid, delta))
        task = self.get(uuid)
        # Same rules as `task modify`: empty values are not sent
        if delta.project:
            task.project = delta.project
        for attr in ("priority", "due", "scheduled", "effort", "impact", "estimate", "fun"):
            value = getattr(delta, attr)
            if value:
                setattr(task, attr, value)
        if delta.blocks > 0:
            task.blocks = delta.blocks
        for tag in delta.tags:
            if tag not in task.tags:
                task.tags.append(tag)

    def get(self, uuid):
        for task in self.tasks:
            if task.uuid == uuid:
                return task
        raise KeyError(uuid)


class FakeProvider:
    """Suggestion provider answering from a description -> result map."""

    name = "fake"

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def enrich(self, description, beacons=(), projects=()):
        self.calls.append((description, tuple(beacons), tuple(projects)))
        result = self.responses.get(description)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, dict):
            return Suggestion.from_dict(result)
        if isinstance(result, Suggestion):
            return copy.deepcopy(result)
        return Suggestion(description=description)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Never read the developer's real config file."""
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "missing" / "config.yaml")
    monkeypatch.delenv(config_module.CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def config():
    return parse_config(copy.deepcopy(SAMPLE_CONFIG), path="<test>")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def make_task():
    """Factory for exported-looking tasks."""
    counter = {"n": 0}

    def _make(description, project=None, urgency=0.0, tags=None, **kwargs):
        counter["n"] += 1
        n = counter["n"]
        return Task(
            id=n,
            uuid=kwargs.pop("uuid", f"uuid-{n}"),
            description=description,
            project=project,
            urgency=urgency,
            tags=list(tags or []),
            **kwargs,
        )

    return _make
