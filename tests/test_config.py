"""
Tests for YAML config loading, defaults and quota lookups.
"""

# Path setup handled by conftest.py
import pytest

from taskbeacon.core import config as config_module
from taskbeacon.core.config import load_config, parse_config, default_beacons
from taskbeacon.core.exceptions import ConfigError


CONFIG_YAML = """
llm:
  provider: openai
projects:
  - name: work
    keywords: [jira, deploy]
    quota: 3
  - name: home
focus_groups:
  - name: Work
    patterns: ["work*", "!work.archive"]
    quota: 1
beacons:
  - name: Be Healthy
    tag: b.healthy
    directions:
      - tag: d.sleep
default_quota: 4
"""


def test_missing_file_gives_defaults():
    config = load_config()

    assert config.source == "<defaults>"
    assert config.llm.provider == "anthropic"
    assert config.llm.model == "claude-sonnet-4-5-20250929"
    assert config.llm.api_key_env == "ANTHROPIC_API_KEY"
    assert config.default_quota == 2
    assert config.projects == ()
    assert config.beacons == default_beacons()
    assert config.beacons[0].tag == "b.organized"

    print("✓ No config file means built-in defaults")


def test_load_explicit_file(tmp_path):
    path = tmp_path / "tb.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    config = load_config(path)

    assert config.source == str(path)
    assert [p.name for p in config.projects] == ["work", "home"]
    assert config.projects[0].keywords == ("jira", "deploy")
    assert config.focus_groups[0].patterns == ("work*", "!work.archive")
    assert config.uses_focus_groups
    assert config.default_quota == 4
    # Beacons from the file replace the built-in catalog
    assert [b.tag for b in config.beacons] == ["b.healthy"]
    assert config.beacons[0].directions[0].name == "d.sleep"

    print("✓ Config file sections are parsed")


def test_provider_defaults_follow_provider(tmp_path):
    path = tmp_path / "tb.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    llm = load_config(path).llm

    assert llm.provider == "openai"
    assert llm.model == "gpt-4o"
    assert llm.api_key_env == "OPENAI_API_KEY"

    ollama = parse_config({"llm": {"provider": "Ollama"}}).llm
    assert ollama.provider == "ollama"
    assert ollama.model == "llama3.2"
    assert ollama.api_key_env == ""
    assert ollama.api_key() == ""


def test_env_var_points_at_config(tmp_path, monkeypatch):
    path = tmp_path / "from-env.yaml"
    path.write_text("default_quota: 7\n", encoding="utf-8")
    monkeypatch.setenv(config_module.CONFIG_ENV, str(path))

    assert load_config().default_quota == 7


def test_working_directory_config_is_last_resort(isolated_config):
    (isolated_config / "config.yaml").write_text("default_quota: 5\n", encoding="utf-8")

    assert load_config().default_quota == 5


def test_explicit_missing_path_is_error(tmp_path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(tmp_path / "nope.yaml")


def test_invalid_yaml_is_error(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("projects: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid YAML"):
        load_config(path)

    print("✓ Broken YAML is reported as a config error")


@pytest.mark.parametrize(
    "data,match",
    [
        (["not", "a", "mapping"], "top level must be a mapping"),
        ({"projects": {"name": "work"}}, "'projects' must be a list"),
        ({"projects": ["work"]}, "entries must be mappings"),
        ({"projects": [{"keywords": ["x"]}]}, "without a name"),
        ({"projects": [{"name": "w", "quota": "lots"}]}, "must be an integer"),
        ({"beacons": [{"name": "no tag"}]}, "without a tag"),
        ({"focus_groups": [{"patterns": ["*"]}]}, "without a name"),
        ({"llm": "anthropic"}, "'llm' entries must be mappings"),
    ],
)
def test_wrong_shapes_rejected(data, match):
    with pytest.raises(ConfigError, match=match):
        parse_config(data)


@pytest.mark.parametrize("value", [0, -3, None])
def test_non_positive_default_quota_falls_back(value):
    assert parse_config({"default_quota": value}).default_quota == 2


def test_quota_lookups():
    config = parse_config({
        "projects": [{"name": "work", "quota": 3}, {"name": "home", "quota": 0}],
        "default_quota": 2,
    })

    assert config.project_quota("work") == 3
    assert config.project_quota("home") == 2
    assert config.project_quota("unknown") == 2
    assert config.quota_for("work") == 3

    grouped = parse_config({
        "projects": [{"name": "work", "quota": 3}],
        "focus_groups": [{"name": "Work", "patterns": ["work*"], "quota": 1}],
    })
    # With focus groups configured, only group quotas apply
    assert grouped.quota_for("Work") == 1
    assert grouped.quota_for("work") == 2
    assert grouped.focus_group_for("work.ops") == "Work"
    assert grouped.focus_group_for("home") is None

    print("✓ Quotas resolve with default fallback")


def test_api_key_read_from_env(config, monkeypatch):
    assert config.llm.api_key() == ""

    monkeypatch.setenv("TB_TEST_KEY", "sk-123")
    assert config.llm.api_key() == "sk-123"
