"""
FILE: taskbeacon/core/config.py
PURPOSE: Load the YAML configuration and answer goal/project/quota questions
EXPORTS:
  - LLMSettings (frozen dataclass)
  - Config (frozen dataclass)
  - load_config(path) -> Config
  - parse_config(data, path) -> Config
  - default_beacons() -> Tuple[Beacon, ...]
  - CONFIG_DIR, CONFIG_PATH
DEPENDENCIES:
  - yaml (PyYAML, config parsing)
  - os, pathlib (stdlib)
  - taskbeacon.core.models (Beacon, Direction, ProjectRule, FocusGroup)
  - taskbeacon.core.focus (resolve_group)
  - taskbeacon.core.exceptions (ConfigError)
NOTES:
  - Search order: explicit path, $TASKBEACON_CONFIG, ~/.config/taskbeacon/config.yaml, ./config.yaml
  - Missing file means all defaults, including the embedded beacon catalog
  - Config is immutable; load once and pass it to flows and the balancer
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from .models import Beacon, Direction, ProjectRule, FocusGroup
from .focus import resolve_group, rule_quota
from .constants import (
    DEFAULT_QUOTA,
    DEFAULT_PROVIDER,
    DEFAULT_MODEL,
    DEFAULT_API_KEY_ENV,
    PROVIDER_MODELS,
    PROVIDER_KEY_ENVS,
)
from .exceptions import ConfigError


logger = logging.getLogger(__name__)

# Config file location (cross-platform)
CONFIG_DIR = Path.home() / ".config" / "taskbeacon"
CONFIG_PATH = CONFIG_DIR / "config.yaml"
CONFIG_ENV = "TASKBEACON_CONFIG"


@dataclass(frozen=True)
class LLMSettings:
    """Which suggestion backend to use and how to reach it."""

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    api_key_env: str = DEFAULT_API_KEY_ENV
    base_url: str = ""

    def api_key(self) -> str:
        """Read the API key from the configured environment variable."""
        if not self.api_key_env:
            return ""
        return os.environ.get(self.api_key_env, "")


@dataclass(frozen=True)
class Config:
    """Loaded configuration. Read-only."""

    llm: LLMSettings = field(default_factory=LLMSettings)
    projects: Tuple[ProjectRule, ...] = ()
    beacons: Tuple[Beacon, ...] = ()
    focus_groups: Tuple[FocusGroup, ...] = ()
    default_quota: int = DEFAULT_QUOTA
    source: Optional[str] = None

    def goal_catalog(self) -> Tuple[Beacon, ...]:
        return self.beacons

    def project_rules(self) -> Tuple[ProjectRule, ...]:
        return self.projects

    def focus_group_rules(self) -> Tuple[FocusGroup, ...]:
        return self.focus_groups

    @property
    def uses_focus_groups(self) -> bool:
        return len(self.focus_groups) > 0

    def project_quota(self, name: str) -> int:
        """Quota for a project, or the default when unset or not positive."""
        return rule_quota(self.projects, name, self.default_quota)

    def focus_group_quota(self, name: str) -> int:
        """Quota for a focus group, or the default when unset or not positive."""
        return rule_quota(self.focus_groups, name, self.default_quota)

    def quota_for(self, name: str) -> int:
        """Quota for a display group: focus group when configured, else project."""
        if self.uses_focus_groups:
            return self.focus_group_quota(name)
        return self.project_quota(name)

    def focus_group_for(self, project: str) -> Optional[str]:
        return resolve_group(project, self.focus_groups)


# --- Parsing helpers ---


def _require_list(value, key: str, path: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list", path)
    return value


def _require_mapping(value, key: str, path: str) -> dict:
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' entries must be mappings", path)
    return value


def _as_int(value, key: str, path: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}", path)


def _as_strings(value, key: str, path: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list of strings", path)
    return tuple(str(v) for v in value)


def _parse_llm(data, path: str) -> LLMSettings:
    if data is None:
        return LLMSettings()
    data = _require_mapping(data, "llm", path)
    # Empty values fall back to the provider's defaults, like a missing key
    provider = str(data.get("provider") or DEFAULT_PROVIDER).lower()
    return LLMSettings(
        provider=provider,
        model=str(data.get("model") or PROVIDER_MODELS.get(provider, DEFAULT_MODEL)),
        api_key_env=str(data.get("api_key_env") or PROVIDER_KEY_ENVS.get(provider, "")),
        base_url=str(data.get("base_url") or ""),
    )


def _parse_projects(data, path: str) -> Tuple[ProjectRule, ...]:
    rules = []
    for item in _require_list(data, "projects", path):
        item = _require_mapping(item, "projects", path)
        if not item.get("name"):
            raise ConfigError("project entry without a name", path)
        rules.append(
            ProjectRule(
                name=str(item["name"]),
                keywords=_as_strings(item.get("keywords"), "keywords", path),
                quota=_as_int(item.get("quota"), "quota", path),
            )
        )
    return tuple(rules)


def _parse_focus_groups(data, path: str) -> Tuple[FocusGroup, ...]:
    groups = []
    for item in _require_list(data, "focus_groups", path):
        item = _require_mapping(item, "focus_groups", path)
        if not item.get("name"):
            raise ConfigError("focus group entry without a name", path)
        groups.append(
            FocusGroup(
                name=str(item["name"]),
                patterns=_as_strings(item.get("patterns"), "patterns", path),
                quota=_as_int(item.get("quota"), "quota", path),
            )
        )
    return tuple(groups)


def _parse_beacons(data, path: str) -> Tuple[Beacon, ...]:
    beacons = []
    for item in _require_list(data, "beacons", path):
        item = _require_mapping(item, "beacons", path)
        if not item.get("tag"):
            raise ConfigError("beacon entry without a tag", path)
        directions = []
        for d in _require_list(item.get("directions"), "directions", path):
            d = _require_mapping(d, "directions", path)
            if not d.get("tag"):
                raise ConfigError("direction entry without a tag", path)
            directions.append(
                Direction(
                    name=str(d.get("name") or d["tag"]),
                    tag=str(d["tag"]),
                    description=str(d.get("description") or ""),
                )
            )
        beacons.append(
            Beacon(
                name=str(item.get("name") or item["tag"]),
                tag=str(item["tag"]),
                description=str(item.get("description") or ""),
                directions=tuple(directions),
            )
        )
    return tuple(beacons)


def parse_config(data, path: str = "<memory>") -> Config:
    """
    Build a Config from already-parsed YAML data.

    Raises:
        ConfigError: If the top-level value or any section has the wrong shape
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", path)

    beacons = _parse_beacons(data.get("beacons"), path) or default_beacons()
    default_quota = _as_int(data.get("default_quota"), "default_quota", path)
    if default_quota <= 0:
        default_quota = DEFAULT_QUOTA

    return Config(
        llm=_parse_llm(data.get("llm"), path),
        projects=_parse_projects(data.get("projects"), path),
        beacons=beacons,
        focus_groups=_parse_focus_groups(data.get("focus_groups"), path),
        default_quota=default_quota,
        source=path,
    )


def _candidate_paths(path: Optional[Path]) -> List[Path]:
    if path is not None:
        return [Path(path)]
    candidates = []
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        candidates.append(Path(env_path))
    candidates.append(CONFIG_PATH)
    candidates.append(Path.cwd() / "config.yaml")
    return candidates


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load configuration from the first existing config file.

    Args:
        path: Explicit file (from --config); must exist when given

    Returns:
        Config with defaults filled in

    Raises:
        ConfigError: If the explicit file is missing, unreadable, or invalid
    """
    if path is not None and not Path(path).exists():
        raise ConfigError("config file not found", str(path))

    for candidate in _candidate_paths(path):
        if not candidate.exists():
            continue
        logger.debug("Loading config from %s", candidate)
        try:
            with open(candidate, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read config: {e}", str(candidate))
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}", str(candidate))
        return parse_config(data, str(candidate))

    logger.debug("No config file found, using defaults")
    return parse_config({}, path="<defaults>")


def _d(name: str, tag: str, description: str) -> Direction:
    return Direction(name=name, tag=tag, description=description)


def default_beacons() -> Tuple[Beacon, ...]:
    """Embedded beacon catalog used when the config defines none."""
    return (
        Beacon(
            name="Be Organized",
            tag="b.organized",
            description="Focus on personal organization and productivity",
            directions=(
                _d("Develop organization habits", "d.org.habits", "Building habits for better organization"),
                _d("Improve tooling", "d.org.tooling", "Better tools and systems for organization"),
                _d("Improve writing skills", "d.writing", "Better written communication"),
                _d("Time management", "d.time.mgmt", "Better time management and prioritization"),
                _d("Project planning", "d.project.plan", "Better planning skills"),
                _d("Keep order", "d.order", "Maintaining order in physical and digital spaces"),
            ),
        ),
        Beacon(
            name="Be Significant in a Field",
            tag="b.significant.field",
            description="Become recognized expert in a domain",
            directions=(
                _d("Improve writing skills", "d.writing", "Better written communication for sharing knowledge"),
                _d("Improve coverage", "d.coverage", "Broader visibility and reach"),
                _d("Improve communication", "d.comm", "Better verbal and presentation skills"),
            ),
        ),
        Beacon(
            name="Be a Great Software Developer",
            tag="b.great.dev",
            description="Excel in software development",
            directions=(
                _d("Algorithm skills", "d.algo", "Better algorithmic thinking"),
                _d("Build workspace", "d.workspace", "Better development environment"),
                _d("Programming languages", "d.prog.lang", "Deeper language knowledge"),
                _d("Software design", "d.sw.design", "Better architecture and design patterns"),
                _d("Dev tooling", "d.dev.tooling", "Better tooling knowledge (IDE, debugging, etc.)"),
                _d("Test writing", "d.test.write", "Better testing skills"),
                _d("Advanced tooling", "d.tooling.adv", "Databases, queues, messaging systems"),
                _d("OS and networks", "d.os.network", "System-level knowledge"),
            ),
        ),
        Beacon(
            name="Be a Great DevOps",
            tag="b.great.devops",
            description="Excel in DevOps and infrastructure",
            directions=(
                _d("System design", "d.sys.design", "Better infrastructure architecture"),
                _d("Software design", "d.sw.design", "Better application design for ops"),
                _d("Advanced tooling", "d.tooling.adv", "Databases, queues, messaging"),
                _d("OS and networks", "d.os.network", "Deep system knowledge"),
                _d("Cloud knowledge", "d.cloud", "Cloud platforms and services"),
            ),
        ),
        Beacon(
            name="Be Great in Hardware Development",
            tag="b.great.hardware",
            description="Excel in hardware and electronics",
            directions=(
                _d("HW software tooling", "d.hw.sw.tooling", "Firmware, embedded software tools"),
                _d("HW tooling", "d.hw.tooling", "Physical tools for hardware work"),
                _d("Build workspace", "d.workspace", "Hardware development workspace"),
                _d("HW development", "d.hw.dev", "General hardware development skills"),
                _d("Circuit design", "d.circuits", "Electronic circuit design"),
                _d("Soldering", "d.soldering", "Soldering and assembly skills"),
            ),
        ),
        Beacon(
            name="Be Great in Relationships",
            tag="b.great.rel",
            description="Excel in personal and professional relationships",
            directions=(
                _d("Help friends", "d.help.friends", "Supporting friends"),
                _d("Kids", "d.kids", "Being a great parent"),
                _d("Help family", "d.help.family", "Supporting family"),
                _d("Communication", "d.comm", "Better interpersonal communication"),
                _d("Psychological help", "d.psych.help", "Ability to help others emotionally"),
            ),
        ),
        Beacon(
            name="Be Healthy",
            tag="b.healthy",
            description="Physical and mental health",
            directions=(
                _d("Physical endurance", "d.endurance", "Physical fitness"),
                _d("Martial arts", "d.martial.arts", "Physical activity through martial arts"),
                _d("Healthy habits", "d.healthy.habits", "Diet, sleep, routines"),
            ),
        ),
    )
