from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger("manuscript.config")

PROJECT_DIR_NAME = ".manuscript"
GLOBAL_DIR_ENV = "MANUSCRIPT_GLOBAL_DIR"

STEP_INPUT = "input"
STEP_TAP = "tap"


class Scope(str, Enum):
    PROJECT = "project"
    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True)
class Step:
    target: str
    value: Optional[str] = None
    type: str = STEP_INPUT

    @property
    def writes(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class ManuscriptConfig:
    name: str
    steps: List[Step] = field(default_factory=list)
    description: Optional[str] = None


def scope_directory(scope: Scope, cwd: Optional[Path] = None) -> Path:
    base = Path(cwd) if cwd is not None else Path.cwd()
    if scope is Scope.PROJECT:
        return base / PROJECT_DIR_NAME
    if scope is Scope.LOCAL:
        return base
    override = os.getenv(GLOBAL_DIR_ENV)
    if override:
        return Path(override)
    # <prefix>/bin/manuscript -> <prefix>/templates
    return Path(sys.argv[0]).resolve().parent.parent / "templates"


def config_path(filename: str, scope: Scope, cwd: Optional[Path] = None) -> Path:
    if not Path(filename).suffix:
        raise ConfigError(f"Please provide the full filename including extension (e.g., {filename}.yaml)")
    return scope_directory(scope, cwd) / filename


def resolve_config_path(filename: str, scope: Scope, cwd: Optional[Path] = None) -> Path:
    path = config_path(filename, scope, cwd)
    if not path.exists():
        raise ConfigError(f"File not found at: {path}", path=str(path))
    return path


def _text(raw: Any, what: str, index: int) -> Optional[str]:
    if raw is None or isinstance(raw, str):
        return raw
    if isinstance(raw, (bool, int, float)):
        logger.warning("step %d: %s %r is not a string; quote it in YAML to keep it exact", index + 1, what, raw)
        return str(raw)
    raise ConfigError(f"Step {index + 1}: '{what}' must be a string")


def parse_step(raw: Any, index: int) -> Step:
    if not isinstance(raw, dict):
        raise ConfigError(f"Step {index + 1} must be a mapping with a 'target'")
    target = _text(raw.get("target"), "target", index)
    if not target:
        raise ConfigError(f"Step {index + 1} is missing 'target'")
    step_type = str(raw.get("type") or STEP_INPUT)
    if step_type == STEP_TAP:
        raise ConfigError(f"Step {index + 1}: 'tap' steps are reserved and not supported yet")
    if step_type != STEP_INPUT:
        raise ConfigError(f"Step {index + 1}: unknown step type '{step_type}'")
    return Step(target=target, value=_text(raw.get("value"), "value", index), type=step_type)


def parse_config(data: Any) -> ManuscriptConfig:
    if not isinstance(data, dict):
        raise ConfigError("Config must be a YAML mapping")
    name = data.get("name") or data.get("title")
    if not name:
        raise ConfigError("Config needs a 'name' (or 'title')")
    raw_steps = data.get("steps")
    if not isinstance(raw_steps, list):
        raise ConfigError("Config needs a 'steps' list")
    description = data.get("description")
    return ManuscriptConfig(
        name=str(name),
        steps=[parse_step(s, i) for i, s in enumerate(raw_steps)],
        description=str(description) if description else None,
    )


def load_config(path: Path) -> ManuscriptConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}", path=str(path)) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}", path=str(path)) from e
    config = parse_config(data)
    logger.debug("loaded %s with %d step(s)", path, len(config.steps))
    return config


EXAMPLE_CONFIG = """\
name: "Login Example"
description: "Fills the login form of the sample app."
steps:
  # 1. Search by Accessibility ID
  # The most reliable method. Set .accessibilityIdentifier in your Swift code.
  - target: "username_field"
    value: "my_user"

  # 2. Search by Label (Anchor)
  # Finds the first field after a static text label (e.g. "Password").
  - target: "Password"
    value: "secret123"

  # 3. Search by Placeholder
  # Finds a text field displaying this placeholder text.
  - target: "Enter your email"
    value: "test@example.com"

  # 4. Search by Value
  # Finds a field that already contains this text. Left alone when it already equals value.
  - target: "Existing Value"
    value: "New Value"
"""


def new_config_template(filename: str) -> str:
    name = filename[: -len(".yaml")] if filename.endswith(".yaml") else filename
    return (
        f'name: "{name}"\n'
        "steps:\n"
        '  - target: "example_element"\n'
        '    value: "Hello World"\n'
    )
