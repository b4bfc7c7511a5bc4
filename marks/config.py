"""Configuration for the marks command interpreter.

The defaults reproduce the classic input rules: lowercase course titles,
five-letter student identifiers starting with ``u`` and non-negative integer
points.  A JSON or YAML file may override any field::

    student_pattern: "s[0-9]{6}"
    error_prefix: "ERR "
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
import logging
from pathlib import Path
import re
from typing import Any, Mapping, Optional, Union

import yaml

__all__ = ["ConfigError", "ShellConfig", "load_shell_config"]

logger = logging.getLogger(__name__)

_PATTERN_FIELDS = ("course_pattern", "student_pattern", "points_pattern")


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


@dataclass(frozen=True)
class ShellConfig:
    """Validation patterns and message settings for :class:`MarksShell`."""

    course_pattern: str = "[a-z]+"
    student_pattern: str = "u[a-z]{4}"
    points_pattern: str = "[0-9]+"
    error_prefix: str = "Error, "
    ok_message: str = "OK"
    empty_course_marker: str = "#"

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if not isinstance(value, str):
                raise ConfigError(f"{item.name} must be a string, got {value!r}")
        for name in _PATTERN_FIELDS:
            pattern = getattr(self, name)
            if not pattern:
                raise ConfigError(f"{name} must not be empty")
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigError(f"{name} is not a valid pattern: {exc}") from exc

    def matches(self, field_name: str, value: str) -> bool:
        """Return ``True`` when *value* fully matches the named pattern."""

        return re.fullmatch(getattr(self, field_name), value) is not None


def _config_from_mapping(payload: Mapping[str, Any]) -> ShellConfig:
    non_string = [key for key in payload if not isinstance(key, str)]
    if non_string:
        raise ConfigError(
            f"Configuration keys must be strings, got {', '.join(map(repr, non_string))}"
        )
    known = {item.name for item in fields(ShellConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    return replace(ShellConfig(), **payload)


def load_shell_config(path: Optional[Union[str, Path]]) -> ShellConfig:
    """Load a :class:`ShellConfig` from *path* or return the defaults."""

    if path is None:
        return ShellConfig()

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration {config_path}: {exc}") from exc

    try:
        if suffix == ".json":
            payload = json.loads(text)
        elif suffix in {".yaml", ".yml"}:
            payload = yaml.safe_load(text)
        else:
            raise ConfigError(
                f"Unsupported configuration format '{suffix}'; use .json, .yaml or .yml"
            )
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    config = _config_from_mapping(payload)
    logger.debug("Loaded shell configuration from %s: %s", config_path, config)
    return config
