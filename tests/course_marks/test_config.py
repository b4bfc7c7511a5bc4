"""Tests for shell configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from marks.config import ConfigError, ShellConfig, load_shell_config


def test_load_shell_config_defaults() -> None:
    config = load_shell_config(None)
    assert config == ShellConfig()
    assert config.matches("student_pattern", "uabcd")
    assert not config.matches("student_pattern", "uabcde")
    assert not config.matches("course_pattern", "Algo")


def test_load_shell_config_from_json(tmp_path: Path) -> None:
    config_path = tmp_path / "shell.json"
    config_path.write_text(
        json.dumps({"student_pattern": "s[0-9]{3}", "ok_message": "done"}),
        encoding="utf-8",
    )

    config = load_shell_config(config_path)

    assert config.student_pattern == "s[0-9]{3}"
    assert config.ok_message == "done"
    assert config.error_prefix == "Error, "


def test_load_shell_config_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "shell.yaml"
    config_path.write_text(
        """
        course_pattern: "[a-z]{2,8}"
        error_prefix: "ERR "
        """,
        encoding="utf-8",
    )

    config = load_shell_config(str(config_path))

    assert config.course_pattern == "[a-z]{2,8}"
    assert config.error_prefix == "ERR "


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "shell.yml"
    config_path.write_text("", encoding="utf-8")
    assert load_shell_config(config_path) == ShellConfig()


@pytest.mark.parametrize(
    "filename, text, expected_message",
    [
        ("shell.json", json.dumps({"colour": "red"}), "Unknown configuration keys"),
        ("shell.json", json.dumps({"points_pattern": 5}), "must be a string"),
        ("shell.json", json.dumps({"course_pattern": "[a-z"}), "not a valid pattern"),
        ("shell.json", json.dumps({"student_pattern": ""}), "must not be empty"),
        ("shell.json", "[1, 2]", "must be a mapping"),
        ("shell.json", "{not json", "Failed to parse"),
        ("shell.yaml", "a: [1, 2", "Failed to parse"),
        ("shell.yaml", "1: x\nfoo: y\n", "keys must be strings"),
        ("shell.yaml", "1: x\n", "keys must be strings"),
        ("shell.toml", "x = 1", "Unsupported configuration format"),
    ],
)
def test_load_shell_config_rejects_invalid_files(
    tmp_path: Path, filename: str, text: str, expected_message: str
) -> None:
    config_path = tmp_path / filename
    config_path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_shell_config(config_path)

    assert expected_message in str(excinfo.value)


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_shell_config(tmp_path / "absent.yaml")
