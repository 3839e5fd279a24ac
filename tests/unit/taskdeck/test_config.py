"""Tests for taskdeck configuration loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from taskdeck.config import TaskdeckConfig, load_config
from taskdeck.model.command import (
    ExecutionEngine,
    JsonSchemaVersion,
    PanelKind,
    RevealKind,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults_without_config_files(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == TaskdeckConfig()
    assert config.execution_engine is ExecutionEngine.TERMINAL
    assert config.schema_version is JsonSchemaVersion.V2_0_0
    assert config.presentation.reveal is RevealKind.ALWAYS


def test_toml_config(tmp_path: Path) -> None:
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(
        'execution_engine = "Process"\n'
        'schema_version = "0.1.0"\n'
        "\n"
        "[presentation]\n"
        'reveal = "Never"\n'
        'panel = "dedicated"\n'
        "focus = true\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.execution_engine is ExecutionEngine.PROCESS
    assert config.schema_version is JsonSchemaVersion.V0_1_0
    assert config.presentation.reveal is RevealKind.NEVER
    assert config.presentation.panel is PanelKind.DEDICATED
    assert config.presentation.focus is True
    assert config.presentation.echo is True


def test_toml_takes_priority_over_json(tmp_path: Path) -> None:
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text('execution_engine = "process"\n', encoding="utf-8")
    (config_dir / "config.json").write_text(
        json.dumps({"execution_engine": "terminal"}), encoding="utf-8"
    )

    assert load_config(tmp_path).execution_engine is ExecutionEngine.PROCESS


def test_json_config_with_unknown_values_falls_back(tmp_path: Path) -> None:
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        json.dumps({"execution_engine": "quantum", "presentation": {"reveal": "sometimes"}}),
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.execution_engine is ExecutionEngine.TERMINAL
    assert config.presentation.reveal is RevealKind.ALWAYS


def test_malformed_toml_raises(tmp_path: Path) -> None:
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("execution_engine = \n", encoding="utf-8")

    with pytest.raises(RuntimeError, match="Malformed TOML"):
        load_config(tmp_path)


def test_invalid_structure_raises(tmp_path: Path) -> None:
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(json.dumps({"presentation": "loud"}), encoding="utf-8")

    with pytest.raises(RuntimeError, match="Invalid config structure"):
        load_config(tmp_path)
