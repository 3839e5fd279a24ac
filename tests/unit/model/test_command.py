"""Tests for command value objects and enum parsing."""

from __future__ import annotations

import pytest

from taskdeck.model.command import (
    ExecutionEngine,
    JsonSchemaVersion,
    PanelKind,
    PresentationOptions,
    RevealKind,
    RuntimeType,
    ShellConfiguration,
    is_shell_configuration,
)


@pytest.mark.parametrize("text", ["always", "Always", "ALWAYS", "aLwAyS"])
def test_reveal_kind_is_case_insensitive(text: str) -> None:
    assert RevealKind.from_string(text) is RevealKind.ALWAYS


def test_reveal_kind_known_values() -> None:
    assert RevealKind.from_string("Silent") is RevealKind.SILENT
    assert RevealKind.from_string("NEVER") is RevealKind.NEVER


@pytest.mark.parametrize("text", ["bogus", "", "alwayss", " always"])
def test_reveal_kind_defaults_to_always(text: str) -> None:
    assert RevealKind.from_string(text) is RevealKind.ALWAYS


def test_panel_kind_parsing() -> None:
    assert PanelKind.from_string("Dedicated") is PanelKind.DEDICATED
    assert PanelKind.from_string("NEW") is PanelKind.NEW
    assert PanelKind.from_string("shared") is PanelKind.SHARED
    assert PanelKind.from_string("bogus") is PanelKind.SHARED


def test_runtime_type_parsing() -> None:
    assert RuntimeType.from_string("SHELL") is RuntimeType.SHELL
    assert RuntimeType.from_string("Process") is RuntimeType.PROCESS
    assert RuntimeType.from_string("bogus") is RuntimeType.PROCESS


def test_execution_engine_uses_caller_default() -> None:
    assert ExecutionEngine.from_string("Process", ExecutionEngine.TERMINAL) is ExecutionEngine.PROCESS
    assert ExecutionEngine.from_string("bogus", ExecutionEngine.TERMINAL) is ExecutionEngine.TERMINAL
    assert ExecutionEngine.from_string("bogus", ExecutionEngine.PROCESS) is ExecutionEngine.PROCESS


def test_json_schema_version_parsing() -> None:
    assert JsonSchemaVersion.from_string("0.1.0") is JsonSchemaVersion.V0_1_0
    assert JsonSchemaVersion.from_string("2.0.0") is JsonSchemaVersion.V2_0_0
    assert JsonSchemaVersion.from_string("9") is JsonSchemaVersion.V2_0_0


def test_presentation_defaults() -> None:
    defaults = PresentationOptions.defaults()
    assert defaults.reveal is RevealKind.ALWAYS
    assert defaults.panel is PanelKind.SHARED
    assert defaults.echo is True
    assert defaults.focus is False


def test_shell_configuration_accepts_raw_and_model_values() -> None:
    assert is_shell_configuration({"executable": "bash"})
    assert is_shell_configuration({"executable": "bash", "args": ["-l", "-c"]})
    assert is_shell_configuration(ShellConfiguration(executable="zsh", args=("-c",)))
    assert is_shell_configuration(ShellConfiguration(executable="zsh"))


@pytest.mark.parametrize(
    "value",
    [
        None,
        {},
        {"executable": 3},
        {"executable": "bash", "args": "-c"},
        {"executable": "bash", "args": ["-c", 1]},
        {"executable": "sh", "args": None},
        "bash",
    ],
)
def test_shell_configuration_rejects_bad_shapes(value: object) -> None:
    assert is_shell_configuration(value) is False
