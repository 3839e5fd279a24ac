"""Configuration loader for taskdeck.

Supports .taskdeck/config.toml or .taskdeck/config.json files carrying the
defaults that task consumers apply when a task leaves them unset.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from taskdeck.model.command import (
    ExecutionEngine,
    JsonSchemaVersion,
    PanelKind,
    PresentationOptions,
    RevealKind,
)

CONFIG_DIR_NAME = ".taskdeck"


@dataclass(frozen=True)
class TaskdeckConfig:
    """Resolved defaults for execution engine, schema version and presentation."""

    execution_engine: ExecutionEngine = ExecutionEngine.TERMINAL
    schema_version: JsonSchemaVersion = JsonSchemaVersion.V2_0_0
    presentation: PresentationOptions = field(default_factory=PresentationOptions.defaults)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskdeckConfig:
        """Parse a config mapping; unknown enum text falls back to defaults."""
        base = cls()

        engine_raw = data.get("execution_engine")
        engine = (
            ExecutionEngine.from_string(engine_raw, base.execution_engine)
            if isinstance(engine_raw, str)
            else base.execution_engine
        )

        version_raw = data.get("schema_version")
        version = (
            JsonSchemaVersion.from_string(version_raw)
            if isinstance(version_raw, str)
            else base.schema_version
        )

        presentation_raw = data.get("presentation", {})
        if not isinstance(presentation_raw, dict):
            raise TypeError("presentation must be a table")
        presentation = PresentationOptions(
            reveal=RevealKind.from_string(str(presentation_raw.get("reveal", "always"))),
            echo=bool(presentation_raw.get("echo", base.presentation.echo)),
            focus=bool(presentation_raw.get("focus", base.presentation.focus)),
            panel=PanelKind.from_string(str(presentation_raw.get("panel", "shared"))),
        )

        return cls(
            execution_engine=engine,
            schema_version=version,
            presentation=presentation,
        )


def load_config(root: Path) -> TaskdeckConfig:
    """Load configuration from .taskdeck/config.toml or .taskdeck/config.json.

    Priority order:
    1. .taskdeck/config.toml (preferred)
    2. .taskdeck/config.json (fallback)
    3. built-in defaults

    Raises:
        RuntimeError: If a config file is malformed or invalid
    """
    config_dir = root / CONFIG_DIR_NAME

    toml_path = config_dir / "config.toml"
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
            return TaskdeckConfig.from_dict(data)
        except tomllib.TOMLDecodeError as e:
            raise RuntimeError(f"Malformed TOML config at {toml_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError(f"Invalid config structure in {toml_path}: {e}") from e

    json_path = config_dir / "config.json"
    if json_path.exists():
        try:
            with open(json_path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise TypeError("expected an object at top level")
            return TaskdeckConfig.from_dict(data)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Malformed JSON config at {json_path}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError(f"Invalid config structure in {json_path}: {e}") from e

    return TaskdeckConfig()
