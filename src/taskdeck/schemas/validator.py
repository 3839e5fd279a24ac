"""Schema validation against the JSON schemas shipped in package data."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib.resources import files
from typing import Any

from jsonschema.validators import Draft202012Validator

SCHEMA_SUFFIX = ".schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str) -> dict[str, Any]:
    """Load a packaged schema by name (with or without the .schema.json suffix).

    Raises:
        KeyError: If no such schema ships with the package
    """
    canonical_name = name.removesuffix(SCHEMA_SUFFIX)
    resource = files("taskdeck.schemas") / f"{canonical_name}{SCHEMA_SUFFIX}"
    if not resource.is_file():
        raise KeyError(f"Schema '{canonical_name}' not found in taskdeck package data")
    return json.loads(resource.read_text(encoding="utf-8"))


def validate_data(
    data: Any,
    schema_name: str,
    strict: bool = True,
) -> tuple[bool, list[str]]:
    """Validate data against a packaged schema.

    Args:
        data: Decoded JSON/YAML document
        schema_name: Name of schema to validate against
        strict: If True, raise on validation errors; if False, return error list

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        KeyError: If schema not found in package data
        ValueError: If validation fails and strict=True
    """
    validator = Draft202012Validator(load_schema(schema_name))
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])

    if errors:
        error_messages = [
            f"{'.'.join(str(p) for p in e.path)}: {e.message}"
            if e.path
            else e.message
            for e in errors
        ]

        if strict:
            raise ValueError(
                f"Schema validation failed for '{schema_name}':\n"
                + "\n".join(f"  - {msg}" for msg in error_messages)
            )

        return False, error_messages

    return True, []
