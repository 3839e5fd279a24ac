"""Packaged JSON schemas for taskdeck documents."""

from taskdeck.schemas.validator import load_schema, validate_data

__all__ = ["load_schema", "validate_data"]
