"""Deterministic JSON artifacts."""

from taskdeck.artifacts.canonical_json import canonical_dumps, write_json

__all__ = ["canonical_dumps", "write_json"]
