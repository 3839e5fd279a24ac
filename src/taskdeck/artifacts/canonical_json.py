"""Canonical JSON used for task identifier keys and ``taskdeck list`` output.

Identifier keys must be byte-stable across runs, so keys are sorted and no
whitespace is emitted.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


def canonical_dumps(obj: Any) -> str:
    """Serialize with sorted keys and compact separators; non-ASCII is kept as is."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def write_json(path: Path, rows: Any) -> None:
    """Write task rows as canonical UTF-8 JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(canonical_dumps(rows), encoding="utf-8")
