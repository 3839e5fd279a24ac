"""Tests for the taskdeck CLI."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import yaml
from typer.testing import CliRunner

from taskdeck import __version__
from taskdeck.cli import cli
from tests.factories import APP, build_snapshot_payload, raw_custom_task

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


def _write_snapshot(tmp_path: Path, payload: dict | None = None) -> Path:
    path = tmp_path / "tasks.yaml"
    path.write_text(yaml.safe_dump(payload or build_snapshot_payload()), encoding="utf-8")
    return path


def test_version() -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list_json_is_in_display_order(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)

    result = runner.invoke(cli, ["--root", str(tmp_path), "list", str(snapshot), "--json"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.output)
    assert [row["label"] for row in rows] == ["Build", "npm: build", "Test", "All"]
    assert [row["kind"] for row in rows] == ["workspace", "extension", "workspace", "composite"]
    assert rows[0]["folder"] == APP.uri
    assert rows[-1]["folder"] is None
    assert rows[-1]["key"] == "all"


def test_list_writes_out_file(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)
    out = tmp_path / "out" / "tasks.json"

    result = runner.invoke(cli, ["--root", str(tmp_path), "list", str(snapshot), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert "Build" in result.output
    rows = json.loads(out.read_text(encoding="utf-8"))
    assert len(rows) == 4


def test_list_reports_missing_snapshot(tmp_path: Path) -> None:
    result = runner.invoke(cli, ["--root", str(tmp_path), "list", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 2
    assert "SNAPSHOT_MISSING" in result.output


def test_list_rejects_empty_presentation(tmp_path: Path) -> None:
    snapshot = _write_snapshot(
        tmp_path,
        {"taskSets": [{"tasks": [raw_custom_task("Build", presentation=None)]}]},
    )

    result = runner.invoke(cli, ["--root", str(tmp_path), "list", str(snapshot)])

    assert result.exit_code == 2, result.output
    assert "SNAPSHOT_SCHEMA_INVALID" in result.output


def test_show_by_identifier_uses_configured_engine(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text('execution_engine = "process"\n', encoding="utf-8")

    result = runner.invoke(cli, ["--root", str(tmp_path), "show", str(snapshot), "test"])

    assert result.exit_code == 0, result.output
    assert '"execution_engine": "process"' in result.output
    assert '"label": "Test"' in result.output


def test_show_unknown_alias(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)

    result = runner.invoke(cli, ["--root", str(tmp_path), "show", str(snapshot), "TEST"])

    assert result.exit_code == 1
    assert "No task matches" in result.output


def test_bad_config_exits_with_error(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)
    config_dir = tmp_path / ".taskdeck"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("execution_engine = \n", encoding="utf-8")

    result = runner.invoke(cli, ["--root", str(tmp_path), "list", str(snapshot)])

    assert result.exit_code == 2
    assert "Malformed TOML" in result.output


def test_validate_ok(tmp_path: Path) -> None:
    snapshot = _write_snapshot(tmp_path)

    result = runner.invoke(cli, ["--root", str(tmp_path), "validate", str(snapshot)])

    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    assert "4 task(s)" in result.output


def test_validate_rejects_duplicate_ids(tmp_path: Path, snapshot_payload: dict) -> None:
    payload = snapshot_payload
    payload["taskSets"][0]["tasks"].append(raw_custom_task("Build", folder_uri=APP.uri))
    snapshot = _write_snapshot(tmp_path, payload)

    result = runner.invoke(cli, ["--root", str(tmp_path), "validate", str(snapshot)])

    assert result.exit_code == 1
    assert "custom:Build" in result.output


def test_validate_rejects_dangling_customization(tmp_path: Path) -> None:
    payload = build_snapshot_payload()
    lint = raw_custom_task("Lint")
    lint["_source"]["customizes"] = {"_key": '{"script":"lint","type":"npm"}', "type": "npm"}
    payload["taskSets"][0]["tasks"].append(lint)
    snapshot = _write_snapshot(tmp_path, payload)

    result = runner.invoke(cli, ["--root", str(tmp_path), "validate", str(snapshot)])

    assert result.exit_code == 1
    assert "Unresolved customization" in result.output
