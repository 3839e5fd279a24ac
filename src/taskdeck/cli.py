"""taskdeck CLI - inspect, order and validate task snapshots."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskdeck import __version__
from taskdeck.artifacts.canonical_json import canonical_dumps, write_json
from taskdeck.config import TaskdeckConfig, load_config
from taskdeck.logging_setup import setup_logging
from taskdeck.model.definition import unresolved_customizations
from taskdeck.model.task import (
    Task,
    get_key,
    get_telemetry_kind,
    get_workspace_folder,
    matches,
)
from taskdeck.snapshot import SnapshotError, TaskSnapshot, load_snapshot, task_to_dict

cli = typer.Typer(
    name="taskdeck",
    help="taskdeck - task identity and ordering for multi-root workspaces",
    no_args_is_help=True,
)
console = Console()


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    ctx: typer.Context,
    root: Path = typer.Option(
        Path("."),
        "--root",
        help="Directory holding the .taskdeck configuration folder.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show taskdeck version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Load configuration shared by all commands."""
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        ctx.obj = load_config(root)
    except RuntimeError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(2) from exc


def _load(snapshot_path: Path) -> TaskSnapshot:
    try:
        return load_snapshot(snapshot_path)
    except SnapshotError as exc:
        console.print(f"[bold red]Error ({exc.reason_code}):[/bold red] {escape(str(exc))}")
        raise typer.Exit(2) from exc


def _task_row(task: Task) -> dict[str, str | None]:
    folder = get_workspace_folder(task)
    return {
        "id": task.id,
        "label": task.label,
        "key": get_key(task),
        "kind": get_telemetry_kind(task),
        "folder": folder.uri if folder is not None else None,
        "group": task.group,
    }


@cli.command("list")
def list_tasks(
    snapshot_path: Path = typer.Argument(..., help="Snapshot file (.json, .yaml or .yml)."),
    as_json: bool = typer.Option(False, "--json", help="Print canonical JSON instead of a table."),
    out: Path | None = typer.Option(None, "--out", help="Also write the ordered rows as JSON."),
) -> None:
    """List tasks in display order: folder order first, then label."""
    snapshot = _load(snapshot_path)
    rows = [_task_row(task) for task in snapshot.sorted_tasks()]

    if out is not None:
        write_json(out, rows)

    if as_json:
        typer.echo(canonical_dumps(rows))
        return

    table = Table(title=f"{len(rows)} task(s)")
    table.add_column("Label", style="bold")
    table.add_column("Key")
    table.add_column("Kind")
    table.add_column("Folder")
    table.add_column("Group")
    for row in rows:
        table.add_row(row["label"], row["key"], row["kind"], row["folder"] or "-", row["group"] or "-")
    console.print(table)


@cli.command("show")
def show_task(
    ctx: typer.Context,
    snapshot_path: Path = typer.Argument(..., help="Snapshot file (.json, .yaml or .yml)."),
    alias: str = typer.Argument(..., help="Task label or identifier (case-sensitive)."),
) -> None:
    """Show the first task whose label or identifier equals ALIAS."""
    config: TaskdeckConfig = ctx.obj
    snapshot = _load(snapshot_path)

    found = next((task for task in snapshot.sorted_tasks() if matches(task, alias)), None)
    if found is None:
        console.print(f"[yellow]No task matches `{escape(alias)}`[/yellow]")
        raise typer.Exit(1)

    presentation = found.presentation or config.presentation
    payload = {
        **_task_row(found),
        "execution_engine": config.execution_engine.value,
        "presentation": {
            "reveal": presentation.reveal.value,
            "echo": presentation.echo,
            "focus": presentation.focus,
            "panel": presentation.panel.value,
        },
        "task": task_to_dict(found),
    }
    console.print_json(canonical_dumps(payload))


@cli.command("validate")
def validate_snapshot(
    snapshot_path: Path = typer.Argument(..., help="Snapshot file (.json, .yaml or .yml)."),
) -> None:
    """Check a snapshot against the schema and the task variant rules."""
    snapshot = _load(snapshot_path)

    seen: dict[str, str] = {}
    duplicates: list[str] = []
    for task in snapshot.tasks():
        if task.id in seen:
            duplicates.append(task.id)
        seen[task.id] = task.label

    if duplicates:
        console.print(f"[bold red]Duplicate task ids:[/bold red] {', '.join(sorted(set(duplicates)))}")
        raise typer.Exit(1)

    dangling = unresolved_customizations(snapshot.tasks())
    if dangling:
        for task in dangling:
            console.print(
                f"[bold red]Unresolved customization:[/bold red] `{escape(task.label)}` customizes "
                f"a task type no extension contributes"
            )
        raise typer.Exit(1)

    console.print(
        f"[green]OK[/green] {len(seen)} task(s) in {len(snapshot.task_sets)} set(s), "
        f"{len(snapshot.workspace_folders)} workspace folder(s)"
    )
