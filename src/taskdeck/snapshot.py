"""Read and write task snapshot documents.

A snapshot is a JSON or YAML document holding already-assembled tasks:

    workspaceFolders:
      - {uri: file:///work/app, name: app}
    taskSets:
      - extension: {identifier: vendor.npm}
        tasks:
          - {_id: ..., _label: ..., type: ..., _source: {...}, ...}

Task entries use the persisted field names (``_id``, ``_label``,
``_source``, ``_key``). The variant of each entry is chosen with
``classify_task``. Workspace folder references are folder URIs.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from taskdeck.model.command import (
    CommandConfiguration,
    CommandOptions,
    PanelKind,
    PresentationOptions,
    RevealKind,
    RuntimeType,
    ShellConfiguration,
    is_shell_configuration,
    is_string_list,
)
from taskdeck.model.definition import ExtensionDescription, TaskSet
from taskdeck.model.sorter import TaskSorter
from taskdeck.model.source import (
    CompositeTaskSource,
    ExtensionTaskSource,
    TaskIdentifier,
    TaskScope,
    TaskSourceConfigElement,
    WorkspaceTaskSource,
)
from taskdeck.model.task import (
    CompositeTask,
    ConfiguringTask,
    ContributedTask,
    CustomTask,
    Task,
    TaskDependency,
    TaskKind,
    classify_task,
)
from taskdeck.model.workspace import WorkspaceFolder, folder_name_from_uri
from taskdeck.schemas.validator import validate_data

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA = "task_snapshot"

FolderResolver = Callable[[Any], WorkspaceFolder | None]

SNAPSHOT_REASON_MISSING = "SNAPSHOT_MISSING"
SNAPSHOT_REASON_PARSE_ERROR = "SNAPSHOT_PARSE_ERROR"
SNAPSHOT_REASON_SCHEMA_INVALID = "SNAPSHOT_SCHEMA_INVALID"
SNAPSHOT_REASON_TASK_INVALID = "SNAPSHOT_TASK_INVALID"


class SnapshotError(ValueError):
    """Snapshot document could not be read or decoded."""

    reason_code: str

    def __init__(self, message: str, reason_code: str = SNAPSHOT_REASON_TASK_INVALID) -> None:
        super().__init__(message)
        self.reason_code = reason_code


@dataclass
class TaskSnapshot:
    """Workspace folders and the task sets published for them."""

    workspace_folders: list[WorkspaceFolder] = field(default_factory=list)
    task_sets: list[TaskSet] = field(default_factory=list)

    def tasks(self) -> list[Task]:
        return [task for task_set in self.task_sets for task in task_set.tasks]

    def sorter(self) -> TaskSorter:
        return TaskSorter(self.workspace_folders)

    def sorted_tasks(self) -> list[Task]:
        return self.sorter().sort(self.tasks())


class _FolderResolver:
    """Maps folder URIs to the declared workspace folders."""

    def __init__(self, folders: list[WorkspaceFolder]) -> None:
        self._by_uri = {folder.uri: folder for folder in folders}

    def __call__(self, uri: Any) -> WorkspaceFolder | None:
        if uri is None:
            return None
        if not isinstance(uri, str):
            raise TypeError(f"workspace folder reference must be a URI string, got {uri!r}")
        folder = self._by_uri.get(uri)
        if folder is None:
            logger.warning("task references undeclared workspace folder %s", uri)
            folder = WorkspaceFolder.detached(uri)
            self._by_uri[uri] = folder
        return folder


# Decoding


def load_snapshot(path: Path) -> TaskSnapshot:
    """Load, validate and decode a snapshot file (``.json``, ``.yaml`` or ``.yml``)."""
    if not path.exists():
        raise SnapshotError(f"Missing snapshot file at {path}", SNAPSHOT_REASON_MISSING)

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SnapshotError(f"{path.name} parse error: {exc}", SNAPSHOT_REASON_PARSE_ERROR) from exc

    snapshot = snapshot_from_dict(payload)
    logger.debug(
        "loaded %d task(s) in %d set(s) from %s",
        len(snapshot.tasks()),
        len(snapshot.task_sets),
        path,
    )
    return snapshot


def snapshot_from_dict(payload: Any) -> TaskSnapshot:
    """Validate a decoded document against the snapshot schema and build the model."""
    ok, errors = validate_data(payload, SNAPSHOT_SCHEMA, strict=False)
    if not ok:
        raise SnapshotError(
            "snapshot does not match schema:\n" + "\n".join(f"  - {msg}" for msg in errors),
            SNAPSHOT_REASON_SCHEMA_INVALID,
        )

    folders = [
        WorkspaceFolder(
            uri=raw["uri"],
            name=raw.get("name") or folder_name_from_uri(raw["uri"]),
            index=index,
        )
        for index, raw in enumerate(payload.get("workspaceFolders", []))
    ]
    resolve = _FolderResolver(folders)

    task_sets: list[TaskSet] = []
    for set_index, raw_set in enumerate(payload["taskSets"]):
        extension_raw = raw_set.get("extension")
        extension = (
            ExtensionDescription(
                identifier=extension_raw["identifier"],
                name=extension_raw.get("name"),
                version=extension_raw.get("version"),
            )
            if extension_raw
            else None
        )
        tasks = [
            _decode_entry(raw_task, resolve, f"taskSets.{set_index}.tasks.{task_index}")
            for task_index, raw_task in enumerate(raw_set["tasks"])
        ]
        task_sets.append(TaskSet(tasks=tasks, extension=extension))

    return TaskSnapshot(workspace_folders=folders, task_sets=task_sets)


def _decode_entry(raw: Mapping[str, Any], resolve: FolderResolver, where: str) -> Task:
    try:
        return task_from_dict(raw, resolve)
    except SnapshotError as exc:
        raise SnapshotError(f"{where}: {exc}", exc.reason_code) from exc


def task_from_dict(
    raw: Mapping[str, Any],
    resolve_folder: FolderResolver | None = None,
) -> Task:
    """Build the task variant a raw entry structurally matches.

    Args:
        raw: Task entry using persisted field names
        resolve_folder: Callable mapping a folder URI to a WorkspaceFolder;
            defaults to detached folders

    Raises:
        SnapshotError: If the entry matches no task variant, is a configuring
            task, or has malformed fields
    """
    resolve = resolve_folder or _FolderResolver([])
    kind = classify_task(raw)
    if kind is None:
        raise SnapshotError(f"task `{raw.get('_label')}` matches no task variant")
    if kind is TaskKind.CONFIGURING:
        raise SnapshotError(
            f"task `{raw.get('_label')}` still configures `{raw['configures'].get('type')}`; "
            "resolve it against its contributed task first"
        )

    try:
        common = _common_fields(raw, resolve)
        source_raw = raw["_source"]
        if kind is TaskKind.CUSTOM:
            return CustomTask(
                source=_workspace_source_from_dict(source_raw, resolve),
                command=_command_from_dict(raw["command"]),
                **common,
            )
        if kind is TaskKind.COMPOSITE:
            return CompositeTask(
                source=CompositeTaskSource(label=source_raw["label"]),
                **common,
            )
        return ContributedTask(
            source=_extension_source_from_dict(source_raw, resolve),
            defines=_identifier_from_dict(raw["defines"]),
            command=_command_from_dict(raw["command"]),
            has_defined_matchers=bool(raw.get("hasDefinedMatchers", False)),
            **common,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SnapshotError(f"task `{raw.get('_label')}` is malformed: {exc}") from exc


def configuring_task_from_dict(
    raw: Mapping[str, Any],
    resolve_folder: FolderResolver | None = None,
) -> ConfiguringTask:
    """Build a configuring task from a workspace entry that has no command yet."""
    if classify_task(raw) is not TaskKind.CONFIGURING:
        raise SnapshotError(f"task `{raw.get('_label')}` is not a configuring task")
    resolve = resolve_folder or _FolderResolver([])
    try:
        return ConfiguringTask(
            source=_workspace_source_from_dict(raw["_source"], resolve),
            configures=_identifier_from_dict(raw["configures"]),
            **_common_fields(raw, resolve),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SnapshotError(f"task `{raw.get('_label')}` is malformed: {exc}") from exc


def _common_fields(raw: Mapping[str, Any], resolve: FolderResolver) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "id": raw["_id"],
        "label": raw["_label"],
        "type": raw["type"],
        "group": raw.get("group"),
        "is_default_group_entry": raw.get("isDefaultGroupEntry"),
        "is_background": raw.get("isBackground"),
        "prompt_on_close": raw.get("promptOnClose"),
    }
    if "name" in raw:
        fields["name"] = raw["name"]
    if "identifier" in raw:
        fields["identifier"] = raw["identifier"]
    if "presentation" in raw:
        fields["presentation"] = _presentation_from_dict(raw["presentation"])
    if "dependsOn" in raw:
        fields["depends_on"] = [
            TaskDependency(workspace_folder=resolve(dep.get("workspaceFolder")), task=dep["task"])
            for dep in raw["dependsOn"]
        ]
    if "problemMatchers" in raw:
        fields["problem_matchers"] = list(raw["problemMatchers"])
    return fields


def _identifier_from_dict(raw: Mapping[str, Any]) -> TaskIdentifier:
    properties = {name: value for name, value in raw.items() if name not in ("_key", "type")}
    return TaskIdentifier(key=raw["_key"], type=raw["type"], properties=properties)


def _workspace_source_from_dict(raw: Mapping[str, Any], resolve: FolderResolver) -> WorkspaceTaskSource:
    config = raw["config"]
    folder = resolve(config["workspaceFolder"])
    if folder is None:
        raise ValueError("workspace task source requires a workspaceFolder")
    customizes = raw.get("customizes")
    return WorkspaceTaskSource(
        label=raw["label"],
        config=TaskSourceConfigElement(
            workspace_folder=folder,
            file=config["file"],
            index=int(config["index"]),
            element=config.get("element"),
        ),
        customizes=_identifier_from_dict(customizes) if customizes else None,
    )


def _extension_source_from_dict(raw: Mapping[str, Any], resolve: FolderResolver) -> ExtensionTaskSource:
    return ExtensionTaskSource(
        label=raw["label"],
        extension=raw["extension"],
        scope=TaskScope(str(raw.get("scope", TaskScope.WORKSPACE.value)).lower()),
        workspace_folder=resolve(raw.get("workspaceFolder")),
    )


def _presentation_from_dict(raw: Any) -> PresentationOptions:
    if not isinstance(raw, Mapping):
        raise ValueError(f"presentation must be a mapping, got {raw!r}")
    defaults = PresentationOptions.defaults()
    return PresentationOptions(
        reveal=RevealKind.from_string(str(raw.get("reveal", defaults.reveal.value))),
        echo=bool(raw.get("echo", defaults.echo)),
        focus=bool(raw.get("focus", defaults.focus)),
        panel=PanelKind.from_string(str(raw.get("panel", defaults.panel.value))),
    )


def _command_from_dict(raw: Any) -> CommandConfiguration:
    if not isinstance(raw, Mapping):
        raise ValueError(f"command must be a mapping, got {raw!r}")
    options = None
    options_raw = raw.get("options")
    if options_raw is not None:
        if not isinstance(options_raw, Mapping):
            raise ValueError(f"command options must be a mapping, got {options_raw!r}")
        shell = None
        shell_raw = options_raw.get("shell")
        if shell_raw is not None:
            if not is_shell_configuration(shell_raw):
                raise ValueError(f"invalid shell configuration: {shell_raw!r}")
            args = shell_raw.get("args")
            shell = ShellConfiguration(
                executable=shell_raw["executable"],
                args=tuple(args) if args is not None else None,
            )
        options = CommandOptions(
            shell=shell,
            cwd=options_raw.get("cwd"),
            env=dict(options_raw["env"]) if options_raw.get("env") is not None else None,
        )

    args_raw = raw.get("args")
    if args_raw is not None and not is_string_list(args_raw):
        raise ValueError("command args must be a list of strings")

    return CommandConfiguration(
        runtime=RuntimeType.from_string(str(raw.get("runtime", RuntimeType.PROCESS.value))),
        name=raw["name"],
        presentation=(
            _presentation_from_dict(raw["presentation"])
            if "presentation" in raw
            else PresentationOptions.defaults()
        ),
        options=options,
        args=tuple(args_raw) if args_raw is not None else None,
        task_selector=raw.get("taskSelector"),
        suppress_task_name=raw.get("suppressTaskName"),
    )


# Encoding


def snapshot_to_dict(snapshot: TaskSnapshot) -> dict[str, Any]:
    """Convert a snapshot to its persisted JSON-compatible form."""
    task_sets: list[dict[str, Any]] = []
    for task_set in snapshot.task_sets:
        entry: dict[str, Any] = {"tasks": [task_to_dict(task) for task in task_set.tasks]}
        if task_set.extension is not None:
            entry["extension"] = _drop_none(
                {
                    "identifier": task_set.extension.identifier,
                    "name": task_set.extension.name,
                    "version": task_set.extension.version,
                }
            )
        task_sets.append(entry)
    return {
        "workspaceFolders": [
            {"uri": folder.uri, "name": folder.name} for folder in snapshot.workspace_folders
        ],
        "taskSets": task_sets,
    }


def task_to_dict(task: Task | ConfiguringTask) -> dict[str, Any]:
    """Convert a task to its persisted form (``_id``, ``_label``, ``_source``...)."""
    payload: dict[str, Any] = {
        "_id": task.id,
        "_label": task.label,
        "type": task.type,
        "name": task.name,
        "identifier": task.identifier,
        "group": task.group,
        "isDefaultGroupEntry": task.is_default_group_entry,
        "isBackground": task.is_background,
        "promptOnClose": task.prompt_on_close,
        "problemMatchers": task.problem_matchers,
    }
    if task.presentation is not None:
        payload["presentation"] = _presentation_to_dict(task.presentation)
    if task.depends_on is not None:
        payload["dependsOn"] = [
            {
                "workspaceFolder": dep.workspace_folder.uri if dep.workspace_folder else None,
                "task": dep.task,
            }
            for dep in task.depends_on
        ]

    if isinstance(task, (CustomTask, ConfiguringTask)):
        payload["_source"] = _workspace_source_to_dict(task.source)
    elif isinstance(task, ContributedTask):
        source = task.source
        payload["_source"] = _drop_none(
            {
                "kind": source.kind.value,
                "label": source.label,
                "extension": source.extension,
                "scope": source.scope.value,
                "workspaceFolder": source.workspace_folder.uri if source.workspace_folder else None,
            }
        )
        payload["defines"] = _identifier_to_dict(task.defines)
        payload["hasDefinedMatchers"] = task.has_defined_matchers
    else:
        payload["_source"] = {"kind": task.source.kind.value, "label": task.source.label}

    if isinstance(task, ConfiguringTask):
        payload["configures"] = _identifier_to_dict(task.configures)
    elif isinstance(task, (CustomTask, ContributedTask)):
        payload["command"] = _command_to_dict(task.command)

    return _drop_none(payload)


def _identifier_to_dict(identifier: TaskIdentifier) -> dict[str, Any]:
    return {**identifier.properties, "_key": identifier.key, "type": identifier.type}


def _workspace_source_to_dict(source: WorkspaceTaskSource) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": source.kind.value,
        "label": source.label,
        "config": {
            "workspaceFolder": source.config.workspace_folder.uri,
            "file": source.config.file,
            "index": source.config.index,
            "element": source.config.element,
        },
    }
    if source.customizes is not None:
        payload["customizes"] = _identifier_to_dict(source.customizes)
    return payload


def _presentation_to_dict(presentation: PresentationOptions) -> dict[str, Any]:
    return {
        "reveal": presentation.reveal.value,
        "echo": presentation.echo,
        "focus": presentation.focus,
        "panel": presentation.panel.value,
    }


def _command_to_dict(command: CommandConfiguration) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "runtime": command.runtime.value,
        "name": command.name,
        "presentation": _presentation_to_dict(command.presentation),
        "args": list(command.args) if command.args is not None else None,
        "taskSelector": command.task_selector,
        "suppressTaskName": command.suppress_task_name,
    }
    if command.options is not None:
        shell = command.options.shell
        payload["options"] = _drop_none(
            {
                "shell": _drop_none(
                    {
                        "executable": shell.executable,
                        "args": list(shell.args) if shell.args is not None else None,
                    }
                )
                if shell is not None
                else None,
                "cwd": command.options.cwd,
                "env": command.options.env,
            }
        )
    return _drop_none(payload)


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}
