"""Task variants and the identity operations over them.

A task is one of three runnable-or-groupable variants:

- ``CustomTask``: authored in a workspace configuration file, runs a command
- ``ContributedTask``: contributed by an extension, runs a command
- ``CompositeTask``: groups other tasks, has no command of its own

``ConfiguringTask`` is a fourth, transient shape. It is a workspace entry that
customizes a contributed task type and has not been resolved against the
contributed task yet. It is never part of the ``Task`` union.

Variant membership is decided structurally (``classify_task``) with a fixed
precedence, so raw mappings coming from an assembler and model instances are
classified by the same rules. Model instances check at construction that
their shape matches their own ``kind``.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from taskdeck.model.command import field_value
from taskdeck.model.source import (
    CompositeTaskSource,
    ExtensionTaskSource,
    TaskIdentifier,
    TaskSourceKind,
    WorkspaceTaskSource,
)

if TYPE_CHECKING:
    from taskdeck.model.command import CommandConfiguration, PresentationOptions
    from taskdeck.model.workspace import WorkspaceFolder


class TaskKind(str, Enum):
    """Variant tag of a task value."""

    CUSTOM = "custom"
    CONTRIBUTED = "contributed"
    COMPOSITE = "composite"
    CONFIGURING = "configuring"


class TaskGroup(str, Enum):
    """Well-known task groups."""

    CLEAN = "clean"
    BUILD = "build"
    REBUILD = "rebuild"
    TEST = "test"

    @classmethod
    def is_group(cls, value: Any) -> bool:
        return isinstance(value, str) and value in {group.value for group in cls}


TELEMETRY_EXTENSION = "extension"
TELEMETRY_WORKSPACE = "workspace"
TELEMETRY_CUSTOMIZED = "workspace>extension"
TELEMETRY_COMPOSITE = "composite"
TELEMETRY_UNKNOWN = "unknown"


@dataclass(frozen=True)
class TaskDependency:
    """Reference to another task this task depends on."""

    workspace_folder: WorkspaceFolder | None
    task: str


@dataclass(kw_only=True)
class ConfigurationProperties:
    """Fields shared by every task variant."""

    name: str | None = None
    identifier: str | None = None
    group: str | None = None
    # Whether this task is the primary task in its group.
    is_default_group_entry: bool | None = None
    presentation: PresentationOptions | None = None
    is_background: bool | None = None
    prompt_on_close: bool | None = None
    depends_on: list[TaskDependency] | None = None
    problem_matchers: list[str | dict[str, Any]] | None = None


@dataclass(kw_only=True)
class CommonTask(ConfigurationProperties):
    """Base for task variants.

    ``id`` is the runtime-assigned identity, unique within one snapshot.
    ``label`` is the cached display label. Both are serialized with a leading
    underscore (``_id``, ``_label``).
    """

    kind: ClassVar[TaskKind]

    id: str
    label: str
    type: str

    def __post_init__(self) -> None:
        actual = classify_task(self)
        if actual is not self.kind:
            shape = actual.value if actual is not None else "no known task"
            raise ValueError(
                f"{self.__class__.__name__} `{self.label}` has the shape of {shape} variant"
            )


@dataclass(kw_only=True)
class CustomTask(CommonTask):
    """Fully user-defined task with a runnable command."""

    kind: ClassVar[TaskKind] = TaskKind.CUSTOM

    type: str = "custom"
    source: WorkspaceTaskSource
    name: str
    identifier: str
    command: CommandConfiguration


@dataclass(kw_only=True)
class ContributedTask(CommonTask):
    """Runnable task of an extension-defined task type."""

    kind: ClassVar[TaskKind] = TaskKind.CONTRIBUTED

    source: ExtensionTaskSource
    defines: TaskIdentifier
    command: CommandConfiguration
    has_defined_matchers: bool = False


@dataclass(kw_only=True)
class CompositeTask(CommonTask):
    """Grouping task; running it means running its dependencies."""

    kind: ClassVar[TaskKind] = TaskKind.COMPOSITE

    type: str = "composite"
    source: CompositeTaskSource
    identifier: str


@dataclass(kw_only=True)
class ConfiguringTask(CommonTask):
    """Workspace entry customizing a contributed task type, not yet resolved."""

    kind: ClassVar[TaskKind] = TaskKind.CONFIGURING

    source: WorkspaceTaskSource
    configures: TaskIdentifier


Task = CustomTask | ContributedTask | CompositeTask


def _source_of(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("_source")
    return getattr(value, "source", None)


def _has_typed_identifier(value: Any, name: str) -> bool:
    identifier = field_value(value, name)
    return bool(identifier) and isinstance(field_value(identifier, "type"), str)


def is_custom_task(value: Any) -> bool:
    return value is not None and field_value(value, "type") == "custom"


def is_configuring_task(value: Any) -> bool:
    """A ``configures`` identifier is present and there is no command yet."""
    return (
        value is not None
        and _has_typed_identifier(value, "configures")
        and field_value(value, "command") is None
    )


def is_contributed_task(value: Any) -> bool:
    """A ``defines`` identifier is present together with a command.

    The command is what tells a resolved contributed task apart from a
    configuring task.
    """
    return (
        value is not None
        and _has_typed_identifier(value, "defines")
        and field_value(value, "command") is not None
    )


def is_composite_task(value: Any) -> bool:
    if value is None:
        return False
    source = _source_of(value)
    return bool(source) and field_value(source, "kind") == TaskSourceKind.COMPOSITE.value


def classify_task(value: Any) -> TaskKind | None:
    """Return the variant tag of a raw mapping or task instance.

    Precedence: custom, composite, configuring, contributed. Returns None
    when the value matches no variant.
    """
    if is_custom_task(value):
        return TaskKind.CUSTOM
    if is_composite_task(value):
        return TaskKind.COMPOSITE
    if is_configuring_task(value):
        return TaskKind.CONFIGURING
    if is_contributed_task(value):
        return TaskKind.CONTRIBUTED
    return None


def get_key(task: Task) -> str:
    """Stable identity of a task across separate parses."""
    if isinstance(task, ContributedTask):
        return task.defines.key
    return task.identifier


def get_workspace_folder(task: Task) -> WorkspaceFolder | None:
    """Owning workspace folder; None for composite and non-folder-scoped tasks."""
    if isinstance(task, CustomTask):
        return task.source.config.workspace_folder
    if isinstance(task, ContributedTask):
        return task.source.workspace_folder
    return None


def clone(task: Task) -> Task:
    """Shallow copy: new top-level object, nested values shared."""
    return copy.copy(task)


def get_telemetry_kind(task: Any) -> str:
    if isinstance(task, ContributedTask):
        return TELEMETRY_EXTENSION
    if isinstance(task, CustomTask):
        if task.source.customizes is not None:
            return TELEMETRY_CUSTOMIZED
        return TELEMETRY_WORKSPACE
    if isinstance(task, CompositeTask):
        return TELEMETRY_COMPOSITE
    return TELEMETRY_UNKNOWN


def matches(task: Task, alias: str) -> bool:
    """Case-sensitive match of a user-typed name against label or identifier."""
    return alias == task.label or alias == task.identifier
