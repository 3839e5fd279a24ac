"""Task source (provenance) types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from taskdeck.model.workspace import WorkspaceFolder


class TaskScope(str, Enum):
    """Level at which an extension-contributed task applies."""

    GLOBAL = "global"
    WORKSPACE = "workspace"
    FOLDER = "folder"


class TaskSourceKind(str, Enum):
    """Where a task came from."""

    WORKSPACE = "workspace"
    EXTENSION = "extension"
    COMPOSITE = "composite"


@dataclass(frozen=True)
class TaskIdentifier:
    """Canonical identity of a contributed task definition.

    ``key`` is serialized as ``_key``. ``properties`` holds the identifying
    properties besides ``type`` (the definition's required properties).
    """

    key: str
    type: str
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TaskSourceConfigElement:
    """Exact configuration file position a workspace task was parsed from."""

    workspace_folder: WorkspaceFolder
    file: str
    index: int
    element: Any = None


@dataclass(frozen=True)
class WorkspaceTaskSource:
    """Task authored in a workspace configuration file.

    ``customizes`` names the contributed task type this entry overrides.
    """

    kind: ClassVar[TaskSourceKind] = TaskSourceKind.WORKSPACE

    label: str
    config: TaskSourceConfigElement
    customizes: TaskIdentifier | None = None


@dataclass(frozen=True)
class ExtensionTaskSource:
    """Task contributed by an extension.

    ``workspace_folder`` is only set for folder-scoped tasks.
    """

    kind: ClassVar[TaskSourceKind] = TaskSourceKind.EXTENSION

    label: str
    extension: str
    scope: TaskScope
    workspace_folder: WorkspaceFolder | None = None


@dataclass(frozen=True)
class CompositeTaskSource:
    """Synthetic grouping task with no file or extension origin."""

    kind: ClassVar[TaskSourceKind] = TaskSourceKind.COMPOSITE

    label: str


TaskSource = WorkspaceTaskSource | ExtensionTaskSource | CompositeTaskSource
