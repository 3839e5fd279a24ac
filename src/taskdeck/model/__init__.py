"""Task data model: value objects, sources, variants and ordering."""

from taskdeck.model.command import (
    CommandConfiguration,
    CommandOptions,
    ExecutionEngine,
    JsonSchemaVersion,
    PanelKind,
    PresentationOptions,
    RevealKind,
    RuntimeType,
    ShellConfiguration,
    is_shell_configuration,
)
from taskdeck.model.definition import (
    Customization,
    ExtensionDescription,
    TaskDefinition,
    TaskSet,
    resolve_customizations,
    unresolved_customizations,
)
from taskdeck.model.sorter import TaskSorter
from taskdeck.model.source import (
    CompositeTaskSource,
    ExtensionTaskSource,
    TaskIdentifier,
    TaskScope,
    TaskSource,
    TaskSourceConfigElement,
    TaskSourceKind,
    WorkspaceTaskSource,
)
from taskdeck.model.task import (
    CompositeTask,
    ConfiguringTask,
    ContributedTask,
    CustomTask,
    Task,
    TaskDependency,
    TaskGroup,
    TaskKind,
    classify_task,
    clone,
    get_key,
    get_telemetry_kind,
    get_workspace_folder,
    is_composite_task,
    is_configuring_task,
    is_contributed_task,
    is_custom_task,
    matches,
)
from taskdeck.model.workspace import WorkspaceFolder

__all__ = [
    "CommandConfiguration",
    "CommandOptions",
    "CompositeTask",
    "CompositeTaskSource",
    "ConfiguringTask",
    "ContributedTask",
    "CustomTask",
    "Customization",
    "ExecutionEngine",
    "ExtensionDescription",
    "ExtensionTaskSource",
    "JsonSchemaVersion",
    "PanelKind",
    "PresentationOptions",
    "RevealKind",
    "RuntimeType",
    "ShellConfiguration",
    "Task",
    "TaskDefinition",
    "TaskDependency",
    "TaskGroup",
    "TaskIdentifier",
    "TaskKind",
    "TaskScope",
    "TaskSet",
    "TaskSorter",
    "TaskSource",
    "TaskSourceConfigElement",
    "TaskSourceKind",
    "WorkspaceFolder",
    "WorkspaceTaskSource",
    "classify_task",
    "clone",
    "get_key",
    "get_telemetry_kind",
    "get_workspace_folder",
    "is_composite_task",
    "is_configuring_task",
    "is_contributed_task",
    "is_custom_task",
    "is_shell_configuration",
    "matches",
    "resolve_customizations",
    "unresolved_customizations",
]
