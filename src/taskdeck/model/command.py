"""Command and shell configuration value objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def field_value(value: Any, name: str) -> Any:
    """Read a field from a raw mapping or a model instance."""
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def is_string_list(value: Any) -> bool:
    """Return True for a list or tuple whose items are all strings."""
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


@dataclass(frozen=True)
class ShellConfiguration:
    """Shell used to run a shell-type command."""

    executable: str
    args: tuple[str, ...] | None = None


def is_shell_configuration(value: Any) -> bool:
    """Structural check for untrusted shell configuration data.

    Accepts raw mappings as well as ShellConfiguration instances. Never raises.
    """
    if value is None:
        return False
    if not isinstance(field_value(value, "executable"), str):
        return False
    if isinstance(value, Mapping):
        # An explicit null is not the same as leaving args out.
        return "args" not in value or is_string_list(value["args"])
    args = field_value(value, "args")
    return args is None or is_string_list(args)


@dataclass(frozen=True)
class CommandOptions:
    """Options for the executed program or shell.

    Every field is optional. A missing ``cwd`` means the current workspace
    root, a missing ``env`` means the parent process environment.
    """

    shell: ShellConfiguration | None = None
    cwd: str | None = None
    env: dict[str, str] | None = None


class RevealKind(str, Enum):
    """Whether the terminal is brought to front when the task runs."""

    ALWAYS = "always"
    # Only when a problem is detected executing the task.
    SILENT = "silent"
    NEVER = "never"

    @classmethod
    def from_string(cls, value: str) -> RevealKind:
        """Parse case-insensitively; unknown text maps to ALWAYS."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.ALWAYS


class PanelKind(str, Enum):
    """Whether the task output panel is shared, dedicated or new per run."""

    SHARED = "shared"
    DEDICATED = "dedicated"
    NEW = "new"

    @classmethod
    def from_string(cls, value: str) -> PanelKind:
        """Parse case-insensitively; unknown text maps to SHARED."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.SHARED


class RuntimeType(str, Enum):
    """How the command is launched."""

    SHELL = "shell"
    PROCESS = "process"

    @classmethod
    def from_string(cls, value: str) -> RuntimeType:
        """Parse case-insensitively; unknown text maps to PROCESS."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.PROCESS


class ExecutionEngine(str, Enum):
    """Backend that hosts task execution."""

    PROCESS = "process"
    TERMINAL = "terminal"

    @classmethod
    def from_string(cls, value: str, default: ExecutionEngine) -> ExecutionEngine:
        """Parse case-insensitively, falling back to the caller's default."""
        try:
            return cls(value.lower())
        except ValueError:
            return default


class JsonSchemaVersion(str, Enum):
    """Version of the task configuration format a task was read from."""

    V0_1_0 = "0.1.0"
    V2_0_0 = "2.0.0"

    @classmethod
    def from_string(cls, value: str) -> JsonSchemaVersion:
        """Parse a version string; anything unrecognized is treated as 2.0.0."""
        try:
            return cls(value.strip())
        except ValueError:
            return cls.V2_0_0


@dataclass(frozen=True)
class PresentationOptions:
    """How a task's output is presented in the user interface."""

    reveal: RevealKind = RevealKind.ALWAYS
    echo: bool = True
    focus: bool = False
    panel: PanelKind = PanelKind.SHARED

    @classmethod
    def defaults(cls) -> PresentationOptions:
        """Presentation used when a task declares none."""
        return cls()


@dataclass(frozen=True)
class CommandConfiguration:
    """The command a runnable task executes."""

    runtime: RuntimeType
    name: str
    presentation: PresentationOptions = field(default_factory=PresentationOptions.defaults)
    options: CommandOptions | None = None
    args: tuple[str, ...] | None = None
    task_selector: str | None = None
    # Whether to suppress the task name when merging global args.
    suppress_task_name: bool | None = None
