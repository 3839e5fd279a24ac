"""Task definitions, task sets and customization resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from taskdeck.artifacts.canonical_json import canonical_dumps
from taskdeck.model.source import TaskIdentifier
from taskdeck.model.task import ContributedTask, CustomTask, get_key

if TYPE_CHECKING:
    from taskdeck.model.task import ConfiguringTask, Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionDescription:
    """Minimal descriptor of the extension publishing a task set."""

    identifier: str
    name: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class TaskDefinition:
    """Extension-declared task type schema.

    Attributes:
        task_type: Value of the ``type`` property of tasks of this type
        required: Properties that identify a task of this type
        properties: Property name to JSON-schema-like descriptor
    """

    task_type: str
    required: tuple[str, ...] = ()
    properties: dict[str, Any] = field(default_factory=dict)

    def create_identifier(
        self,
        external: Mapping[str, Any],
        *,
        strict: bool = False,
    ) -> TaskIdentifier | None:
        """Build the canonical identifier of a task of this type.

        The key is the canonical JSON of ``type`` plus every required
        property, so the same properties always give the same key regardless
        of their order in the source data.

        Args:
            external: Task properties as written by the user or extension
            strict: Raise instead of returning None when required properties
                are missing

        Returns:
            TaskIdentifier, or None if ``type`` does not match or a required
            property is missing and ``strict`` is False

        Raises:
            ValueError: If ``strict`` and the properties are incomplete
        """
        if external.get("type") != self.task_type:
            if strict:
                raise ValueError(
                    f"task type `{external.get('type')}` does not match definition `{self.task_type}`"
                )
            return None

        missing = [name for name in self.required if name not in external]
        if missing:
            if strict:
                raise ValueError(
                    f"task of type `{self.task_type}` is missing required properties: {missing}"
                )
            logger.debug("cannot key %s task, missing %s", self.task_type, missing)
            return None

        identifying = {name: external[name] for name in self.required}
        key = canonical_dumps({"type": self.task_type, **identifying})
        return TaskIdentifier(key=key, type=self.task_type, properties=identifying)


@dataclass
class TaskSet:
    """The unit in which one configuration file or one extension publishes tasks."""

    tasks: list[Task]
    extension: ExtensionDescription | None = None

    def by_key(self) -> dict[str, Task]:
        """Index tasks by their stable key; later duplicates win."""
        return {get_key(task): task for task in self.tasks}


@dataclass(frozen=True)
class Customization:
    """A configuring workspace entry paired with the contributed task it customizes."""

    configuring: ConfiguringTask
    contributed: ContributedTask


def resolve_customizations(
    configuring: Iterable[ConfiguringTask],
    contributed: Iterable[ContributedTask],
) -> tuple[list[Customization], list[ConfiguringTask]]:
    """Pair configuring tasks with contributed tasks by identifier key.

    Returns:
        (resolved pairs, configuring tasks with no contributed counterpart)
    """
    by_key = {task.defines.key: task for task in contributed}
    resolved: list[Customization] = []
    unresolved: list[ConfiguringTask] = []
    for entry in configuring:
        target = by_key.get(entry.configures.key)
        if target is None:
            logger.debug("no contributed task for %s (%s)", entry.label, entry.configures.key)
            unresolved.append(entry)
            continue
        resolved.append(Customization(configuring=entry, contributed=target))
    return resolved, unresolved


def unresolved_customizations(tasks: Iterable[Task]) -> list[CustomTask]:
    """Custom tasks whose ``customizes`` key names no contributed task in ``tasks``."""
    pool = list(tasks)
    defined = {task.defines.key for task in pool if isinstance(task, ContributedTask)}
    return [
        task
        for task in pool
        if isinstance(task, CustomTask)
        and task.source.customizes is not None
        and task.source.customizes.key not in defined
    ]
