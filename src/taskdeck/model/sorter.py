"""Display ordering of tasks across workspace folders."""

from __future__ import annotations

import functools
import unicodedata
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

from taskdeck.model.task import get_workspace_folder

if TYPE_CHECKING:
    from taskdeck.model.task import Task
    from taskdeck.model.workspace import WorkspaceFolder


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def label_sort_key(label: str) -> tuple[str, str, str]:
    """Order labels ignoring accents and case, then by accents, then lowercase first.

    A locale-independent stand-in for a locale-aware compare: "éclair" sorts
    between "eclair" and "fig", and "a" before "A".
    """
    folded = label.casefold()
    return (_fold_accents(folded), folded, label.swapcase())


def compare_labels(a: str, b: str) -> int:
    ka = label_sort_key(a)
    kb = label_sort_key(b)
    return (ka > kb) - (ka < kb)


class TaskSorter:
    """Orders tasks by the position of their workspace folder, then by label.

    The folder ranks are fixed when the sorter is built. Build a new sorter
    when the workspace folder list changes.
    """

    def __init__(self, workspace_folders: Sequence[WorkspaceFolder]) -> None:
        self._order = MappingProxyType(
            {str(folder.uri): index for index, folder in enumerate(workspace_folders)}
        )

    def _rank(self, folder: WorkspaceFolder) -> int:
        # Unknown folders share rank 0 with the first folder in the list.
        index = self._order.get(str(folder.uri))
        return 0 if index is None else index

    def compare(self, a: Task, b: Task) -> int:
        aw = get_workspace_folder(a)
        bw = get_workspace_folder(b)
        if aw is not None and bw is not None:
            ai = self._rank(aw)
            bi = self._rank(bw)
            if ai == bi:
                return compare_labels(a.label, b.label)
            return ai - bi
        if aw is None and bw is not None:
            return 1
        if aw is not None and bw is None:
            return -1
        return 0

    def sort(self, tasks: Iterable[Task]) -> list[Task]:
        """Return a new list in display order; equal tasks keep their order."""
        return sorted(tasks, key=functools.cmp_to_key(self.compare))
