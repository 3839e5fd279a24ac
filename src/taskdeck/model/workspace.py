"""Workspace folder value object."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import urlparse


@dataclass(frozen=True)
class WorkspaceFolder:
    """One root directory of a (possibly multi-root) workspace.

    Attributes:
        uri: Folder URI; the string form is the folder's identity for ordering
        name: Display name
        index: Position in the workspace folder list, or None when the folder
            is not part of the open workspace (stale or removed folder)
    """

    uri: str
    name: str
    index: int | None = None

    @classmethod
    def detached(cls, uri: str) -> WorkspaceFolder:
        """Build a folder that is not part of any workspace folder list."""
        return cls(uri=uri, name=folder_name_from_uri(uri), index=None)

    def __str__(self) -> str:
        return self.uri


def folder_name_from_uri(uri: str) -> str:
    """Derive a display name from the last path segment of a URI."""
    path = urlparse(uri).path or uri
    name = PurePosixPath(path.rstrip("/")).name
    return name or uri
