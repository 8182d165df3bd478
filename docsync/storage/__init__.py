"""Storage layer for docsync."""

from docsync.storage.index import DocumentIndex
from docsync.storage.versions import VersionStore
from docsync.storage.workspace import Workspace, get_workspace, reset_workspace

__all__ = [
    "DocumentIndex",
    "VersionStore",
    "Workspace",
    "get_workspace",
    "reset_workspace",
]
