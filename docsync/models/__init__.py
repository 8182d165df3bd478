"""Data models for docsync."""

from docsync.models.document import DocCategory, DocumentStats, IndexEntry, IndexManifest
from docsync.models.version import SnapshotDescriptor

__all__ = ["DocCategory", "DocumentStats", "IndexEntry", "IndexManifest", "SnapshotDescriptor"]
