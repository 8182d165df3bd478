"""Reconciliation of the document index against the documents directory."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from docsync.exceptions import DocumentServiceError
from docsync.models.document import IndexEntry, utcnow
from docsync.services.sync.inference import (
    DEFAULT_CATEGORY_RULES,
    CategoryRule,
    infer_metadata,
)
from docsync.storage import frontmatter
from docsync.storage.workspace import Workspace

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one reconciliation pass."""

    entries: list[IndexEntry]
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class SyncEngine:
    """Keeps the index's filename set equal to the set of files on disk.

    Files that appear without an index entry (for example, written directly
    by an agent) are registered with inferred metadata; entries whose file is
    gone are dropped. The manifest is only written when something changed.
    """

    def __init__(
        self,
        workspace: Workspace,
        rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
    ):
        """
        Initialize sync engine.

        Args:
            workspace: Workspace to reconcile
            rules: Ordered category rules used for discovered documents
        """
        self.workspace = workspace
        self.rules = rules

    def reconcile(self) -> SyncResult:
        """
        Run one reconciliation pass.

        Returns:
            SyncResult with the reconciled entries and the filenames added/removed

        Raises:
            StorageError: If the directory or index cannot be read or written
        """
        self.workspace.ensure_directories()

        with self.workspace.index.transaction() as txn:
            on_disk = self.workspace.document_filenames()
            on_disk_set = set(on_disk)
            indexed = {entry.filename for entry in txn.entries}

            added: list[str] = []
            for filename in on_disk:
                if filename not in indexed:
                    txn.entries.insert(0, self._discover(filename))
                    added.append(filename)

            removed = [e.filename for e in txn.entries if e.filename not in on_disk_set]
            if removed:
                txn.entries[:] = [e for e in txn.entries if e.filename in on_disk_set]

            if added or removed:
                txn.mark_changed()

        result = SyncResult(entries=list(txn.entries), added=added, removed=removed)
        if result.changed:
            logger.info(
                "Reconciled index: %d added, %d removed", len(added), len(removed)
            )
        return result

    def _discover(self, filename: str) -> IndexEntry:
        """Build an index entry for a file that has none."""
        meta: dict[str, str] = {}
        body = ""
        try:
            raw = self.workspace.read_document(filename)
            meta, body = frontmatter.parse(raw)
        except DocumentServiceError as e:
            # Unreadable files still get registered with filename defaults
            logger.warning("Could not read %s during discovery: %s", filename, e)

        inferred = infer_metadata(
            filename, meta, body, extension=self.workspace.extension, rules=self.rules
        )
        now = utcnow()
        return IndexEntry(filename=filename, created_at=now, updated_at=now, **inferred)
