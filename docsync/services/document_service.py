"""Document service layer: the operations exposed to the UI and to agents."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from docsync.config import get_settings
from docsync.exceptions import NotFoundError
from docsync.models.document import (
    CATEGORY_ICONS,
    DEFAULT_CATEGORY,
    DEFAULT_EMOJI,
    DocCategory,
    DocumentStats,
    IndexEntry,
    icon_for_category,
    utcnow,
)
from docsync.models.version import SnapshotDescriptor
from docsync.services.document.naming import duplicate_stem, slugify, unique_filename
from docsync.services.document.validation import DocumentValidator
from docsync.services.sync.engine import SyncEngine, SyncResult
from docsync.services.sync.inference import DEFAULT_CATEGORY_RULES, CategoryRule, infer_metadata
from docsync.storage import frontmatter
from docsync.storage.workspace import Workspace

logger = logging.getLogger(__name__)

METADATA_KEYS = ("title", "emoji", "category")


class DocumentService:
    """Service layer for document operations with validation and version history.

    Every content-modifying operation snapshots the stored form of the
    document before overwriting it. Concurrent writes to the same document
    are last-write-wins.
    """

    def __init__(
        self,
        workspace: Workspace,
        rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
        default_editor: str | None = None,
    ):
        """
        Initialize document service with a workspace.

        Args:
            workspace: Documents directory, index and version store to operate on
            rules: Ordered category rules for documents discovered on disk
            default_editor: Attribution used when a write names no editor.
                            If None, reads from settings.
        """
        self.workspace = workspace
        self.index = workspace.index
        self.versions = workspace.versions
        self.sync_engine = SyncEngine(workspace, rules)
        self.validator = DocumentValidator()
        self.default_editor = default_editor or get_settings().default_editor

    def sync(self) -> SyncResult:
        """Reconcile the index with the documents directory."""
        return self.sync_engine.reconcile()

    def list_documents(
        self,
        category: str | None = None,
        title_pattern: str | None = None,
    ) -> list[IndexEntry]:
        """
        List documents after reconciling the index with the directory.

        Args:
            category: Optional exact category filter
            title_pattern: Optional case-insensitive substring of the title

        Returns:
            Index entries, most recently discovered or created first
        """
        entries = self.sync().entries
        if category:
            entries = [e for e in entries if e.category == category]
        if title_pattern:
            needle = title_pattern.lower()
            entries = [e for e in entries if needle in e.title.lower()]
        return entries

    def get_entry(self, filename: str) -> IndexEntry:
        """
        Get the index entry for a document.

        Raises:
            ValidationError: If filename is invalid
            NotFoundError: If the document is not indexed
        """
        self.workspace.resolve_document(filename)
        entry = self.index.get(filename)
        if entry is None:
            raise NotFoundError("Document", filename)
        return entry

    def get_content(self, filename: str) -> str:
        """
        Get a document's body with the frontmatter header removed.

        Raises:
            ValidationError: If filename is invalid or escapes the documents directory
            NotFoundError: If the document does not exist
            StorageError: If the file cannot be read
        """
        return frontmatter.strip(self.workspace.read_document(filename))

    def create_document(
        self,
        title: str,
        emoji: str | None = None,
        category: str | None = None,
        content: str | None = None,
        created_by: str | None = None,
    ) -> IndexEntry:
        """
        Create a new document and register it in the index.

        Args:
            title: Document title (required, non-empty)
            emoji: Optional icon; defaults to the category's icon
            category: Optional category; defaults to Reference
            content: Optional initial body; defaults to a heading with the title
            created_by: Optional attribution; defaults to the configured editor

        Returns:
            The new index entry

        Raises:
            ValidationError: If title, emoji, category or content is invalid
            StorageError: If the file or index cannot be written
        """
        self.validator.validate_title(title)
        title = title.strip()
        if category is None:
            category = DEFAULT_CATEGORY.value
        self.validator.validate_category(category)
        if emoji is None:
            emoji = icon_for_category(category)
        self.validator.validate_emoji(emoji)
        if content is None:
            content = f"# {title}\n"
        self.validator.validate_body(content)
        editor = created_by or self.default_editor
        self.validator.validate_editor(editor)

        self.workspace.ensure_directories()
        extension = self.workspace.extension
        # Filename choice, file write and index insert happen under the index lock
        with self.index.transaction() as txn:
            taken = {e.filename for e in txn.entries} | set(self.workspace.document_filenames())
            filename = unique_filename(slugify(title), taken, extension)

            meta = {"title": title, "emoji": emoji, "category": category, "last_edited_by": editor}
            self.workspace.write_document(filename, frontmatter.compose(meta, content))

            now = utcnow()
            entry = IndexEntry(
                filename=filename,
                title=title,
                emoji=emoji,
                category=category,
                created_at=now,
                updated_at=now,
            )
            txn.entries.insert(0, entry)
            txn.mark_changed()

        logger.info("Created document %s", filename)
        return entry

    def write_content(
        self, filename: str, content: str, edited_by: str | None = None
    ) -> IndexEntry | None:
        """
        Replace a document's body, snapshotting the previous version first.

        The header is rebuilt from the previous frontmatter with the index
        entry's title/emoji/category laid over it, so metadata edits made via
        update_metadata reach the file here. If content itself starts with a
        frontmatter header naming at least one known key, its keys are folded
        into the rebuilt header and copied to the index entry; otherwise
        content is stored verbatim as the body.

        Args:
            filename: Document filename
            content: New body
            edited_by: Attribution recorded as last_edited_by

        Returns:
            Updated index entry, or None if the document is not indexed yet
            (the next reconciliation registers it)

        Raises:
            ValidationError: If filename is invalid or escapes the documents directory,
                             or content/edited_by is invalid
            StorageError: If the snapshot or the write fails
        """
        self.workspace.resolve_document(filename)
        self.validator.validate_body(content)
        editor = edited_by or self.default_editor
        self.validator.validate_editor(editor)

        existing = self.workspace.read_document_if_exists(filename)
        meta: dict[str, str] = {}
        if existing:
            # Must land before the overwrite below
            self.versions.snapshot(filename, existing)
            meta, _ = frontmatter.parse(existing)

        entry = self.index.get(filename)
        if entry is not None:
            meta.update(title=entry.title, emoji=entry.emoji, category=entry.category)

        incoming_meta, body = frontmatter.parse(content)
        # A leading fenced block with no known key is body text (e.g. horizontal rules)
        if not any(key in incoming_meta for key in frontmatter.KNOWN_KEYS):
            incoming_meta, body = {}, content
        meta.update(incoming_meta)
        meta["last_edited_by"] = editor

        self.workspace.write_document(filename, frontmatter.compose(meta, body))

        updates = self._index_fields(incoming_meta)
        if entry is None:
            return None
        return self.index.patch(filename, **updates) if updates else self.index.touch(filename)

    def update_metadata(
        self,
        filename: str,
        title: str | None = None,
        emoji: str | None = None,
        category: str | None = None,
    ) -> IndexEntry:
        """
        Update display metadata in the index only.

        The file's frontmatter catches up on the next write_content.

        Raises:
            ValidationError: If any provided field is invalid
            NotFoundError: If the document is not indexed
        """
        self.workspace.resolve_document(filename)
        fields: dict[str, Any] = {}
        if title is not None:
            self.validator.validate_title(title)
            fields["title"] = title.strip()
        if emoji is not None:
            self.validator.validate_emoji(emoji)
            fields["emoji"] = emoji
        if category is not None:
            self.validator.validate_category(category)
            fields["category"] = category

        if not fields:
            return self.get_entry(filename)
        return self.index.patch(filename, **fields)

    def delete_document(self, filename: str) -> bool:
        """
        Delete a document file and its index entry. Version history is kept.

        Returns:
            True if a file or an index entry was removed, False if neither existed

        Raises:
            ValidationError: If filename is invalid
            StorageError: If the file or index cannot be modified
        """
        removed_file = self.workspace.delete_document(filename)
        removed_entry = self.index.remove(filename)
        if removed_file or removed_entry:
            logger.info("Deleted document %s", filename)
        return removed_file or removed_entry

    def duplicate_document(self, filename: str) -> IndexEntry:
        """
        Copy a document verbatim under a new filename.

        Returns:
            Index entry for the copy, titled "Copy of <title>"

        Raises:
            ValidationError: If filename is invalid
            NotFoundError: If the source document does not exist
        """
        raw = self.workspace.read_document(filename)
        source = self.index.get(filename)
        if source is None:
            meta, body = frontmatter.parse(raw)
            inferred = infer_metadata(
                filename, meta, body, self.workspace.extension, self.sync_engine.rules
            )
            title, emoji, category = inferred["title"], inferred["emoji"], inferred["category"]
        else:
            title, emoji, category = source.title, source.emoji, source.category

        extension = self.workspace.extension
        with self.index.transaction() as txn:
            taken = {e.filename for e in txn.entries} | set(self.workspace.document_filenames())
            new_filename = unique_filename(duplicate_stem(filename, extension), taken, extension)
            self.workspace.write_document(new_filename, raw)

            now = utcnow()
            entry = IndexEntry(
                filename=new_filename,
                title=f"Copy of {title}",
                emoji=emoji,
                category=category,
                created_at=now,
                updated_at=now,
            )
            txn.entries.insert(0, entry)
            txn.mark_changed()

        logger.info("Duplicated %s as %s", filename, new_filename)
        return entry

    def list_versions(self, filename: str) -> list[SnapshotDescriptor]:
        """List a document's snapshots, newest first. Empty if it has none."""
        self.workspace.resolve_document(filename)
        return self.versions.list(filename)

    def read_version(self, filename: str, version_id: str) -> str:
        """
        Get the body stored in one snapshot.

        Raises:
            ValidationError: If filename or version_id is invalid
            NotFoundError: If the snapshot does not exist
        """
        self.workspace.resolve_document(filename)
        return frontmatter.strip(self.versions.read(filename, version_id))

    def restore_version(self, filename: str, version_id: str) -> str:
        """
        Replace current content with a snapshot's stored form.

        The current content is snapshotted first, so a restore can itself be
        undone by restoring that snapshot.

        Returns:
            The restored body

        Raises:
            ValidationError: If filename or version_id is invalid
            NotFoundError: If the snapshot does not exist
            StorageError: If the snapshot or the write fails
        """
        self.workspace.resolve_document(filename)
        restored = self.versions.read(filename, version_id)

        current = self.workspace.read_document_if_exists(filename)
        if current:
            self.versions.snapshot(filename, current)
        self.workspace.write_document(filename, restored)
        self.index.touch(filename)

        logger.info("Restored %s to version %s", filename, version_id)
        return frontmatter.strip(restored)

    def purge_versions(self, filename: str) -> int:
        """Delete a document's whole snapshot history. Returns the number removed."""
        self.workspace.resolve_document(filename)
        return self.versions.purge(filename)

    def get_stats(self, filename: str) -> DocumentStats:
        """Word and non-whitespace character counts of a document body."""
        tokens = self.get_content(filename).split()
        return DocumentStats(
            filename=filename,
            words=len(tokens),
            characters=sum(len(t) for t in tokens),
        )

    @staticmethod
    def list_categories() -> list[dict[str, str]]:
        """All categories with their default icons."""
        return [
            {"category": c.value, "emoji": CATEGORY_ICONS.get(c, DEFAULT_EMOJI)}
            for c in DocCategory
        ]

    def _index_fields(self, meta: dict[str, str]) -> dict[str, str]:
        """Valid title/emoji/category values from a frontmatter header."""
        fields = {k: meta[k] for k in METADATA_KEYS if meta.get(k)}
        if "category" in fields and not DocCategory.is_valid(fields["category"]):
            del fields["category"]
        return fields
