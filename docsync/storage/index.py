"""Document index manifest (``documents-index.json``).

The manifest is always read and written whole. Every read-modify-write runs
under a lock shared by all ``DocumentIndex`` instances that point at the same
file, so background reconciliation and request handlers never interleave
their updates. Nothing is cached between calls; each operation reloads from
disk.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from pydantic import ValidationError as PydanticValidationError

from docsync.exceptions import NotFoundError, StorageError
from docsync.models.document import IndexEntry, IndexManifest, utcnow
from docsync.storage.files import atomic_write_text, read_text

logger = logging.getLogger(__name__)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.RLock()
        return _locks[key]


class IndexTransaction:
    """Working copy of the index inside ``DocumentIndex.transaction``."""

    def __init__(self, entries: list[IndexEntry]):
        self.entries = entries
        self.changed = False

    def mark_changed(self) -> None:
        self.changed = True


class DocumentIndex:
    """Load/save access to the index manifest plus small mutators."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def load(self) -> list[IndexEntry]:
        """
        Read the manifest. A missing file is an empty index.

        Raises:
            StorageError: If the manifest cannot be read or parsed
        """
        try:
            text = read_text(self.path)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read index {self.path}: {e}", e) from e

        if not text.strip():
            return []

        try:
            return IndexManifest.model_validate_json(text).documents
        except PydanticValidationError as e:
            raise StorageError(f"Index {self.path} is malformed: {e}", e) from e

    def save(self, entries: list[IndexEntry]) -> None:
        """Replace the manifest with entries."""
        manifest = IndexManifest(documents=entries)
        with self._lock:
            try:
                atomic_write_text(self.path, manifest.model_dump_json(indent=2) + "\n")
            except OSError as e:
                raise StorageError(f"Failed to write index {self.path}: {e}", e) from e
        logger.debug("Index saved with %d entries", len(entries))

    @contextmanager
    def transaction(self) -> Generator[IndexTransaction, None, None]:
        """
        Hold the index lock across a load-modify-save cycle.

        The manifest is written on exit only if the caller marked a change.

        Usage:
            with index.transaction() as txn:
                txn.entries.insert(0, entry)
                txn.mark_changed()
        """
        with self._lock:
            txn = IndexTransaction(self.load())
            yield txn
            if txn.changed:
                self.save(txn.entries)

    def get(self, filename: str) -> IndexEntry | None:
        """Get the entry for filename, if any."""
        for entry in self.load():
            if entry.filename == filename:
                return entry
        return None

    def upsert(self, entry: IndexEntry) -> IndexEntry:
        """Replace the entry with the same filename, or prepend a new one."""
        with self.transaction() as txn:
            for i, existing in enumerate(txn.entries):
                if existing.filename == entry.filename:
                    txn.entries[i] = entry
                    break
            else:
                txn.entries.insert(0, entry)
            txn.mark_changed()
        return entry

    def remove(self, filename: str) -> bool:
        """Drop the entry for filename. Returns False if there was none."""
        with self.transaction() as txn:
            remaining = [e for e in txn.entries if e.filename != filename]
            if len(remaining) != len(txn.entries):
                txn.entries[:] = remaining
                txn.mark_changed()
        return txn.changed

    def patch(self, filename: str, **fields: Any) -> IndexEntry:
        """
        Update selected fields of an entry and bump its updated_at.

        Raises:
            NotFoundError: If filename has no entry
        """
        fields.setdefault("updated_at", utcnow())
        with self.transaction() as txn:
            for i, existing in enumerate(txn.entries):
                if existing.filename == filename:
                    txn.entries[i] = existing.model_copy(update=fields)
                    txn.mark_changed()
                    return txn.entries[i]
        raise NotFoundError("Document", filename)

    def touch(self, filename: str) -> IndexEntry | None:
        """Bump updated_at for filename; returns None when it is not indexed."""
        try:
            return self.patch(filename)
        except NotFoundError:
            return None
