"""Per-document snapshot archive.

Snapshots live under ``<versions_dir>/<document-id>/<timestamp><ext>``. The
timestamp is the UTC instant in ISO form with ``:`` and ``.`` replaced by
``-``, so names sort chronologically and double as version IDs.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

from docsync.exceptions import NotFoundError, StorageError, ValidationError
from docsync.models.version import SnapshotDescriptor
from docsync.storage import frontmatter
from docsync.storage.files import atomic_write_text, ensure_dir, read_text

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S-%fZ"
PREVIEW_LENGTH = 100
UNKNOWN_AUTHOR = "Unknown"

_VERSION_ID_RE = re.compile(r"^[0-9A-Za-z-]+$")
_MARKDOWN_MARKERS_RE = re.compile(r"[#*_>`~]+")


def format_timestamp(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(version_id: str) -> datetime | None:
    try:
        return datetime.strptime(version_id, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def make_preview(raw: str, length: int = PREVIEW_LENGTH) -> str:
    """Plain-text preview of a snapshot body."""
    text = _MARKDOWN_MARKERS_RE.sub(" ", frontmatter.strip(raw))
    text = " ".join(text.split())
    if len(text) > length:
        return text[:length].rstrip() + "..."
    return text


class VersionStore:
    """Append-only snapshot history, one directory per document."""

    def __init__(self, root: Path, extension: str = ".md", max_versions: int | None = None):
        """
        Initialize the store.

        Args:
            root: Directory that holds one subdirectory per document
            extension: Suffix used for snapshot files
            max_versions: Snapshots kept per document; None keeps everything
        """
        self.root = Path(root)
        self.extension = extension
        self.max_versions = max_versions

    def snapshot(self, doc_id: str, raw_content: str) -> str:
        """
        Persist raw_content as a new snapshot of doc_id.

        Returns:
            The new snapshot's version ID

        Raises:
            StorageError: If the snapshot cannot be written
        """
        scope = self._scope(doc_id)
        try:
            version_id = self._claim(scope)
        except OSError as e:
            raise StorageError(f"Failed to snapshot {doc_id}: {e}", e) from e

        path = scope / f"{version_id}{self.extension}"
        try:
            atomic_write_text(path, raw_content)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise StorageError(f"Failed to snapshot {doc_id}: {e}", e) from e

        logger.debug("Snapshot %s taken for %s", version_id, doc_id)
        if self.max_versions:
            self.prune(doc_id, self.max_versions)
        return version_id

    def list(self, doc_id: str) -> list[SnapshotDescriptor]:
        """
        List snapshots for a document, newest first.

        Any I/O problem is logged and reported as an empty history.
        """
        scope = self._scope(doc_id)
        if not scope.is_dir():
            return []

        try:
            descriptors = [self._describe(path) for path in self._snapshot_files(scope)]
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not list versions for %s: %s", doc_id, e)
            return []

        return descriptors

    def read(self, doc_id: str, version_id: str) -> str:
        """
        Read one snapshot's stored content.

        Raises:
            ValidationError: If version_id is malformed
            NotFoundError: If the snapshot does not exist
            StorageError: If the snapshot cannot be read
        """
        if not isinstance(version_id, str) or not _VERSION_ID_RE.match(version_id):
            raise ValidationError(f"Invalid version ID: {version_id!r}", "version_id")

        path = self._scope(doc_id) / f"{version_id}{self.extension}"
        try:
            return read_text(path)
        except FileNotFoundError:
            raise NotFoundError("Version", f"{doc_id}@{version_id}")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read version {version_id} of {doc_id}: {e}", e) from e

    def purge(self, doc_id: str) -> int:
        """Remove every snapshot of a document. Returns how many were removed."""
        scope = self._scope(doc_id)
        if not scope.is_dir():
            return 0
        try:
            count = len(self._snapshot_files(scope))
            shutil.rmtree(scope)
        except OSError as e:
            raise StorageError(f"Failed to purge versions of {doc_id}: {e}", e) from e
        logger.info("Purged %d version(s) of %s", count, doc_id)
        return count

    def prune(self, doc_id: str, keep: int) -> int:
        """Delete the oldest snapshots beyond the newest ``keep``."""
        scope = self._scope(doc_id)
        try:
            stale = self._snapshot_files(scope)[keep:]
            for path in stale:
                path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to prune versions of {doc_id}: {e}", e) from e
        if stale:
            logger.debug("Pruned %d old version(s) of %s", len(stale), doc_id)
        return len(stale)

    def _scope(self, doc_id: str) -> Path:
        if not doc_id or doc_id in (".", "..") or "/" in doc_id or "\\" in doc_id:
            raise ValidationError(f"Invalid document ID: {doc_id!r}", "filename")
        return self.root / doc_id

    def _claim(self, scope: Path) -> str:
        """Reserve a free version ID in scope by creating its file exclusively."""
        ensure_dir(scope)
        moment = datetime.now(timezone.utc)
        while True:
            version_id = format_timestamp(moment)
            try:
                fd = os.open(
                    scope / f"{version_id}{self.extension}",
                    os.O_CREAT | os.O_EXCL | os.O_WRONLY,
                )
            except FileExistsError:
                moment += timedelta(microseconds=1)
                continue
            os.close(fd)
            return version_id

    def _snapshot_files(self, scope: Path) -> list[Path]:
        """Snapshot files in a scope, newest first."""
        files = [
            p
            for p in scope.iterdir()
            if p.is_file() and p.suffix == self.extension and not p.name.startswith(".")
        ]
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(
            files,
            key=lambda p: (parse_timestamp(p.stem) or epoch, p.stem),
            reverse=True,
        )

    def _describe(self, path: Path) -> SnapshotDescriptor:
        raw = read_text(path)
        meta, _ = frontmatter.parse(raw)
        return SnapshotDescriptor(
            version_id=path.stem,
            timestamp=parse_timestamp(path.stem),
            size=path.stat().st_size,
            author=meta.get("last_edited_by") or UNKNOWN_AUTHOR,
            preview=make_preview(raw),
        )
