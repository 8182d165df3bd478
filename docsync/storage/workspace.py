"""Documents directory layout and raw document file access."""

import logging
from pathlib import Path

from docsync.config import get_settings
from docsync.exceptions import NotFoundError, StorageError, ValidationError
from docsync.storage.files import atomic_write_text, ensure_dir, read_text
from docsync.storage.index import DocumentIndex
from docsync.storage.versions import VersionStore

logger = logging.getLogger(__name__)


class Workspace:
    """One documents directory with its index manifest and version archive."""

    FILENAME_MAX_LENGTH = 255

    def __init__(
        self,
        documents_dir: Path | str | None = None,
        index_filename: str | None = None,
        versions_dirname: str | None = None,
        extension: str | None = None,
        max_versions: int | None = None,
    ):
        """
        Initialize the workspace.

        Args:
            documents_dir: Directory holding the documents. If None, reads from settings.
            index_filename: Manifest file name inside documents_dir. If None, uses settings.
            versions_dirname: Snapshot directory name inside documents_dir. If None, uses settings.
            extension: Recognized document extension. If None, uses settings.
            max_versions: Snapshots kept per document. If None, uses settings.
        """
        settings = get_settings()

        self.documents_dir = Path(documents_dir or settings.documents_dir).resolve()
        self.extension = extension or settings.document_extension
        if max_versions is None:
            max_versions = settings.max_versions_per_document

        self.index = DocumentIndex(self.documents_dir / (index_filename or settings.index_filename))
        self.versions = VersionStore(
            self.documents_dir / (versions_dirname or settings.versions_dirname),
            extension=self.extension,
            max_versions=max_versions,
        )

    def ensure_directories(self) -> None:
        """Create the documents directory if it is missing."""
        try:
            ensure_dir(self.documents_dir)
        except OSError as e:
            raise StorageError(f"Failed to create {self.documents_dir}: {e}", e) from e

    def resolve_document(self, filename: str) -> Path:
        """
        Map a document ID to its path, refusing anything outside the directory.

        Raises:
            ValidationError: If filename is malformed or escapes documents_dir
        """
        if not isinstance(filename, str) or not filename.strip():
            raise ValidationError("Document filename cannot be empty", "filename")
        if len(filename) > self.FILENAME_MAX_LENGTH:
            raise ValidationError(
                f"Document filename must be at most {self.FILENAME_MAX_LENGTH} characters",
                "filename",
            )
        if not filename.endswith(self.extension) or filename == self.extension:
            raise ValidationError(
                f"Document filename must end with {self.extension}", "filename"
            )
        if any(sep in filename for sep in ("/", "\\", "\x00")) or filename.startswith("."):
            raise ValidationError(f"Invalid document filename: {filename!r}", "filename")

        path = (self.documents_dir / filename).resolve()
        if path.parent != self.documents_dir:
            raise ValidationError(f"Access denied: {filename!r}", "filename")
        return path

    def document_filenames(self) -> list[str]:
        """Names of all document files currently on disk, sorted."""
        self.ensure_directories()
        try:
            return sorted(
                p.name
                for p in self.documents_dir.iterdir()
                if p.is_file() and p.suffix == self.extension and not p.name.startswith(".")
            )
        except OSError as e:
            raise StorageError(f"Failed to list {self.documents_dir}: {e}", e) from e

    def exists(self, filename: str) -> bool:
        return self.resolve_document(filename).is_file()

    def read_document(self, filename: str) -> str:
        """
        Read a document's stored form (frontmatter included).

        Raises:
            ValidationError: If filename is invalid
            NotFoundError: If the file does not exist
            StorageError: If the file cannot be read
        """
        path = self.resolve_document(filename)
        try:
            return read_text(path)
        except FileNotFoundError:
            raise NotFoundError("Document", filename)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {filename}: {e}", e) from e

    def read_document_if_exists(self, filename: str) -> str | None:
        try:
            return self.read_document(filename)
        except NotFoundError:
            return None

    def write_document(self, filename: str, raw: str) -> None:
        """Replace a document's stored form."""
        path = self.resolve_document(filename)
        try:
            atomic_write_text(path, raw)
        except OSError as e:
            raise StorageError(f"Failed to write {filename}: {e}", e) from e

    def delete_document(self, filename: str) -> bool:
        """Remove a document file. Returns False if it was already gone."""
        path = self.resolve_document(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete {filename}: {e}", e) from e
        return True


# Global workspace instance
_workspace: Workspace | None = None


def get_workspace(documents_dir: Path | str | None = None) -> Workspace:
    """
    Get or create the global workspace.

    Args:
        documents_dir: Documents directory. Only used on first call.
    """
    global _workspace
    if _workspace is None:
        _workspace = Workspace(documents_dir)
    return _workspace


def reset_workspace() -> None:
    """Reset the global workspace (useful for testing)."""
    global _workspace
    _workspace = None
