"""Shared pytest fixtures and test utilities for docsync tests."""

from pathlib import Path
from typing import Generator

import pytest

from docsync.services.document_service import DocumentService
from docsync.storage import frontmatter
from docsync.storage.workspace import Workspace, reset_workspace


@pytest.fixture(scope="function")
def documents_dir(tmp_path) -> Path:
    """Empty documents directory for one test."""
    path = tmp_path / "documents"
    path.mkdir()
    return path


@pytest.fixture(scope="function")
def workspace(documents_dir) -> Generator[Workspace, None, None]:
    """
    Create a workspace rooted at a temporary documents directory.

    Yields:
        Workspace with unbounded version history
    """
    reset_workspace()
    yield Workspace(documents_dir)
    reset_workspace()


@pytest.fixture
def service(workspace):
    """Create a document service instance."""
    return DocumentService(workspace, default_editor="User")


@pytest.fixture
def sample_document(service):
    """Create a sample document for testing."""
    return service.create_document(
        title="Sample Document",
        emoji="📘",
        category="Guide",
        content="# Sample Document\n\nFirst draft.\n",
    )


class FileHelpers:
    """Write documents straight to disk, the way an external agent would."""

    @staticmethod
    def drop(documents_dir: Path, filename: str, body: str, **meta: str) -> Path:
        """Write filename with an optional frontmatter header; returns its path."""
        path = documents_dir / filename
        raw = frontmatter.compose(meta, body) if meta else body
        path.write_text(raw, encoding="utf-8")
        return path

    @staticmethod
    def read(documents_dir: Path, filename: str) -> str:
        return (documents_dir / filename).read_text(encoding="utf-8")


@pytest.fixture
def files():
    """Provide FileHelpers."""
    return FileHelpers
