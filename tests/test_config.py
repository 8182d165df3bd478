"""Tests for settings and logging setup."""

import json
import logging
from pathlib import Path

import pytest

pytestmark = pytest.mark.unit

from docsync.config import Settings
from docsync.logging_config import JsonFormatter, configure_logging
from docsync.storage.workspace import Workspace


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOCUMENTS_DIR", raising=False)
        settings = Settings(_env_file=None)
        assert settings.documents_dir == Path("./data/documents")
        assert settings.index_filename == "documents-index.json"
        assert settings.max_versions_per_document is None
        assert settings.background_sync_enabled()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DOCUMENTS_DIR", str(tmp_path))
        monkeypatch.setenv("SYNC_INTERVAL_SECONDS", "0")
        monkeypatch.setenv("MAX_VERSIONS_PER_DOCUMENT", "5")

        settings = Settings(_env_file=None)

        assert settings.documents_dir == tmp_path
        assert not settings.background_sync_enabled()
        assert settings.max_versions_per_document == 5

    def test_workspace_layout(self, tmp_path):
        workspace = Workspace(tmp_path, index_filename="idx.json", versions_dirname=".hist", max_versions=3)
        assert workspace.index.path == tmp_path.resolve() / "idx.json"
        assert workspace.versions.root == tmp_path.resolve() / ".hist"
        assert workspace.versions.max_versions == 3


class TestLogging:
    """Test log formatting."""

    def test_json_formatter(self):
        record = logging.LogRecord("docsync.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "docsync.test"

    def test_configure_logging_json(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(Settings(_env_file=None, log_format="json", log_level="warning"))
            assert root.level == logging.WARNING
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
