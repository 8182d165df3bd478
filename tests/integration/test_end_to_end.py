"""End-to-end integration tests for docsync workflows."""

import asyncio
import json

import pytest

pytestmark = pytest.mark.integration

from docsync.mcp.tool_handlers import call_tool_handler
from docsync.services.document_service import DocumentService
from docsync.storage import frontmatter


class TestAgentAndUserWorkflow:
    """Test an agent and a UI user working on the same documents directory."""

    def test_agent_drop_then_user_edit_then_restore(self, workspace, files):
        """Test an agent-written report flowing through edit and undo."""
        service = DocumentService(workspace)

        # Agent writes a file straight into the directory
        files.drop(
            workspace.documents_dir,
            "weekly-report.md",
            "# Weekly Report\n\n- shipped sync\n",
            last_edited_by="Agent",
        )

        # The UI lists documents and sees it
        docs = service.list_documents()
        assert [(d.filename, d.title, d.category) for d in docs] == [
            ("weekly-report.md", "Weekly Report", "Report")
        ]

        # A user retitles it and edits the body
        service.update_metadata("weekly-report.md", emoji="📊")
        service.write_content(
            "weekly-report.md", "# Weekly Report\n\n- shipped sync\n- fixed bugs\n", edited_by="Alice"
        )

        meta, _ = frontmatter.parse(files.read(workspace.documents_dir, "weekly-report.md"))
        assert meta["emoji"] == "📊"
        assert meta["last_edited_by"] == "Alice"

        # History shows the agent's version
        versions = service.list_versions("weekly-report.md")
        assert [v.author for v in versions] == ["Agent"]
        assert versions[0].preview == "Weekly Report - shipped sync"

        # Undo the user's edit
        service.restore_version("weekly-report.md", versions[0].version_id)
        assert service.get_content("weekly-report.md") == "# Weekly Report\n\n- shipped sync\n"

        # And undo the undo
        latest = service.list_versions("weekly-report.md")[0]
        assert latest.author == "Alice"
        service.restore_version("weekly-report.md", latest.version_id)
        assert "fixed bugs" in service.get_content("weekly-report.md")

    def test_external_delete_is_reconciled(self, workspace):
        service = DocumentService(workspace)
        entry = service.create_document(title="Scratch")

        (workspace.documents_dir / entry.filename).unlink()

        assert service.list_documents() == []
        assert workspace.index.load() == []

    def test_ui_and_agent_share_state(self, workspace):
        """Test documents created over MCP are visible to the service and back."""
        result = asyncio.run(
            call_tool_handler(
                "create_document",
                {"title": "Incident Guide", "category": "Guide", "created_by": "Agent"},
                workspace,
            )
        )
        filename = json.loads(result[0].text)["filename"]

        service = DocumentService(workspace)
        service.write_content(filename, "# Incident Guide\n\n1. Page on-call\n")

        result = asyncio.run(
            call_tool_handler("list_versions", {"filename": filename}, workspace)
        )
        versions = json.loads(result[0].text)["versions"]
        assert [v["author"] for v in versions] == ["Agent"]
