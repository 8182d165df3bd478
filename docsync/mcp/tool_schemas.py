"""MCP tool schema definitions."""

from typing import Any

from docsync.models.document import DocCategory

_FILENAME = {
    "type": "string",
    "description": "Document filename including extension, e.g. weekly-report.md",
}
_VERSION_ID = {
    "type": "string",
    "description": "Version ID as returned by list_versions",
}
_CATEGORY = {
    "type": "string",
    "enum": DocCategory.values(),
    "description": "Document category",
}


def get_tool_schemas() -> dict[str, dict[str, Any]]:
    """Get all MCP tool schemas."""
    return {
        "list_documents": {
            "name": "list_documents",
            "description": "Reconcile the index with the documents directory and list all documents",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category": {**_CATEGORY, "description": "Optional category filter"},
                    "title_pattern": {
                        "type": "string",
                        "description": "Optional case-insensitive title substring",
                    },
                },
            },
        },
        "get_document_content": {
            "name": "get_document_content",
            "description": "Read a document's Markdown body (frontmatter removed)",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "write_document": {
            "name": "write_document",
            "description": "Replace a document's body; the previous content is kept as a version",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "filename": _FILENAME,
                    "content": {"type": "string", "description": "New Markdown body"},
                    "edited_by": {
                        "type": "string",
                        "description": "Name recorded as the last editor",
                    },
                },
                "required": ["filename", "content"],
            },
        },
        "create_document": {
            "name": "create_document",
            "description": "Create a new document; the filename is derived from the title",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Document title"},
                    "emoji": {"type": "string", "description": "Optional icon"},
                    "category": _CATEGORY,
                    "content": {
                        "type": "string",
                        "description": "Optional initial body (default: a heading with the title)",
                    },
                    "created_by": {"type": "string", "description": "Optional author name"},
                },
                "required": ["title"],
            },
        },
        "update_document_metadata": {
            "name": "update_document_metadata",
            "description": "Change a document's title, emoji or category without touching its content",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "filename": _FILENAME,
                    "title": {"type": "string", "description": "New title"},
                    "emoji": {"type": "string", "description": "New icon"},
                    "category": _CATEGORY,
                },
                "required": ["filename"],
            },
        },
        "delete_document": {
            "name": "delete_document",
            "description": "Delete a document and its index entry (version history is kept)",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "duplicate_document": {
            "name": "duplicate_document",
            "description": "Copy a document under a new filename",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "list_versions": {
            "name": "list_versions",
            "description": "List a document's saved versions, newest first",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "read_version": {
            "name": "read_version",
            "description": "Read the body of one saved version",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME, "version_id": _VERSION_ID},
                "required": ["filename", "version_id"],
            },
        },
        "restore_version": {
            "name": "restore_version",
            "description": "Restore a saved version; the current content is saved as a version first",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME, "version_id": _VERSION_ID},
                "required": ["filename", "version_id"],
            },
        },
        "purge_versions": {
            "name": "purge_versions",
            "description": "Delete every saved version of a document",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "sync_documents": {
            "name": "sync_documents",
            "description": "Register new files and drop entries for deleted files",
            "inputSchema": {"type": "object", "properties": {}},
        },
        "get_document_stats": {
            "name": "get_document_stats",
            "description": "Word and character counts for a document",
            "inputSchema": {
                "type": "object",
                "properties": {"filename": _FILENAME},
                "required": ["filename"],
            },
        },
        "list_categories": {
            "name": "list_categories",
            "description": "List document categories with their default icons",
            "inputSchema": {"type": "object", "properties": {}},
        },
    }
