"""MCP tool handlers for executing tool operations."""

import asyncio
import json
from typing import Any, Callable

from mcp import McpError
from mcp.types import ErrorData, TextContent

from docsync.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
)
from docsync.mcp.serializers import serialize_model, serialize_sync_result
from docsync.services.document_service import DocumentService
from docsync.storage.workspace import Workspace


def _text(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2, ensure_ascii=False))]


def handle_list_documents(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle list_documents tool."""
    service = DocumentService(workspace)
    docs = service.list_documents(
        category=arguments.get("category"),
        title_pattern=arguments.get("title_pattern"),
    )
    return _text({"documents": serialize_model(docs)})


def handle_get_document_content(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle get_document_content tool."""
    service = DocumentService(workspace)
    content = service.get_content(arguments["filename"])
    return _text({"filename": arguments["filename"], "content": content})


def handle_write_document(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle write_document tool."""
    service = DocumentService(workspace)
    entry = service.write_content(
        filename=arguments["filename"],
        content=arguments["content"],
        edited_by=arguments.get("edited_by"),
    )
    return _text({"success": True, "document": serialize_model(entry)})


def handle_create_document(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle create_document tool."""
    service = DocumentService(workspace)
    entry = service.create_document(
        title=arguments["title"],
        emoji=arguments.get("emoji"),
        category=arguments.get("category"),
        content=arguments.get("content"),
        created_by=arguments.get("created_by"),
    )
    return _text(serialize_model(entry))


def handle_update_document_metadata(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle update_document_metadata tool."""
    service = DocumentService(workspace)
    entry = service.update_metadata(
        filename=arguments["filename"],
        title=arguments.get("title"),
        emoji=arguments.get("emoji"),
        category=arguments.get("category"),
    )
    return _text(serialize_model(entry))


def handle_delete_document(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle delete_document tool."""
    service = DocumentService(workspace)
    deleted = service.delete_document(arguments["filename"])
    return _text({"deleted": deleted})


def handle_duplicate_document(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle duplicate_document tool."""
    service = DocumentService(workspace)
    entry = service.duplicate_document(arguments["filename"])
    return _text(serialize_model(entry))


def handle_list_versions(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle list_versions tool."""
    service = DocumentService(workspace)
    versions = service.list_versions(arguments["filename"])
    return _text({"versions": serialize_model(versions)})


def handle_read_version(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle read_version tool."""
    service = DocumentService(workspace)
    content = service.read_version(arguments["filename"], arguments["version_id"])
    return _text({"version_id": arguments["version_id"], "content": content})


def handle_restore_version(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle restore_version tool."""
    service = DocumentService(workspace)
    content = service.restore_version(arguments["filename"], arguments["version_id"])
    return _text({"restored": arguments["version_id"], "content": content})


def handle_purge_versions(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle purge_versions tool."""
    service = DocumentService(workspace)
    removed = service.purge_versions(arguments["filename"])
    return _text({"removed": removed})


def handle_sync_documents(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle sync_documents tool."""
    service = DocumentService(workspace)
    return _text(serialize_sync_result(service.sync()))


def handle_get_document_stats(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle get_document_stats tool."""
    service = DocumentService(workspace)
    return _text(serialize_model(service.get_stats(arguments["filename"])))


def handle_list_categories(arguments: dict[str, Any], workspace: Workspace) -> list[TextContent]:
    """Handle list_categories tool."""
    return _text({"categories": DocumentService.list_categories()})


# Tool handler registry
TOOL_HANDLERS: dict[str, Callable[[dict[str, Any], Workspace], list[TextContent]]] = {
    "list_documents": handle_list_documents,
    "get_document_content": handle_get_document_content,
    "write_document": handle_write_document,
    "create_document": handle_create_document,
    "update_document_metadata": handle_update_document_metadata,
    "delete_document": handle_delete_document,
    "duplicate_document": handle_duplicate_document,
    "list_versions": handle_list_versions,
    "read_version": handle_read_version,
    "restore_version": handle_restore_version,
    "purge_versions": handle_purge_versions,
    "sync_documents": handle_sync_documents,
    "get_document_stats": handle_get_document_stats,
    "list_categories": handle_list_categories,
}


async def call_tool_handler(
    tool_name: str, arguments: dict[str, Any], workspace: Workspace
) -> list[TextContent]:
    """
    Call the appropriate tool handler.

    Args:
        tool_name: Name of the tool to call
        arguments: Tool arguments
        workspace: Workspace the tool operates on

    Returns:
        List of TextContent with tool execution result

    Raises:
        McpError: If tool name is unknown or handler raises an error
    """
    if tool_name not in TOOL_HANDLERS:
        raise McpError(
            ErrorData(
                code=-32601,  # Method not found
                message=f"Unknown tool: {tool_name}",
            )
        )

    handler = TOOL_HANDLERS[tool_name]

    try:
        # Handlers do blocking file I/O and may wait on the index lock
        return await asyncio.to_thread(handler, arguments, workspace)
    except McpError:
        raise
    except KeyError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Missing required argument: {e.args[0]}",
            )
        )
    except ValidationError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Validation error: {str(e)}",
            )
        )
    except NotFoundError as e:
        raise McpError(
            ErrorData(
                code=-32001,  # Custom error: not found
                message=str(e),
            )
        )
    except StorageError as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Storage error: {str(e)}",
            )
        )
    except Exception as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )
