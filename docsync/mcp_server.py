"""MCP (Model Context Protocol) server for docsync.

Exposes the document operations to agents over stdio, using the mcp library
for JSON-RPC 2.0 communication. While the server runs, the index is also
reconciled against the documents directory in the background.
"""

import asyncio
import logging

from mcp import McpError
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ErrorData, TextContent, Tool

from docsync import __version__
from docsync.config import get_settings
from docsync.logging_config import configure_logging
from docsync.mcp.tool_handlers import call_tool_handler
from docsync.mcp.tool_schemas import get_tool_schemas
from docsync.services.sync import PeriodicReconciler, SyncEngine
from docsync.storage.workspace import get_workspace

logger = logging.getLogger(__name__)

SERVER_NAME = "docsync"

# Initialize MCP server
app = Server(SERVER_NAME)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    return [Tool(**schema) for schema in get_tool_schemas().values()]


@app.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
    """Handle tool calls."""
    if arguments is None:
        arguments = {}

    workspace = get_workspace()

    try:
        return await call_tool_handler(name, arguments, workspace)
    except McpError:
        # Handlers already convert service exceptions to McpError
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling tool {name}")
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )


async def main():
    """Main entry point for MCP server."""
    settings = get_settings()
    workspace = get_workspace()
    engine = SyncEngine(workspace)
    engine.reconcile()

    reconciler = None
    if settings.background_sync_enabled():
        reconciler = PeriodicReconciler(engine, settings.sync_interval_seconds)
        reconciler.start()

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
    finally:
        if reconciler is not None:
            await reconciler.stop()


def run() -> None:
    configure_logging()
    asyncio.run(main())


if __name__ == "__main__":
    run()
