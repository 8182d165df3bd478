"""HTTP API for docsync: REST document routes plus a JSON-RPC MCP endpoint."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from mcp import McpError
from pydantic import BaseModel

from docsync import __version__
from docsync.config import get_settings
from docsync.exceptions import NotFoundError, StorageError, ValidationError
from docsync.logging_config import configure_logging
from docsync.mcp.serializers import serialize_model, serialize_sync_result
from docsync.mcp.tool_handlers import call_tool_handler
from docsync.mcp.tool_schemas import get_tool_schemas
from docsync.services.document_service import DocumentService
from docsync.services.sync import PeriodicReconciler, SyncEngine
from docsync.storage.workspace import Workspace, get_workspace

logger = logging.getLogger(__name__)

MARKDOWN = "text/markdown"


class CreateDocumentRequest(BaseModel):
    title: Optional[str] = None
    emoji: Optional[str] = None
    category: Optional[str] = None
    content: Optional[str] = None
    created_by: Optional[str] = None


class WriteContentRequest(BaseModel):
    content: Optional[str] = None
    markdown: Optional[str] = None
    edited_by: Optional[str] = None


class UpdateMetadataRequest(BaseModel):
    title: Optional[str] = None
    emoji: Optional[str] = None
    category: Optional[str] = None


def _workspace(app: FastAPI) -> Workspace:
    return app.state.workspace or get_workspace()


def get_document_service(request: Request) -> DocumentService:
    """Per-request service bound to the app's workspace."""
    return DocumentService(_workspace(request.app))


def create_app(
    workspace: Workspace | None = None, sync_interval: float | None = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        workspace: Workspace to serve. If None, uses the global workspace.
        sync_interval: Seconds between background reconciliations. If None,
                       reads from settings; 0 disables the background task.
    """
    if sync_interval is None:
        sync_interval = get_settings().sync_interval_seconds

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = SyncEngine(_workspace(app))
        await asyncio.to_thread(engine.reconcile)

        reconciler = None
        if sync_interval > 0:
            reconciler = PeriodicReconciler(engine, sync_interval)
            reconciler.start()
        app.state.reconciler = reconciler
        try:
            yield
        finally:
            if reconciler is not None:
                await reconciler.stop()

    app = FastAPI(
        title="docsync",
        description="Markdown document sync and version history",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.workspace = workspace
    app.state.reconciler = None

    _register_error_handlers(app)
    _register_routes(app)
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc), "field": exc.field})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})


def _register_routes(app: FastAPI) -> None:
    @app.get("/")
    def root():
        """Service info."""
        return {
            "name": "docsync",
            "version": __version__,
            "endpoints": ["/api/documents", "/mcp", "/health"],
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "docsync"}

    @app.get("/api/documents")
    def list_documents(
        category: Optional[str] = None,
        q: Optional[str] = None,
        service: DocumentService = Depends(get_document_service),
    ):
        docs = service.list_documents(category=category, title_pattern=q)
        return {"documents": serialize_model(docs)}

    @app.post("/api/documents", status_code=201)
    def create_document(
        payload: CreateDocumentRequest,
        service: DocumentService = Depends(get_document_service),
    ):
        entry = service.create_document(
            title=payload.title,
            emoji=payload.emoji,
            category=payload.category,
            content=payload.content,
            created_by=payload.created_by,
        )
        return serialize_model(entry)

    @app.post("/api/documents/sync")
    def sync_documents(service: DocumentService = Depends(get_document_service)):
        return serialize_sync_result(service.sync())

    @app.get("/api/documents/categories")
    def list_categories():
        return {"categories": DocumentService.list_categories()}

    @app.get("/api/documents/{filename}")
    def get_document_content(
        filename: str, service: DocumentService = Depends(get_document_service)
    ):
        return PlainTextResponse(service.get_content(filename), media_type=MARKDOWN)

    @app.put("/api/documents/{filename}")
    def write_document_content(
        filename: str,
        payload: WriteContentRequest,
        service: DocumentService = Depends(get_document_service),
    ):
        content = payload.content if payload.content is not None else (payload.markdown or "")
        service.write_content(filename, content, edited_by=payload.edited_by)
        return {"success": True}

    @app.patch("/api/documents/{filename}/meta")
    def update_document_metadata(
        filename: str,
        payload: UpdateMetadataRequest,
        service: DocumentService = Depends(get_document_service),
    ):
        entry = service.update_metadata(
            filename, title=payload.title, emoji=payload.emoji, category=payload.category
        )
        return serialize_model(entry)

    @app.delete("/api/documents/{filename}")
    def delete_document(filename: str, service: DocumentService = Depends(get_document_service)):
        return {"success": True, "deleted": service.delete_document(filename)}

    @app.post("/api/documents/{filename}/duplicate", status_code=201)
    def duplicate_document(
        filename: str, service: DocumentService = Depends(get_document_service)
    ):
        return serialize_model(service.duplicate_document(filename))

    @app.get("/api/documents/{filename}/stats")
    def get_document_stats(
        filename: str, service: DocumentService = Depends(get_document_service)
    ):
        return serialize_model(service.get_stats(filename))

    @app.get("/api/documents/{filename}/versions")
    def list_versions(filename: str, service: DocumentService = Depends(get_document_service)):
        return {"versions": serialize_model(service.list_versions(filename))}

    @app.delete("/api/documents/{filename}/versions")
    def purge_versions(filename: str, service: DocumentService = Depends(get_document_service)):
        return {"removed": service.purge_versions(filename)}

    @app.get("/api/documents/{filename}/versions/{version_id}")
    def read_version(
        filename: str,
        version_id: str,
        service: DocumentService = Depends(get_document_service),
    ):
        return PlainTextResponse(service.read_version(filename, version_id), media_type=MARKDOWN)

    @app.post("/api/documents/{filename}/versions/{version_id}/restore")
    def restore_version(
        filename: str,
        version_id: str,
        service: DocumentService = Depends(get_document_service),
    ):
        return {"content": service.restore_version(filename, version_id)}

    @app.post("/mcp")
    async def mcp_jsonrpc(request: Request, payload: dict = Body(...)):
        """JSON-RPC 2.0 endpoint for MCP clients that speak plain HTTP."""
        return await handle_jsonrpc_request(payload, _workspace(request.app))


async def handle_jsonrpc_request(request: Dict[str, Any], workspace: Workspace) -> Dict[str, Any]:
    """Handle JSON-RPC 2.0 request."""
    jsonrpc = request.get("jsonrpc", "2.0")
    request_id = request.get("id")
    method = request.get("method")
    params = request.get("params") or {}

    if method == "initialize":
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {
                "protocolVersion": "2024-11-05",
                "capabilities": {"tools": {}},
                "serverInfo": {"name": "docsync", "version": __version__},
            },
        }
    elif method == "tools/list":
        tools = [
            {
                "name": tool_def["name"],
                "description": tool_def["description"],
                "inputSchema": tool_def["inputSchema"],
            }
            for tool_def in get_tool_schemas().values()
        ]
        return {"jsonrpc": jsonrpc, "id": request_id, "result": {"tools": tools}}
    elif method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        try:
            result = await call_tool_handler(tool_name, arguments, workspace)
        except McpError as e:
            return {
                "jsonrpc": jsonrpc,
                "id": request_id,
                "error": {"code": e.error.code, "message": e.error.message},
            }

        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {"content": [{"type": "text", "text": result[0].text}]},
        }
    else:
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "error": {"code": -32601, "message": f"Method not found: {method}"},
        }


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
