"""
MCP Import API endpoints.

Validate and execute imports of MCP servers from files, JSON documents or
external registries.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ..config import mcp_logger
from ..importer.models import ImportRequest
from ..importer.service import McpImportService, get_import_service

DEFAULT_NAMESPACE = "public"

router = APIRouter(prefix="/api/mcp/import", tags=["mcp-import"])


@router.post("/validate")
def validate_import(
    request: ImportRequest,
    namespace_id: str = DEFAULT_NAMESPACE,
    service: McpImportService = Depends(get_import_service)
) -> dict[str, Any]:
    """Validate the servers of an import request without importing them."""
    try:
        return service.validate_import(namespace_id, request).to_dict()
    except Exception as e:
        mcp_logger.error(f"Validate endpoint error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/execute")
def execute_import(
    request: ImportRequest,
    namespace_id: str = DEFAULT_NAMESPACE,
    service: McpImportService = Depends(get_import_service)
) -> dict[str, Any]:
    """Import the servers of a request, or only validate them when validate_only is set."""
    try:
        if request.validate_only:
            return {"validation": service.validate_import(namespace_id, request).to_dict()}
        return service.execute_import(namespace_id, request).to_dict()
    except Exception as e:
        mcp_logger.error(f"Execute endpoint error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
