"""
MCP Registry API endpoints.

Read-only registry view of the catalog: servers imported here can be listed and
fetched in the same format external registries publish.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ..config import mcp_logger
from ..registry.listing import CatalogRegistryService, get_registry_service

DEFAULT_NAMESPACE = "public"

router = APIRouter(prefix="/api/mcp/registry/v0", tags=["mcp-registry"])


@router.get("/servers")
def list_servers(
    namespace_id: str = DEFAULT_NAMESPACE,
    cursor: str | None = None,
    limit: int | None = None,
    search: str | None = None,
    service: CatalogRegistryService = Depends(get_registry_service)
) -> dict[str, Any]:
    """List catalog servers one page at a time."""
    try:
        return service.list_servers(namespace_id, cursor, limit, search).to_registry_dict()
    except Exception as e:
        mcp_logger.error(f"List servers endpoint error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/servers/{server_id}")
def get_server(
    server_id: str,
    namespace_id: str = DEFAULT_NAMESPACE,
    service: CatalogRegistryService = Depends(get_registry_service)
) -> dict[str, Any]:
    """Get one catalog server."""
    server = service.get_server(namespace_id, server_id)
    if server is None:
        raise HTTPException(status_code=404, detail=f"Server {server_id} not found")
    return server.to_registry_dict()
