"""HTTP routes for MCP server import and the catalog registry view."""

from .import_api import router as import_router
from .registry_api import router as registry_router

__all__ = ["import_router", "registry_router"]
