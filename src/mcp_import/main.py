"""
MCP Import Service

A standalone FastAPI service that imports MCP servers from external registries
and serves the resulting catalog in registry format.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .api_routes import import_router, registry_router
from .config import configure_logging, mcp_logger
from .importer.service import get_import_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    mcp_logger.info("MCP import service started")

    yield

    # Shutdown
    get_import_service().dispatcher.registry_client.close()
    mcp_logger.info("MCP import service shutdown complete")


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="MCP Import Service",
        description="Imports MCP servers from external registries into a server catalog",
        version=__version__,
        lifespan=lifespan
    )
    app.include_router(import_router)
    app.include_router(registry_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
