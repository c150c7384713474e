"""
MCP Server Catalog

This module defines the catalog the importer writes into, plus an in-memory
implementation used by the HTTP routes and tests.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..config import mcp_logger
from ..errors import CatalogOperationError
from ..registry.records import ServerBasicInfo


@dataclass
class EndpointSpec:
    """How the catalog reaches a non-stdio server."""
    type: str | None = None
    data: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "data": dict(self.data)}


@dataclass
class CatalogEntry:
    """A server as stored in the catalog."""
    basic_info: ServerBasicInfo
    tool_spec: dict[str, Any] | None = None
    endpoint_spec: EndpointSpec | None = None


class McpCatalog(ABC):
    """Catalog of MCP servers, partitioned by namespace."""

    @abstractmethod
    def create(self, namespace: str, basic_info: ServerBasicInfo, tool_spec: dict[str, Any] | None,
               endpoint_spec: EndpointSpec | None) -> str:
        """Create a server; returns its id."""

    @abstractmethod
    def update(self, namespace: str, overwrite: bool, basic_info: ServerBasicInfo,
               tool_spec: dict[str, Any] | None, endpoint_spec: EndpointSpec | None, override: bool):
        """Update an existing server."""

    @abstractmethod
    def get(self, namespace: str, server_id: str) -> CatalogEntry | None:
        """Get a server by id."""

    @abstractmethod
    def find_by_name(self, namespace: str, name: str) -> CatalogEntry | None:
        """Get a server by name."""

    @abstractmethod
    def list_servers(self, namespace: str) -> list[CatalogEntry]:
        """List every server of a namespace."""


class InMemoryCatalog(McpCatalog):
    """Thread-safe, process-local catalog."""

    def __init__(self):
        self._servers: dict[str, dict[str, CatalogEntry]] = {}
        self._lock = threading.Lock()

    def create(self, namespace, basic_info, tool_spec, endpoint_spec) -> str:
        if not basic_info.id:
            raise CatalogOperationError("Server id is required")

        with self._lock:
            servers = self._servers.setdefault(namespace, {})
            if basic_info.id in servers:
                raise CatalogOperationError(f"Server {basic_info.id} already exists in namespace {namespace}")
            servers[basic_info.id] = CatalogEntry(basic_info, tool_spec, endpoint_spec)

        mcp_logger.info(f"Created MCP server {basic_info.id} in namespace {namespace}")
        return basic_info.id

    def update(self, namespace, overwrite, basic_info, tool_spec, endpoint_spec, override):
        with self._lock:
            servers = self._servers.get(namespace, {})
            if basic_info.id not in servers:
                raise CatalogOperationError(f"Server {basic_info.id} not found in namespace {namespace}")
            servers[basic_info.id] = CatalogEntry(basic_info, tool_spec, endpoint_spec)

        mcp_logger.info(f"Updated MCP server {basic_info.id} in namespace {namespace}")

    def get(self, namespace, server_id) -> CatalogEntry | None:
        with self._lock:
            return self._servers.get(namespace, {}).get(server_id)

    def find_by_name(self, namespace, name) -> CatalogEntry | None:
        with self._lock:
            for entry in self._servers.get(namespace, {}).values():
                if entry.basic_info.name == name:
                    return entry
        return None

    def list_servers(self, namespace) -> list[CatalogEntry]:
        with self._lock:
            return list(self._servers.get(namespace, {}).values())
