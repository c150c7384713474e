"""
MCP Catalog Registry Listing

This module serves catalog servers back in registry format, so other tools can
read the catalog the same way this package reads external registries.
"""

import threading

from ..config import mcp_logger
from ..importer.catalog import CatalogEntry, McpCatalog
from ..importer.service import get_import_service
from .models import (
    KeyValueInput,
    Meta,
    OfficialMeta,
    RegistryListMetadata,
    RegistryServer,
    RegistryServerList,
    Remote,
)
from .records import ProtocolType
from .transformer import to_rfc3339

REGISTRY_SCHEMA_URI = "https://static.modelcontextprotocol.io/schemas/2025-07-09/server.schema.json"

DEFAULT_LIST_LIMIT = 30
MAX_LIST_LIMIT = 100

# Headers every served remote declares
REMOTE_HEADER_NAMES = ("Authorization", "X-Server-Path")


def resolve_transport(front_protocol: str | None) -> str | None:
    """Registry transport for a front protocol; only sse and streamable-http have one."""
    if front_protocol == ProtocolType.SSE.value:
        return ProtocolType.SSE.value
    if front_protocol == ProtocolType.STREAMABLE_HTTP.value:
        return ProtocolType.STREAMABLE_HTTP.value
    return None


def clamp_limit(limit: int | None) -> int:
    if limit is None or limit <= 0:
        return DEFAULT_LIST_LIMIT
    return min(limit, MAX_LIST_LIMIT)


class CatalogRegistryService:
    """Read-only registry view over a catalog."""

    def __init__(self, catalog: McpCatalog):
        self.catalog = catalog

    def list_servers(self, namespace: str, cursor: str | None = None, limit: int | None = None,
                     search: str | None = None) -> RegistryServerList:
        """List one page of servers, ordered by id.

        The cursor is the id of the last server of the previous page. Search is a
        case-insensitive substring match on the server name.
        """
        entries = sorted(self.catalog.list_servers(namespace), key=lambda e: e.basic_info.id)

        if search and search.strip():
            needle = search.strip().lower()
            entries = [e for e in entries if needle in (e.basic_info.name or "").lower()]
        if cursor and cursor.strip():
            entries = [e for e in entries if e.basic_info.id > cursor]

        size = clamp_limit(limit)
        page = entries[:size]
        next_cursor = page[-1].basic_info.id if len(entries) > size else None

        servers = [self.build_registry_server(entry).to_registry_dict() for entry in page]
        return RegistryServerList(
            servers=servers,
            metadata=RegistryListMetadata(next_cursor=next_cursor, count=len(servers))
        )

    def get_server(self, namespace: str, server_id: str) -> RegistryServer | None:
        """Get one server in registry format."""
        entry = self.catalog.get(namespace, server_id)
        if entry is None:
            mcp_logger.debug(f"Registry lookup missed {server_id} in namespace {namespace}")
            return None
        return self.build_registry_server(entry)

    def build_registry_server(self, entry: CatalogEntry) -> RegistryServer:
        info = entry.basic_info
        version = info.version_detail

        official = OfficialMeta(id=info.id)
        if version is not None:
            release = to_rfc3339(version.release_date)
            official.published_at = release
            official.updated_at = release
            official.is_latest = version.is_latest

        return RegistryServer(
            schema_uri=REGISTRY_SCHEMA_URI,
            name=info.name,
            description=info.description,
            status=info.status,
            version=version.version if version else None,
            repository=info.repository,
            packages=info.packages,
            remotes=self.build_remotes(entry),
            meta=Meta(official=official)
        )

    def build_remotes(self, entry: CatalogEntry) -> list[Remote] | None:
        """Remotes from the front endpoints, falling back to the endpoint spec."""
        info = entry.basic_info
        transport = resolve_transport(info.front_protocol)

        urls = []
        config = info.remote_service_config
        if config is not None and config.front_endpoints:
            urls = [f"{ep.protocol}://{ep.endpoint_data}{ep.path}" for ep in config.front_endpoints]
        elif entry.endpoint_spec is not None and entry.endpoint_spec.data.get("address"):
            address = entry.endpoint_spec.data["address"]
            if ":" in address:
                address = f"[{address}]"
            port = entry.endpoint_spec.data.get("port")
            path = (config.export_path if config else None) or "/"
            host_port = f"{address}:{port}" if port else address
            urls = [f"{ProtocolType.HTTP.value}://{host_port}{path}"]

        if not urls:
            return None
        return [
            Remote(
                transport_type=transport,
                url=url,
                headers=[KeyValueInput(name=name) for name in REMOTE_HEADER_NAMES]
            )
            for url in urls
        ]


# Global registry listing instance
_registry_service: CatalogRegistryService | None = None
_registry_service_lock = threading.Lock()


def get_registry_service() -> CatalogRegistryService:
    """Get the global registry listing, backed by the import service's catalog."""
    global _registry_service
    if _registry_service is None:
        with _registry_service_lock:
            if _registry_service is None:
                _registry_service = CatalogRegistryService(get_import_service().catalog)
    return _registry_service
