"""
MCP Import Dispatcher

This module turns an import request into normalized server records, whatever
the source: an uploaded file, a single JSON record, or a registry URL.
"""

import json
from enum import Enum
from typing import Any

from ..client import RegistryClient
from ..config import mcp_logger
from ..errors import InvalidArgumentError, UnsupportedSourceKindError
from ..registry.records import McpServerRecord
from ..registry.transformer import SchemaTransformer, generate_server_id
from .models import FETCH_ALL_PAGES, ImportRequest

SERVERS_FIELD = "servers"


class SourceKind(Enum):
    """Where the servers of an import request come from."""
    FILE = "file"
    JSON = "json"
    URL = "url"

    @classmethod
    def from_value(cls, value: str | None) -> "SourceKind":
        """Resolve a source kind, ignoring case and surrounding whitespace."""
        if value is None:
            raise UnsupportedSourceKindError(value)
        normalized = value.strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise UnsupportedSourceKindError(value)


def parse_payload(data: str | None) -> dict[str, Any] | list[Any]:
    """Parse a file or json payload; the root must be an object or an array."""
    if data is None or not data.strip():
        raise InvalidArgumentError("Import data is empty")
    try:
        root = json.loads(data)
    except json.JSONDecodeError as e:
        raise InvalidArgumentError(f"Invalid JSON payload: {e.msg}") from e
    if not isinstance(root, (dict, list)):
        raise InvalidArgumentError(f"JSON payload must be an object or an array, got {type(root).__name__}")
    return root


class ImportDispatcher:
    """Routes an import request to the matching source reader."""

    def __init__(self, registry_client: RegistryClient | None = None,
                 transformer: SchemaTransformer | None = None):
        self.transformer = transformer or SchemaTransformer()
        self.registry_client = registry_client or RegistryClient(transformer=self.transformer)

    def normalize(self, request: ImportRequest) -> list[McpServerRecord]:
        """Produce the normalized server records of a request.

        Every returned record carries a non-blank id.
        """
        kind = SourceKind.from_value(request.import_type)

        if kind == SourceKind.FILE:
            servers = self._from_file(request.data)
        elif kind == SourceKind.JSON:
            servers = self._from_json(request.data)
        else:
            servers = self._from_url(request)

        for server in servers:
            if not server.id or not server.id.strip():
                server.id = generate_server_id(server.name)

        mcp_logger.info(f"Normalized {len(servers)} servers from {kind.value} import")
        return servers

    def _from_file(self, data: str | None) -> list[McpServerRecord]:
        root = parse_payload(data)

        if isinstance(root, dict) and SERVERS_FIELD in root:
            raws = root[SERVERS_FIELD]
            if not isinstance(raws, list):
                mcp_logger.warning(f"Ignoring file payload: '{SERVERS_FIELD}' is not an array")
                return []
            return self.transformer.transform_all(raws)
        if isinstance(root, list):
            return self.transformer.transform_all(root)

        server = self.transformer.transform(root)
        return [server] if server is not None else []

    def _from_json(self, data: str | None) -> list[McpServerRecord]:
        root = parse_payload(data)

        if isinstance(root, dict) and SERVERS_FIELD in root:
            raws = root[SERVERS_FIELD]
            if not isinstance(raws, list):
                raise InvalidArgumentError(f"'{SERVERS_FIELD}' must be an array")
            if not raws:
                raise InvalidArgumentError("No server found in JSON payload")
            raw = raws[0]
        elif isinstance(root, list):
            if not root:
                raise InvalidArgumentError("No server found in JSON payload")
            raw = root[0]
        else:
            raw = root

        server = self.transformer.transform(raw)
        return [server] if server is not None else []

    def _from_url(self, request: ImportRequest) -> list[McpServerRecord]:
        url = request.data
        if not url or not url.strip():
            raise InvalidArgumentError("Registry URL is blank")

        if request.limit == FETCH_ALL_PAGES:
            return self.registry_client.fetch_all(url, request.search)

        page = self.registry_client.fetch_page(url, request.cursor, request.limit, request.search)
        return page.servers
