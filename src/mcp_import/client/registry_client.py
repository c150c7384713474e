"""
MCP Registry Client

This module provides a paginated HTTP client for external MCP registries.
"""

import threading
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote_plus

import httpx
from pydantic import ValidationError

from ..config import RegistryClientConfig, mcp_logger
from ..errors import HttpStatusError, InvalidArgumentError, ParseError
from ..registry.models import RegistryServerList
from ..registry.records import McpServerRecord
from ..registry.transformer import SchemaTransformer, generate_server_id

SERVERS_FIELD = "servers"
METADATA_FIELD = "metadata"
NEXT_CURSOR_FIELD = "next_cursor"


@dataclass
class PageResult:
    """One page of normalized servers plus the cursor of the next page."""
    servers: list[McpServerRecord] = field(default_factory=list)
    next_cursor: str | None = None


def build_page_url(base: str, cursor: str | None = None, limit: int | None = None,
                   search: str | None = None) -> str:
    """Append cursor, limit and search to a base URL, keeping any existing query."""
    url = base
    has_query = "?" in base

    def append(name: str, value: str):
        nonlocal url, has_query
        url += ("&" if has_query else "?") + f"{name}={value}"
        has_query = True

    if cursor and cursor.strip():
        append("cursor", quote_plus(cursor))
    if limit is not None and limit > 0:
        append("limit", str(limit))
    if search and search.strip():
        append("search", quote_plus(search))
    return url


def extract_next_cursor(root: Any) -> str | None:
    """Read metadata.next_cursor; blank or non-text cursors mean no next page."""
    if not isinstance(root, dict):
        return None
    metadata = root.get(METADATA_FIELD)
    if not isinstance(metadata, dict):
        return None
    next_cursor = metadata.get(NEXT_CURSOR_FIELD)
    if isinstance(next_cursor, str) and next_cursor.strip():
        return next_cursor
    return None


class RegistryClient:
    """Client for fetching server listings from an MCP registry."""

    def __init__(self, config: RegistryClientConfig | None = None,
                 http_client: httpx.Client | None = None,
                 transformer: SchemaTransformer | None = None):
        """
        Initialize the registry client.

        Args:
            config: Client configuration (timeouts, token, page guard)
            http_client: Pre-built httpx client; owned by the caller if given
            transformer: Schema transformer used for every fetched record
        """
        self.config = config or RegistryClientConfig()
        self.transformer = transformer or SchemaTransformer()
        self._owns_session = http_client is None
        self.session = http_client
        self._session_lock = threading.Lock()

    def _get_session(self) -> httpx.Client:
        """Get or create the HTTP session."""
        if self.session is None:
            with self._session_lock:
                if self.session is None:
                    self.session = httpx.Client(
                        timeout=httpx.Timeout(self.config.read_timeout, connect=self.config.connect_timeout),
                        follow_redirects=self.config.follow_redirects,
                        headers={"User-Agent": self.config.user_agent}
                    )
        return self.session

    def close(self):
        """Close the HTTP session if this client created it."""
        with self._session_lock:
            if self.session is not None and self._owns_session:
                self.session.close()
                self.session = None

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.config.resolve_bearer_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def fetch_page(self, base_url: str | None, cursor: str | None = None, limit: int | None = None,
                   search: str | None = None) -> PageResult:
        """Fetch one registry page. Does not follow the next cursor."""
        if not base_url or not base_url.strip():
            raise InvalidArgumentError("URL is blank")

        page_url = build_page_url(base_url.strip(), cursor, limit, search)
        session = self._get_session()

        mcp_logger.debug(f"Fetching registry page {page_url}")
        response = session.get(page_url, headers=self._build_headers())
        if not response.is_success:
            raise HttpStatusError(response.status_code, page_url)

        try:
            root = response.json()
        except ValueError as e:
            raise ParseError(f"Failed to parse response body from {page_url}") from e

        if not isinstance(root, (dict, list)):
            raise ParseError(f"Unexpected response body from {page_url}: {type(root).__name__}")

        servers = self._parse_typed(root)
        if not servers:
            servers = self._parse_tree(root)

        for server in servers:
            if not server.id or not server.id.strip():
                server.id = generate_server_id(server.name)

        return PageResult(servers=servers, next_cursor=extract_next_cursor(root))

    def _parse_typed(self, root: Any) -> list[McpServerRecord]:
        """Read the body as a registry list response."""
        if not isinstance(root, dict):
            return []
        try:
            page = RegistryServerList.model_validate(root)
        except ValidationError as e:
            raise ParseError(f"Failed to parse response body: {e}") from e
        return self.transformer.transform_all(page.servers or [])

    def _parse_tree(self, root: Any) -> list[McpServerRecord]:
        """Fallback for legacy bodies: servers array, bare array or single object."""
        if isinstance(root, dict) and isinstance(root.get(SERVERS_FIELD), list):
            return self.transformer.transform_all(root[SERVERS_FIELD])
        if isinstance(root, list):
            return self.transformer.transform_all(root)
        server = self.transformer.transform(root)
        return [server] if server is not None else []

    def fetch_all(self, base_url: str | None, search: str | None = None) -> list[McpServerRecord]:
        """Follow next cursors and collect every page, up to the page guard."""
        collected: list[McpServerRecord] = []
        cursor = None
        pages = 0

        while pages < self.config.max_pages:
            pages += 1
            page = self.fetch_page(base_url, cursor, self.config.page_size, search)
            collected.extend(page.servers)
            if page.next_cursor is None:
                break
            cursor = page.next_cursor
        else:
            mcp_logger.warning(f"Stopped after {pages} pages from {base_url}; registry kept returning cursors")

        return collected

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
