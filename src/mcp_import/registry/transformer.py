"""
MCP Registry Schema Transformer

This module converts registry records into normalized server records. It owns
protocol inference, remote endpoint mapping, URL validation and id resolution.
"""

import re
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from ..config import mcp_logger
from ..errors import RecordConversionError, RemoteUrlError
from .models import RegistryServer, Remote
from .records import (
    STATUS_ACTIVE,
    STATUS_DEPRECATED,
    FrontEndpoint,
    McpServerRecord,
    ProtocolType,
    RemoteServiceConfig,
    ServerVersionDetail,
)

HTTP_PREFIX = "http://"
HTTPS_PREFIX = "https://"
DUBBO_PREFIX = "dubbo://"

# Schemes that are never accepted for a remote, wherever they appear in the URL
DENIED_URL_MARKERS = ("javascript:", "data:", "file:")

TRANSPORT_SSE = "sse"
TRANSPORT_STREAMABLE = ("streamable", "streamable-http")


def normalize_status(status: str | None) -> str:
    """Map a registry status to active or deprecated."""
    if status is None:
        return STATUS_ACTIVE
    value = status.strip().lower()
    if value in (STATUS_ACTIVE, STATUS_DEPRECATED):
        return value
    return STATUS_ACTIVE


def generate_server_id(name: str | None) -> str:
    """Generate a server id: name-derived prefix plus a random suffix."""
    if not name or not name.strip():
        return uuid.uuid4().hex

    base_id = re.sub(r"[^a-z0-9]", "", name.lower())
    suffix = uuid.uuid4().hex[:8]
    return f"{base_id}-{suffix}"


def to_rfc3339(raw: str | None) -> str | None:
    """Normalize epoch seconds / millis to RFC 3339; other values pass through."""
    if raw is None or raw == "":
        return None
    if raw.endswith("Z") or "T" in raw:
        return raw
    if not raw.isdigit() or len(raw) not in (10, 13):
        return raw

    millis = int(raw) if len(raw) == 13 else int(raw) * 1000
    try:
        dt = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return raw
    fraction = f".{millis % 1000:03d}" if millis % 1000 else ""
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + fraction + "Z"


def is_valid_url(url: str | None, protocol: str) -> bool:
    """Check a URL against the denylist and the rules of the given protocol."""
    if not url or not url.strip():
        return False

    lower_url = url.lower()
    if any(marker in lower_url for marker in DENIED_URL_MARKERS):
        return False

    if protocol == ProtocolType.HTTP.value:
        return lower_url.startswith(HTTP_PREFIX) or lower_url.startswith(HTTPS_PREFIX)
    if protocol == ProtocolType.STDIO.value:
        # Commands and paths, no traversal or shell chaining
        return ".." not in lower_url and "&" not in lower_url and "|" not in lower_url
    if protocol == ProtocolType.DUBBO.value:
        return (lower_url.startswith(DUBBO_PREFIX) or lower_url.startswith(HTTP_PREFIX)
                or lower_url.startswith(HTTPS_PREFIX))
    return ".." not in lower_url


def infer_protocol(server: RegistryServer) -> str | None:
    """Infer the protocol before packages and remotes are processed.

    Packages mean stdio. Otherwise the first remote's transport decides between
    sse and streamable-http; anything else is left undecided.
    """
    if server.packages:
        return ProtocolType.STDIO.value

    if server.remotes:
        first = server.remotes[0]
        transport = first.transport_type if first else None
        if transport is not None:
            lower = transport.strip().lower()
            if lower == TRANSPORT_SSE:
                return ProtocolType.SSE.value
            if lower in TRANSPORT_STREAMABLE:
                return ProtocolType.STREAMABLE_HTTP.value
    return None


def parse_front_endpoint(remote: Remote, url: str) -> tuple[FrontEndpoint, str] | None:
    """Decompose a validated remote URL into a front endpoint and its export path.

    Returns None when the URL has no host. Raises RemoteUrlError when the URL
    cannot be decomposed at all.
    """
    try:
        if any(ch.isspace() for ch in url):
            raise ValueError("URL contains whitespace")
        parts = urlsplit(url)
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise RemoteUrlError(url, e) from e

    if not host:
        return None
    if ":" in host:
        host = f"[{host}]"

    path = parts.path
    if parts.query:
        path += "?" + parts.query
    if parts.fragment:
        path += "#" + parts.fragment

    is_https = parts.scheme.lower() == ProtocolType.HTTPS.value
    effective_port = port if port else (443 if is_https else 80)

    endpoint = FrontEndpoint(
        endpoint_data=f"{host}:{effective_port}",
        path=path or "/",
        transport_type=remote.transport_type,
        protocol=ProtocolType.HTTPS.value if is_https else ProtocolType.HTTP.value,
        headers=remote.headers
    )
    return endpoint, path


class SchemaTransformer:
    """Transforms registry records into normalized MCP server records."""

    def transform(self, raw: RegistryServer | Mapping[str, Any] | None) -> McpServerRecord | None:
        """Transform one registry record; returns None if the record is dropped."""
        if raw is None:
            return None

        try:
            server = self._coerce(raw)
            return self._transform(server)
        except Exception as e:
            name = raw.get("name") if isinstance(raw, Mapping) else getattr(raw, "name", None)
            mcp_logger.warning(f"Skipping registry record {name!r}: {e}")
            return None

    def transform_all(self, raws) -> list[McpServerRecord]:
        """Transform a sequence of records, dropping the ones that fail."""
        servers = []
        for raw in raws:
            server = self.transform(raw)
            if server is not None:
                servers.append(server)
        return servers

    def _coerce(self, raw) -> RegistryServer:
        if isinstance(raw, RegistryServer):
            return raw
        if not isinstance(raw, Mapping):
            raise RecordConversionError(f"expected an object, got {type(raw).__name__}")
        try:
            return RegistryServer.model_validate(dict(raw))
        except ValidationError as e:
            raise RecordConversionError(str(e)) from e

    def _transform(self, server: RegistryServer) -> McpServerRecord:
        record = McpServerRecord(
            id=self.resolve_registry_id(server),
            name=server.name,
            description=server.description,
            status=normalize_status(server.status),
            repository=server.repository
        )

        record.version_detail = self.build_version(server)

        early_protocol = infer_protocol(server)
        if early_protocol:
            record.set_protocol(early_protocol)

        if server.packages:
            record.packages = server.packages

        self.apply_remote_config(server, record)

        if not record.protocol:
            record.set_protocol(ProtocolType.STDIO.value)

        return record

    def resolve_registry_id(self, server: RegistryServer) -> str | None:
        """Prefer the official registry id, then the repository id."""
        official = server.official
        if official and official.id and official.id.strip():
            return official.id
        return server.repository.id if server.repository else None

    def build_version(self, server: RegistryServer) -> ServerVersionDetail | None:
        """Build version detail from version, publish date and latest flag."""
        official = server.official

        release = server.published_at
        if (not release or not release.strip()) and official:
            release = official.published_at
        release = to_rfc3339(release.strip()) if release and release.strip() else None
        is_latest = official.is_latest if official else None

        has_version = bool(server.version and server.version.strip())
        if not has_version and release is None and is_latest is None:
            return None

        return ServerVersionDetail(
            version=server.version if has_version else None,
            release_date=release,
            is_latest=is_latest
        )

    def apply_remote_config(self, server: RegistryServer, record: McpServerRecord):
        """Build the remote service config from declared remotes.

        Only runs when no remote config exists yet. Remotes that fail validation or
        have no host are dropped; the export path is taken from the last endpoint.
        """
        if record.remote_service_config is not None or not server.remotes:
            return

        config = RemoteServiceConfig()
        for remote in server.remotes:
            if remote is None or not remote.url or not remote.url.strip():
                continue

            url = remote.url.strip()
            # Front endpoints are always http(s)
            if not is_valid_url(url, ProtocolType.HTTP.value):
                mcp_logger.debug(f"Rejected remote URL for {server.name!r}: {url}")
                continue

            parsed = parse_front_endpoint(remote, url)
            if parsed is None:
                mcp_logger.debug(f"Remote URL without host for {server.name!r}: {url}")
                continue

            endpoint, path = parsed
            config.export_path = path
            config.front_endpoints.append(endpoint)

        record.remote_service_config = config
