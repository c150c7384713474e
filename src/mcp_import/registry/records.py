"""
MCP Server Records

This module defines the normalized server record produced from registry data and
consumed by validation and import.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import Package, Repository

STATUS_ACTIVE = "active"
STATUS_DEPRECATED = "deprecated"

ENDPOINT_TYPE_DIRECT = "DIRECT"


class ProtocolType(Enum):
    """Server protocols known to the catalog."""
    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"
    HTTP = "http"
    HTTPS = "https"
    DUBBO = "dubbo"


@dataclass
class ServerVersionDetail:
    """Version information for a server."""
    version: str | None = None
    release_date: str | None = None
    is_latest: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "release_date": self.release_date,
            "is_latest": self.is_latest
        }


@dataclass
class FrontEndpoint:
    """One reachable address, path and transport for a remote server."""
    endpoint_data: str
    path: str = "/"
    transport_type: str | None = None
    protocol: str = ProtocolType.HTTP.value
    endpoint_type: str = ENDPOINT_TYPE_DIRECT
    headers: Any | None = None

    def to_dict(self) -> dict[str, Any]:
        headers = self.headers
        if isinstance(headers, list):
            headers = [h.to_dict() if hasattr(h, "to_dict") else h for h in headers]
        return {
            "endpoint_data": self.endpoint_data,
            "path": self.path,
            "transport_type": self.transport_type,
            "protocol": self.protocol,
            "endpoint_type": self.endpoint_type,
            "headers": headers
        }


@dataclass
class RemoteServiceConfig:
    """Remote endpoints a server is reachable at."""
    export_path: str | None = None
    front_endpoints: list[FrontEndpoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "export_path": self.export_path,
            "front_endpoints": [ep.to_dict() for ep in self.front_endpoints]
        }


@dataclass
class ServerBasicInfo:
    """The part of a server record the catalog stores as its basic info."""
    id: str
    name: str | None
    protocol: str | None
    front_protocol: str | None = None
    description: str | None = None
    status: str = STATUS_ACTIVE
    repository: Repository | None = None
    version_detail: ServerVersionDetail | None = None
    remote_service_config: RemoteServiceConfig | None = None
    packages: list[Package] | None = None


@dataclass
class McpServerRecord:
    """Normalized MCP server, ready for validation and import."""
    name: str | None
    id: str | None = None
    description: str | None = None
    status: str = STATUS_ACTIVE
    protocol: str | None = None
    front_protocol: str | None = None
    repository: Repository | None = None
    version_detail: ServerVersionDetail | None = None
    packages: list[Package] | None = None
    remote_service_config: RemoteServiceConfig | None = None
    tool_spec: dict[str, Any] | None = None

    def set_protocol(self, protocol: str):
        """Set protocol and front protocol together."""
        self.protocol = protocol
        self.front_protocol = protocol

    def launch_command(self) -> str | None:
        """Command line for the first declared package, if any."""
        from ..packages.commands import build_package_command

        if not self.packages:
            return None
        return build_package_command(self.packages[0])

    def to_basic_info(self) -> ServerBasicInfo:
        return ServerBasicInfo(
            id=self.id,
            name=self.name,
            protocol=self.protocol,
            front_protocol=self.front_protocol,
            description=self.description,
            status=self.status,
            repository=self.repository,
            version_detail=self.version_detail,
            remote_service_config=self.remote_service_config,
            packages=self.packages
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON friendly dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "protocol": self.protocol,
            "front_protocol": self.front_protocol,
            "repository": self.repository.to_dict() if self.repository else None,
            "version_detail": self.version_detail.to_dict() if self.version_detail else None,
            "packages": [p.to_dict() for p in self.packages] if self.packages is not None else None,
            "remote_service_config": (
                self.remote_service_config.to_dict() if self.remote_service_config else None
            ),
            "tool_spec": self.tool_spec,
            "launch_command": self.launch_command()
        }
