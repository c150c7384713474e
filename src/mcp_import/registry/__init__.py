"""
MCP Registry Module

Registry record models and their transformation into normalized server records.

Components:
- models: records as published by external registries
- records: the normalized server record
- transformer: registry record -> server record conversion
"""

from .models import (
    OFFICIAL_META_KEY,
    KeyValueInput,
    NamedArgument,
    Package,
    PositionalArgument,
    RegistryServer,
    RegistryServerList,
    Remote,
    Repository,
)
from .records import (
    FrontEndpoint,
    McpServerRecord,
    ProtocolType,
    RemoteServiceConfig,
    ServerBasicInfo,
    ServerVersionDetail,
)
from .transformer import SchemaTransformer, generate_server_id, is_valid_url

__all__ = [
    "OFFICIAL_META_KEY",
    "FrontEndpoint",
    "KeyValueInput",
    "McpServerRecord",
    "NamedArgument",
    "Package",
    "PositionalArgument",
    "ProtocolType",
    "RegistryServer",
    "RegistryServerList",
    "Remote",
    "RemoteServiceConfig",
    "Repository",
    "SchemaTransformer",
    "ServerBasicInfo",
    "ServerVersionDetail",
    "generate_server_id",
    "is_valid_url"
]
