import copy

import httpx
import pytest

from mcp_import.config import RegistryClientConfig
from mcp_import.importer import InMemoryCatalog, McpImportService
from mcp_import.registry import OFFICIAL_META_KEY
from mcp_import.client import RegistryClient

FILESYSTEM_SERVER = {
    "$schema": "https://static.modelcontextprotocol.io/schemas/2025-09-29/server.schema.json",
    "name": "io.github.example/filesystem",
    "description": "Read and write local files",
    "version": "1.2.0",
    "repository": {"url": "https://github.com/example/filesystem", "source": "github", "id": "repo-123"},
    "packages": [
        {
            "registryType": "npm",
            "identifier": "@example/server-filesystem",
            "version": "1.2.0",
            "packageArguments": [
                {"type": "positional", "value": "/tmp"},
                {"type": "named", "name": "--mode", "value": "readonly"},
            ],
            "environmentVariables": [{"name": "FS_ROOT", "isRequired": True}],
        }
    ],
    "_meta": {
        OFFICIAL_META_KEY: {
            "serverId": "fs-official-id",
            "versionId": "v-1",
            "publishedAt": "2025-01-15T10:00:00Z",
            "isLatest": True,
        }
    },
}

WEATHER_SERVER = {
    "name": "io.github.example/weather",
    "description": "Weather forecasts",
    "version": "0.3.0",
    "remotes": [{"type": "sse", "url": "https://api.example.com/mcp/sse?region=eu"}],
}


@pytest.fixture
def filesystem_server():
    return copy.deepcopy(FILESYSTEM_SERVER)


@pytest.fixture
def weather_server():
    return copy.deepcopy(WEATHER_SERVER)


@pytest.fixture
def catalog():
    return InMemoryCatalog()


@pytest.fixture
def import_service(catalog):
    return McpImportService(catalog)


@pytest.fixture
def make_registry_client():
    """Build a registry client whose requests go to the given handler."""
    clients = []

    def factory(handler, **config):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = RegistryClient(RegistryClientConfig(**config), http_client=http_client)
        clients.append(http_client)
        return client

    yield factory

    for http_client in clients:
        http_client.close()
