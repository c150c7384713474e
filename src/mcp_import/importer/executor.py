"""
MCP Import Executor

Applies the per-server conflict policy (create, update or skip) against the catalog.
"""

from ..config import mcp_logger
from ..registry.records import ENDPOINT_TYPE_DIRECT, McpServerRecord, ProtocolType
from .catalog import EndpointSpec, McpCatalog
from .models import (
    CONFLICT_EXISTING,
    RESULT_FAILED,
    RESULT_SKIPPED,
    RESULT_SUCCESS,
    ImportResult,
    ValidationItem,
)


def select_items(items: list[ValidationItem] | None, selection: list[str] | None) -> list[ValidationItem]:
    """Valid items, restricted to the selected ids when a selection is given."""
    if not items:
        return []
    if not selection:
        return [item for item in items if item.is_valid]

    selected = set(selection)
    return [item for item in items if item.server_id in selected and item.is_valid]


def build_endpoint_spec(server: McpServerRecord) -> EndpointSpec | None:
    """Endpoint spec from the first front endpoint; stdio servers have none."""
    if server.protocol == ProtocolType.STDIO.value:
        return None

    spec = EndpointSpec()
    config = server.remote_service_config
    if config is None or not config.front_endpoints:
        return spec

    endpoint_data = config.front_endpoints[0].endpoint_data
    address, sep, port = str(endpoint_data or "").rpartition(":")
    # IPv6 hosts are bracketed in endpoint data
    address = address.removeprefix("[").removesuffix("]")
    if not sep or not address or not port:
        mcp_logger.debug(f"Unusable endpoint data for {server.name!r}: {endpoint_data!r}")
        return spec

    spec.type = ENDPOINT_TYPE_DIRECT
    spec.data["address"] = address
    spec.data["port"] = port
    return spec


class ImportExecutor:
    """Writes selected servers into the catalog."""

    def __init__(self, catalog: McpCatalog):
        self.catalog = catalog

    def execute(self, namespace: str, items: list[ValidationItem], selection: list[str] | None,
                override_existing: bool) -> list[ImportResult]:
        """Import the selected valid items; a failing item never stops the batch."""
        return [
            self.import_one(namespace, item, override_existing)
            for item in select_items(items, selection)
        ]

    def import_one(self, namespace: str, item: ValidationItem, override_existing: bool) -> ImportResult:
        result = ImportResult(server_id=item.server_id, server_name=item.server_name)

        if item.exists and not override_existing:
            result.status = RESULT_SKIPPED
            result.conflict_type = CONFLICT_EXISTING
            return result

        try:
            server = item.server
            basic_info = server.to_basic_info()
            endpoint_spec = build_endpoint_spec(server)

            if item.exists:
                self.catalog.update(namespace, True, basic_info, server.tool_spec, endpoint_spec, override_existing)
            else:
                self.catalog.create(namespace, basic_info, server.tool_spec, endpoint_spec)

            result.status = RESULT_SUCCESS
        except Exception as e:
            mcp_logger.error(f"Failed to import server {item.server_id}: {e}")
            result.status = RESULT_FAILED
            result.error_message = f"Failed to import server: {e}"

        return result
