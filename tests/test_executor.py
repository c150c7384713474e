"""Import executor tests: selection, conflict policy and endpoint specs."""
import pytest

from mcp_import.errors import CatalogOperationError
from mcp_import.importer import (
    EndpointSpec,
    ImportExecutor,
    InMemoryCatalog,
    ValidationItem,
    build_endpoint_spec,
    select_items,
)
from mcp_import.registry import (
    FrontEndpoint,
    McpServerRecord,
    RemoteServiceConfig,
    SchemaTransformer,
    ServerBasicInfo,
)

NAMESPACE = "public"


def make_item(server_id, status="valid", exists=False, protocol="stdio", name=None):
    server = McpServerRecord(name=name or f"server-{server_id}", id=server_id, protocol=protocol)
    return ValidationItem(server=server, status=status, server_id=server_id, server_name=server.name, exists=exists)


def sse_server(endpoint_data="api.example.com:443"):
    return McpServerRecord(
        name="remote",
        id="remote-1",
        protocol="sse",
        remote_service_config=RemoteServiceConfig(
            export_path="/sse", front_endpoints=[FrontEndpoint(endpoint_data=endpoint_data, path="/sse")]
        ),
    )


class FailingCatalog(InMemoryCatalog):
    def create(self, namespace, basic_info, tool_spec, endpoint_spec):
        if basic_info.id == "boom":
            raise CatalogOperationError("storage unavailable")
        return super().create(namespace, basic_info, tool_spec, endpoint_spec)


def test_select_without_selection_takes_valid_items():
    items = [make_item("a"), make_item("b", status="invalid"), make_item("c")]
    assert [i.server_id for i in select_items(items, None)] == ["a", "c"]
    assert [i.server_id for i in select_items(items, [])] == ["a", "c"]


def test_select_requires_selected_and_valid():
    items = [make_item("a"), make_item("b", status="invalid"), make_item("c")]
    assert [i.server_id for i in select_items(items, ["b", "c"])] == ["c"]


def test_create_when_not_existing(catalog):
    results = ImportExecutor(catalog).execute(NAMESPACE, [make_item("a")], None, False)
    assert results[0].status == "success"
    assert catalog.get(NAMESPACE, "a").basic_info.name == "server-a"


def test_skip_existing_without_override(catalog):
    results = ImportExecutor(catalog).execute(NAMESPACE, [make_item("a", exists=True)], None, False)
    assert results[0].status == "skipped"
    assert results[0].conflict_type == "existing"
    assert catalog.get(NAMESPACE, "a") is None


def test_update_existing_with_override(catalog):
    ImportExecutor(catalog).execute(NAMESPACE, [make_item("a", name="old")], None, False)
    results = ImportExecutor(catalog).execute(NAMESPACE, [make_item("a", exists=True, name="new")], None, True)
    assert results[0].status == "success"
    assert catalog.get(NAMESPACE, "a").basic_info.name == "new"


def test_failure_is_recorded_and_batch_continues():
    catalog = FailingCatalog()
    results = ImportExecutor(catalog).execute(NAMESPACE, [make_item("boom"), make_item("ok")], None, False)
    assert [r.status for r in results] == ["failed", "success"]
    assert results[0].error_message == "Failed to import server: storage unavailable"
    assert catalog.get(NAMESPACE, "ok") is not None


def test_update_of_missing_server_fails(catalog):
    results = ImportExecutor(catalog).execute(NAMESPACE, [make_item("ghost", exists=True)], None, True)
    assert results[0].status == "failed"
    assert results[0].error_message.startswith("Failed to import server: ")


def test_remote_server_stored_with_endpoint_spec(catalog):
    item = ValidationItem(server=sse_server(), server_id="remote-1", server_name="remote")
    ImportExecutor(catalog).execute(NAMESPACE, [item], None, False)
    spec = catalog.get(NAMESPACE, "remote-1").endpoint_spec
    assert spec.type == "DIRECT"
    assert spec.data == {"address": "api.example.com", "port": "443"}


def test_stdio_server_has_no_endpoint_spec():
    assert build_endpoint_spec(McpServerRecord(name="local", protocol="stdio")) is None


def test_remote_server_without_endpoints_gets_empty_spec():
    spec = build_endpoint_spec(McpServerRecord(name="remote", protocol="sse"))
    assert spec == EndpointSpec()


@pytest.mark.parametrize("endpoint_data", ["no-port-here", "", "host:", ":8080"])
def test_unsplittable_endpoint_gets_empty_spec(endpoint_data):
    spec = build_endpoint_spec(sse_server(endpoint_data))
    assert spec.type is None
    assert spec.data == {}


def test_ipv6_endpoint_is_unbracketed():
    spec = build_endpoint_spec(sse_server("[::1]:8080"))
    assert spec.type == "DIRECT"
    assert spec.data == {"address": "::1", "port": "8080"}


def test_ipv6_remote_from_registry_record():
    server = SchemaTransformer().transform({"name": "v6", "remotes": [{"type": "sse", "url": "http://[::1]:8080/sse"}]})
    spec = build_endpoint_spec(server)
    assert spec.data == {"address": "::1", "port": "8080"}


def test_catalog_update_replaces_specs(catalog):
    basic_info = ServerBasicInfo(id="a", name="a", protocol="sse")
    catalog.create(NAMESPACE, basic_info, {"tools": []}, EndpointSpec("DIRECT", {"address": "h", "port": "1"}))
    catalog.update(NAMESPACE, True, basic_info, None, None, True)
    entry = catalog.get(NAMESPACE, "a")
    assert entry.tool_spec is None
    assert entry.endpoint_spec is None
