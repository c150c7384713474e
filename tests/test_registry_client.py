"""Registry client tests: page URLs, headers, body shapes, pagination and failures."""
import json
import time
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from mcp_import.client import RegistryClient, build_page_url, extract_next_cursor
from mcp_import.config.settings import REGISTRY_TOKEN_ENV
from mcp_import.errors import HttpStatusError, InvalidArgumentError, ParseError

BASE_URL = "https://registry.example.com/v0/servers"


def json_response(body, status_code=200):
    return httpx.Response(status_code, content=json.dumps(body).encode(), headers={"Content-Type": "application/json"})


def test_build_page_url_appends_parameters():
    url = build_page_url(BASE_URL, cursor="abc/1", limit=10, search="file system")
    assert url == BASE_URL + "?cursor=abc%2F1&limit=10&search=file+system"


def test_build_page_url_keeps_existing_query():
    assert build_page_url(BASE_URL + "?version=latest", limit=5) == BASE_URL + "?version=latest&limit=5"


def test_build_page_url_ignores_blank_values():
    assert build_page_url(BASE_URL, cursor=" ", limit=0, search="") == BASE_URL


def test_extract_next_cursor():
    assert extract_next_cursor({"metadata": {"next_cursor": "c2"}}) == "c2"
    assert extract_next_cursor({"metadata": {"next_cursor": "  "}}) is None
    assert extract_next_cursor({"metadata": {"next_cursor": 3}}) is None
    assert extract_next_cursor([{"name": "x"}]) is None


def test_fetch_page_sends_query_and_headers(make_registry_client, weather_server):
    seen = {}

    def handler(request):
        seen["request"] = request
        return json_response({"servers": [weather_server], "metadata": {"next_cursor": "next-1", "count": 1}})

    client = make_registry_client(handler, registry_token="secret")
    page = client.fetch_page(BASE_URL, cursor="c 1", limit=10, search="weather")

    request = seen["request"]
    assert request.url.params["cursor"] == "c 1"
    assert request.url.params["limit"] == "10"
    assert request.url.params["search"] == "weather"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["Authorization"] == "Bearer secret"
    assert page.next_cursor == "next-1"
    assert [s.name for s in page.servers] == ["io.github.example/weather"]


def test_token_from_environment(make_registry_client, monkeypatch):
    monkeypatch.setenv(REGISTRY_TOKEN_ENV, " env-token ")
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return json_response({"servers": []})

    make_registry_client(handler).fetch_page(BASE_URL)
    assert seen["auth"] == "Bearer env-token"


def test_no_token_no_authorization_header(make_registry_client, monkeypatch):
    monkeypatch.delenv(REGISTRY_TOKEN_ENV, raising=False)
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return json_response({"servers": []})

    make_registry_client(handler).fetch_page(BASE_URL)
    assert seen["auth"] is None


def test_blank_ids_are_generated(make_registry_client, weather_server):
    client = make_registry_client(lambda request: json_response({"servers": [weather_server]}))
    page = client.fetch_page(BASE_URL)
    assert page.servers[0].id.startswith("iogithubexampleweather-")


def test_bare_array_body(make_registry_client, filesystem_server, weather_server):
    client = make_registry_client(lambda request: json_response([filesystem_server, weather_server]))
    page = client.fetch_page(BASE_URL)
    assert len(page.servers) == 2
    assert page.next_cursor is None


def test_single_object_body(make_registry_client, filesystem_server):
    client = make_registry_client(lambda request: json_response(filesystem_server))
    page = client.fetch_page(BASE_URL)
    assert [s.id for s in page.servers] == ["fs-official-id"]


def test_bad_records_are_skipped(make_registry_client, weather_server):
    client = make_registry_client(lambda request: json_response({"servers": ["junk", weather_server, 7]}))
    assert len(client.fetch_page(BASE_URL).servers) == 1


def test_http_error_status(make_registry_client):
    client = make_registry_client(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(HttpStatusError) as exc_info:
        client.fetch_page(BASE_URL)
    assert exc_info.value.status_code == 503


@pytest.mark.parametrize("body", [b"<html>nope</html>", b"42", b'"text"'])
def test_unparseable_body(make_registry_client, body):
    client = make_registry_client(lambda request: httpx.Response(200, content=body))
    with pytest.raises(ParseError):
        client.fetch_page(BASE_URL)


def test_blank_base_url(make_registry_client):
    client = make_registry_client(lambda request: json_response([]))
    with pytest.raises(InvalidArgumentError):
        client.fetch_page("  ")


def test_fetch_all_follows_cursors(make_registry_client):
    pages = {
        None: {"servers": [{"name": "a"}], "metadata": {"next_cursor": "p2"}},
        "p2": {"servers": [{"name": "b"}], "metadata": {"next_cursor": "p3"}},
        "p3": {"servers": [{"name": "c"}], "metadata": {"next_cursor": ""}},
    }
    limits = []

    def handler(request):
        limits.append(request.url.params.get("limit"))
        return json_response(pages[request.url.params.get("cursor")])

    client = make_registry_client(handler)
    servers = client.fetch_all(BASE_URL)
    assert [s.name for s in servers] == ["a", "b", "c"]
    assert limits == ["30", "30", "30"]


def test_fetch_all_stops_at_page_guard(make_registry_client):
    calls = []

    def handler(request):
        calls.append(request.url)
        return json_response({"servers": [], "metadata": {"next_cursor": f"c{len(calls)}"}})

    client = make_registry_client(handler)
    assert client.fetch_all(BASE_URL) == []
    assert len(calls) == 200


def test_fetch_all_propagates_http_errors(make_registry_client):
    def handler(request):
        if request.url.params.get("cursor") == "p2":
            return httpx.Response(500)
        return json_response({"servers": [{"name": "a"}], "metadata": {"next_cursor": "p2"}})

    client = make_registry_client(handler)
    with pytest.raises(HttpStatusError):
        client.fetch_all(BASE_URL)


def test_injected_http_client_is_not_closed(make_registry_client):
    client = make_registry_client(lambda request: json_response([]))
    session = client.session
    with client:
        client.fetch_page(BASE_URL)
    assert not session.is_closed


def test_same_cursor_fetches_same_page(make_registry_client, filesystem_server):
    urls = []

    def handler(request):
        urls.append(str(request.url))
        return json_response({"servers": [filesystem_server], "metadata": {"next_cursor": "c2"}})

    client = make_registry_client(handler)
    first = client.fetch_page(BASE_URL, cursor="c1", limit=5)
    second = client.fetch_page(BASE_URL, cursor="c1", limit=5)
    assert urls[0] == urls[1]
    assert [s.to_dict() for s in first.servers] == [s.to_dict() for s in second.servers]
    assert first.next_cursor == second.next_cursor == "c2"


def test_default_session_configuration():
    client = RegistryClient()
    session = client._get_session()
    try:
        assert session.timeout.connect == 10.0
        assert session.timeout.read == 20.0
        assert session.follow_redirects is True
        assert session.headers["User-Agent"] == "mcp-registry-import/1.0"
    finally:
        client.close()
    assert client.session is None
    assert session.is_closed


def test_default_session_created_once_across_threads(monkeypatch):
    created = []

    class SlowClient(httpx.Client):
        def __init__(self, *args, **kwargs):
            time.sleep(0.05)
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(httpx, "Client", SlowClient)
    client = RegistryClient()
    with ThreadPoolExecutor(max_workers=4) as pool:
        sessions = list(pool.map(lambda _: client._get_session(), range(4)))
    client.close()

    assert len(created) == 1
    assert all(session is created[0] for session in sessions)
