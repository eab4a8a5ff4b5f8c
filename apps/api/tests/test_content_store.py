import json

import httpx
import pytest

from config import StoreIdentity
from services.content_store import ContentStoreClient, build_endpoint
from services.errors import ConfigError, HTTPError, TransportError
from fakes import TEST_IDENTITY


def _client(handler, identity=TEST_IDENTITY):
    return ContentStoreClient(identity=identity, http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_build_endpoint_uses_project_version_and_dataset():
    assert build_endpoint(TEST_IDENTITY, api_host="sanity.io") == (
        "https://demo123.api.sanity.io/v2023-10-01/data/query/production"
    )


def test_query_posts_query_and_params_and_returns_result_field():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"result": [{"_id": "a"}], "ms": 3})

    result = _client(handler).query('*[_type=="theme"]', {"lang": "ka"})

    assert result == [{"_id": "a"}]
    assert seen["method"] == "POST"
    assert seen["url"].endswith("/v2023-10-01/data/query/production")
    assert seen["body"] == {"query": '*[_type=="theme"]', "params": {"lang": "ka"}}
    assert seen["auth"] is None


def test_query_sends_bearer_token_for_private_dataset():
    identity = StoreIdentity(project_id="demo123", dataset="private", api_version="2023-10-01", token="sk-read")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer sk-read"
        return httpx.Response(200, json={"result": None})

    assert _client(handler, identity).query("*[0]") is None


def test_non_2xx_response_raises_http_error_with_detail():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"description": "param $slug referenced, but not provided"}})

    with pytest.raises(HTTPError) as exc_info:
        _client(handler).query("*[slug.current==$slug]")

    assert exc_info.value.code == 400
    assert exc_info.value.detail["error"]["description"].startswith("param $slug")


def test_network_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        _client(handler).query("*[0]")

    assert "connection refused" in exc_info.value.message


def test_unreadable_body_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(TransportError):
        _client(handler).query("*[0]")


def test_missing_identity_raises_config_error_without_network_call():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"result": []})

    client = _client(handler, StoreIdentity(project_id="", dataset="production", api_version="2023-10-01"))

    with pytest.raises(ConfigError):
        client.query("*[0]")
    assert calls == []
