import json

import httpx
import pytest

from storefront_adapter.config import AdapterConfig
from storefront_adapter.connection import (
    CacheDirective,
    GraphQLConnection,
    HTTPMethod,
    RestConnection,
)
from storefront_adapter.errors import BackendError, TransportError, UpstreamRequestError


def make_config(**backend):
    return AdapterConfig(
        backend={
            "graphql_api_url": "https://store.example.com/graphql",
            "rest_api_url": "https://store.example.com",
            "api_token": "graphql-token",
            **backend,
        },
    )


def make_client(handler, seen=None):
    def wrapped(request):
        if seen is not None:
            seen.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(wrapped))


@pytest.mark.asyncio
async def test_graphql_fetch_returns_status_and_body():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"data": {"menu": []}}), seen)
    connection = GraphQLConnection(make_config(), client=client)

    res = await connection.fetch("query getMenu { menu }", variables={"handle": "main"})

    assert res.status == 200
    assert res.body == {"data": {"menu": []}}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://store.example.com/graphql"
    assert request.headers["Authorization"] == "Bearer graphql-token"
    assert json.loads(request.content) == {"query": "query getMenu { menu }", "variables": {"handle": "main"}}
    await client.aclose()


@pytest.mark.asyncio
async def test_graphql_fetch_omits_empty_variables():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"data": {}}), seen)
    connection = GraphQLConnection(make_config(), client=client)

    await connection.fetch("query getPages { pages }")

    assert json.loads(seen[0].content) == {"query": "query getPages { pages }"}
    await client.aclose()


@pytest.mark.asyncio
async def test_cache_directive_becomes_cache_control_header():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"data": {}}), seen)
    connection = GraphQLConnection(make_config(), client=client)

    await connection.fetch("query a { a }")
    await connection.fetch("mutation b { b }", cache=CacheDirective.NO_STORE)

    assert seen[0].headers["Cache-Control"] == "max-age=900"
    assert seen[1].headers["Cache-Control"] == "no-store"
    await client.aclose()


@pytest.mark.asyncio
async def test_caller_headers_override_defaults():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"data": {}}), seen)
    connection = GraphQLConnection(make_config(), client=client)

    await connection.fetch("query a { a }", headers={"Authorization": "Bearer other", "X-Request-Id": "1"})

    assert seen[0].headers["Authorization"] == "Bearer other"
    assert seen[0].headers["X-Request-Id"] == "1"
    await client.aclose()


@pytest.mark.asyncio
async def test_errors_payload_raises_upstream_request_error():
    calls = []
    body = {"errors": [{"status": 404, "message": "not found"}]}
    client = make_client(lambda r: httpx.Response(200, json=body), calls)
    connection = GraphQLConnection(make_config(), client=client)

    with pytest.raises(UpstreamRequestError) as exc_info:
        await connection.fetch("query getProduct { product }")

    assert exc_info.value.status == 404
    assert exc_info.value.message == "not found"
    assert exc_info.value.request == "query getProduct { product }"
    assert len(calls) == 1
    await client.aclose()


@pytest.mark.asyncio
async def test_errors_payload_without_status_defaults_to_500():
    client = make_client(lambda r: httpx.Response(200, json={"errors": [{"message": "bad field"}]}))
    connection = GraphQLConnection(make_config(), client=client)

    with pytest.raises(UpstreamRequestError) as exc_info:
        await connection.fetch("query a { a }")

    assert exc_info.value.status == 500
    assert exc_info.value.message == "bad field"
    await client.aclose()


@pytest.mark.asyncio
async def test_error_status_without_errors_payload():
    client = make_client(lambda r: httpx.Response(503, json={"detail": "down"}))
    connection = GraphQLConnection(make_config(), client=client)

    with pytest.raises(UpstreamRequestError) as exc_info:
        await connection.fetch("query a { a }")

    assert exc_info.value.status == 503
    assert exc_info.value.message == "Service Unavailable"
    await client.aclose()


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    connection = GraphQLConnection(make_config(), client=client)

    with pytest.raises(TransportError) as exc_info:
        await connection.fetch("query a { a }")

    error = exc_info.value
    assert error.status is None
    assert error.request == "query a { a }"
    assert isinstance(error.cause, httpx.ConnectError)
    assert error.__cause__ is error.cause
    await client.aclose()


@pytest.mark.asyncio
async def test_unparseable_body_raises_transport_error():
    client = make_client(lambda r: httpx.Response(200, text="<html>oops</html>"))
    connection = GraphQLConnection(make_config(), client=client)

    with pytest.raises(TransportError) as exc_info:
        await connection.fetch("query a { a }")

    assert isinstance(exc_info.value.cause, ValueError)
    assert isinstance(exc_info.value, BackendError)
    await client.aclose()


@pytest.mark.asyncio
async def test_rest_fetch_uses_path_method_and_token():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={"id": "cart-1"}), seen)
    connection = RestConnection(make_config(rest_api_token="rest-token"), client=client)

    res = await connection.fetch(
        "/api/storefront/cart",
        method=HTTPMethod.POST,
        body={"lineItems": []},
        cache=CacheDirective.NO_STORE,
    )

    assert res.body == {"id": "cart-1"}
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://store.example.com/api/storefront/cart"
    assert request.headers["X-Auth-Token"] == "rest-token"
    assert json.loads(request.content) == {"lineItems": []}
    await client.aclose()


@pytest.mark.asyncio
async def test_rest_token_falls_back_to_api_token():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={}), seen)
    connection = RestConnection(make_config(), client=client)

    await connection.fetch("/api/storefront/cart")

    assert seen[0].headers["X-Auth-Token"] == "graphql-token"
    assert seen[0].method == "GET"
    await client.aclose()


@pytest.mark.asyncio
async def test_rest_errors_report_path():
    client = make_client(lambda r: httpx.Response(422, json={"status": 422, "title": "Missing line items"}))
    connection = RestConnection(make_config(), client=client)

    with pytest.raises(UpstreamRequestError) as exc_info:
        await connection.fetch("/api/storefront/cart", method=HTTPMethod.POST)

    assert exc_info.value.status == 422
    assert exc_info.value.message == "Missing line items"
    assert exc_info.value.request == "/api/storefront/cart"
    await client.aclose()


@pytest.mark.asyncio
async def test_rest_base_url_from_storefront_domain():
    seen = []
    client = make_client(lambda r: httpx.Response(200, json={}), seen)
    config = make_config(rest_api_url=None, storefront_domain="shop.example.com")
    connection = RestConnection(config, client=client)

    await connection.fetch("/api/storefront/cart")

    assert str(seen[0].url) == "https://shop.example.com/api/storefront/cart"
    await client.aclose()


@pytest.mark.asyncio
async def test_owned_client_is_closed():
    connection = GraphQLConnection(make_config())
    async with connection:
        assert not connection.client.is_closed
    assert connection.client.is_closed


@pytest.mark.asyncio
async def test_rest_array_body_is_returned_as_parsed():
    carts = [{"id": "cart-1"}, {"id": "cart-2"}]
    client = make_client(lambda r: httpx.Response(200, json=carts))
    connection = RestConnection(make_config(), client=client)

    res = await connection.fetch("/api/storefront/carts")

    assert res.body == carts
    await client.aclose()
