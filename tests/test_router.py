import httpx
import pytest
from fastapi import FastAPI

from storefront_adapter.client import StorefrontClient
from storefront_adapter.config import AdapterConfig
from storefront_adapter.mock_client import MockBackendClient
from storefront_adapter.router import get_storefront_router


def make_config():
    return AdapterConfig(
        backend={
            "graphql_api_url": "https://store.example.com/graphql",
            "rest_api_url": "https://store.example.com",
            "api_token": "token",
        },
    )


def make_app(responses=None):
    mock = MockBackendClient(responses)
    app = FastAPI()
    app.include_router(get_storefront_router(StorefrontClient(make_config(), client=mock)))
    return app, mock


def cart_body():
    return {
        "id": "cart-1",
        "cost": {"totalAmount": {"amount": "10.00", "currencyCode": "USD"}},
        "lines": {"edges": [{"node": {"id": "line-1", "quantity": 1, "merchandise": {"id": "v1"}}}]},
    }


@pytest.mark.asyncio
async def test_router_serves_product():
    app, _ = make_app()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/storefront/products/mock-t-shirt")

    assert response.status_code == 200
    body = response.json()
    assert body["featuredImage"]["url"] == "https://example.com/img1.jpg"
    assert body["priceRange"]["minVariantPrice"] == {"amount": "29.99", "currencyCode": "USD"}


@pytest.mark.asyncio
async def test_router_absent_entity_is_404():
    app, _ = make_app({})

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/storefront/pages/missing")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_router_maps_upstream_error_status():
    app, mock = make_app({"getCollection": {"errors": [{"status": 404, "message": "not found"}]}})

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/storefront/collections/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "not found"
    assert len(mock.requests) == 1


@pytest.mark.asyncio
async def test_router_collection_listing():
    app, _ = make_app({})

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/storefront/collections")

    assert response.status_code == 200
    assert response.json()[0]["path"] == "/search"


@pytest.mark.asyncio
async def test_router_cart_lifecycle():
    app, mock = make_app({
        "/api/storefront/cart": {"data": {"cartCreate": {"cart": cart_body()}}},
        "addToCart": {"data": {"cartLinesAdd": {"cart": cart_body()}}},
        "removeFromCart": {"data": {"cartLinesRemove": {"cart": cart_body()}}},
    })

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        created = await client.post("/storefront/carts", json={"lines": [{"merchandiseId": "v1", "quantity": 1}]})
        added = await client.post(
            "/storefront/carts/cart-1/lines",
            json={"lines": [{"merchandiseId": "v1", "quantity": 2}]},
        )
        removed = await client.post("/storefront/carts/cart-1/lines/remove", json={"line_ids": ["line-1"]})

    assert created.status_code == 200
    assert created.json()["cost"]["totalTaxAmount"] == {"amount": "0.0", "currencyCode": "USD"}
    assert added.status_code == 200
    assert removed.status_code == 200
    assert mock.requests[1]["json"]["variables"]["lines"] == [{"merchandiseId": "v1", "quantity": 2}]
