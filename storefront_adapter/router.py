"""FastAPI router serving unified storefront entities."""

import logging
from typing import Any, Awaitable, List, Optional, TypeVar
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, ConfigDict

from .client import StorefrontClient
from .errors import TransportError, UpstreamRequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CartLineInput(BaseModel):
    merchandise_id: str = Field(alias="merchandiseId")
    quantity: int = Field(1, ge=1)

    model_config = ConfigDict(populate_by_name=True)


class CartLineUpdate(CartLineInput):
    id: str
    quantity: int = Field(..., ge=0)


class CreateCartRequest(BaseModel):
    lines: List[CartLineInput] = Field(default_factory=list)


class AddLinesRequest(BaseModel):
    lines: List[CartLineInput] = Field(..., min_length=1)


class UpdateLinesRequest(BaseModel):
    lines: List[CartLineUpdate] = Field(..., min_length=1)


class RemoveLinesRequest(BaseModel):
    line_ids: List[str] = Field(..., min_length=1)


async def _call(operation: Awaitable[T]) -> T:
    """Await a facade operation, turning backend failures into HTTP errors."""
    try:
        return await operation
    except UpstreamRequestError as e:
        status_code = e.status if isinstance(e.status, int) and 400 <= e.status < 600 else 502
        logger.warning("upstream_rejected", extra={"status": e.status})
        raise HTTPException(status_code=status_code, detail=e.message or "Upstream request failed")
    except TransportError:
        logger.exception("upstream_unreachable")
        raise HTTPException(status_code=502, detail="Storefront backend unavailable")


def _dump(entity: Optional[BaseModel], not_found: str) -> dict:
    if entity is None:
        raise HTTPException(status_code=404, detail=not_found)
    return entity.model_dump(mode="json", by_alias=True)


def _dump_all(entities: List[BaseModel]) -> List[Any]:
    return [e.model_dump(mode="json", by_alias=True) for e in entities]


def get_storefront_router(client: StorefrontClient) -> APIRouter:
    """
    Create a FastAPI router for storefront endpoints.

    Args:
        client: Storefront facade instance

    Returns:
        APIRouter with async endpoints
    """
    router = APIRouter(prefix="/storefront", tags=["storefront"])

    @router.get("/products")
    async def list_products(
        query: Optional[str] = None,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ):
        products = await _call(client.get_products(query=query, reverse=reverse, sort_key=sort_key))
        return _dump_all(products)

    @router.get("/products/{handle}")
    async def get_product(handle: str):
        """Get a product by handle."""
        return _dump(await _call(client.get_product(handle)), "Product not found")

    @router.get("/products/{product_id}/recommendations")
    async def get_recommendations(product_id: str):
        return _dump_all(await _call(client.get_product_recommendations(product_id)))

    @router.get("/collections")
    async def list_collections():
        """Public collection listing, "All" first."""
        return _dump_all(await _call(client.get_collections()))

    @router.get("/collections/{handle}")
    async def get_collection(handle: str):
        return _dump(await _call(client.get_collection(handle)), "Collection not found")

    @router.get("/categories/{category_id}/products")
    async def get_category_products(category_id: int, limit: Optional[int] = None):
        return _dump_all(await _call(client.get_collection_products(category_id, limit)))

    @router.get("/menu")
    async def get_menu():
        return _dump_all(await _call(client.get_menu()))

    @router.get("/pages")
    async def list_pages():
        return _dump_all(await _call(client.get_pages()))

    @router.get("/pages/{handle}")
    async def get_page(handle: str):
        return _dump(await _call(client.get_page(handle)), "Page not found")

    @router.post("/carts")
    async def create_cart(request: CreateCartRequest):
        lines = [line.model_dump(by_alias=True) for line in request.lines]
        return _dump(await _call(client.create_cart(lines or None)), "Cart not created")

    @router.get("/carts/{cart_id}")
    async def get_cart(cart_id: str):
        return _dump(await _call(client.get_cart(cart_id)), "Cart not found")

    @router.post("/carts/{cart_id}/lines")
    async def add_lines(cart_id: str, request: AddLinesRequest):
        lines = [line.model_dump(by_alias=True) for line in request.lines]
        return _dump(await _call(client.add_to_cart(cart_id, lines)), "Cart not found")

    @router.patch("/carts/{cart_id}/lines")
    async def update_lines(cart_id: str, request: UpdateLinesRequest):
        lines = [line.model_dump(by_alias=True) for line in request.lines]
        return _dump(await _call(client.update_cart(cart_id, lines)), "Cart not found")

    @router.post("/carts/{cart_id}/lines/remove")
    async def remove_lines(cart_id: str, request: RemoveLinesRequest):
        return _dump(await _call(client.remove_from_cart(cart_id, request.line_ids)), "Cart not found")

    return router
