"""Storefront facade: one async operation per storefront use case."""

import logging
from typing import Any, Dict, List, Optional

from . import queries
from .config import AdapterConfig
from .connection import CacheDirective, GraphQLConnection, HTTPMethod, RestConnection
from .models.storefront_models import Cart, Collection, Menu, Page, Product
from .telemetry import init_metrics
from .normalize import (
    ProductReshaper,
    remove_edges_and_nodes,
    reshape_cart,
    reshape_collection,
    reshape_collection_listing,
    reshape_menu,
    reshape_page,
    reshape_pages,
    reshape_product,
    reshape_products,
    reshape_shopify_product,
)

logger = logging.getLogger(__name__)

PRODUCT_RESHAPERS: Dict[str, ProductReshaper] = {
    "bigcommerce": reshape_product,
    "shopify": reshape_shopify_product,
}


def _dig(body: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    value = body
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


class StorefrontClient:
    """
    Public storefront operations over the configured backend.

    Each operation builds its variables, makes one upstream call and passes
    the raw answer through the matching normalizer. Cart mutations and cart
    reads ask the upstream not to cache; catalog reads allow caching.
    Connection failures propagate unchanged.
    """

    def __init__(
        self,
        config: AdapterConfig,
        graphql: Optional[GraphQLConnection] = None,
        rest: Optional[RestConnection] = None,
        client: Optional[Any] = None,
        product_reshaper: Optional[ProductReshaper] = None,
    ):
        """
        Initialize the facade.

        Args:
            config: Adapter configuration
            graphql: Optional GraphQL connection to use instead of building one
            rest: Optional REST connection to use instead of building one
            client: Optional HTTP client shared by the connections this
                facade builds (e.g., MockBackendClient)
            product_reshaper: Override for the platform's product normalizer
        """
        self.config = config
        if config.telemetry.console_metrics:
            init_metrics()

        self._owned = []
        if graphql is None:
            graphql = GraphQLConnection(config, client=client)
            self._owned.append(graphql)
        if rest is None:
            rest = RestConnection(config, client=client)
            self._owned.append(rest)
        self.graphql = graphql
        self.rest = rest
        self.reshape_product = product_reshaper or PRODUCT_RESHAPERS[config.backend.platform]

    async def close(self):
        """Close the connections this facade created."""
        for connection in self._owned:
            await connection.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def create_cart(self, lines: Optional[List[Dict[str, Any]]] = None) -> Optional[Cart]:
        """
        Create a cart through the REST cart endpoint.

        Args:
            lines: Optional initial line items (``{"merchandiseId", "quantity"}``)

        Returns:
            The new cart
        """
        body = {"lineItems": lines} if lines else None
        res = await self.rest.fetch(
            queries.CART_REST_PATH,
            method=HTTPMethod.POST,
            body=body,
            cache=CacheDirective.NO_STORE,
        )
        cart = reshape_cart(_dig(res.body, "data", "cartCreate", "cart"))
        logger.info("cart_created", extra={"cart_id": cart.id if cart else None})
        return cart

    async def add_to_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Optional[Cart]:
        res = await self.graphql.fetch(
            queries.ADD_TO_CART_MUTATION,
            variables={"cartId": cart_id, "lines": lines},
            cache=CacheDirective.NO_STORE,
        )
        return reshape_cart(_dig(res.body, "data", "cartLinesAdd", "cart"))

    async def remove_from_cart(self, cart_id: str, line_ids: List[str]) -> Optional[Cart]:
        res = await self.graphql.fetch(
            queries.REMOVE_FROM_CART_MUTATION,
            variables={"cartId": cart_id, "lineIds": line_ids},
            cache=CacheDirective.NO_STORE,
        )
        return reshape_cart(_dig(res.body, "data", "cartLinesRemove", "cart"))

    async def update_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Optional[Cart]:
        """Update line quantities (``{"id", "merchandiseId", "quantity"}`` per line)."""
        res = await self.graphql.fetch(
            queries.EDIT_CART_ITEMS_MUTATION,
            variables={"cartId": cart_id, "lines": lines},
            cache=CacheDirective.NO_STORE,
        )
        return reshape_cart(_dig(res.body, "data", "cartLinesUpdate", "cart"))

    async def get_cart(self, cart_id: str) -> Optional[Cart]:
        """Fetch a cart, or None if the backend has no such cart."""
        res = await self.graphql.fetch(
            queries.GET_CART_QUERY,
            variables={"cartId": cart_id},
            cache=CacheDirective.NO_STORE,
        )
        return reshape_cart(_dig(res.body, "data", "cart"))

    async def get_collection(self, handle: str) -> Optional[Collection]:
        """Fetch one collection by handle. Hidden collections are returned too."""
        res = await self.graphql.fetch(queries.GET_COLLECTION_QUERY, variables={"handle": handle})
        return reshape_collection(_dig(res.body, "data", "collection"))

    async def get_collection_products(self, category_id: int, limit: Optional[int] = None) -> List[Product]:
        variables: Dict[str, Any] = {"categoryId": category_id}
        if limit is not None:
            variables["first"] = limit
        res = await self.graphql.fetch(queries.GET_COLLECTION_PRODUCTS_QUERY, variables=variables)
        nodes = remove_edges_and_nodes(_dig(res.body, "data", "site", "category", "products"))
        return reshape_products(nodes, self.reshape_product)

    async def get_collections(self) -> List[Collection]:
        """
        Fetch the public collection listing.

        Returns:
            The synthetic "All" collection followed by every non-hidden collection
        """
        res = await self.graphql.fetch(
            queries.GET_COLLECTIONS_QUERY,
            variables={"first": self.config.catalog.collections_page_size},
        )
        return reshape_collection_listing(
            remove_edges_and_nodes(_dig(res.body, "data", "collections")),
            hidden_prefix=self.config.catalog.hidden_collection_prefix,
        )

    async def get_menu(self) -> List[Menu]:
        res = await self.graphql.fetch(queries.GET_SITE_INFO_QUERY)
        return reshape_menu(_dig(res.body, "data", "site", "categoryTree"))

    async def get_page(self, handle: str) -> Optional[Page]:
        res = await self.graphql.fetch(queries.GET_PAGE_QUERY, variables={"handle": handle})
        return reshape_page(_dig(res.body, "data", "pageByHandle"))

    async def get_pages(self) -> List[Page]:
        res = await self.graphql.fetch(queries.GET_PAGES_QUERY)
        return reshape_pages(_dig(res.body, "data", "pages"))

    async def get_product(self, handle: str) -> Optional[Product]:
        """
        Fetch a product by handle.

        Args:
            handle: Product handle

        Returns:
            Unified product, or None if not found
        """
        res = await self.graphql.fetch(queries.GET_PRODUCT_QUERY, variables={"handle": handle})
        return self.reshape_product(_dig(res.body, "data", "product"))

    async def get_product_recommendations(self, product_id: str) -> List[Product]:
        res = await self.graphql.fetch(
            queries.GET_PRODUCT_RECOMMENDATIONS_QUERY,
            variables={"productId": product_id},
        )
        return reshape_products(_dig(res.body, "data", "productRecommendations"), self.reshape_product)

    async def get_products(
        self,
        query: Optional[str] = None,
        reverse: Optional[bool] = None,
        sort_key: Optional[str] = None,
    ) -> List[Product]:
        """
        Search products.

        Args:
            query: Upstream search expression
            reverse: Reverse the sort order
            sort_key: Upstream sort key (e.g. ``PRICE``)

        Returns:
            Matching products in upstream order
        """
        variables = {
            key: value
            for key, value in (("query", query), ("reverse", reverse), ("sortKey", sort_key))
            if value is not None
        }
        res = await self.graphql.fetch(queries.GET_PRODUCTS_QUERY, variables=variables)
        return reshape_products(
            remove_edges_and_nodes(_dig(res.body, "data", "products")),
            self.reshape_product,
        )
