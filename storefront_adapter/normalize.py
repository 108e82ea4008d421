"""Reshaping of upstream entities into the unified storefront models.

Every function here is pure: it never mutates its input and never raises for
absent data. Absent single entities come back as ``None``, absent lists as ``[]``.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from .models.backend_models import BackendCategory, BackendPriceRange, Connection
from .models.storefront_models import (
    Cart,
    Collection,
    Menu,
    Money,
    Page,
    PriceRange,
    Product,
)

# Downstream price formatting expects these exact strings.
DEFAULT_TAX_AMOUNT = {"amount": "0.0", "currencyCode": "USD"}

HIDDEN_COLLECTION_PREFIX = "hidden"

ProductReshaper = Callable[[Optional[Dict[str, Any]]], Optional[Product]]


def remove_edges_and_nodes(connection: Optional[Dict[str, Any]]) -> List[Any]:
    """
    Flatten a paginated connection into its nodes.

    Args:
        connection: Upstream ``{edges: [{node}], pageInfo}`` object

    Returns:
        The inner nodes in upstream order
    """
    if not connection or not connection.get("edges"):
        return []
    return Connection.model_validate(connection).nodes()


def reshape_cart(cart: Optional[Dict[str, Any]]) -> Optional[Cart]:
    """
    Normalize an upstream cart.

    Line items are flattened out of their connection. A missing
    ``cost.totalTaxAmount`` is filled with a zero USD amount.
    """
    if not cart:
        return None

    cost = dict(cart.get("cost") or {})
    if not cost.get("totalTaxAmount"):
        cost["totalTaxAmount"] = dict(DEFAULT_TAX_AMOUNT)

    return Cart.model_validate({
        **cart,
        "cost": cost,
        "lines": remove_edges_and_nodes(cart.get("lines")),
    })


def _reshape_image(image: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not image:
        return None
    url = image.get("url") or image.get("urlOriginal") or image.get("src")
    return {**image, "url": url}


def _reshape_price_range(prices: Optional[Dict[str, Any]]) -> Optional[PriceRange]:
    if not prices or not prices.get("priceRange"):
        return None

    price_range = BackendPriceRange.model_validate(prices["priceRange"])

    def to_money(bound):
        if bound is None:
            return Money()
        return Money(amount=bound.value, currency_code=bound.currency_code)

    return PriceRange(
        min_variant_price=to_money(price_range.min),
        max_variant_price=to_money(price_range.max),
    )


def reshape_product(product: Optional[Dict[str, Any]]) -> Optional[Product]:
    """
    Normalize a product from the hybrid (REST/GraphQL) backend.

    The featured image is the first image the backend flags with
    ``isDefault``; when none is flagged there is no featured image.
    ``prices.priceRange.{min,max}.value`` becomes
    ``priceRange.{minVariantPrice,maxVariantPrice}.amount``.

    Args:
        product: Raw product node, or None

    Returns:
        Unified product, or None when the input is absent
    """
    if not product:
        return None

    rest = {k: v for k, v in product.items() if k not in ("images", "variants")}
    images = [
        img for img in (_reshape_image(node) for node in remove_edges_and_nodes(product.get("images")))
        if img
    ]
    featured_image = next((img for img in images if img.get("isDefault") is True), None)

    return Product.model_validate({
        **rest,
        "images": images,
        "variants": remove_edges_and_nodes(product.get("variants")),
        "featuredImage": featured_image,
        "priceRange": _reshape_price_range(product.get("prices")),
    })


def reshape_shopify_product(product: Optional[Dict[str, Any]]) -> Optional[Product]:
    """
    Normalize a product from the GraphQL platform.

    Its ``priceRange`` already has the unified shape. The featured image is
    always one of ``images``: the one flagged ``isDefault``, else the one whose
    url matches the platform's ``featuredImage``, else none.
    """
    if not product:
        return None

    rest = {k: v for k, v in product.items() if k not in ("images", "variants")}
    images = [
        img for img in (_reshape_image(node) for node in remove_edges_and_nodes(product.get("images")))
        if img
    ]
    featured_image = next((img for img in images if img.get("isDefault") is True), None)
    if featured_image is None:
        selected = _reshape_image(product.get("featuredImage"))
        if selected and selected["url"]:
            featured_image = next((img for img in images if img["url"] == selected["url"]), None)

    return Product.model_validate({
        **rest,
        "images": images,
        "variants": remove_edges_and_nodes(product.get("variants")),
        "featuredImage": featured_image,
    })


def reshape_products(
    products: Optional[Iterable[Optional[Dict[str, Any]]]],
    reshape: ProductReshaper = reshape_product,
) -> List[Product]:
    """Reshape a list of products, dropping empty entries."""
    reshaped: List[Product] = []
    for product in products or []:
        if product:
            reshaped_product = reshape(product)
            if reshaped_product:
                reshaped.append(reshaped_product)
    return reshaped


def reshape_collection(collection: Optional[Dict[str, Any]]) -> Optional[Collection]:
    if not collection:
        return None

    handle = collection.get("handle") or ""
    return Collection.model_validate({**collection, "handle": handle, "path": f"/search/{handle}"})


def reshape_collections(collections: Optional[Iterable[Optional[Dict[str, Any]]]]) -> List[Collection]:
    reshaped: List[Collection] = []
    for collection in collections or []:
        reshaped_collection = reshape_collection(collection)
        if reshaped_collection:
            reshaped.append(reshaped_collection)
    return reshaped


def all_products_collection() -> Collection:
    """The synthetic collection that lists the whole catalog."""
    return Collection(
        handle="",
        title="All",
        description="All products",
        seo={"title": "All", "description": "All products"},
        path="/search",
        updated_at=datetime.now(timezone.utc).isoformat(),
    )


def reshape_collection_listing(
    collections: Optional[Iterable[Optional[Dict[str, Any]]]],
    hidden_prefix: str = HIDDEN_COLLECTION_PREFIX,
) -> List[Collection]:
    """
    Build the public collection listing.

    The synthetic "All" collection always comes first. Collections whose handle
    starts with ``hidden_prefix`` are left out; the rest keep upstream order.
    """
    visible = [
        collection
        for collection in reshape_collections(collections)
        if not collection.handle.startswith(hidden_prefix)
    ]
    return [all_products_collection(), *visible]


def reshape_menu(category_tree: Optional[Iterable[Optional[Dict[str, Any]]]]) -> List[Menu]:
    """Map category-tree nodes 1:1 onto menu entries; null nodes are skipped."""
    menu: List[Menu] = []
    for node in category_tree or []:
        if not node:
            continue
        category = BackendCategory.model_validate(node)
        menu.append(Menu(id=category.entity_id, title=category.name, path=category.path))
    return menu


def reshape_page(page: Optional[Dict[str, Any]]) -> Optional[Page]:
    if not page:
        return None
    return Page.model_validate(page)


def reshape_pages(connection: Optional[Dict[str, Any]]) -> List[Page]:
    return [page for page in (reshape_page(node) for node in remove_edges_and_nodes(connection)) if page]
