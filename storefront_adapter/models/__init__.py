"""Data models for upstream backends and the unified storefront format."""

from .backend_models import (
    Edge,
    Connection,
    BackendMoney,
    BackendPriceRange,
    BackendCategory,
)
from .storefront_models import (
    Money,
    Image,
    SEO,
    CartLine,
    CartCost,
    Cart,
    ProductOption,
    ProductVariant,
    PriceRange,
    Product,
    Collection,
    Menu,
    Page,
)

__all__ = [
    "Edge",
    "Connection",
    "BackendMoney",
    "BackendPriceRange",
    "BackendCategory",
    "Money",
    "Image",
    "SEO",
    "CartLine",
    "CartCost",
    "Cart",
    "ProductOption",
    "ProductVariant",
    "PriceRange",
    "Product",
    "Collection",
    "Menu",
    "Page",
]
