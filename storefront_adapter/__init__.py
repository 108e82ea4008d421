"""
Storefront commerce adapter

Lets a storefront talk to a GraphQL commerce platform or a REST/GraphQL
hybrid platform through one normalized model of carts, products,
collections, pages and menus.
"""

__version__ = "0.1.0"

from .client import StorefrontClient
from .config import AdapterConfig
from .errors import BackendError, TransportError, UpstreamRequestError
from .router import get_storefront_router
from .mock_client import MockBackendClient

__all__ = [
    "StorefrontClient",
    "AdapterConfig",
    "BackendError",
    "TransportError",
    "UpstreamRequestError",
    "get_storefront_router",
    "MockBackendClient",
]
