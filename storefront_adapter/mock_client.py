"""Mock backend client for sandbox mode and tests."""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

_OPERATION_NAME = re.compile(r"\b(?:query|mutation)\s+(\w+)")


class MockResponse:
    """Minimal response object compatible with connection usage."""

    def __init__(self, data: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None):
        self._data = data
        self.status_code = status_code
        self.headers = headers or {}
        self.reason_phrase = "OK" if status_code < 400 else "Error"

    def json(self) -> Any:
        return self._data


SAMPLE_PRODUCT = {
    "id": "UHJvZHVjdDoxMTI=",
    "entityId": 112,
    "handle": "mock-t-shirt",
    "title": "Mock T-Shirt",
    "description": "Soft cotton t-shirt",
    "descriptionHtml": "<p>Soft cotton t-shirt</p>",
    "vendor": "MockBrand",
    "productType": "Apparel",
    "options": [{"id": "color", "name": "Color", "values": ["Red"]}],
    "prices": {
        "priceRange": {
            "min": {"value": "29.99", "currencyCode": "USD"},
            "max": {"value": "29.99", "currencyCode": "USD"},
        }
    },
    "images": {
        "edges": [
            {"node": {"urlOriginal": "https://example.com/img1.jpg", "altText": "Front", "isDefault": True}}
        ]
    },
    "variants": {
        "edges": [
            {
                "node": {
                    "id": "UHJvZHVjdFZhcmlhbnQ6MQ==",
                    "title": "Red",
                    "selectedOptions": [{"name": "Color", "value": "Red"}],
                    "price": {"amount": "29.99", "currencyCode": "USD"},
                }
            }
        ]
    },
}


class MockBackendClient:
    """
    Mock HTTP client that returns canned upstream bodies.

    Responses are keyed by GraphQL operation name (``getProduct``) or by
    REST path (``/api/storefront/cart``). A value may be a body or a
    ``MockResponse`` when a specific status code is needed. Every request
    is recorded in ``requests``.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.responses: Dict[str, Any] = (
            responses
            if responses is not None
            else {"getProduct": {"data": {"product": SAMPLE_PRODUCT}}}
        )
        self.requests: List[Dict[str, Any]] = []

    def _route(self, url: str, json: Optional[Any]) -> Optional[str]:
        if isinstance(json, dict) and json.get("query"):
            match = _OPERATION_NAME.search(json["query"])
            if match:
                return match.group(1)
        return urlparse(url).path

    async def request(self, method: str, url: str, **kwargs) -> MockResponse:
        json = kwargs.get("json")
        self.requests.append({
            "method": method,
            "url": url,
            "json": json,
            "headers": dict(kwargs.get("headers") or {}),
        })

        response = self.responses.get(self._route(url, json))
        if response is None:
            return MockResponse({"data": {}})
        if isinstance(response, MockResponse):
            return response
        return MockResponse(response)

    async def aclose(self) -> None:
        return None
