"""Connections to the upstream storefront backend.

Two variants share one error contract: ``GraphQLConnection`` POSTs query
documents with variables, ``RestConnection`` calls path + method endpoints.
Each call makes exactly one attempt. Failures surface as
:class:`~storefront_adapter.errors.UpstreamRequestError` (the upstream answered
with errors) or :class:`~storefront_adapter.errors.TransportError` (no usable
answer).
"""

import logging
from enum import Enum
from time import perf_counter
from typing import Any, Dict, Optional
import httpx
from pydantic import BaseModel, ConfigDict

from .config import AdapterConfig
from .errors import BackendError, TransportError, UpstreamRequestError
from .telemetry import get_request_duration_histogram

logger = logging.getLogger(__name__)


class CacheDirective(str, Enum):
    """Cache hint forwarded to the upstream with each request."""
    FORCE_CACHE = "force-cache"
    NO_STORE = "no-store"


class HTTPMethod(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    POST = "POST"
    PUT = "PUT"


class BackendResponse(BaseModel):
    """Parsed upstream answer; ``body`` is the decoded JSON (object or array)."""
    status: int
    body: Any

    model_config = ConfigDict(frozen=True)


def _extract_error(status_code: int, reason: Optional[str], body: Any, request: str) -> Optional[BackendError]:
    """Build the error an upstream answer carries, if it carries one."""
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        if isinstance(first, dict):
            return UpstreamRequestError(
                message=first.get("message") or first.get("title"),
                status=first.get("status") or 500,
                request=request,
            )
        return UpstreamRequestError(message=str(first), status=500, request=request)

    if status_code >= 400:
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("title")
        return UpstreamRequestError(
            message=message or reason or f"HTTP {status_code}",
            status=status_code,
            request=request,
        )
    return None


class BaseConnection:
    """Shared transport plumbing for both connection variants."""

    backend_name = "base"

    def __init__(self, config: AdapterConfig, client: Optional[Any] = None):
        """
        Initialize the connection.

        Args:
            config: Adapter configuration
            client: Optional HTTP client (e.g., MockBackendClient); must offer
                an async ``request(method, url, **kwargs)``
        """
        self.config = config
        self.duration_histogram = get_request_duration_histogram()

        if client is not None:
            self.client = client
            self._owns_client = False
        else:
            self.client = httpx.AsyncClient(timeout=config.backend.timeout_seconds)
            self._owns_client = True

    async def close(self):
        """Close HTTP client."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _auth_headers(self) -> Dict[str, str]:
        return {}

    def _build_headers(self, cache: CacheDirective, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        if cache == CacheDirective.NO_STORE:
            cache_control = "no-store"
        else:
            cache_control = f"max-age={self.config.cache.revalidate_seconds}"

        return {
            "Content-Type": "application/json",
            "Cache-Control": cache_control,
            **self._auth_headers(),
            **(headers or {}),
        }

    async def _send(
        self,
        method: str,
        url: str,
        request: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
    ) -> BackendResponse:
        """
        Perform one upstream call and apply the error contract.

        Args:
            method: HTTP method
            url: Absolute request URL
            request: Query document or path reported on failure
            headers: Request headers
            json: JSON request body

        Returns:
            Status and parsed body
        """
        start = perf_counter()
        outcome = "error"
        logger.debug("upstream_request", extra={"backend": self.backend_name, "http_method": method, "url": url})

        try:
            try:
                response = await self.client.request(method, url, json=json, headers=headers)
                body = response.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning(
                    "upstream_transport_error",
                    extra={"backend": self.backend_name, "url": url, "error": repr(exc)},
                )
                raise TransportError(exc, request=request) from exc

            error = _extract_error(response.status_code, getattr(response, "reason_phrase", None), body, request)
            if error is not None:
                logger.warning(
                    "upstream_request_error",
                    extra={"backend": self.backend_name, "url": url, "status": error.status},
                )
                raise error

            outcome = "success"
            return BackendResponse(status=response.status_code, body=body)
        finally:
            duration_ms = (perf_counter() - start) * 1000
            self.duration_histogram.record(
                duration_ms,
                attributes={"backend": self.backend_name, "outcome": outcome},
            )


class GraphQLConnection(BaseConnection):
    """POST-with-JSON-body GraphQL endpoint."""

    backend_name = "graphql"

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.config.backend.api_token}"}

    async def fetch(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        cache: CacheDirective = CacheDirective.FORCE_CACHE,
    ) -> BackendResponse:
        """
        Send a GraphQL document.

        Args:
            query: Query or mutation document, sent unmodified
            variables: Query variables
            headers: Extra headers, overriding the defaults
            cache: Cache hint for the upstream

        Returns:
            Status and parsed body
        """
        payload: Dict[str, Any] = {}
        if query:
            payload["query"] = query
        if variables:
            payload["variables"] = variables

        return await self._send(
            "POST",
            self.config.backend.graphql_api_url,
            request=query,
            headers=self._build_headers(cache, headers),
            json=payload,
        )


class RestConnection(BaseConnection):
    """Path + method REST endpoint."""

    backend_name = "rest"

    def __init__(self, config: AdapterConfig, client: Optional[Any] = None):
        super().__init__(config, client)
        base_url = config.backend.rest_api_url
        if not base_url and config.backend.storefront_domain:
            base_url = f"https://{config.backend.storefront_domain}"
        self.base_url = base_url.rstrip("/") if base_url else None

    def _auth_headers(self) -> Dict[str, str]:
        token = self.config.backend.rest_api_token or self.config.backend.api_token
        return {"X-Auth-Token": token}

    async def fetch(
        self,
        path: str,
        method: HTTPMethod = HTTPMethod.GET,
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        cache: CacheDirective = CacheDirective.FORCE_CACHE,
    ) -> BackendResponse:
        """
        Call a REST endpoint.

        Args:
            path: Path appended to the REST base URL
            method: HTTP method
            body: JSON body, if any
            headers: Extra headers, overriding the defaults
            cache: Cache hint for the upstream

        Returns:
            Status and parsed body
        """
        if self.base_url is None:
            raise ValueError("rest_api_url or storefront_domain must be configured for REST calls")

        return await self._send(
            HTTPMethod(method).value,
            f"{self.base_url}{path}",
            request=path,
            headers=self._build_headers(cache, headers),
            json=body,
        )
