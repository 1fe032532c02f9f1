"""
Products API HTTP Client.

The only place that talks HTTP to the products backend. Each call is
attempted exactly once; failures are classified so CatalogService can decide
whether to fall back to the local backup:

- NoBackendConfigured: endpoint resolved to local-only, nothing was sent
- NetworkError: no HTTP response was received
- RemoteError: a non-2xx response was received
- EnvelopeError: a 2xx response whose body is not the shape asked for
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from eyewear_catalog.error_handler import EnvelopeError, NetworkError, NoBackendConfigured, RemoteError
from eyewear_catalog.integrations.policy.endpoint_resolver import Endpoint
from eyewear_catalog.integrations.policy.response_wrappers import parse_envelope, unwrap_collection, unwrap_item

logger = logging.getLogger(__name__)


class Expect(str, Enum):
    COLLECTION = "collection"
    ITEM = "item"


class ProductsApiClient:
    def __init__(
        self,
        endpoint: Endpoint,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.endpoint = endpoint
        self.transport = transport
        self.headers = dict(headers or {})

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    async def execute(
        self,
        endpoint_path: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        expect: Expect = Expect.ITEM,
    ) -> Any:
        if not self.endpoint.is_remote:
            logger.info("No API URL available - using local backup")
            raise NoBackendConfigured()

        method = method.upper()
        url = f"{self.endpoint.base_url}{endpoint_path}"
        headers: Dict[str, str] = dict(self.headers)
        request_kwargs: Dict[str, Any] = {"params": params}
        if method != "GET":
            headers["Content-Type"] = "application/json"
            request_kwargs["json"] = body if body is not None else {}

        logger.debug("API request: %s %s params=%s", method, url, params)
        try:
            async with self._client() as client:
                response = await client.request(method, url, headers=headers, **request_kwargs)
        except httpx.RequestError as exc:
            logger.warning("Network error on %s %s: %s", method, url, exc)
            raise NetworkError(f"Cannot connect to products API at {self.endpoint.base_url}: {exc}") from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning("API error response %s on %s %s: %s", response.status_code, method, url, message)
            raise RemoteError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise EnvelopeError(f"Response from {url} is not valid JSON") from exc

        envelope = parse_envelope(data)
        if expect is Expect.COLLECTION:
            return unwrap_collection(envelope)
        return unwrap_item(envelope)

    async def check_health(self) -> bool:
        if not self.endpoint.is_remote:
            logger.info("Local-only mode: no products API configured")
            return False
        try:
            async with self._client() as client:
                response = await client.get(f"{self.endpoint.base_url}/health", headers=self.headers)
        except httpx.RequestError as exc:
            logger.warning("API connection failed: %s", exc)
            return False
        if not response.is_success:
            logger.warning("API responded with error status: %s", response.status_code)
        return response.is_success


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return f"HTTP {response.status_code}: {response.reason_phrase}"
