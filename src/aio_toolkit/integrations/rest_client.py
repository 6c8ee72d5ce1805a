"""Thin async REST client over httpx."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPES = ("application/json", "application/hal+json")


class RestClient:
    """
    Minimal JSON REST client.

    Non-2xx responses raise ``httpx.HTTPStatusError``. Bodies are decoded as
    JSON when the response advertises a JSON content type (or none at all),
    otherwise the raw text is returned. Empty responses return None.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the REST client.

        Args:
            timeout: Request timeout in seconds for the owned client.
            client: Optional pre-built httpx client (e.g., with a mock transport).
        """
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, endpoint: str, headers: dict[str, str] | None = None) -> Any:
        return await self.api_call(endpoint, "GET", headers)

    async def post(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        return await self.api_call(endpoint, "POST", headers, payload)

    async def put(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        return await self.api_call(endpoint, "PUT", headers, payload)

    async def delete(self, endpoint: str, headers: dict[str, str] | None = None) -> Any:
        return await self.api_call(endpoint, "DELETE", headers)

    async def api_call(
        self,
        endpoint: str,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> Any:
        """
        Perform an HTTP request and decode the response.

        Args:
            endpoint: Absolute URL.
            method: HTTP method.
            headers: Request headers.
            payload: JSON-serialisable body, or None for no body.

        Returns:
            Decoded JSON, response text, or None for empty responses.
        """
        request_headers = dict(headers or {})
        if payload is not None:
            request_headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {endpoint}")

        response = await self.client.request(
            method,
            endpoint,
            headers=request_headers,
            json=payload,
        )
        response.raise_for_status()

        if response.status_code == 204 or not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if not content_type or any(t in content_type for t in JSON_CONTENT_TYPES):
            return response.json()

        return response.text
