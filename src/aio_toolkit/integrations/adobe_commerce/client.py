"""Adobe Commerce REST API client."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from aio_toolkit.exceptions import ConfigurationError
from aio_toolkit.integrations.adobe_commerce.auth import CommerceConnection
from aio_toolkit.integrations.rest_client import RestClient

logger = logging.getLogger(__name__)


@dataclass
class CommerceResponse:
    """Outcome of a Commerce API call. Failures are reported, not raised."""

    success: bool
    message: Any
    status_code: int | None = None
    body: Any = None


class AdobeCommerceClient:
    """
    Call Adobe Commerce REST endpoints relative to the store base URL.

    Authentication headers come from the connection for every request.
    HTTP and network errors are turned into unsuccessful CommerceResponse
    values. Failures to authenticate propagate.
    """

    def __init__(
        self,
        base_url: str,
        connection: CommerceConnection,
        rest_client: RestClient | None = None,
    ) -> None:
        """
        Initialize the Commerce client.

        Args:
            base_url: Store base URL, e.g. ``https://store.example.com``.
            connection: Authentication for each request.
            rest_client: Optional REST client (e.g., over a mock transport).

        Raises:
            ConfigurationError: If base_url is empty.
        """
        if not base_url:
            raise ConfigurationError("Commerce URL must be provided")

        self.base_url = base_url.rstrip("/")
        self.connection = connection
        self.rest_client = rest_client or RestClient()

    async def close(self) -> None:
        """Close the HTTP client and the connection."""
        await self.rest_client.close()
        await self.connection.close()

    async def get(self, endpoint: str, headers: dict[str, str] | None = None) -> CommerceResponse:
        return await self.api_call(endpoint, "GET", headers)

    async def post(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> CommerceResponse:
        return await self.api_call(endpoint, "POST", headers, payload)

    async def put(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> CommerceResponse:
        return await self.api_call(endpoint, "PUT", headers, payload)

    async def delete(self, endpoint: str, headers: dict[str, str] | None = None) -> CommerceResponse:
        return await self.api_call(endpoint, "DELETE", headers)

    async def api_call(
        self,
        endpoint: str,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        payload: Any = None,
    ) -> CommerceResponse:
        """
        Perform an authenticated request against the store.

        Args:
            endpoint: Path relative to the base URL, e.g. ``rest/V1/products``.
            method: HTTP method.
            headers: Extra request headers.
            payload: JSON-serialisable body, or None for no body.

        Returns:
            CommerceResponse with the decoded body on success.
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request_headers = {
            "Content-Type": "application/json",
            **await self.connection.get_auth_headers(method, url),
            **(headers or {}),
        }

        logger.debug(f"Request [{method}] {url}")

        try:
            message = await self.rest_client.api_call(url, method, request_headers, payload)
        except httpx.HTTPStatusError as e:
            response = e.response
            logger.debug(f"Response [{method}] {url} - {response.status_code} {response.reason_phrase}")
            return CommerceResponse(
                success=False,
                message=f"Response code {response.status_code} ({response.reason_phrase})",
                status_code=response.status_code,
                body=self._error_body(response),
            )
        except (httpx.TransportError, ValueError) as e:
            logger.error(f"Error while calling Commerce API: {e}")
            return CommerceResponse(
                success=False,
                message=f'Unexpected error, check logs. Original error "{e}"',
                status_code=500,
            )

        return CommerceResponse(success=True, message=message)

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
