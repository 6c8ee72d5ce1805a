"""Shared plumbing for Adobe I/O Events API managers."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from aio_toolkit.exceptions import IOEventsApiError
from aio_toolkit.integrations.rest_client import RestClient

logger = logging.getLogger(__name__)

IO_EVENTS_BASE_URL = "https://api.adobe.io"
CONFLICTING_ID_HEADER = "x-conflicting-id"

# Status codes used when translating errors
BAD_REQUEST = 400
UNAUTHORIZED = 401
FORBIDDEN = 403
NOT_FOUND = 404
REQUEST_TIMEOUT = 408
CONFLICT = 409
INTERNAL_SERVER_ERROR = 500

DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    UNAUTHORIZED: "Unauthorized: Invalid or expired access token",
    FORBIDDEN: "Forbidden: Insufficient permissions or invalid API key",
    NOT_FOUND: "Not Found: The requested resource does not exist",
    INTERNAL_SERVER_ERROR: (
        "Internal Server Error: Adobe I/O Events service is temporarily unavailable"
    ),
}


@dataclass(frozen=True)
class IOEventsCredentials:
    """Identity of the Adobe I/O workspace the managers act on."""

    client_id: str
    consumer_id: str
    project_id: str
    workspace_id: str
    access_token: str

    def __post_init__(self) -> None:
        for name in ("client_id", "consumer_id", "project_id", "workspace_id", "access_token"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise ValueError(f"{name} is required and cannot be empty")


def validation_error(message: str) -> IOEventsApiError:
    """Build the error raised for client-side input validation failures."""
    return IOEventsApiError(message, BAD_REQUEST, "VALIDATION_ERROR")


class IOEventsManager:
    """
    Base class for the provider, event metadata and registration managers.

    Subclasses set ``resource`` (used in fallback messages) and may extend
    ``status_messages`` with resource-specific wording.
    """

    resource = "resource"
    status_messages: dict[int, str] = DEFAULT_STATUS_MESSAGES

    def __init__(
        self,
        credentials: IOEventsCredentials,
        rest_client: RestClient | None = None,
        base_url: str = IO_EVENTS_BASE_URL,
    ) -> None:
        """
        Initialize the manager.

        Args:
            credentials: Workspace identity and access token.
            rest_client: Shared REST client (one is created when omitted).
            base_url: Adobe I/O API base URL.
        """
        self.credentials = credentials
        self.rest_client = rest_client or RestClient()
        self.base_url = base_url.rstrip("/")

    @property
    def workspace_url(self) -> str:
        c = self.credentials
        return f"{self.base_url}/events/{c.consumer_id}/{c.project_id}/{c.workspace_id}"

    def _headers(self, write: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "x-api-key": self.credentials.client_id,
            "Accept": "application/hal+json",
        }
        if write:
            headers["Content-Type"] = "application/json"
        return headers

    async def _call(
        self,
        method: str,
        url: str,
        payload: Any = None,
    ) -> Any:
        """Run one request, translating every failure into IOEventsApiError."""
        try:
            return await self.rest_client.api_call(
                url,
                method,
                self._headers(write=payload is not None),
                payload,
            )
        except IOEventsApiError:
            raise
        except httpx.HTTPStatusError as e:
            raise self._status_error(e.response) from e
        except httpx.TimeoutException as e:
            raise IOEventsApiError(
                "Request timeout: Adobe I/O Events API did not respond in time",
                REQUEST_TIMEOUT,
                "TIMEOUT_ERROR",
            ) from e
        except httpx.TransportError as e:
            raise IOEventsApiError(
                "Network error: Unable to connect to Adobe I/O Events API",
                0,
                "NETWORK_ERROR",
                str(e),
            ) from e
        except ValueError as e:
            raise IOEventsApiError(
                "Invalid response format: Unable to parse API response",
                INTERNAL_SERVER_ERROR,
                "PARSE_ERROR",
            ) from e

    def _status_error(self, response: httpx.Response) -> IOEventsApiError:
        status_code = response.status_code
        body: dict[str, Any] = {}
        try:
            parsed = response.json()
            if isinstance(parsed, dict):
                body = parsed
        except ValueError:
            pass

        message = body.get("message") or body.get("error") or self._status_message(status_code)
        return IOEventsApiError(
            message,
            status_code,
            body.get("error_code"),
            body.get("details"),
        )

    def _status_message(self, status_code: int) -> str:
        return self.status_messages.get(
            status_code,
            f"API Error: HTTP {status_code} while processing {self.resource}",
        )

    async def _list_all(self, url: str, embedded_key: str) -> list[dict[str, Any]]:
        """
        Collect every page of a HAL collection.

        Follows ``_links.next.href`` until absent.
        """
        results: list[dict[str, Any]] = []
        next_url: str | None = url

        while next_url:
            response = await self._call("GET", next_url)
            if not isinstance(response, dict):
                raise IOEventsApiError(
                    "Invalid response format: Expected object",
                    INTERNAL_SERVER_ERROR,
                    "PARSE_ERROR",
                )

            items = (response.get("_embedded") or {}).get(embedded_key, [])
            if not isinstance(items, list):
                raise IOEventsApiError(
                    f"Invalid response format: {embedded_key} should be an array",
                    INTERNAL_SERVER_ERROR,
                    "PARSE_ERROR",
                )
            results.extend(items)

            next_url = ((response.get("_links") or {}).get("next") or {}).get("href")
            if next_url:
                logger.debug(f"Following next page for {self.resource}: {next_url}")

        return results

    @staticmethod
    def _require_object(response: Any, what: str) -> dict[str, Any]:
        if not isinstance(response, dict):
            raise IOEventsApiError(
                f"Invalid response format: Expected {what} object",
                INTERNAL_SERVER_ERROR,
                "PARSE_ERROR",
            )
        return response
