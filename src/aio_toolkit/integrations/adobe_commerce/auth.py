"""Authentication connections for the Adobe Commerce REST API."""

import base64
import hashlib
import hmac
import logging
import secrets
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qsl, quote, urlsplit

import httpx
import redis.asyncio as redis

from aio_toolkit.integrations.rest_client import RestClient

logger = logging.getLogger(__name__)


class CommerceConnection(ABC):
    """Abstract base class for Adobe Commerce authentication."""

    @abstractmethod
    async def get_auth_headers(self, method: str, url: str) -> dict[str, str]:
        """
        Get authentication headers for one request.

        Args:
            method: HTTP method of the request.
            url: Absolute request URL, including any query string.

        Returns:
            Dictionary of headers to include in the request.
        """
        ...

    async def close(self) -> None:
        """Release any HTTP clients held by the connection."""
        pass


class BasicAuthConnection(CommerceConnection):
    """
    Admin username/password authentication.

    Exchanges the credentials for an admin token at
    ``rest/V1/integration/admin/token`` and reuses it until it expires. When a
    Redis client is given the token is shared through it, otherwise it is
    cached on the instance.
    """

    TOKEN_KEY = "adobe_commerce_basic_auth_token"
    TOKEN_TTL = 3600  # seconds

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        redis_client: redis.Redis | None = None,
        rest_client: RestClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.redis = redis_client
        self.rest_client = rest_client or RestClient()

        self._token: str | None = None
        self._token_expires_at: datetime | None = None

    async def close(self) -> None:
        await self.rest_client.close()

    async def get_auth_headers(self, method: str, url: str) -> dict[str, str]:
        logger.debug("Using Commerce client with admin token authentication")
        token = await self.get_token()
        return {"Authorization": f"Bearer {token}"}

    async def get_token(self) -> str:
        """Return a cached admin token, generating a new one when needed."""
        token = await self._get_cached_token()
        if token:
            return token

        token = await self._generate_token()
        await self._set_cached_token(token)
        return token

    async def _generate_token(self) -> str:
        endpoint = f"{self.base_url}/rest/V1/integration/admin/token"
        logger.debug(f"Requesting admin token from {endpoint}")

        token = await self.rest_client.post(
            endpoint,
            {"Content-Type": "application/json"},
            {"username": self.username, "password": self.password},
        )
        if not isinstance(token, str) or not token:
            raise RuntimeError("Failed to obtain Commerce admin token")
        return token

    async def _get_cached_token(self) -> str | None:
        if self.redis is not None:
            try:
                cached = await self.redis.get(self.TOKEN_KEY)
                if cached:
                    return cached.decode("utf-8") if isinstance(cached, bytes) else cached
            except Exception as e:
                logger.warning(f"Redis cache read failed: {e}")

        now = datetime.now(timezone.utc)
        if self._token and self._token_expires_at and now < self._token_expires_at:
            return self._token
        return None

    async def _set_cached_token(self, token: str) -> None:
        self._token = token
        self._token_expires_at = datetime.now(timezone.utc) + timedelta(seconds=self.TOKEN_TTL)

        if self.redis is not None:
            try:
                await self.redis.setex(self.TOKEN_KEY, self.TOKEN_TTL, token)
            except Exception as e:
                logger.warning(f"Redis cache write failed: {e}")


def _percent_encode(value: str) -> str:
    return quote(str(value), safe="~")


class Oauth1aConnection(CommerceConnection):
    """
    OAuth 1.0a integration authentication.

    Signs every request with HMAC-SHA256 using the consumer and access token
    pairs from Admin > System > Integrations.
    """

    SIGNATURE_METHOD = "HMAC-SHA256"

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        access_token: str,
        access_token_secret: str,
    ) -> None:
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.access_token = access_token
        self.access_token_secret = access_token_secret

    async def get_auth_headers(self, method: str, url: str) -> dict[str, str]:
        return {
            "Authorization": self.authorization_header(
                method,
                url,
                nonce=secrets.token_hex(16),
                timestamp=str(int(time.time())),
            )
        }

    def authorization_header(self, method: str, url: str, nonce: str, timestamp: str) -> str:
        """Build the ``OAuth ...`` Authorization header value for a request."""
        oauth_params = {
            "oauth_consumer_key": self.consumer_key,
            "oauth_nonce": nonce,
            "oauth_signature_method": self.SIGNATURE_METHOD,
            "oauth_timestamp": timestamp,
            "oauth_token": self.access_token,
            "oauth_version": "1.0",
        }
        oauth_params["oauth_signature"] = self.signature(
            self.signature_base_string(method, url, oauth_params)
        )

        return "OAuth " + ", ".join(
            f'{_percent_encode(k)}="{_percent_encode(v)}"'
            for k, v in sorted(oauth_params.items())
        )

    def signature(self, base_string: str) -> str:
        key = f"{_percent_encode(self.consumer_secret)}&{_percent_encode(self.access_token_secret)}"
        digest = hmac.new(key.encode(), base_string.encode(), hashlib.sha256).digest()
        return base64.b64encode(digest).decode()

    @staticmethod
    def signature_base_string(method: str, url: str, oauth_params: dict[str, str]) -> str:
        """Method, base URL and sorted encoded parameters joined with ``&``."""
        parts = urlsplit(url)
        base_url = f"{parts.scheme.lower()}://{parts.netloc.lower()}{parts.path}"

        params = parse_qsl(parts.query, keep_blank_values=True) + list(oauth_params.items())
        normalized = "&".join(
            f"{k}={v}"
            for k, v in sorted((_percent_encode(k), _percent_encode(v)) for k, v in params)
        )

        return "&".join([
            method.upper(),
            _percent_encode(base_url),
            _percent_encode(normalized),
        ])


class AdobeAuth:
    """
    Adobe IMS server-to-server OAuth 2.0 token provider.

    Uses the client credentials grant and keeps the token until shortly
    before it expires.
    """

    IMS_TOKEN_URL = "https://ims-na1.adobelogin.com/ims/token/v3"
    TOKEN_EXPIRY_BUFFER = timedelta(minutes=5)

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        scopes: list[str],
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize with Adobe IMS credentials.

        Args:
            client_id: Adobe IMS client ID (API key).
            client_secret: Adobe IMS client secret.
            scopes: OAuth scopes requested for the token.
            client: Optional pre-built httpx client.
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes = scopes

        self._access_token: str | None = None
        self._token_expires_at: datetime | None = None
        self._http_client = client

    @property
    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=30.0)
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        now = datetime.now(timezone.utc)

        if (
            self._access_token
            and self._token_expires_at
            and now < (self._token_expires_at - self.TOKEN_EXPIRY_BUFFER)
        ):
            return self._access_token

        await self._fetch_access_token()

        if not self._access_token:
            raise RuntimeError("Failed to obtain access token")

        return self._access_token

    async def _fetch_access_token(self) -> None:
        """Fetch a new access token from Adobe IMS."""
        response = await self._client.post(
            self.IMS_TOKEN_URL,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": ",".join(self.scopes),
            },
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
            },
        )
        response.raise_for_status()

        data = response.json()
        self._access_token = data.get("access_token")

        # IMS returns expires_in in seconds
        expires_in = data.get("expires_in", 86400)
        self._token_expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)


class ImsConnection(CommerceConnection):
    """Adobe Commerce as a Cloud Service authentication through Adobe IMS."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        ims_org_id: str,
        scopes: list[str],
        auth: AdobeAuth | None = None,
    ) -> None:
        self.client_id = client_id
        self.ims_org_id = ims_org_id
        self.auth = auth or AdobeAuth(client_id, client_secret, scopes)

    async def close(self) -> None:
        await self.auth.close()

    async def get_auth_headers(self, method: str, url: str) -> dict[str, str]:
        logger.debug("Using Commerce client with IMS authentication")
        token = await self.auth.get_token()
        return {
            "Authorization": f"Bearer {token}",
            "x-gw-ims-org-id": self.ims_org_id,
            "x-api-key": self.client_id,
        }
