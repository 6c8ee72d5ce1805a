"""Bearer token extraction and expiry inspection."""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


@dataclass
class BearerTokenInfo:
    """Information about a Bearer token."""

    token: str | None
    token_length: int
    is_valid: bool
    expiry: str | None  # ISO 8601
    time_until_expiry: int | None  # milliseconds


class BearerToken:
    """Helpers for Bearer tokens received by runtime actions."""

    @staticmethod
    def extract(params: dict[str, Any]) -> BearerTokenInfo:
        """
        Extract the Bearer token from OpenWhisk-style action params.

        Args:
            params: Action params carrying ``__ow_headers``.

        Returns:
            BearerTokenInfo for the token (or for no token).
        """
        token = None
        headers = params.get("__ow_headers") or {}
        authorization = headers.get("authorization")
        if isinstance(authorization, str) and authorization.startswith(BEARER_PREFIX):
            token = authorization[len(BEARER_PREFIX):]

        return BearerToken.info(token)

    @staticmethod
    def info(token: str | None) -> BearerTokenInfo:
        """Describe a token: length, validity and expiry."""
        expiry = BearerToken._calculate_expiry(token)
        now = datetime.now(timezone.utc)

        time_until_expiry = None
        if expiry:
            time_until_expiry = max(0, int((expiry - now).total_seconds() * 1000))

        return BearerTokenInfo(
            token=token,
            token_length=len(token) if token else 0,
            is_valid=BearerToken._is_token_valid(token, expiry),
            expiry=expiry.isoformat() if expiry else None,
            time_until_expiry=time_until_expiry,
        )

    @staticmethod
    def _is_token_valid(token: str | None, expiry: datetime | None) -> bool:
        if not token:
            return False

        if expiry and datetime.now(timezone.utc) >= expiry:
            logger.info("Token has expired")
            return False

        return True

    @staticmethod
    def _calculate_expiry(token: str | None) -> datetime | None:
        """
        Work out when a token expires.

        JWT ``expires_in`` is milliseconds from now and wins over ``exp``
        (unix seconds). Anything else defaults to 24 hours from now.
        """
        if not token:
            return None

        now = datetime.now(timezone.utc)
        parts = token.split(".")
        if len(parts) != 3:
            return now + DEFAULT_TOKEN_LIFETIME

        try:
            segment = parts[1] + "=" * (-len(parts[1]) % 4)
            payload = json.loads(base64.urlsafe_b64decode(segment))
        except (binascii.Error, ValueError):
            logger.warning("Could not parse token expiry, using default 24h")
            return now + DEFAULT_TOKEN_LIFETIME

        if not isinstance(payload, dict):
            return now + DEFAULT_TOKEN_LIFETIME

        try:
            if payload.get("expires_in"):
                return now + timedelta(milliseconds=int(payload["expires_in"]))
            if payload.get("exp"):
                return datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            logger.warning("Could not parse token expiry, using default 24h")

        return now + DEFAULT_TOKEN_LIFETIME
