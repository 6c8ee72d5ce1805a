"""Adobe Commerce REST API client and authentication."""

from aio_toolkit.integrations.adobe_commerce.auth import (
    AdobeAuth,
    BasicAuthConnection,
    CommerceConnection,
    ImsConnection,
    Oauth1aConnection,
)
from aio_toolkit.integrations.adobe_commerce.client import (
    AdobeCommerceClient,
    CommerceResponse,
)

__all__ = [
    "AdobeAuth",
    "AdobeCommerceClient",
    "BasicAuthConnection",
    "CommerceConnection",
    "CommerceResponse",
    "ImsConnection",
    "Oauth1aConnection",
]
