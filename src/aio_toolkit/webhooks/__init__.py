"""Adobe Commerce webhook helpers."""

from aio_toolkit.webhooks.response import WebhookActionResponse, WebhookOperation

__all__ = [
    "WebhookActionResponse",
    "WebhookOperation",
]
