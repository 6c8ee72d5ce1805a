"""Response builders for Adobe Commerce synchronous webhooks."""

from enum import Enum
from typing import Any


class WebhookOperation(str, Enum):
    """Operations Adobe Commerce understands in a webhook response."""

    SUCCESS = "success"
    EXCEPTION = "exception"
    ADD = "add"
    REPLACE = "replace"
    REMOVE = "remove"


class WebhookActionResponse:
    """
    Build ``{"op": ...}`` webhook responses.

    Optional fields left as None are omitted from the response.
    """

    @staticmethod
    def _build(op: WebhookOperation, **fields: Any) -> dict[str, Any]:
        response: dict[str, Any] = {"op": op.value}
        response.update({k: v for k, v in fields.items() if v is not None})
        return response

    @staticmethod
    def success() -> dict[str, Any]:
        return WebhookActionResponse._build(WebhookOperation.SUCCESS)

    @staticmethod
    def exception(exception_class: str | None = None, message: str | None = None) -> dict[str, Any]:
        """Abort the Commerce operation, optionally naming the PHP exception class."""
        return WebhookActionResponse._build(
            WebhookOperation.EXCEPTION,
            **{"class": exception_class, "message": message},
        )

    @staticmethod
    def add(path: str, value: Any, instance: str | None = None) -> dict[str, Any]:
        return WebhookActionResponse._build(
            WebhookOperation.ADD, path=path, value=value, instance=instance
        )

    @staticmethod
    def replace(path: str, value: Any, instance: str | None = None) -> dict[str, Any]:
        return WebhookActionResponse._build(
            WebhookOperation.REPLACE, path=path, value=value, instance=instance
        )

    @staticmethod
    def remove(path: str) -> dict[str, Any]:
        return WebhookActionResponse._build(WebhookOperation.REMOVE, path=path)
