"""Discord webhook dispatch and response handling."""

from dishook.webhooks.dispatcher import (
    DispatchError,
    DispatchResult,
    InvalidWebhookError,
    WebhookDispatcher,
    WebhookError,
    build_content,
)
from dishook.webhooks.fields import MESSAGE_FIELDS, extract_fields

__all__ = [
    "DispatchError",
    "DispatchResult",
    "InvalidWebhookError",
    "MESSAGE_FIELDS",
    "WebhookDispatcher",
    "WebhookError",
    "build_content",
    "extract_fields",
]
