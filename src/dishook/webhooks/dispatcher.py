"""Validation and HTTP dispatch against Discord webhook URLs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

WEBHOOK_PREFIX = "https://discord.com/api/webhooks/"
MAX_CONTENT_LENGTH = 2000
SUPPORTED_METHODS = ("POST", "PATCH")


class WebhookError(Exception):
    """Base error for webhook operations."""


class InvalidWebhookError(WebhookError):
    """The URL is not a usable Discord webhook."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"'{url}' is not a valid webhook token.")


class DispatchError(WebhookError):
    """A request failed in transport or Discord answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass
class DispatchResult:
    status_code: int
    data: Any = None


def build_content(args: list[str] | tuple[str, ...], start_index: int) -> str:
    """Join the positional arguments from ``start_index`` on with single spaces.

    Used as the message body when no explicit message flag is given.
    """
    return " ".join(args[start_index:]).strip()


def message_url(url: str, message_id: str) -> str:
    return f"{url.rstrip('/')}/messages/{message_id}"


def is_too_long(content: str) -> bool:
    return len(content) > MAX_CONTENT_LENGTH


class WebhookDispatcher:
    """Issues single, blocking requests against a webhook endpoint."""

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        probe: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        self._timeout = timeout
        self._probe = probe
        self._transport = transport
        self._headers = {}
        if user_agent:
            self._headers["User-Agent"] = user_agent

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            headers=self._headers,
        )

    def validate(self, url: str) -> bool:
        """Check the webhook prefix, then probe the URL for a 401.

        Any status other than 401 counts as valid, and so does a probe
        that fails in transport. A URL httpx cannot parse is invalid.
        """
        if not url.startswith(WEBHOOK_PREFIX):
            logger.debug("Rejected %s: missing webhook prefix", url)
            return False
        if not self._probe:
            return True

        try:
            with self._client() as client:
                response = client.get(url)
        except httpx.InvalidURL as e:
            logger.debug("Rejected %r: %s", url, e)
            return False
        except httpx.HTTPError as e:
            logger.warning("Webhook probe failed, assuming valid: %s", e)
            return True

        logger.debug("Probe %s returned status %d", url, response.status_code)
        return response.status_code != 401

    def dispatch(
        self,
        method: str,
        url: str,
        payload: dict[str, Any],
        params: dict[str, str] | None = None,
    ) -> DispatchResult | None:
        """Send ``payload`` as JSON. Only POST and PATCH are supported.

        Any other method performs no request and returns None.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            logger.warning("Unsupported dispatch method %s, nothing sent", method)
            return None
        return self._send(method, url, json=payload, params=params)

    def fetch(self, url: str) -> dict[str, Any]:
        """GET the target and return its JSON object."""
        result = self._send("GET", url)
        if not isinstance(result.data, dict):
            raise DispatchError("Expected a JSON object in the response", result.status_code)
        return result.data

    def delete(self, url: str) -> DispatchResult:
        return self._send("DELETE", url)

    def _send(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
    ) -> DispatchResult:
        logger.debug("%s %s", method, url)
        try:
            with self._client() as client:
                response = client.request(method, url, json=json, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DispatchError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            raise DispatchError(_error_message(response), response.status_code)

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                logger.debug("Non-JSON response body from %s", url)
        return DispatchResult(status_code=response.status_code, data=data)


def _error_message(response: httpx.Response) -> str:
    """Prefer Discord's own error message over the bare status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return f"Discord returned {response.status_code}: {body['message']}"
    return f"Discord returned {response.status_code} {response.reason_phrase}".rstrip()
