"""Test fixtures for dishook."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import httpx
import pytest

from dishook.core.config import Settings
from dishook.interfaces.cli import AppContext

WEBHOOK_URL = "https://discord.com/api/webhooks/123456789/token-abc"

SAMPLE_MESSAGE = {
    "id": "1100000000000000001",
    "type": 0,
    "content": "hello world",
    "channel_id": "2200000000000000002",
    "author": {
        "id": "123456789",
        "username": "Captain Hook",
        "avatar": "a1b2c3",
        "discriminator": "0000",
        "bot": True,
    },
    "mention_everyone": False,
    "mention_roles": [],
    "pinned": False,
    "tts": False,
    "timestamp": "2024-01-01T00:00:00.000000+00:00",
    "edited_timestamp": None,
    "embeds": [],
    "components": [],
    "flags": 0,
    "webhook_id": "123456789",
}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler=None):
        self.requests: list[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200, json={}))
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def sent(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    @staticmethod
    def body(request: httpx.Request) -> dict:
        return json.loads(request.content)


def discord_handler(request: httpx.Request) -> httpx.Response:
    """Answers like a healthy webhook endpoint."""
    if request.method == "GET":
        return httpx.Response(200, json=SAMPLE_MESSAGE)
    if request.method == "POST":
        if request.url.params.get("wait") == "true":
            return httpx.Response(200, json=SAMPLE_MESSAGE)
        return httpx.Response(204)
    if request.method == "PATCH":
        return httpx.Response(200, json=SAMPLE_MESSAGE)
    return httpx.Response(204)


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def transport():
    return RecordingTransport(discord_handler)


@pytest.fixture
def settings():
    return Settings(webhooks={"alerts": WEBHOOK_URL})


@pytest.fixture
def app(settings, transport):
    return AppContext(settings, transport=transport)
