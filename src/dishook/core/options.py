"""Per-command options built by the CLI and passed to the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dishook.webhooks.dispatcher import message_url


@dataclass(frozen=True)
class ExecuteOptions:
    """A new message to post through a webhook."""

    url: str
    content: str
    username: str | None = None
    avatar_url: str | None = None
    tts: bool = False
    wait: bool = False

    def payload(self) -> dict[str, Any]:
        """Build the JSON body. Only keys the user supplied are included."""
        payload: dict[str, Any] = {}
        if self.content:
            payload["content"] = self.content
        if self.username:
            payload["username"] = self.username
        if self.avatar_url:
            payload["avatar_url"] = self.avatar_url
        if self.tts:
            payload["tts"] = True
        return payload


@dataclass(frozen=True)
class EditOptions:
    """Replacement content for a message previously sent by the webhook."""

    url: str
    message_id: str
    content: str

    @property
    def target(self) -> str:
        return message_url(self.url, self.message_id)

    def payload(self) -> dict[str, Any]:
        return {"content": self.content}


@dataclass(frozen=True)
class GetOptions:
    url: str
    fields: tuple[str, ...] = ()
