"""Message fields selectable with `dishook get`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MessageField:
    name: str
    path: tuple[str, ...]
    help: str
    short: str | None = None

    @property
    def param(self) -> str:
        return self.name.replace("-", "_")


MESSAGE_FIELDS: tuple[MessageField, ...] = (
    # author
    MessageField("avatar-url", ("author", "avatar"), "avatar hash of the webhook", "a"),
    MessageField("bot", ("author", "bot"), "returns if the author is a bot", "b"),
    MessageField("discriminator", ("author", "discriminator"), "returns discriminator", "d"),
    MessageField("author-id", ("author", "id"), "returns ID of the webhook user"),
    MessageField("username", ("author", "username"), "name used for the webhook", "u"),
    # message
    MessageField("message", ("content",), "message sent", "m"),
    MessageField("message-id", ("id",), "message ID", "s"),
    MessageField("channel-id", ("channel_id",), "channel ID", "c"),
    MessageField("mentions-everyone", ("mention_everyone",), "returns if everyone is mentioned", "e"),
    MessageField("mention-roles", ("mention_roles",), "returns mentioned roles", "r"),
    MessageField("pinned", ("pinned",), "returns if message is pinned", "p"),
    MessageField("timestamp", ("timestamp",), "returns the time the message was sent"),
    MessageField("tts", ("tts",), "returns if TTS was used", "t"),
    # webhook
    MessageField("webhook-id", ("webhook_id",), "webhook ID"),
    MessageField("webhook-type", ("type",), "message type"),
    # misc
    MessageField("components", ("components",), "components included with the message"),
    MessageField("edited-timestamp", ("edited_timestamp",), "time when message was edited"),
    MessageField("embeds", ("embeds",), "array of message embeds"),
    MessageField("flags", ("flags",), "message flags bitfield"),
)

FIELDS_BY_NAME = {f.name: f for f in MESSAGE_FIELDS}


def _lookup(data: Any, path: tuple[str, ...]) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def extract_fields(message: dict[str, Any], names: list[str] | tuple[str, ...]) -> dict[str, Any]:
    """Pick the requested fields out of a message object, in the order given.

    Unknown names raise KeyError. Missing values come back as None.
    """
    return {name: _lookup(message, FIELDS_BY_NAME[name].path) for name in names}
