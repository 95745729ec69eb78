"""dishook - send, edit, fetch and delete Discord webhook messages."""

__version__ = "0.1.0"
