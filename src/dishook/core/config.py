"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from dishook import __version__


class HTTPConfig(BaseModel):
    # None disables the timeout entirely
    timeout: float | None = None
    user_agent: str = f"dishook/{__version__}"
    probe: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISHOOK_",
        env_nested_delimiter="__",
    )

    http: HTTPConfig = HTTPConfig()
    log_level: str = "WARNING"

    # Defaults for `execute` when the flags are not given
    username: str | None = None
    avatar_url: str | None = None

    webhooks: dict[str, str] = {}

    @classmethod
    def load(cls, config_path: Path | None = None) -> Settings:
        """Load settings from YAML file, then overlay env vars."""
        data: dict = {}
        if config_path and config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Settings file must contain a YAML mapping: {config_path}")
        return cls(**data)

    def resolve_webhook(self, name_or_url: str) -> str:
        """Return the URL behind a configured alias, or the input unchanged."""
        return self.webhooks.get(name_or_url, name_or_url)
