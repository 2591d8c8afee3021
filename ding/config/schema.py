"""Configuration schema using Pydantic."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DiscordConfig(BaseModel):
    """Discord webhook endpoint. Read-only once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    webhook_url: str = Field(alias="webhookUrl")
    username: str = "ding"
    user_agent: str = Field(default="ding", alias="userAgent")
    timeout: float | None = None  # seconds; None waits forever


class Config(BaseModel):
    """Root configuration, loaded from ``~/.ding/config.json``."""

    model_config = ConfigDict(populate_by_name=True)

    discord: DiscordConfig | None = None
    ignore_exit_code: bool = Field(default=False, alias="ignoreExitCode")
