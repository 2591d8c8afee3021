"""Configuration module for ding."""

from ding.config.loader import get_config_path, load_config
from ding.config.schema import Config, DiscordConfig

__all__ = ["Config", "DiscordConfig", "load_config", "get_config_path"]
