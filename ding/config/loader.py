"""Load the optional JSON config file."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from ding.config.schema import Config
from ding.errors import ConfigurationError


def get_config_path() -> Path:
    return Path.home() / ".ding" / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Read *path* (or the default location) into a :class:`Config`.

    A missing default file yields defaults; a missing explicit path, bad JSON
    or a schema mismatch raises :class:`ConfigurationError`.
    """
    explicit = path is not None
    path = path or get_config_path()

    if not path.exists():
        if explicit:
            raise ConfigurationError(f"config file not found: {path}")
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        config = Config.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(f"invalid config file {path}: {e}") from e

    logger.debug(f"Loaded config from {path}")
    return config
