"""Configuration loading: optional JSON file overlaid with environment variables."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigError
from ..logs.logger import logger
from .model import ClientConfig

CONF_FILE_ENV = "TMI_CONF_FILE"

# environment variable -> ClientConfig field
ENV_OVERRIDES = {
    "IDENTITY_USER": "user",
    "IDENTITY_PASS": "password",
    "TMI_CHANNELS": "channels",
}


def load_raw(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read the JSON config file.

    A missing file yields an empty mapping; unreadable or malformed files
    raise ``ConfigError``.
    """
    try:
        with Path(path).open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return dict(data)


def load_config(
    path: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> ClientConfig:
    env = os.environ if env is None else env
    path = path or env.get(CONF_FILE_ENV)
    raw = load_raw(path) if path else {}
    for var, field_name in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            raw[field_name] = value
    try:
        config = ClientConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", data={"errors": e.errors()}) from e
    logger.log_event(
        "config",
        "loaded",
        level=logging.DEBUG,
        user=config.user,
        anonymous=config.anonymous,
        channels=len(config.channels),
        transport=config.transport,
    )
    return config
