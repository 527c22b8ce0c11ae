"""Config loader: optional YAML file plus environment overrides."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from cwaproxy.config.schema import ProxyConfig

logger = logging.getLogger(__name__)

# Environment variable -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "CWA_API_KEY": ("upstream", "api_key"),
    "PORT": ("server", "port"),
    "APP_ENV": ("server", "environment"),
}


def load_config(
    path: str | Path | None = None, env: Mapping[str, str] | None = None
) -> ProxyConfig:
    """Load and validate config.

    Values from the YAML file (if any) are overridden by CWA_API_KEY, PORT and
    APP_ENV. When env is None, a local .env file is loaded into os.environ
    first and os.environ is used.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}
        # An empty YAML section loads as None; treat it as absent
        raw = {k: v for k, v in raw.items() if v is not None}

    if env is None:
        load_dotenv()
        env = os.environ

    for var, (section, field) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            section_data = raw.get(section) or {}
            section_data[field] = value
            raw[section] = section_data
            logger.debug("Config %s.%s taken from $%s", section, field, var)

    return ProxyConfig(**raw)


def get_config_value(config: ProxyConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'server.port'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redacted_dump(config: ProxyConfig) -> dict[str, Any]:
    """Config as a plain dict with the API key masked."""
    data = config.model_dump()
    if data["upstream"]["api_key"]:
        data["upstream"]["api_key"] = "***"
    return data
