"""
Configuration storage and loading for fluent-mailerlite.

This module provides functions to save and load configuration as JSON so
that scripts and the CLI can share one settings file with manual editing.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    AppConfig,
    LoggingConfig,
    MailerLiteConfig,
    load_config,
    parse_timeout,
)
from .errors import ConfigError


CONFIG_FILE = os.getenv("MAILERLITE_CONFIG_FILE", "config.json")


def _config_to_dict(config: AppConfig) -> Dict[str, Any]:
    """Convert AppConfig to a dictionary."""
    result: Dict[str, Any] = {
        "logging": {
            "log_dir": config.logging.log_dir if config.logging else "logs",
            "log_level": config.logging.log_level if config.logging else "INFO",
        },
    }

    if config.mailerlite:
        result["mailerlite"] = {
            "api_key": config.mailerlite.api_key,
            "base_url": config.mailerlite.base_url,
            "timeout_seconds": config.mailerlite.timeout_seconds,
        }

    return result


def _dict_to_config(data: Dict[str, Any]) -> AppConfig:
    """Convert a dictionary to AppConfig."""
    logging_data = data.get("logging") or {}
    logging_cfg = LoggingConfig(
        log_dir=logging_data.get("log_dir", "logs"),
        log_level=logging_data.get("log_level", "INFO"),
    )

    mailerlite_cfg = None
    ml_data = data.get("mailerlite")
    if ml_data:
        mailerlite_cfg = MailerLiteConfig(
            api_key=ml_data.get("api_key", ""),
            base_url=ml_data.get("base_url") or DEFAULT_BASE_URL,
            timeout_seconds=parse_timeout(
                ml_data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
                source="mailerlite.timeout_seconds",
            ),
        )

    return AppConfig(mailerlite=mailerlite_cfg, logging=logging_cfg)


def load_config_from_file(config_path: str = CONFIG_FILE) -> AppConfig:
    """
    Load configuration from a JSON file.

    Falls back to environment variables (``load_config``) when the file
    does not exist.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    config_file = Path(config_path)

    if not config_file.exists():
        return load_config()

    try:
        with open(config_file, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")

    return _dict_to_config(data)


def save_config_to_file(config: AppConfig, config_path: str = CONFIG_FILE) -> None:
    """
    Save configuration to a JSON file.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_file = Path(config_path)

    try:
        if config_file.parent and not config_file.parent.exists():
            config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(_config_to_dict(config), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Failed to save config file: {e}") from e
