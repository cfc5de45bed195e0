"""
Configuration models and loading logic for fluent-mailerlite.

The goal of this module is to provide a single place where runtime
configuration (API key, base URL, timeout, logging settings) is defined
and loaded from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from .errors import ConfigError


DEFAULT_BASE_URL = "https://connect.mailerlite.com/api/"
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass
class MailerLiteConfig:
    """
    Configuration for the MailerLite API connection.

    ``api_key`` may be empty here; the manager refuses to start without it.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


@dataclass
class LoggingConfig:
    """
    Logging-related configuration.
    """

    log_dir: str = "logs"
    log_level: str = "INFO"


@dataclass
class AppConfig:
    """
    Top-level configuration for fluent-mailerlite.
    """

    mailerlite: Optional[MailerLiteConfig] = None
    logging: Optional[LoggingConfig] = None


def parse_timeout(raw: object, source: str = "MAILERLITE_TIMEOUT") -> int:
    """
    Parse a timeout value in seconds, raising ConfigError for junk input.
    """

    try:
        timeout_seconds = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{source} must be an integer") from exc
    if timeout_seconds <= 0:
        raise ConfigError(f"{source} must be greater than zero")
    return timeout_seconds


def load_config() -> AppConfig:
    """
    Load fluent-mailerlite configuration from environment variables.

    Environment variables:
        MAILERLITE_API_KEY: API key for MailerLite (an empty key is kept and
            rejected later by the manager).
        MAILERLITE_API_URL: Base URL of the API (default: production root).
        MAILERLITE_TIMEOUT: Request timeout in seconds (default: 30).

        MAILERLITE_LOG_DIR: Directory for log files (default: "logs").
        MAILERLITE_LOG_LEVEL: Root log level (default: "INFO").
    """

    logging_cfg = LoggingConfig(
        log_dir=os.getenv("MAILERLITE_LOG_DIR", "logs"),
        log_level=os.getenv("MAILERLITE_LOG_LEVEL", "INFO"),
    )

    mailerlite_cfg = MailerLiteConfig(
        api_key=os.getenv("MAILERLITE_API_KEY", ""),
        base_url=os.getenv("MAILERLITE_API_URL") or DEFAULT_BASE_URL,
        timeout_seconds=parse_timeout(
            os.getenv("MAILERLITE_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
        ),
    )

    return AppConfig(mailerlite=mailerlite_cfg, logging=logging_cfg)
