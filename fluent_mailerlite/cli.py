"""
Command line entry point.

Usage:
    python -m fluent_mailerlite ping
    python -m fluent_mailerlite list subscribers --limit 10

Credentials come from ``config.json`` (see ``core.config_storage``) or the
MAILERLITE_* environment variables.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

from .core.config import AppConfig, MailerLiteConfig
from .core.config_storage import CONFIG_FILE, load_config_from_file
from .core.errors import MailerLiteError
from .core.logging import configure_logging, get_logger
from .manager import MailerLiteManager
from .mailerlite import MailerLite
from .resources.base import unwrap_page

logger = get_logger("mailerlite.cli")

RESOURCES = (
    "subscribers",
    "campaigns",
    "groups",
    "fields",
    "segments",
    "automations",
    "webhooks",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluent-mailerlite",
        description="Small command line client for the MailerLite API",
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE,
        help=f"Path to the JSON config file (default: {CONFIG_FILE})",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("ping", help="Check that the configured API key works")

    list_parser = commands.add_parser("list", help="Print one page of a resource list")
    list_parser.add_argument("resource", choices=RESOURCES)
    list_parser.add_argument("--limit", type=int, default=25, help="Page size (default: 25)")
    list_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    return parser


def _mailerlite_config(config: AppConfig) -> MailerLiteConfig:
    return config.mailerlite or MailerLiteConfig(api_key="")


def ping(config: AppConfig) -> Dict[str, Any]:
    """
    Authenticated round trip against the timezones endpoint.
    """

    manager = MailerLiteManager.from_config(_mailerlite_config(config))
    timezones = unwrap_page(manager.get_client().timezones.get())
    return {
        "status": "ok",
        "base_url": manager.config.base_url,
        "timezones": len(timezones["data"]),
    }


def list_resource(config: AppConfig, resource: str, limit: int, page: int = 1) -> Dict[str, Any]:
    mailerlite = MailerLite.from_config(_mailerlite_config(config))
    builder = getattr(mailerlite, resource)()
    return builder.list({"limit": limit, "page": page})


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config_from_file(args.config)
        if config.logging is not None:
            configure_logging(config.logging)

        if args.command == "ping":
            result = ping(config)
        else:
            result = list_resource(config, args.resource, args.limit, args.page)
    except MailerLiteError as exc:
        logger.error("Command %s failed: %s", args.command, exc.message)
        print_json({"status": "error", "code": exc.code, "message": exc.message})
        return 1

    print_json(result)
    return 0
