"""
Response transforms for webhooks.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


def transform_webhook(raw: Any) -> Dict[str, Any]:
    data = unwrap_resource(raw)
    event = value(data, "event")
    if event is None and data.get("events"):
        event = data["events"][0]
    return {
        "id": value(data, "id"),
        "account_id": value(data, "account_id"),
        "event": event,
        "url": value(data, "url"),
        "enabled": value(data, "enabled", False),
        "name": value(data, "name"),
        "settings": value(data, "settings", {}),
        "headers": value(data, "headers", {}),
        "secret": value(data, "secret"),
        "timeout": value(data, "timeout", 30),
        "retry_count": value(data, "retry_count", 3),
        "created_at": value(data, "created_at"),
        "updated_at": value(data, "updated_at"),
        "last_delivery_at": value(data, "last_delivery_at"),
        "last_delivery_status": value(data, "last_delivery_status"),
        "delivery_count": value(data, "delivery_count", 0),
        "success_count": value(data, "success_count", 0),
        "failure_count": value(data, "failure_count", 0),
    }
