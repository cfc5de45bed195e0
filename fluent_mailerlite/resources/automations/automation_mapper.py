"""
Response transform for automations.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


def transform_automation(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite automation into the stable local shape.
    """

    data = unwrap_resource(raw)
    return {
        "id": value(data, "id"),
        "account_id": value(data, "account_id"),
        "name": value(data, "name"),
        "description": value(data, "description"),
        "enabled": value(data, "enabled", False),
        "status": value(data, "status"),
        "triggers": value(data, "triggers", []),
        "steps": value(data, "steps", []),
        "settings": value(data, "settings", {}),
        "conditions": value(data, "conditions", []),
        "stats": value(data, "stats", {}),
        "subscribers_count": value(data, "subscribers_count", 0),
        "completed_count": value(data, "completed_count", 0),
        "active_count": value(data, "active_count", 0),
        "created_at": value(data, "created_at"),
        "updated_at": value(data, "updated_at"),
        "triggered_at": value(data, "triggered_at"),
        "completed_at": value(data, "completed_at"),
    }
