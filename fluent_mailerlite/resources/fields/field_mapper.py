"""
Response transforms for custom fields.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


def transform_field(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite field into the stable local shape.
    """

    data = unwrap_resource(raw)
    return {
        "id": value(data, "id"),
        "name": value(data, "name"),
        "type": value(data, "type"),
        "title": value(data, "title"),
        "default_value": value(data, "default_value"),
        "options": value(data, "options", {}),
        "required": value(data, "required", False),
        "position": value(data, "position"),
        "subscribers_count": value(data, "subscribers_count"),
        "created_at": value(data, "created_at"),
        "updated_at": value(data, "updated_at"),
    }


def transform_field_usage(raw: Any) -> Dict[str, Any]:
    data = unwrap_resource(raw)
    return {
        "subscribers_count": value(data, "subscribers_count", 0),
        "filled_count": value(data, "filled_count", 0),
        "empty_count": value(data, "empty_count", 0),
        "usage_percentage": value(data, "usage_percentage", 0.0),
    }
