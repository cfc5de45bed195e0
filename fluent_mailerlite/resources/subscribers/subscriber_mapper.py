"""
Response transform for subscribers.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


def transform_subscriber(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite subscriber into the stable local shape.
    """

    data = unwrap_resource(raw)
    return {
        "id": value(data, "id"),
        "email": value(data, "email"),
        "name": value(data, "name"),
        "status": value(data, "status"),
        "subscribed_at": value(data, "subscribed_at"),
        "unsubscribed_at": value(data, "unsubscribed_at"),
        "created_at": value(data, "created_at"),
        "updated_at": value(data, "updated_at"),
        "fields": value(data, "fields", {}),
        "groups": value(data, "groups", []),
        "segments": value(data, "segments", []),
        "opted_in_at": value(data, "opted_in_at"),
        "optin_ip": value(data, "optin_ip"),
    }
