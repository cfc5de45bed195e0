"""
Response transform for groups.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


_COUNTERS = (
    "active_count",
    "sent_count",
    "opens_count",
    "clicks_count",
    "unsubscribed_count",
    "unconfirmed_count",
    "bounced_count",
    "junk_count",
)


def _rate(data: Dict[str, Any], key: str) -> Any:
    # MailerLite reports rates as {"float": 0.25, "string": "25%"}.
    rate = value(data, key, 0)
    if isinstance(rate, dict):
        return value(rate, "float", 0)
    return rate


def transform_group(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite group into the stable local shape.
    """

    data = unwrap_resource(raw)
    result: Dict[str, Any] = {
        "id": value(data, "id"),
        "name": value(data, "name"),
    }
    for counter in _COUNTERS:
        result[counter] = value(data, counter, 0)
    result["open_rate"] = _rate(data, "open_rate")
    result["click_rate"] = _rate(data, "click_rate")
    result["created_at"] = value(data, "created_at")
    return result
