"""
Response transforms for segments.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


_COUNTERS = (
    "subscribers_count",
    "active_count",
    "unsubscribed_count",
    "unconfirmed_count",
    "bounced_count",
    "junk_count",
)


def transform_segment(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite segment into the stable local shape.
    """

    data = unwrap_resource(raw)
    result: Dict[str, Any] = {
        "id": value(data, "id"),
        "name": value(data, "name"),
        "description": value(data, "description"),
        "filters": value(data, "filters", []),
        "active": value(data, "active", True),
    }
    for counter in _COUNTERS:
        result[counter] = value(data, counter, 0)
    result["last_calculated_at"] = value(data, "last_calculated_at")
    result["created_at"] = value(data, "created_at")
    result["updated_at"] = value(data, "updated_at")
    return result


def transform_segment_stats(raw: Any) -> Dict[str, Any]:
    data = unwrap_resource(raw)
    stats: Dict[str, Any] = {counter: value(data, counter, 0) for counter in _COUNTERS}
    stats["growth_rate"] = value(data, "growth_rate", 0.0)
    stats["last_calculated_at"] = value(data, "last_calculated_at")
    return stats
