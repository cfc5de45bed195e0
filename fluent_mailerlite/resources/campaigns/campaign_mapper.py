"""
Response transform for campaigns.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base import unwrap_resource, value


_SCALAR_KEYS = (
    "id",
    "account_id",
    "name",
    "subject",
    "from_name",
    "from_email",
    "status",
    "type",
    "created_at",
    "updated_at",
    "scheduled_at",
    "sent_at",
    "delivery_schedule",
    "language_iso",
    "is_winner",
    "winner_version_for",
    "winner_sending_time",
    "winner_selected_manually_at",
    "uses_ecommerce",
    "uses_survey",
    "can_be_scheduled",
    "initial_created_at",
    "type_for_humans",
)


def transform_campaign(raw: Any) -> Dict[str, Any]:
    """
    Map a raw MailerLite campaign into the stable local shape.
    """

    data = unwrap_resource(raw)
    result: Dict[str, Any] = {key: value(data, key) for key in _SCALAR_KEYS}
    result.update(
        {
            "warnings": value(data, "warnings", []),
            "emails": value(data, "emails", []),
            "used_in_automations": value(data, "used_in_automations", []),
            "stats": value(data, "stats", {}),
            "settings": value(data, "settings", {}),
            "ab_settings": value(data, "ab_settings", {}),
        }
    )
    return result
