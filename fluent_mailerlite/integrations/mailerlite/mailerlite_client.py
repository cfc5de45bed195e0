"""
Resource endpoint groups on top of ``MailerLiteHttpClient``.

``MailerLiteClient`` is the collaborator the services talk to: one
attribute per resource (``client.subscribers.create(...)``) returning the
raw decoded JSON from the API. No reshaping or error classification
happens here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...core.config import MailerLiteConfig
from ...core.logging import get_logger
from .mailerlite_http import MailerLiteHttpClient


logger = get_logger("mailerlite.integrations.client")


class ResourceEndpoint:
    """
    CRUD calls shared by every MailerLite resource.
    """

    path = ""

    def __init__(self, http_client: MailerLiteHttpClient) -> None:
        self._http = http_client

    def _item(self, resource_id: Any, *parts: Any) -> str:
        suffix = "".join(f"/{part}" for part in parts)
        return f"{self.path}/{resource_id}{suffix}"

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._http.post(self.path, json=payload)

    def find(self, resource_id: Any) -> Dict[str, Any]:
        return self._http.get(self._item(resource_id))

    def update(self, resource_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._http.put(self._item(resource_id), json=payload)

    def delete(self, resource_id: Any) -> None:
        self._http.delete(self._item(resource_id))

    def get(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._http.get(self.path, params=filters or None)


class SubscribersEndpoint(ResourceEndpoint):
    path = "subscribers"

    def add_to_group(self, subscriber_id: Any, group_id: Any) -> Dict[str, Any]:
        return self._http.post(self._item(subscriber_id, "groups", group_id))

    def remove_from_group(self, subscriber_id: Any, group_id: Any) -> None:
        self._http.delete(self._item(subscriber_id, "groups", group_id))


class CampaignsEndpoint(ResourceEndpoint):
    path = "campaigns"

    def schedule(self, campaign_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._http.post(self._item(campaign_id, "schedule"), json=payload)

    def send(self, campaign_id: Any) -> Dict[str, Any]:
        return self._http.post(
            self._item(campaign_id, "schedule"), json={"delivery": "instant"}
        )

    def cancel(self, campaign_id: Any) -> Dict[str, Any]:
        return self._http.post(self._item(campaign_id, "cancel"))

    def get_stats(self, campaign_id: Any) -> Dict[str, Any]:
        return self._http.get(self._item(campaign_id))

    def get_subscribers(
        self, campaign_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(
            self._item(campaign_id, "reports", "subscriber-activity"),
            params=filters or None,
        )


class GroupsEndpoint(ResourceEndpoint):
    path = "groups"

    def get_subscribers(
        self, group_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(self._item(group_id, "subscribers"), params=filters or None)

    def assign_subscriber(self, group_id: Any, subscriber_id: Any) -> Dict[str, Any]:
        return self._http.post(f"subscribers/{subscriber_id}/groups/{group_id}")

    def unassign_subscriber(self, group_id: Any, subscriber_id: Any) -> None:
        self._http.delete(f"subscribers/{subscriber_id}/groups/{group_id}")


class FieldsEndpoint(ResourceEndpoint):
    path = "fields"

    def usage(self, field_id: Any) -> Dict[str, Any]:
        return self._http.get(self._item(field_id, "usage"))


class SegmentsEndpoint(ResourceEndpoint):
    path = "segments"

    def get_subscribers(
        self, segment_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(self._item(segment_id, "subscribers"), params=filters or None)

    def refresh(self, segment_id: Any) -> Dict[str, Any]:
        return self._http.post(self._item(segment_id, "refresh"))


class AutomationsEndpoint(ResourceEndpoint):
    path = "automations"

    def _action(self, automation_id: Any, action: str) -> Dict[str, Any]:
        return self._http.post(self._item(automation_id, action))

    def start(self, automation_id: Any) -> Dict[str, Any]:
        return self._action(automation_id, "start")

    def stop(self, automation_id: Any) -> Dict[str, Any]:
        return self._action(automation_id, "stop")

    def pause(self, automation_id: Any) -> Dict[str, Any]:
        return self._action(automation_id, "pause")

    def resume(self, automation_id: Any) -> Dict[str, Any]:
        return self._action(automation_id, "resume")

    def get_subscribers(
        self, automation_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(
            self._item(automation_id, "subscribers"), params=filters or None
        )

    def get_activity(
        self, automation_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(self._item(automation_id, "activity"), params=filters or None)

    def get_stats(self, automation_id: Any) -> Dict[str, Any]:
        return self._http.get(self._item(automation_id, "stats"))


class WebhooksEndpoint(ResourceEndpoint):
    path = "webhooks"

    def test(self, webhook_id: Any) -> Dict[str, Any]:
        return self._http.post(self._item(webhook_id, "test"))

    def get_logs(
        self, webhook_id: Any, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._http.get(self._item(webhook_id, "logs"), params=filters or None)

    def get_stats(self, webhook_id: Any) -> Dict[str, Any]:
        return self._http.get(self._item(webhook_id, "stats"))


class TimezonesEndpoint:
    def __init__(self, http_client: MailerLiteHttpClient) -> None:
        self._http = http_client

    def get(self) -> Dict[str, Any]:
        return self._http.get("timezones")


class MailerLiteClient:
    """
    Entry point to every MailerLite endpoint group.
    """

    def __init__(self, http_client: MailerLiteHttpClient) -> None:
        self._http = http_client
        self.subscribers = SubscribersEndpoint(http_client)
        self.campaigns = CampaignsEndpoint(http_client)
        self.groups = GroupsEndpoint(http_client)
        self.fields = FieldsEndpoint(http_client)
        self.segments = SegmentsEndpoint(http_client)
        self.automations = AutomationsEndpoint(http_client)
        self.webhooks = WebhooksEndpoint(http_client)
        self.timezones = TimezonesEndpoint(http_client)

    @classmethod
    def from_config(cls, config: MailerLiteConfig) -> "MailerLiteClient":
        """
        Factory to construct a client from ``MailerLiteConfig``.
        """

        logger.debug(
            "Creating MailerLite client",
            extra={"base_url": config.base_url, "timeout": config.timeout_seconds},
        )
        http_client = MailerLiteHttpClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
        )
        return cls(http_client=http_client)
