"""
Top-level entry point.

``MailerLite`` owns one service per resource and hands out fresh builders::

    mailerlite = MailerLite.from_env()
    mailerlite.subscribers().email("ada@example.com").named("Ada").subscribe()
    mailerlite.group_service.list({"limit": 10})
"""

from __future__ import annotations

from typing import Any

from .core.config import MailerLiteConfig
from .manager import MailerLiteManager
from .resources.automations.automation_builder import AutomationBuilder
from .resources.automations.automation_service import AutomationService
from .resources.campaigns.campaign_builder import CampaignBuilder
from .resources.campaigns.campaign_service import CampaignService
from .resources.fields.field_builder import FieldBuilder
from .resources.fields.field_service import FieldService
from .resources.groups.group_builder import GroupBuilder
from .resources.groups.group_service import GroupService
from .resources.segments.segment_builder import SegmentBuilder
from .resources.segments.segment_service import SegmentService
from .resources.subscribers.subscriber_builder import SubscriberBuilder
from .resources.subscribers.subscriber_service import SubscriberService
from .resources.webhooks.webhook_builder import WebhookBuilder
from .resources.webhooks.webhook_service import WebhookService


class MailerLite:
    """
    Facade over the resource services.

    ``manager`` is a ``MailerLiteManager`` or anything else with a
    ``get_client()`` method. No request is made until a service needs one.
    """

    def __init__(self, manager: Any) -> None:
        self._manager = manager
        self._subscribers = SubscriberService(manager)
        self._campaigns = CampaignService(manager)
        self._groups = GroupService(manager)
        self._fields = FieldService(manager)
        self._segments = SegmentService(manager)
        self._automations = AutomationService(manager)
        self._webhooks = WebhookService(manager)

    @classmethod
    def from_config(cls, config: MailerLiteConfig) -> "MailerLite":
        return cls(MailerLiteManager.from_config(config))

    @classmethod
    def from_env(cls) -> "MailerLite":
        return cls(MailerLiteManager.from_env())

    @property
    def manager(self) -> Any:
        return self._manager

    # Builders: a new one per call so state never leaks between chains.

    def subscribers(self) -> SubscriberBuilder:
        return SubscriberBuilder(self._subscribers)

    def campaigns(self) -> CampaignBuilder:
        return CampaignBuilder(self._campaigns)

    def groups(self) -> GroupBuilder:
        return GroupBuilder(self._groups)

    def fields(self) -> FieldBuilder:
        return FieldBuilder(self._fields)

    def segments(self) -> SegmentBuilder:
        return SegmentBuilder(self._segments)

    def automations(self) -> AutomationBuilder:
        return AutomationBuilder(self._automations)

    def webhooks(self) -> WebhookBuilder:
        return WebhookBuilder(self._webhooks)

    # Services for direct use

    @property
    def subscriber_service(self) -> SubscriberService:
        return self._subscribers

    @property
    def campaign_service(self) -> CampaignService:
        return self._campaigns

    @property
    def group_service(self) -> GroupService:
        return self._groups

    @property
    def field_service(self) -> FieldService:
        return self._fields

    @property
    def segment_service(self) -> SegmentService:
        return self._segments

    @property
    def automation_service(self) -> AutomationService:
        return self._automations

    @property
    def webhook_service(self) -> WebhookService:
        return self._webhooks
