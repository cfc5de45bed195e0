"""
Fluent builder for webhooks.

Example::

    mailerlite.webhooks() \\
        .on_subscriber("created") \\
        .url("https://example.com/hooks/mailerlite") \\
        .with_secret("s3cret") \\
        .and_timeout(10) \\
        .create()
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...api.webhooks import (
    CONTENT_TYPES,
    DEFAULT_RETRY_COUNT,
    DEFAULT_TIMEOUT,
    Webhook,
    WebhooksApi,
)
from ...core.errors import ValidationError
from ..base import FluentBuilder


# Short event names accepted by the on_<family>() helpers.
_FAMILY_EVENTS = {
    "subscriber": ("created", "updated", "unsubscribed", "bounced", "complained", "deleted"),
    "campaign": (
        "sent",
        "opened",
        "clicked",
        "bounced",
        "complained",
        "unsubscribed",
        "delivered",
        "soft_bounced",
        "hard_bounced",
    ),
    "automation": ("subscriber_added", "subscriber_completed", "email_sent", "started", "stopped"),
    "form": ("submitted",),
    "group": ("subscriber_added", "subscriber_removed"),
}


class WebhookBuilder(FluentBuilder):
    def __init__(self, service: WebhooksApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._event: Optional[str] = None
        self._url: Optional[str] = None
        self._enabled = True
        self._name: Optional[str] = None
        self._settings: Dict[str, Any] = {}
        self._headers: Dict[str, str] = {}
        self._secret: Optional[str] = None
        self._timeout = DEFAULT_TIMEOUT
        self._retry_count = DEFAULT_RETRY_COUNT

    # Event and target

    def on(self, event: str) -> "WebhookBuilder":
        self._event = event
        return self

    def listen(self, event: str) -> "WebhookBuilder":
        return self.on(event)

    def url(self, url: str) -> "WebhookBuilder":
        self._url = url
        return self

    def to(self, url: str) -> "WebhookBuilder":
        return self.url(url)

    def _on_family(self, family: str, event: str) -> "WebhookBuilder":
        valid = _FAMILY_EVENTS[family]
        if event not in valid:
            raise ValidationError(
                f"Invalid {family} event '{event}'. Valid events: {', '.join(valid)}"
            )
        return self.on(f"{family}.{event}")

    def on_subscriber(self, event: str) -> "WebhookBuilder":
        return self._on_family("subscriber", event)

    def on_campaign(self, event: str) -> "WebhookBuilder":
        return self._on_family("campaign", event)

    def on_automation(self, event: str) -> "WebhookBuilder":
        return self._on_family("automation", event)

    def on_form(self, event: str) -> "WebhookBuilder":
        return self._on_family("form", event)

    def on_group(self, event: str) -> "WebhookBuilder":
        return self._on_family("group", event)

    def on_test(self) -> "WebhookBuilder":
        return self.on("webhook.test")

    # Delivery options

    def named(self, name: str) -> "WebhookBuilder":
        self._name = name
        return self

    def enabled(self, enabled: bool = True) -> "WebhookBuilder":
        self._enabled = enabled
        return self

    def disabled(self) -> "WebhookBuilder":
        return self.enabled(False)

    def with_settings(self, settings: Dict[str, Any]) -> "WebhookBuilder":
        self._settings.update(settings)
        return self

    def with_setting(self, key: str, value: Any) -> "WebhookBuilder":
        self._settings[key] = value
        return self

    def with_headers(self, headers: Dict[str, str]) -> "WebhookBuilder":
        self._headers.update(headers)
        return self

    def with_header(self, name: str, value: str) -> "WebhookBuilder":
        self._headers[name] = value
        return self

    def with_secret(self, secret: str) -> "WebhookBuilder":
        self._secret = secret
        return self

    def timeout(self, seconds: int) -> "WebhookBuilder":
        self._timeout = seconds
        return self

    def retries(self, count: int) -> "WebhookBuilder":
        self._retry_count = count
        return self

    def verify_ssl(self, verify: bool = True) -> "WebhookBuilder":
        return self.with_setting("verify_ssl", verify)

    def content_type(self, content_type: str) -> "WebhookBuilder":
        return self.with_setting("content_type", content_type)

    def as_json(self) -> "WebhookBuilder":
        return self.content_type(CONTENT_TYPES[0])

    def as_form(self) -> "WebhookBuilder":
        return self.content_type(CONTENT_TYPES[1])

    def to_dto(self) -> Webhook:
        if not self._event:
            raise ValidationError("Event is required to create WebhookDTO")
        if not self._url:
            raise ValidationError("URL is required to create WebhookDTO")

        return Webhook(
            event=self._event,
            url=self._url,
            enabled=self._enabled,
            name=self._name,
            settings=dict(self._settings),
            headers=dict(self._headers),
            secret=self._secret,
            timeout=self._timeout,
            retry_count=self._retry_count,
        )

    # Terminal operations

    def create(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def find(self, webhook_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(webhook_id)

    def update(self, webhook_id: str) -> Dict[str, Any]:
        return self._service.update(webhook_id, self.to_dto())

    def delete(self, webhook_id: str) -> bool:
        return self._service.delete(webhook_id)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def enable(self, webhook_id: str) -> Dict[str, Any]:
        return self._service.enable(webhook_id)

    def disable(self, webhook_id: str) -> Dict[str, Any]:
        return self._service.disable(webhook_id)

    def test(self, webhook_id: str) -> Dict[str, Any]:
        return self._service.test(webhook_id)

    def logs(self, webhook_id: str, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.get_logs(webhook_id, filters or {})

    def stats(self, webhook_id: str) -> Dict[str, Any]:
        return self._service.get_stats(webhook_id)

    def find_by_url(self, url: str, event: Optional[str] = None) -> Optional[Dict[str, Any]]:
        return self._service.find_by_url(url, event)

    def delete_by_url(self, url: str, event: Optional[str] = None) -> bool:
        return self._service.delete_by_url(url, event)

    # One-shot shortcuts

    def on_subscriber_created(self, url: str) -> Dict[str, Any]:
        return self.on("subscriber.created").url(url).create()

    def on_subscriber_updated(self, url: str) -> Dict[str, Any]:
        return self.on("subscriber.updated").url(url).create()

    def on_subscriber_unsubscribed(self, url: str) -> Dict[str, Any]:
        return self.on("subscriber.unsubscribed").url(url).create()

    def on_campaign_sent(self, url: str) -> Dict[str, Any]:
        return self.on("campaign.sent").url(url).create()

    def on_campaign_opened(self, url: str) -> Dict[str, Any]:
        return self.on("campaign.opened").url(url).create()

    def on_campaign_clicked(self, url: str) -> Dict[str, Any]:
        return self.on("campaign.clicked").url(url).create()
