"""
Webhook DTO and service interface.

A webhook listens for exactly one event; MailerLite expects it wrapped as
``{"events": [event]}`` on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any, Dict, Optional, Protocol, Sequence

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import is_valid_url, max_length


SUBSCRIBER_EVENTS = (
    "subscriber.created",
    "subscriber.updated",
    "subscriber.unsubscribed",
    "subscriber.bounced",
    "subscriber.complained",
    "subscriber.deleted",
)
CAMPAIGN_EVENTS = (
    "campaign.sent",
    "campaign.opened",
    "campaign.clicked",
    "campaign.bounced",
    "campaign.complained",
    "campaign.unsubscribed",
    "campaign.delivered",
    "campaign.soft_bounced",
    "campaign.hard_bounced",
)
AUTOMATION_EVENTS = (
    "automation.subscriber_added",
    "automation.subscriber_completed",
    "automation.email_sent",
    "automation.started",
    "automation.stopped",
)
FORM_EVENTS = ("form.submitted",)
GROUP_EVENTS = ("group.subscriber_added", "group.subscriber_removed")

WEBHOOK_EVENTS = (
    SUBSCRIBER_EVENTS
    + CAMPAIGN_EVENTS
    + AUTOMATION_EVENTS
    + FORM_EVENTS
    + GROUP_EVENTS
    + ("webhook.test",)
)

CONTENT_TYPES = ("application/json", "application/x-www-form-urlencoded")
HEADER_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]+$")

DEFAULT_TIMEOUT = 30
DEFAULT_RETRY_COUNT = 3


def _require_event(event: str, allowed: Sequence[str], label: str) -> None:
    if event not in allowed:
        raise ValidationError(
            f"Invalid {label} '{event}'. Valid events: {', '.join(allowed)}"
        )


def validate_headers(headers: Dict[Any, Any]) -> None:
    for name, header_value in headers.items():
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Header names must be non-empty strings.")
        if not isinstance(header_value, str):
            raise ValidationError(f"Header '{name}' value must be a string.")
        if not HEADER_NAME_PATTERN.match(name):
            raise ValidationError(
                f"Invalid header name '{name}'. Only alphanumeric characters, "
                "hyphens, and underscores are allowed."
            )


@dataclass(frozen=True)
class Webhook(BaseDTO):
    """
    Webhook create/update payload.
    """

    event: str
    url: str
    enabled: bool = True
    name: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    secret: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT
    retry_count: int = DEFAULT_RETRY_COUNT

    def __post_init__(self) -> None:
        self._validate_event()
        self._validate_url()
        max_length(self.name, 255, "Webhook name cannot exceed 255 characters.")
        self._validate_settings()
        validate_headers(self.headers)
        if self.secret is not None and not self.secret.strip():
            raise ValidationError("Webhook secret cannot be empty.")
        if not 1 <= self.timeout <= 300:
            raise ValidationError("Webhook timeout must be between 1 and 300 seconds.")
        if not 0 <= self.retry_count <= 10:
            raise ValidationError("Webhook retry count must be between 0 and 10.")

    def _validate_event(self) -> None:
        if not self.event or not self.event.strip():
            raise ValidationError("Webhook event cannot be empty.")
        _require_event(self.event, WEBHOOK_EVENTS, "webhook event")

    def _validate_url(self) -> None:
        if not self.url or not self.url.strip():
            raise ValidationError("Webhook URL cannot be empty.")
        if not is_valid_url(self.url):
            raise ValidationError(f"Invalid webhook URL: {self.url}")
        if not self.url.startswith("https://"):
            raise ValidationError("Webhook URL must use HTTPS for security.")
        max_length(self.url, 2048, "Webhook URL cannot exceed 2048 characters.")

    def _validate_settings(self) -> None:
        verify_ssl = self.settings.get("verify_ssl")
        if verify_ssl is not None and not isinstance(verify_ssl, bool):
            raise ValidationError("Setting verify_ssl must be a boolean.")
        content_type = self.settings.get("content_type")
        if content_type is not None and content_type not in CONTENT_TYPES:
            raise ValidationError(
                'Setting content_type must be either "application/json" '
                'or "application/x-www-form-urlencoded".'
            )

    @classmethod
    def _prepare(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        # API responses carry the list form; a webhook only ever has one.
        if data.get("event") is None and data.get("events"):
            data["event"] = data["events"][0]
        return data

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "events": [self.event],
            "url": self.url,
            "enabled": self.enabled,
        }
        if self.name is not None:
            data["name"] = self.name
        if self.settings:
            data["settings"] = dict(self.settings)
        if self.headers:
            data["headers"] = dict(self.headers)
        if self.secret is not None:
            data["secret"] = self.secret
        if self.timeout != DEFAULT_TIMEOUT:
            data["timeout"] = self.timeout
        if self.retry_count != DEFAULT_RETRY_COUNT:
            data["retry_count"] = self.retry_count
        return data

    # Named constructors

    @classmethod
    def create(cls, event: str, url: str, name: Optional[str] = None) -> "Webhook":
        return cls(event=event, url=url, name=name)

    @classmethod
    def for_subscriber(cls, event: str, url: str) -> "Webhook":
        _require_event(event, SUBSCRIBER_EVENTS[:5], "subscriber event")
        return cls(event=event, url=url)

    @classmethod
    def for_campaign(cls, event: str, url: str) -> "Webhook":
        _require_event(event, CAMPAIGN_EVENTS[:6], "campaign event")
        return cls(event=event, url=url)

    @classmethod
    def for_automation(cls, event: str, url: str) -> "Webhook":
        _require_event(event, AUTOMATION_EVENTS[:3], "automation event")
        return cls(event=event, url=url)

    @classmethod
    def create_with_headers(cls, event: str, url: str, headers: Dict[str, str]) -> "Webhook":
        return cls(event=event, url=url, headers=dict(headers))

    @classmethod
    def create_with_secret(cls, event: str, url: str, secret: str) -> "Webhook":
        return cls(event=event, url=url, secret=secret)

    # Immutable updates

    def with_name(self, name: str) -> "Webhook":
        return self.with_(name=name)

    def with_enabled(self, enabled: bool) -> "Webhook":
        return self.with_(enabled=enabled)

    def with_headers(self, headers: Dict[str, str]) -> "Webhook":
        return self.with_(headers={**self.headers, **headers})

    def with_settings(self, settings: Dict[str, Any]) -> "Webhook":
        return self.with_(settings={**self.settings, **settings})

    def with_secret(self, secret: str) -> "Webhook":
        return self.with_(secret=secret)

    def with_timeout(self, timeout: int) -> "Webhook":
        return self.with_(timeout=timeout)

    def with_retry_count(self, retry_count: int) -> "Webhook":
        return self.with_(retry_count=retry_count)


class WebhooksApi(Protocol):
    """
    Operations offered for webhooks.
    """

    def create(self, webhook: Webhook) -> Dict[str, Any]:
        ...

    def get_by_id(self, webhook_id: str) -> Optional[Dict[str, Any]]:
        ...

    def find_by_url(self, url: str, event: Optional[str] = None) -> Optional[Dict[str, Any]]:
        ...

    def update(self, webhook_id: str, webhook: Any) -> Dict[str, Any]:
        ...

    def delete(self, webhook_id: str) -> bool:
        ...

    def delete_by_url(self, url: str, event: Optional[str] = None) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def enable(self, webhook_id: str) -> Dict[str, Any]:
        ...

    def disable(self, webhook_id: str) -> Dict[str, Any]:
        ...

    def test(self, webhook_id: str) -> Dict[str, Any]:
        ...

    def get_logs(
        self, webhook_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...

    def get_stats(self, webhook_id: str) -> Dict[str, Any]:
        ...
