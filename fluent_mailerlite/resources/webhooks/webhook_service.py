"""
MailerLite implementation of ``WebhooksApi``.
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

from ...api.webhooks import Webhook
from ...core.errors import (
    IntegrationError,
    WebhookCreateError,
    WebhookDeleteError,
    WebhookNotFoundError,
    WebhookUpdateError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_duplicate,
    is_invalid_data,
    is_not_found,
    mentions,
    payload_of,
    scan_pages,
    unwrap_page,
    unwrap_resource,
)
from .webhook_mapper import transform_webhook


logger = get_logger("mailerlite.resources.webhooks")


class WebhookService(BaseService):
    """
    Webhook operations backed by the MailerLite API.
    """

    endpoint_name = "webhooks"

    def create(self, webhook: Webhook) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(webhook.to_dict())
        except IntegrationError as exc:
            self._create_failed(webhook, exc)

        logger.info(
            "Created webhook",
            extra={"event": webhook.event, "url": webhook.url},
        )
        return transform_webhook(raw)

    def get_by_id(self, webhook_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(webhook_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_webhook(raw)

    def find_by_url(self, url: str, event: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Linear scan of every webhook page for ``url`` (and ``event`` when
        given).
        """

        def matches(item: Dict[str, Any]) -> bool:
            return item.get("url") == url and (event is None or item.get("event") == event)

        return scan_pages(self.list, matches)

    def update(self, webhook_id: str, webhook: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(webhook_id, payload_of(webhook))
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(WebhookNotFoundError.with_id(webhook_id), exc)
            if is_invalid_data(exc):
                self._fail(
                    WebhookUpdateError.invalid_data(webhook_id, ["Validation failed"], exc),
                    exc,
                )
            self._fail(WebhookUpdateError.make(webhook_id, str(exc), exc), exc)
        return transform_webhook(raw)

    def delete(self, webhook_id: str) -> bool:
        try:
            self._endpoint().delete(webhook_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(WebhookNotFoundError.with_id(webhook_id), exc)
            self._fail(WebhookDeleteError.make(webhook_id, str(exc), exc), exc)
        return True

    def delete_by_url(self, url: str, event: Optional[str] = None) -> bool:
        webhook = self.find_by_url(url, event)
        if webhook is None:
            raise WebhookNotFoundError.with_url(url)
        return self.delete(webhook["id"])

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_webhook)

    def enable(self, webhook_id: str) -> Dict[str, Any]:
        return self.update(webhook_id, {"enabled": True})

    def disable(self, webhook_id: str) -> Dict[str, Any]:
        return self.update(webhook_id, {"enabled": False})

    def test(self, webhook_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().test(webhook_id)
        except IntegrationError as exc:
            self._lookup_failed(webhook_id, exc)
        return unwrap_resource(raw)

    def get_logs(
        self, webhook_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_logs(webhook_id, filters or {})
        except IntegrationError as exc:
            self._lookup_failed(webhook_id, exc)
        return unwrap_page(raw)

    def get_stats(self, webhook_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_stats(webhook_id)
        except IntegrationError as exc:
            self._lookup_failed(webhook_id, exc)
        return unwrap_resource(raw)

    # Error classification

    def _create_failed(self, webhook: Webhook, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_invalid_data(exc):
            self._fail(
                WebhookCreateError.invalid_data(webhook.url, ["Validation failed"], exc), exc
            )
        if is_duplicate(exc):
            self._fail(WebhookCreateError.already_exists(webhook.url, exc), exc)
        if mentions(exc, "invalid url", "unreachable"):
            self._fail(WebhookCreateError.invalid_url(webhook.url, exc), exc)
        if mentions(exc, "invalid event"):
            self._fail(WebhookCreateError.invalid_event(webhook.event, webhook.url, exc), exc)
        self._fail(WebhookCreateError.make(webhook.url, str(exc), exc), exc)

    def _lookup_failed(self, webhook_id: str, exc: IntegrationError) -> NoReturn:
        if is_not_found(exc):
            self._fail(WebhookNotFoundError.with_id(webhook_id), exc)
        self._reraise(exc)
