"""
MailerLite implementation of ``SubscribersApi``.
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional, Union

from ...api.subscribers import GroupId, Subscriber, SubscriberStatus
from ...core.errors import (
    IntegrationError,
    SubscriberCreateError,
    SubscriberDeleteError,
    SubscriberNotFoundError,
    SubscriberUpdateError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_duplicate,
    is_invalid_data,
    is_not_found,
    payload_of,
    unwrap_page,
)
from .subscriber_mapper import transform_subscriber


logger = get_logger("mailerlite.resources.subscribers")


class SubscriberService(BaseService):
    """
    Subscriber operations backed by the MailerLite API.
    """

    endpoint_name = "subscribers"

    def create(self, subscriber: Subscriber) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(subscriber.to_dict())
        except IntegrationError as exc:
            self._create_failed(subscriber.email, exc)

        logger.info("Created subscriber %s", subscriber.email)
        return transform_subscriber(raw)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self._lookup(email)

    def get_by_id(self, subscriber_id: str) -> Optional[Dict[str, Any]]:
        return self._lookup(subscriber_id)

    def _lookup(self, identifier: str) -> Optional[Dict[str, Any]]:
        # The find endpoint accepts either an ID or an email address.
        try:
            raw = self._endpoint().find(identifier)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_subscriber(raw)

    def update(
        self, subscriber_id: str, data: Union[Subscriber, Dict[str, Any]]
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(subscriber_id, payload_of(data))
        except IntegrationError as exc:
            self._update_failed(subscriber_id, exc)
        return transform_subscriber(raw)

    def delete(self, subscriber_id: str) -> bool:
        try:
            self._endpoint().delete(subscriber_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(SubscriberNotFoundError.with_id(subscriber_id), exc)
            self._fail(SubscriberDeleteError.make(subscriber_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_subscriber)

    def add_to_group(self, subscriber_id: str, group_id: GroupId) -> Dict[str, Any]:
        try:
            raw = self._endpoint().add_to_group(subscriber_id, group_id)
        except IntegrationError as exc:
            self._update_failed(subscriber_id, exc)
        return transform_subscriber(raw)

    def remove_from_group(self, subscriber_id: str, group_id: GroupId) -> bool:
        try:
            self._endpoint().remove_from_group(subscriber_id, group_id)
        except IntegrationError as exc:
            self._update_failed(subscriber_id, exc)
        return True

    def unsubscribe(self, subscriber_id: str) -> Dict[str, Any]:
        return self.update(subscriber_id, {"status": SubscriberStatus.UNSUBSCRIBED.value})

    def resubscribe(self, subscriber_id: str) -> Dict[str, Any]:
        return self.update(subscriber_id, {"status": SubscriberStatus.ACTIVE.value})

    # Error classification

    def _create_failed(self, email: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_duplicate(exc):
            self._fail(SubscriberCreateError.already_exists(email, exc), exc)
        if is_invalid_data(exc):
            self._fail(SubscriberCreateError.invalid_data(email, ["Validation failed"], exc), exc)
        self._fail(SubscriberCreateError.make(email, str(exc), exc), exc)

    def _update_failed(self, subscriber_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(SubscriberNotFoundError.with_id(subscriber_id), exc)
        if is_invalid_data(exc):
            self._fail(
                SubscriberUpdateError.invalid_data(subscriber_id, ["Validation failed"], exc),
                exc,
            )
        self._fail(SubscriberUpdateError.make(subscriber_id, str(exc), exc), exc)
