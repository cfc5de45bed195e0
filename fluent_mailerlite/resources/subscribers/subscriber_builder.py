"""
Fluent builder for subscribers.

Example::

    mailerlite.subscribers() \\
        .email("jane@example.com") \\
        .named("Jane") \\
        .to_group("newsletter") \\
        .and_with_field("company", "ACME") \\
        .subscribe()
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ...api.subscribers import GroupId, Subscriber, SubscriberStatus, SubscriberType, SubscribersApi
from ...core.errors import ValidationError
from ...core.validation import unique
from ..base import FluentBuilder


class SubscriberBuilder(FluentBuilder):
    """
    Accumulates subscriber attributes, then hands a ``Subscriber`` DTO to
    the service.

    Email-based operations (``find``, ``update``, ``delete``, ...) look the
    subscriber up first and return ``None``/``False`` when it does not exist.
    """

    def __init__(self, service: SubscribersApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._email: Optional[str] = None
        self._name: Optional[str] = None
        self._fields: Dict[str, Any] = {}
        self._groups: List[GroupId] = []
        self._segments: List[GroupId] = []
        self._status = SubscriberStatus.ACTIVE.value
        self._resubscribe = False
        self._type: Optional[str] = None
        self._autoresponders = True

    # Setters

    def email(self, email: str) -> "SubscriberBuilder":
        self._email = email
        return self

    def named(self, name: str) -> "SubscriberBuilder":
        self._name = name
        return self

    def with_name(self, name: str) -> "SubscriberBuilder":
        return self.named(name)

    def with_fields(self, fields: Dict[str, Any]) -> "SubscriberBuilder":
        self._fields.update(fields)
        return self

    def with_field(self, key: str, value: Any) -> "SubscriberBuilder":
        self._fields[key] = value
        return self

    def to_group(self, group: Union[GroupId, List[GroupId]]) -> "SubscriberBuilder":
        if isinstance(group, list):
            self._groups.extend(group)
        else:
            self._groups.append(group)
        return self

    def to_groups(self, groups: List[GroupId]) -> "SubscriberBuilder":
        return self.to_group(list(groups))

    def to_segment(self, segment: Union[GroupId, List[GroupId]]) -> "SubscriberBuilder":
        if isinstance(segment, list):
            self._segments.extend(segment)
        else:
            self._segments.append(segment)
        return self

    def to_segments(self, segments: List[GroupId]) -> "SubscriberBuilder":
        return self.to_segment(list(segments))

    def active(self) -> "SubscriberBuilder":
        self._status = SubscriberStatus.ACTIVE.value
        return self

    def unsubscribed(self) -> "SubscriberBuilder":
        self._status = SubscriberStatus.UNSUBSCRIBED.value
        return self

    def unconfirmed(self) -> "SubscriberBuilder":
        self._status = SubscriberStatus.UNCONFIRMED.value
        return self

    def resubscribe_if_exists(self) -> "SubscriberBuilder":
        self._resubscribe = True
        return self

    def imported(self) -> "SubscriberBuilder":
        self._type = SubscriberType.IMPORTED.value
        return self

    def regular(self) -> "SubscriberBuilder":
        self._type = SubscriberType.REGULAR.value
        return self

    def without_autoresponders(self) -> "SubscriberBuilder":
        self._autoresponders = False
        return self

    def with_autoresponders(self) -> "SubscriberBuilder":
        self._autoresponders = True
        return self

    # DTO

    def to_dto(self) -> Subscriber:
        if not self._email:
            raise ValidationError("Email is required to create SubscriberDTO")

        return Subscriber(
            email=self._email,
            name=self._name,
            fields=dict(self._fields),
            groups=unique(self._groups),
            status=self._status,
            resubscribe=self._resubscribe,
            type=self._type,
            segments=unique(self._segments),
            autoresponders=self._autoresponders,
        )

    # Terminal operations

    def subscribe(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def create(self) -> Dict[str, Any]:
        return self.subscribe()

    def find(self) -> Optional[Dict[str, Any]]:
        return self._service.get_by_email(self._require_email("find subscriber"))

    def update(self) -> Optional[Dict[str, Any]]:
        existing = self.find()
        if existing is None:
            return None
        return self._service.update(existing["id"], self.to_dto())

    def update_by_id(self, subscriber_id: str) -> Dict[str, Any]:
        return self._service.update(subscriber_id, self.to_dto())

    def unsubscribe(self) -> Optional[Dict[str, Any]]:
        existing = self._existing("unsubscribe")
        if existing is None:
            return None
        return self._service.unsubscribe(existing["id"])

    def resubscribe(self) -> Optional[Dict[str, Any]]:
        existing = self._existing("resubscribe")
        if existing is None:
            return None
        return self._service.resubscribe(existing["id"])

    def delete(self) -> bool:
        existing = self._existing("delete subscriber")
        if existing is None:
            return False
        return self._service.delete(existing["id"])

    def add_to_group(self, group_id: GroupId) -> Optional[Dict[str, Any]]:
        existing = self._existing("add to group")
        if existing is None:
            return None
        return self._service.add_to_group(existing["id"], group_id)

    def remove_from_group(self, group_id: GroupId) -> bool:
        existing = self._existing("remove from group")
        if existing is None:
            return False
        return self._service.remove_from_group(existing["id"], group_id)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def _require_email(self, action: str) -> str:
        if not self._email:
            raise ValidationError(f"Email is required to {action}")
        return self._email

    def _existing(self, action: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_email(self._require_email(action))
