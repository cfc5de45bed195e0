"""
Subscriber DTO and service interface.

``Subscriber`` is the validated request payload for creating or updating a
subscriber. ``SubscribersApi`` is the interface builders program against;
``SubscriberService`` under ``resources/subscribers`` implements it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import id_list, is_scalar, is_valid_email, one_of, unique


DISPOSABLE_DOMAINS = (
    "10minutemail.com",
    "tempmail.org",
    "guerrillamail.com",
    "mailinator.com",
)


class SubscriberStatus(str, Enum):
    """
    Subscription status as reported by MailerLite.
    """

    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"
    UNCONFIRMED = "unconfirmed"
    BOUNCED = "bounced"
    JUNK = "junk"


class SubscriberType(str, Enum):
    REGULAR = "regular"
    UNSUBSCRIBED = "unsubscribed"
    IMPORTED = "imported"


GroupId = Union[str, int]


@dataclass(frozen=True)
class Subscriber(BaseDTO):
    """
    Subscriber create/update payload.

    Only ``email`` is required. Optional values equal to their default are
    left out of ``to_dict``.
    """

    email: str
    name: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    groups: List[GroupId] = field(default_factory=list)
    status: str = SubscriberStatus.ACTIVE.value
    resubscribe: bool = False
    type: Optional[str] = None
    segments: List[GroupId] = field(default_factory=list)
    autoresponders: bool = True

    def __post_init__(self) -> None:
        self._validate_email()
        one_of(self.status, [s.value for s in SubscriberStatus], "status")
        if self.type is not None:
            one_of(self.type, [t.value for t in SubscriberType], "type")
        self._validate_fields()
        id_list(self.groups, "Group")
        id_list(self.segments, "Segment")

    def _validate_email(self) -> None:
        if not self.email or not self.email.strip():
            raise ValidationError("Email cannot be empty.")
        if not is_valid_email(self.email):
            raise ValidationError(f"Invalid email address: {self.email}")
        domain = self.email.rsplit("@", 1)[1].lower()
        if domain in DISPOSABLE_DOMAINS:
            raise ValidationError(
                f"Disposable email addresses are not allowed: {self.email}"
            )

    def _validate_fields(self) -> None:
        for key, item in self.fields.items():
            if not isinstance(key, str) or key.strip() == "":
                raise ValidationError("Field keys must be non-empty strings.")
            if item is not None and not is_scalar(item):
                raise ValidationError(
                    f"Field '{key}' has invalid value type. Must be scalar or null."
                )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"email": self.email}
        if self.name is not None:
            data["name"] = self.name
        if self.fields:
            data["fields"] = dict(self.fields)
        if self.groups:
            data["groups"] = list(self.groups)
        if self.status != SubscriberStatus.ACTIVE.value:
            data["status"] = self.status
        if self.resubscribe:
            data["resubscribe"] = True
        if self.type is not None:
            data["type"] = self.type
        if self.segments:
            data["segments"] = list(self.segments)
        if not self.autoresponders:
            data["autoresponders"] = False
        return data

    # Named constructors

    @classmethod
    def create(cls, email: str, name: Optional[str] = None) -> "Subscriber":
        return cls(email=email, name=name)

    @classmethod
    def create_with_groups(
        cls, email: str, groups: List[GroupId], name: Optional[str] = None
    ) -> "Subscriber":
        return cls(email=email, name=name, groups=list(groups))

    @classmethod
    def create_with_fields(
        cls, email: str, fields: Dict[str, Any], name: Optional[str] = None
    ) -> "Subscriber":
        return cls(email=email, name=name, fields=dict(fields))

    # Immutable updates

    def with_name(self, name: str) -> "Subscriber":
        return self.with_(name=name)

    def with_groups(self, groups: List[GroupId]) -> "Subscriber":
        """
        Add ``groups`` to the existing ones (no duplicates).
        """

        return self.with_(groups=unique([*self.groups, *groups]))

    def with_fields(self, fields: Dict[str, Any]) -> "Subscriber":
        return self.with_(fields={**self.fields, **fields})


class SubscribersApi(Protocol):
    """
    Operations offered for subscribers.
    """

    def create(self, subscriber: Subscriber) -> Dict[str, Any]:
        ...

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        ...

    def get_by_id(self, subscriber_id: str) -> Optional[Dict[str, Any]]:
        ...

    def update(self, subscriber_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def delete(self, subscriber_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def add_to_group(self, subscriber_id: str, group_id: GroupId) -> Dict[str, Any]:
        ...

    def remove_from_group(self, subscriber_id: str, group_id: GroupId) -> bool:
        ...

    def unsubscribe(self, subscriber_id: str) -> Dict[str, Any]:
        ...

    def resubscribe(self, subscriber_id: str) -> Dict[str, Any]:
        ...
