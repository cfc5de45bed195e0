"""
Campaign DTO and service interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import id_list, is_valid_email, max_length, one_of, unique


SCHEDULE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CampaignType(str, Enum):
    REGULAR = "regular"
    AB = "ab"
    RESEND = "resend"


class ABTestType(str, Enum):
    SUBJECT = "subject"
    FROM_NAME = "from_name"
    CONTENT = "content"


@dataclass(frozen=True)
class Campaign(BaseDTO):
    """
    Campaign create/update payload.

    ``subject`` identifies the campaign in errors. ``type`` is always sent;
    the other optional values only when set.
    """

    subject: str
    from_name: str
    from_email: str
    html: Optional[str] = None
    plain: Optional[str] = None
    groups: List[Union[str, int]] = field(default_factory=list)
    segments: List[Union[str, int]] = field(default_factory=list)
    schedule_at: Optional[datetime] = None
    type: str = CampaignType.REGULAR.value
    settings: Dict[str, Any] = field(default_factory=dict)
    ab_settings: Dict[str, Any] = field(default_factory=dict)
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.subject or not self.subject.strip():
            raise ValidationError("Campaign subject cannot be empty.")
        max_length(self.subject, 255, "Campaign subject cannot exceed 255 characters.")

        if not self.from_name or not self.from_name.strip():
            raise ValidationError("From name cannot be empty.")
        max_length(self.from_name, 100, "From name cannot exceed 100 characters.")

        if not self.from_email or not self.from_email.strip():
            raise ValidationError("From email cannot be empty.")
        if not is_valid_email(self.from_email):
            raise ValidationError(f"Invalid from email address: {self.from_email}")

        self._validate_content()
        id_list(self.groups, "Group")
        id_list(self.segments, "Segment")
        one_of(self.type, [t.value for t in CampaignType], "campaign type")

        if self.schedule_at is not None and self.schedule_at <= _now_like(self.schedule_at):
            raise ValidationError("Schedule time must be in the future.")

        self._validate_ab_settings()

    def _validate_content(self) -> None:
        if self.html is None and self.plain is None:
            raise ValidationError("Campaign must have either HTML or plain text content.")
        if self.html is not None and not self.html.strip():
            raise ValidationError("HTML content cannot be empty if provided.")
        if self.plain is not None and not self.plain.strip():
            raise ValidationError("Plain text content cannot be empty if provided.")

    def _validate_ab_settings(self) -> None:
        if self.type == CampaignType.AB.value and not self.ab_settings:
            raise ValidationError(
                'A/B test settings are required when campaign type is "ab".'
            )
        if self.type != CampaignType.AB.value:
            if self.ab_settings:
                raise ValidationError(
                    'A/B test settings can only be used with campaign type "ab".'
                )
            return

        for required in ("test_type", "send_size"):
            if required not in self.ab_settings:
                raise ValidationError(f"A/B test setting '{required}' is required.")

        one_of(self.ab_settings["test_type"], [t.value for t in ABTestType], "A/B test type")

        send_size = self.ab_settings["send_size"]
        if isinstance(send_size, bool) or not isinstance(send_size, int) or not 10 <= send_size <= 50:
            raise ValidationError("A/B test send size must be an integer between 10 and 50.")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "subject": self.subject,
            "from_name": self.from_name,
            "from_email": self.from_email,
        }
        if self.name is not None:
            data["name"] = self.name
        if self.html is not None:
            data["html"] = self.html
        if self.plain is not None:
            data["plain"] = self.plain
        if self.groups:
            data["groups"] = list(self.groups)
        if self.segments:
            data["segments"] = list(self.segments)
        if self.schedule_at is not None:
            data["schedule_at"] = self.schedule_at.strftime(SCHEDULE_FORMAT)
        data["type"] = self.type
        if self.settings:
            data["settings"] = dict(self.settings)
        if self.ab_settings:
            data["ab_settings"] = dict(self.ab_settings)
        return data

    @classmethod
    def _prepare(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        schedule_at = data.get("schedule_at")
        if isinstance(schedule_at, str):
            data["schedule_at"] = parse_schedule(schedule_at)
        return data

    # Named constructors

    @classmethod
    def create(
        cls, subject: str, from_name: str, from_email: str, **options: Any
    ) -> "Campaign":
        return cls(subject=subject, from_name=from_name, from_email=from_email, **options)

    @classmethod
    def create_with_html(
        cls, subject: str, from_name: str, from_email: str, html: str, **options: Any
    ) -> "Campaign":
        return cls.create(subject, from_name, from_email, html=html, **options)

    @classmethod
    def create_with_content(
        cls,
        subject: str,
        from_name: str,
        from_email: str,
        html: str,
        plain: str,
        **options: Any,
    ) -> "Campaign":
        return cls.create(subject, from_name, from_email, html=html, plain=plain, **options)

    # Immutable updates

    def with_subject(self, subject: str) -> "Campaign":
        return self.with_(subject=subject)

    def with_from(self, from_name: str, from_email: str) -> "Campaign":
        return self.with_(from_name=from_name, from_email=from_email)

    def with_html(self, html: str) -> "Campaign":
        return self.with_(html=html)

    def with_groups(self, groups: List[Union[str, int]]) -> "Campaign":
        return self.with_(groups=unique([*self.groups, *groups]))

    def with_segments(self, segments: List[Union[str, int]]) -> "Campaign":
        return self.with_(segments=unique([*self.segments, *segments]))

    def with_schedule(self, schedule_at: datetime) -> "Campaign":
        return self.with_(schedule_at=schedule_at)


def parse_schedule(text: str) -> datetime:
    """
    Parse ``YYYY-MM-DD HH:MM:SS`` or any ISO-8601 timestamp.
    """

    try:
        return datetime.strptime(text, SCHEDULE_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid schedule time: {text}") from exc


def _now_like(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return datetime.now(moment.tzinfo)
    return datetime.now()


class CampaignsApi(Protocol):
    """
    Operations offered for campaigns.
    """

    def create(self, campaign: Campaign) -> Dict[str, Any]:
        ...

    def draft(self, campaign: Campaign) -> Dict[str, Any]:
        ...

    def get_by_id(self, campaign_id: str) -> Optional[Dict[str, Any]]:
        ...

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def require_by_name(self, name: str) -> Dict[str, Any]:
        ...

    def update(self, campaign_id: str, campaign: Campaign) -> Dict[str, Any]:
        ...

    def delete(self, campaign_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def schedule(self, campaign_id: str, schedule_at: datetime) -> Dict[str, Any]:
        ...

    def send(self, campaign_id: str) -> Dict[str, Any]:
        ...

    def cancel(self, campaign_id: str) -> Dict[str, Any]:
        ...

    def get_stats(self, campaign_id: str) -> Dict[str, Any]:
        ...

    def get_subscribers(
        self, campaign_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...
