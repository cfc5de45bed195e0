"""
Fluent builder for campaigns.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union

from ...api.campaigns import CampaignType, Campaign, CampaignsApi, parse_schedule
from ...core.errors import ValidationError
from ...core.validation import unique
from ..base import FluentBuilder


RecipientId = Union[str, int]


class CampaignBuilder(FluentBuilder):
    """
    Accumulates campaign attributes.

    ``send()`` and ``schedule()`` create the campaign first and only then
    send or schedule it; a failed create stops there.
    """

    def __init__(self, service: CampaignsApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._subject: Optional[str] = None
        self._name: Optional[str] = None
        self._from_name: Optional[str] = None
        self._from_email: Optional[str] = None
        self._html: Optional[str] = None
        self._plain: Optional[str] = None
        self._groups: List[RecipientId] = []
        self._segments: List[RecipientId] = []
        self._schedule_at: Optional[datetime] = None
        self._type = CampaignType.REGULAR.value
        self._settings: Dict[str, Any] = {}
        self._ab_settings: Dict[str, Any] = {}
        self._is_draft = False

    # Setters

    def draft(self) -> "CampaignBuilder":
        self._is_draft = True
        return self

    def subject(self, subject: str) -> "CampaignBuilder":
        self._subject = subject
        return self

    def named(self, name: str) -> "CampaignBuilder":
        self._name = name
        return self

    def from_(self, name: str, email: str) -> "CampaignBuilder":
        self._from_name = name
        self._from_email = email
        return self

    def from_name(self, name: str) -> "CampaignBuilder":
        self._from_name = name
        return self

    def from_email(self, email: str) -> "CampaignBuilder":
        self._from_email = email
        return self

    def html(self, html: str) -> "CampaignBuilder":
        self._html = html
        return self

    def plain(self, plain: str) -> "CampaignBuilder":
        self._plain = plain
        return self

    def content(self, html: str, plain: Optional[str] = None) -> "CampaignBuilder":
        self._html = html
        if plain is not None:
            self._plain = plain
        return self

    def to_group(self, group: Union[RecipientId, List[RecipientId]]) -> "CampaignBuilder":
        self._groups.extend(group if isinstance(group, list) else [group])
        return self

    def to_groups(self, groups: List[RecipientId]) -> "CampaignBuilder":
        return self.to_group(list(groups))

    def to_segment(self, segment: Union[RecipientId, List[RecipientId]]) -> "CampaignBuilder":
        self._segments.extend(segment if isinstance(segment, list) else [segment])
        return self

    def to_segments(self, segments: List[RecipientId]) -> "CampaignBuilder":
        return self.to_segment(list(segments))

    def schedule_at(self, when: datetime) -> "CampaignBuilder":
        self._schedule_at = when
        return self

    def schedule_in(self, minutes: int) -> "CampaignBuilder":
        self._schedule_at = datetime.now() + timedelta(minutes=minutes)
        return self

    def schedule_for(self, when: str) -> "CampaignBuilder":
        self._schedule_at = parse_schedule(when)
        return self

    def regular(self) -> "CampaignBuilder":
        self._type = CampaignType.REGULAR.value
        self._ab_settings = {}
        return self

    def ab_test(self, settings: Dict[str, Any]) -> "CampaignBuilder":
        self._type = CampaignType.AB.value
        self._ab_settings = dict(settings)
        return self

    def resend(self) -> "CampaignBuilder":
        self._type = CampaignType.RESEND.value
        return self

    def with_settings(self, settings: Dict[str, Any]) -> "CampaignBuilder":
        self._settings.update(settings)
        return self

    def with_setting(self, key: str, value: Any) -> "CampaignBuilder":
        self._settings[key] = value
        return self

    # DTO

    def to_dto(self) -> Campaign:
        if not self._subject:
            raise ValidationError("Subject is required to create CampaignDTO")
        if not self._from_name:
            raise ValidationError("From name is required to create CampaignDTO")
        if not self._from_email:
            raise ValidationError("From email is required to create CampaignDTO")

        return Campaign(
            subject=self._subject,
            from_name=self._from_name,
            from_email=self._from_email,
            html=self._html,
            plain=self._plain,
            groups=unique(self._groups),
            segments=unique(self._segments),
            schedule_at=self._schedule_at,
            type=self._type,
            settings=dict(self._settings),
            ab_settings=dict(self._ab_settings),
            name=self._name,
        )

    # Terminal operations

    def create(self) -> Dict[str, Any]:
        dto = self.to_dto()
        if self._is_draft:
            return self._service.draft(dto)
        return self._service.create(dto)

    def send(self) -> Dict[str, Any]:
        campaign = self.create()
        return self._service.send(campaign["id"])

    def schedule(self) -> Dict[str, Any]:
        if self._schedule_at is None:
            raise ValidationError("Schedule time is required to schedule campaign")
        campaign = self.create()
        return self._service.schedule(campaign["id"], self._schedule_at)

    def find(self, campaign_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(campaign_id)

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        return self._service.find_by_name(name)

    def require_by_name(self, name: str) -> Dict[str, Any]:
        return self._service.require_by_name(name)

    def update(self, campaign_id: str) -> Dict[str, Any]:
        return self._service.update(campaign_id, self.to_dto())

    def delete(self, campaign_id: str) -> bool:
        return self._service.delete(campaign_id)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def stats(self, campaign_id: str) -> Dict[str, Any]:
        return self._service.get_stats(campaign_id)

    def subscribers(
        self, campaign_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._service.get_subscribers(campaign_id, filters or {})

    def send_by_id(self, campaign_id: str) -> Dict[str, Any]:
        return self._service.send(campaign_id)

    def schedule_by_id(self, campaign_id: str, when: datetime) -> Dict[str, Any]:
        return self._service.schedule(campaign_id, when)

    def cancel(self, campaign_id: str) -> Dict[str, Any]:
        return self._service.cancel(campaign_id)
