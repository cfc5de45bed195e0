"""
Fluent builder for segments.

Example::

    mailerlite.segments() \\
        .named("Engaged Dutch readers") \\
        .where_field("country", "equals", "NL") \\
        .and_who_opened(days=30) \\
        .to_dto()
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ...api.segments import (
    Segment,
    SegmentsApi,
    date_filter,
    email_activity_filter,
    field_filter,
    group_filter,
)
from ...core.errors import ValidationError
from ...core.validation import unique
from ..base import FluentBuilder


class SegmentBuilder(FluentBuilder):
    def __init__(self, service: SegmentsApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._name: Optional[str] = None
        self._description: Optional[str] = None
        self._filters: List[Dict[str, Any]] = []
        self._tags: List[str] = []
        self._options: Dict[str, Any] = {}
        self._active = True

    # Identity

    def name(self, name: str) -> "SegmentBuilder":
        self._name = name
        return self

    def named(self, name: str) -> "SegmentBuilder":
        return self.name(name)

    def with_description(self, description: str) -> "SegmentBuilder":
        self._description = description
        return self

    def description(self, description: str) -> "SegmentBuilder":
        return self.with_description(description)

    # Filters

    def where_field(self, field_name: str, operator: str, value: Any) -> "SegmentBuilder":
        self._filters.append(field_filter(field_name, operator, value))
        return self

    def where_group(self, group_id: Union[str, int], is_member: bool = True) -> "SegmentBuilder":
        self._filters.append(group_filter(group_id, is_member))
        return self

    def where_date(self, field_name: str, operator: str, value: Any) -> "SegmentBuilder":
        self._filters.append(date_filter(field_name, operator, value))
        return self

    def where_email_activity(
        self, activity: str, campaign_id: Optional[str] = None, days: Optional[int] = None
    ) -> "SegmentBuilder":
        self._filters.append(email_activity_filter(activity, campaign_id, days))
        return self

    def who_opened(self, campaign_id: Optional[str] = None, days: Optional[int] = None) -> "SegmentBuilder":
        return self.where_email_activity("opened", campaign_id, days)

    def who_clicked(self, campaign_id: Optional[str] = None, days: Optional[int] = None) -> "SegmentBuilder":
        return self.where_email_activity("clicked", campaign_id, days)

    def who_didnt_open(self, campaign_id: Optional[str] = None, days: Optional[int] = None) -> "SegmentBuilder":
        return self.where_email_activity("not_opened", campaign_id, days)

    def who_didnt_click(self, campaign_id: Optional[str] = None, days: Optional[int] = None) -> "SegmentBuilder":
        return self.where_email_activity("not_clicked", campaign_id, days)

    def in_group(self, group_id: Union[str, int]) -> "SegmentBuilder":
        return self.where_group(group_id, True)

    def not_in_group(self, group_id: Union[str, int]) -> "SegmentBuilder":
        return self.where_group(group_id, False)

    def created_after(self, date: str) -> "SegmentBuilder":
        return self.where_date("created_at", "after", date)

    def created_before(self, date: str) -> "SegmentBuilder":
        return self.where_date("created_at", "before", date)

    def subscribed_after(self, date: str) -> "SegmentBuilder":
        return self.where_date("subscribed_at", "after", date)

    def subscribed_before(self, date: str) -> "SegmentBuilder":
        return self.where_date("subscribed_at", "before", date)

    # Other attributes

    def with_tags(self, tags: Union[str, List[str]]) -> "SegmentBuilder":
        self._tags.extend([tags] if isinstance(tags, str) else tags)
        return self

    def tagged(self, tag: str) -> "SegmentBuilder":
        return self.with_tags(tag)

    def with_options(self, options: Dict[str, Any]) -> "SegmentBuilder":
        self._options.update(options)
        return self

    def active(self) -> "SegmentBuilder":
        self._active = True
        return self

    def inactive(self) -> "SegmentBuilder":
        self._active = False
        return self

    # DTOs

    def to_dto(self) -> Segment:
        if not self._name:
            raise ValidationError("Name is required to create SegmentDTO")
        if not self._filters:
            raise ValidationError("At least one filter is required to create SegmentDTO")
        return self._build(is_update=False)

    def to_update_dto(self) -> Segment:
        """
        Partial payload for updates; filters are optional here.
        """

        if not self._name:
            raise ValidationError("Name is required to update SegmentDTO")
        return self._build(is_update=True)

    def _build(self, is_update: bool) -> Segment:
        return Segment(
            name=self._name or "",
            filters=list(self._filters),
            description=self._description,
            tags=unique(self._tags),
            options=dict(self._options),
            active=self._active,
            is_update=is_update,
        )

    # Terminal operations

    def create(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def update(self, segment_id: str) -> Dict[str, Any]:
        return self._service.update(segment_id, self.to_update_dto())

    def delete(self, segment_id: str) -> bool:
        return self._service.delete(segment_id)

    def find(self, segment_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(segment_id)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def get_subscribers(
        self, segment_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._service.get_subscribers(segment_id, filters or {})

    def refresh(self, segment_id: str) -> Dict[str, Any]:
        return self._service.refresh(segment_id)

    def get_stats(self, segment_id: str) -> Dict[str, Any]:
        return self._service.get_stats(segment_id)

    def activate(self, segment_id: str) -> Dict[str, Any]:
        return self._service.activate(segment_id)

    def deactivate(self, segment_id: str) -> Dict[str, Any]:
        return self._service.deactivate(segment_id)
