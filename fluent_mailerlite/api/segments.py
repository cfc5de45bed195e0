"""
Segment DTO and service interface.

A segment is defined by a list of filters. Each filter is a dict with a
``type`` discriminator plus type-specific keys, e.g.::

    {"type": "field", "field": "country", "operator": "equals", "value": "NL"}
    {"type": "group", "group_id": "123", "operator": "in"}
    {"type": "email_activity", "activity": "opened", "campaign_id": "42"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import max_length, string_keys, unique
from .groups import validate_resource_name, validate_tags


class FilterType(str, Enum):
    FIELD = "field"
    GROUP = "group"
    DATE = "date"
    EMAIL_ACTIVITY = "email_activity"
    SURVEY = "survey"
    AUTOMATION = "automation"


_REQUIRED_FILTER_KEYS = {
    FilterType.FIELD.value: ("Field", ("field", "operator", "value")),
    FilterType.GROUP.value: ("Group", ("group_id", "operator")),
    FilterType.DATE.value: ("Date", ("field", "operator", "value")),
    FilterType.EMAIL_ACTIVITY.value: ("Email activity", ("activity",)),
}


def _quoted(keys: tuple) -> str:
    quoted = [f"'{key}'" for key in keys]
    if len(quoted) <= 2:
        return " and ".join(quoted)
    return ", ".join(quoted[:-1]) + ", and " + quoted[-1]


def validate_filters(filters: List[Any]) -> None:
    if not filters:
        raise ValidationError("At least one filter is required to create SegmentDTO")

    valid_types = [t.value for t in FilterType]
    for index, entry in enumerate(filters):
        if not isinstance(entry, dict):
            raise ValidationError(f"Filter at index {index} must be an array.")
        filter_type = entry.get("type")
        if not filter_type:
            raise ValidationError(f"Filter at index {index} must have a 'type' field.")
        if filter_type not in valid_types:
            raise ValidationError(
                f"Invalid filter type '{filter_type}' at index {index}. "
                f"Valid types: {', '.join(valid_types)}"
            )
        label_keys = _REQUIRED_FILTER_KEYS.get(filter_type)
        if label_keys is None:
            continue
        label, keys = label_keys
        if any(key not in entry for key in keys):
            raise ValidationError(
                f"{label} filter at index {index} must have {_quoted(keys)}."
            )


@dataclass(frozen=True)
class Segment(BaseDTO):
    """
    Segment payload.

    ``is_update`` marks partial payloads for updates, where filters are
    optional and never sent.
    """

    name: str
    filters: List[Dict[str, Any]] = field(default_factory=list)
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)
    active: bool = True
    is_update: bool = False

    def __post_init__(self) -> None:
        validate_resource_name(self.name, "Segment")
        if not self.is_update:
            validate_filters(self.filters)
        max_length(
            self.description, 1000, "Segment description cannot exceed 1000 characters."
        )
        validate_tags(self.tags)
        string_keys(self.options, "Option keys must be non-empty strings.")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if not self.is_update and self.filters:
            data["filters"] = [dict(entry) for entry in self.filters]
        if self.description is not None:
            data["description"] = self.description
        if self.tags:
            data["tags"] = list(self.tags)
        if self.options:
            data["options"] = dict(self.options)
        if not self.active:
            data["active"] = False
        return data

    # Named constructors

    @classmethod
    def create(cls, name: str, filters: List[Dict[str, Any]]) -> "Segment":
        return cls(name=name, filters=list(filters))

    @classmethod
    def for_update(cls, name: str) -> "Segment":
        return cls(name=name, is_update=True)

    @classmethod
    def create_with_description(
        cls, name: str, filters: List[Dict[str, Any]], description: str
    ) -> "Segment":
        return cls(name=name, filters=list(filters), description=description)

    @classmethod
    def create_with_tags(
        cls, name: str, filters: List[Dict[str, Any]], tags: List[str]
    ) -> "Segment":
        return cls(name=name, filters=list(filters), tags=list(tags))

    @classmethod
    def email_activity(
        cls,
        name: str,
        activity: str,
        campaign_id: Optional[str] = None,
        days: Optional[int] = None,
    ) -> "Segment":
        return cls(name=name, filters=[email_activity_filter(activity, campaign_id, days)])

    @classmethod
    def field(cls, name: str, field_name: str, operator: str, value: Any) -> "Segment":
        return cls(name=name, filters=[field_filter(field_name, operator, value)])

    @classmethod
    def group(cls, name: str, group_id: Union[str, int], is_member: bool = True) -> "Segment":
        return cls(name=name, filters=[group_filter(group_id, is_member)])

    @classmethod
    def date(cls, name: str, field_name: str, operator: str, value: Any) -> "Segment":
        return cls(name=name, filters=[date_filter(field_name, operator, value)])

    # Immutable updates

    def with_name(self, name: str) -> "Segment":
        return self.with_(name=name)

    def with_filters(self, filters: List[Dict[str, Any]]) -> "Segment":
        return self.with_(filters=list(filters))

    def add_filters(self, filters: List[Dict[str, Any]]) -> "Segment":
        return self.with_(filters=[*self.filters, *filters])

    def with_description(self, description: str) -> "Segment":
        return self.with_(description=description)

    def with_tags(self, tags: List[str]) -> "Segment":
        return self.with_(tags=unique([*self.tags, *tags]))

    def with_options(self, options: Dict[str, Any]) -> "Segment":
        return self.with_(options={**self.options, **options})

    def activate(self) -> "Segment":
        return self.with_(active=True)

    def deactivate(self) -> "Segment":
        return self.with_(active=False)


# Filter factories, shared with the segment builder.


def field_filter(field_name: str, operator: str, value: Any) -> Dict[str, Any]:
    return {"type": FilterType.FIELD.value, "field": field_name, "operator": operator, "value": value}


def group_filter(group_id: Union[str, int], is_member: bool = True) -> Dict[str, Any]:
    return {
        "type": FilterType.GROUP.value,
        "group_id": group_id,
        "operator": "in" if is_member else "not_in",
    }


def date_filter(field_name: str, operator: str, value: Any) -> Dict[str, Any]:
    return {"type": FilterType.DATE.value, "field": field_name, "operator": operator, "value": value}


def email_activity_filter(
    activity: str, campaign_id: Optional[str] = None, days: Optional[int] = None
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"type": FilterType.EMAIL_ACTIVITY.value, "activity": activity}
    if campaign_id is not None:
        entry["campaign_id"] = campaign_id
    if days is not None:
        entry["days"] = days
    return entry


class SegmentsApi(Protocol):
    """
    Operations offered for segments.
    """

    def create(self, segment: Segment) -> Dict[str, Any]:
        ...

    def get_by_id(self, segment_id: str) -> Optional[Dict[str, Any]]:
        ...

    def update(self, segment_id: str, segment: Segment) -> Dict[str, Any]:
        ...

    def delete(self, segment_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def get_subscribers(
        self, segment_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...

    def refresh(self, segment_id: str) -> Dict[str, Any]:
        ...

    def get_stats(self, segment_id: str) -> Dict[str, Any]:
        ...

    def activate(self, segment_id: str) -> Dict[str, Any]:
        ...

    def deactivate(self, segment_id: str) -> Dict[str, Any]:
        ...
