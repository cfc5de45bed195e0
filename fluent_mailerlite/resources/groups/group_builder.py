"""
Fluent builder for groups.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from ...api.groups import Group, GroupsApi
from ...core.errors import ValidationError
from ...core.validation import unique
from ..base import FluentBuilder


class GroupBuilder(FluentBuilder):
    def __init__(self, service: GroupsApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._name: Optional[str] = None
        self._description: Optional[str] = None
        self._tags: List[str] = []
        self._settings: Dict[str, Any] = {}

    def name(self, name: str) -> "GroupBuilder":
        self._name = name
        return self

    def named(self, name: str) -> "GroupBuilder":
        return self.name(name)

    def with_description(self, description: str) -> "GroupBuilder":
        self._description = description
        return self

    def description(self, description: str) -> "GroupBuilder":
        return self.with_description(description)

    def with_tags(self, tags: Union[str, List[str]]) -> "GroupBuilder":
        self._tags.extend([tags] if isinstance(tags, str) else tags)
        return self

    def with_tag(self, tag: str) -> "GroupBuilder":
        self._tags.append(tag)
        return self

    def tagged(self, tag: str) -> "GroupBuilder":
        return self.with_tag(tag)

    def with_settings(self, settings: Dict[str, Any]) -> "GroupBuilder":
        self._settings.update(settings)
        return self

    def with_setting(self, key: str, value: Any) -> "GroupBuilder":
        self._settings[key] = value
        return self

    def to_dto(self) -> Group:
        if not self._name:
            raise ValidationError("Name is required to create GroupDTO")

        return Group(
            name=self._name,
            description=self._description,
            tags=unique(self._tags),
            settings=dict(self._settings),
        )

    # Terminal operations

    def create(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def update(self, group_id: str) -> Dict[str, Any]:
        return self._service.update(group_id, self.to_dto())

    def delete(self, group_id: str) -> bool:
        return self._service.delete(group_id)

    def find(self, group_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(group_id)

    def find_by_name(self, name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        lookup = name or self._name
        if not lookup:
            raise ValidationError("Name is required to find group by name")
        return self._service.get_by_name(lookup)

    def require_by_name(self, name: Optional[str] = None) -> Dict[str, Any]:
        lookup = name or self._name
        if not lookup:
            raise ValidationError("Name is required to find group by name")
        return self._service.require_by_name(lookup)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def get_subscribers(
        self, group_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._service.get_subscribers(group_id, filters or {})

    def add_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> Dict[str, Any]:
        return self._service.add_subscribers(group_id, subscriber_ids)

    def remove_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> bool:
        return self._service.remove_subscribers(group_id, subscriber_ids)
