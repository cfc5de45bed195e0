"""
Group DTO and service interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Union

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import is_scalar, max_length, string_keys, unique


INVALID_NAME_CHARACTERS = ("<", ">", '"', "'", "/", "\\")


def validate_resource_name(name: str, label: str) -> None:
    """
    Name rules shared by groups and segments.
    """

    if not name or not name.strip():
        raise ValidationError(f"{label} name cannot be empty.")
    max_length(name, 255, f"{label} name cannot exceed 255 characters.")
    if any(char in name for char in INVALID_NAME_CHARACTERS):
        raise ValidationError(
            f"{label} name contains invalid characters: " + " ".join(INVALID_NAME_CHARACTERS)
        )


def validate_tags(tags: List[Any]) -> None:
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError("All tags must be strings.")
        if not tag.strip():
            raise ValidationError("Tags cannot be empty strings.")
        max_length(tag, 100, "Each tag cannot exceed 100 characters.")


@dataclass(frozen=True)
class Group(BaseDTO):
    """
    Group create/update payload.
    """

    name: str
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_resource_name(self.name, "Group")
        max_length(
            self.description, 1000, "Group description cannot exceed 1000 characters."
        )
        validate_tags(self.tags)
        string_keys(self.settings, "Setting keys must be non-empty strings.")
        for key, item in self.settings.items():
            if item is not None and not is_scalar(item) and not isinstance(item, (list, dict)):
                raise ValidationError(f"Setting '{key}' has an invalid value type.")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        if self.tags:
            data["tags"] = list(self.tags)
        if self.settings:
            data["settings"] = dict(self.settings)
        return data

    @classmethod
    def create(cls, name: str) -> "Group":
        return cls(name=name)

    @classmethod
    def create_with_description(cls, name: str, description: str) -> "Group":
        return cls(name=name, description=description)

    @classmethod
    def create_with_tags(cls, name: str, tags: List[str]) -> "Group":
        return cls(name=name, tags=list(tags))

    def with_name(self, name: str) -> "Group":
        return self.with_(name=name)

    def with_description(self, description: str) -> "Group":
        return self.with_(description=description)

    def with_tags(self, tags: List[str]) -> "Group":
        return self.with_(tags=unique([*self.tags, *tags]))

    def with_settings(self, settings: Dict[str, Any]) -> "Group":
        return self.with_(settings={**self.settings, **settings})


class GroupsApi(Protocol):
    """
    Operations offered for groups.
    """

    def create(self, group: Group) -> Dict[str, Any]:
        ...

    def get(self, group_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_by_id(self, group_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def require_by_name(self, name: str) -> Dict[str, Any]:
        ...

    def update(self, group_id: str, group: Group) -> Dict[str, Any]:
        ...

    def delete(self, group_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def get_subscribers(
        self, group_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...

    def add_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> Dict[str, Any]:
        ...

    def remove_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> bool:
        ...
