"""
Custom field DTO and service interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Any, Dict, List, Optional, Protocol

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import max_length, one_of, string_keys


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Field(BaseDTO):
    """
    Custom field create/update payload.

    ``title`` is a local display label; MailerLite has no such attribute so
    it is never part of ``to_dict``.
    """

    name: str
    type: str
    title: Optional[str] = None
    default_value: Any = None
    options: Dict[str, Any] = field(default_factory=dict)
    required: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Field name cannot be empty.")
        max_length(
            self.name, 255, "Field name cannot exceed 255 characters (MailerLite limit)."
        )
        one_of(self.type, [t.value for t in FieldType], "field type")
        max_length(self.title, 255, "Field title cannot exceed 255 characters.")
        if self.default_value is not None:
            self._validate_default_value()
        string_keys(self.options, "Option keys must be non-empty strings.")

    def _validate_default_value(self) -> None:
        default = self.default_value
        if self.type == FieldType.TEXT.value and not isinstance(default, str):
            raise ValidationError("Default value for text field must be a string.")
        if self.type == FieldType.NUMBER.value and (
            isinstance(default, bool) or not isinstance(default, (int, float))
        ):
            raise ValidationError("Default value for number field must be numeric.")
        if self.type == FieldType.BOOLEAN.value and not isinstance(default, bool):
            raise ValidationError("Default value for boolean field must be a boolean.")
        if self.type == FieldType.DATE.value:
            if not isinstance(default, str):
                raise ValidationError("Default value for date field must be a string.")
            if not DATE_PATTERN.match(default):
                raise ValidationError(
                    "Default value for date field must be in YYYY-MM-DD format."
                )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.default_value is not None:
            data["default_value"] = self.default_value
        if self.options:
            data["options"] = dict(self.options)
        if self.required:
            data["required"] = True
        return data

    # Named constructors

    @classmethod
    def text(cls, name: str, title: Optional[str] = None, default_value: Optional[str] = None) -> "Field":
        return cls(name=name, type=FieldType.TEXT.value, title=title, default_value=default_value)

    @classmethod
    def number(cls, name: str, title: Optional[str] = None, default_value: Any = None) -> "Field":
        return cls(name=name, type=FieldType.NUMBER.value, title=title, default_value=default_value)

    @classmethod
    def date(cls, name: str, title: Optional[str] = None, default_value: Optional[str] = None) -> "Field":
        return cls(name=name, type=FieldType.DATE.value, title=title, default_value=default_value)

    @classmethod
    def boolean(cls, name: str, title: Optional[str] = None, default_value: Optional[bool] = None) -> "Field":
        return cls(name=name, type=FieldType.BOOLEAN.value, title=title, default_value=default_value)

    @classmethod
    def select(cls, name: str, options: List[str], title: Optional[str] = None) -> "Field":
        """
        Text field restricted to ``options``.
        """

        return cls(
            name=name,
            type=FieldType.TEXT.value,
            title=title,
            options={"type": "select", "values": list(options)},
        )

    # Immutable updates

    def with_name(self, name: str) -> "Field":
        return self.with_(name=name)

    def with_title(self, title: str) -> "Field":
        return self.with_(title=title)

    def with_default_value(self, default_value: Any) -> "Field":
        return self.with_(default_value=default_value)

    def with_options(self, options: Dict[str, Any]) -> "Field":
        return self.with_(options={**self.options, **options})

    def make_required(self) -> "Field":
        return self.with_(required=True)

    def make_optional(self) -> "Field":
        return self.with_(required=False)


class FieldsApi(Protocol):
    """
    Operations offered for custom fields.
    """

    def create(self, field: Field) -> Dict[str, Any]:
        ...

    def get_by_id(self, field_id: str) -> Optional[Dict[str, Any]]:
        ...

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def require_by_name(self, name: str) -> Dict[str, Any]:
        ...

    def update(self, field_id: str, field: Field) -> Dict[str, Any]:
        ...

    def delete(self, field_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def get_usage(self, field_id: str) -> Dict[str, Any]:
        ...
