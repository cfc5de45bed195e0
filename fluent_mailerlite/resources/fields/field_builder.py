"""
Fluent builder for custom fields.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...api.fields import Field, FieldsApi, FieldType
from ...core.errors import ValidationError
from ..base import FluentBuilder


class FieldBuilder(FluentBuilder):
    """
    Accumulates custom field attributes.

    ``with_title``/``title`` set the local display title, which is kept
    separate from ``name``.
    """

    def __init__(self, service: FieldsApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._name: Optional[str] = None
        self._type: Optional[str] = None
        self._title: Optional[str] = None
        self._default_value: Any = None
        self._options: Dict[str, Any] = {}
        self._required = False

    # Shortcut constructors

    @classmethod
    def text(cls, service: FieldsApi, name: str, title: Optional[str] = None) -> "FieldBuilder":
        return cls(service).name(name).as_text()._maybe_title(title)

    @classmethod
    def number(cls, service: FieldsApi, name: str, title: Optional[str] = None) -> "FieldBuilder":
        return cls(service).name(name).as_number()._maybe_title(title)

    @classmethod
    def date(cls, service: FieldsApi, name: str, title: Optional[str] = None) -> "FieldBuilder":
        return cls(service).name(name).as_date()._maybe_title(title)

    @classmethod
    def boolean(cls, service: FieldsApi, name: str, title: Optional[str] = None) -> "FieldBuilder":
        return cls(service).name(name).as_boolean()._maybe_title(title)

    @classmethod
    def select(
        cls, service: FieldsApi, name: str, options: List[str], title: Optional[str] = None
    ) -> "FieldBuilder":
        return cls(service).name(name).as_select(options)._maybe_title(title)

    def _maybe_title(self, title: Optional[str]) -> "FieldBuilder":
        if title is not None:
            self._title = title
        return self

    # Setters

    def name(self, name: str) -> "FieldBuilder":
        self._name = name
        return self

    def named(self, name: str) -> "FieldBuilder":
        return self.name(name)

    def type(self, field_type: str) -> "FieldBuilder":
        self._type = field_type
        return self

    def as_text(self) -> "FieldBuilder":
        return self.type(FieldType.TEXT.value)

    def as_number(self) -> "FieldBuilder":
        return self.type(FieldType.NUMBER.value)

    def as_date(self) -> "FieldBuilder":
        return self.type(FieldType.DATE.value)

    def as_boolean(self) -> "FieldBuilder":
        return self.type(FieldType.BOOLEAN.value)

    def as_select(self, options: List[str]) -> "FieldBuilder":
        self._type = FieldType.TEXT.value
        self._options["type"] = "select"
        self._options["values"] = list(options)
        return self

    def as_email(self) -> "FieldBuilder":
        self._type = FieldType.TEXT.value
        self._options["validation"] = "email"
        return self

    def as_phone(self) -> "FieldBuilder":
        self._type = FieldType.TEXT.value
        self._options["validation"] = "phone"
        return self

    def with_title(self, title: str) -> "FieldBuilder":
        self._title = title
        return self

    def title(self, title: str) -> "FieldBuilder":
        return self.with_title(title)

    def with_default(self, value: Any) -> "FieldBuilder":
        self._default_value = value
        return self

    def default_value(self, value: Any) -> "FieldBuilder":
        return self.with_default(value)

    def with_options(self, options: Dict[str, Any]) -> "FieldBuilder":
        self._options.update(options)
        return self

    def with_option(self, key: str, value: Any) -> "FieldBuilder":
        self._options[key] = value
        return self

    def required(self) -> "FieldBuilder":
        self._required = True
        return self

    def optional(self) -> "FieldBuilder":
        self._required = False
        return self

    def min_length(self, length: int) -> "FieldBuilder":
        return self.with_option("min_length", length)

    def max_length(self, length: int) -> "FieldBuilder":
        return self.with_option("max_length", length)

    def min_value(self, value: float) -> "FieldBuilder":
        return self.with_option("min_value", value)

    def max_value(self, value: float) -> "FieldBuilder":
        return self.with_option("max_value", value)

    def to_dto(self) -> Field:
        if not self._name:
            raise ValidationError("Name is required to create FieldDTO")
        if not self._type:
            raise ValidationError("Type is required to create FieldDTO")

        return Field(
            name=self._name,
            type=self._type,
            title=self._title,
            default_value=self._default_value,
            options=dict(self._options),
            required=self._required,
        )

    # Terminal operations

    def create(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def update(self, field_id: str) -> Dict[str, Any]:
        return self._service.update(field_id, self.to_dto())

    def delete(self, field_id: str) -> bool:
        return self._service.delete(field_id)

    def find(self, field_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(field_id)

    def find_by_name(self, name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        lookup = name or self._name
        if not lookup:
            raise ValidationError("Name is required to find field by name")
        return self._service.find_by_name(lookup)

    def require_by_name(self, name: Optional[str] = None) -> Dict[str, Any]:
        lookup = name or self._name
        if not lookup:
            raise ValidationError("Name is required to find field by name")
        return self._service.require_by_name(lookup)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def get_usage(self, field_id: str) -> Dict[str, Any]:
        return self._service.get_usage(field_id)
