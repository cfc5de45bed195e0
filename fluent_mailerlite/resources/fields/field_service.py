"""
MailerLite implementation of ``FieldsApi``.
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

from ...api.fields import Field
from ...core.errors import (
    FieldCreateError,
    FieldDeleteError,
    FieldNotFoundError,
    FieldUpdateError,
    IntegrationError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_duplicate,
    is_invalid_data,
    is_not_found,
    payload_of,
    scan_pages,
    unwrap_page,
)
from .field_mapper import transform_field, transform_field_usage


logger = get_logger("mailerlite.resources.fields")


class FieldService(BaseService):
    """
    Custom field operations backed by the MailerLite API.
    """

    endpoint_name = "fields"

    def create(self, field: Field) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(field.to_dict())
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_duplicate(exc):
                self._fail(FieldCreateError.already_exists(field.name, exc), exc)
            if is_invalid_data(exc):
                self._fail(FieldCreateError.invalid_data(field.name, ["Validation failed"], exc), exc)
            self._fail(FieldCreateError.make(field.name, str(exc), exc), exc)

        logger.info("Created field %r", field.name)
        return transform_field(raw)

    def get_by_id(self, field_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(field_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_field(raw)

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        First field named ``name``.

        MailerLite has no name filter, so this walks every page of
        ``list()`` and compares client-side.
        """

        return scan_pages(self.list, lambda item: item.get("name") == name)

    def require_by_name(self, name: str) -> Dict[str, Any]:
        field = self.find_by_name(name)
        if field is None:
            raise FieldNotFoundError.with_name(name)
        return field

    def update(self, field_id: str, field: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(field_id, payload_of(field))
        except IntegrationError as exc:
            self._update_failed(field_id, exc)
        return transform_field(raw)

    def delete(self, field_id: str) -> bool:
        try:
            self._endpoint().delete(field_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(FieldNotFoundError.with_id(field_id), exc)
            self._fail(FieldDeleteError.make(field_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_field)

    def get_usage(self, field_id: str) -> Dict[str, Any]:
        """
        Usage counters from the field ``usage`` endpoint.

        An unknown field raises ``FieldNotFoundError``; counters missing
        from the response are reported as zero.
        """

        try:
            raw = self._endpoint().usage(field_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                self._fail(FieldNotFoundError.with_id(field_id), exc)
            self._reraise(exc)
        return transform_field_usage(raw)

    def _update_failed(self, field_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(FieldNotFoundError.with_id(field_id), exc)
        if is_invalid_data(exc):
            self._fail(FieldUpdateError.invalid_data(field_id, ["Validation failed"], exc), exc)
        self._fail(FieldUpdateError.make(field_id, str(exc), exc), exc)
