"""
MailerLite implementation of ``SegmentsApi``.

The MailerLite API cannot create segments; ``create`` always raises
``SegmentCreateError`` and segments have to be created in the dashboard.
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

from ...api.segments import Segment
from ...core.errors import (
    IntegrationError,
    SegmentCreateError,
    SegmentDeleteError,
    SegmentNotFoundError,
    SegmentUpdateError,
)
from ...core.logging import get_logger
from ..base import BaseService, is_invalid_data, is_not_found, mentions, payload_of, unwrap_page
from .segment_mapper import transform_segment, transform_segment_stats


logger = get_logger("mailerlite.resources.segments")


class SegmentService(BaseService):
    """
    Segment operations backed by the MailerLite API.
    """

    endpoint_name = "segments"

    def create(self, segment: Segment) -> Dict[str, Any]:
        error = SegmentCreateError.not_supported(segment.name)
        logger.warning(error.message)
        raise error

    def get_by_id(self, segment_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(segment_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_segment(raw)

    def update(self, segment_id: str, segment: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(segment_id, payload_of(segment))
        except IntegrationError as exc:
            self._update_failed(segment_id, exc)
        return transform_segment(raw)

    def delete(self, segment_id: str) -> bool:
        try:
            self._endpoint().delete(segment_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(SegmentNotFoundError.with_id(segment_id), exc)
            self._fail(SegmentDeleteError.make(segment_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_segment)

    def get_subscribers(
        self, segment_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_subscribers(segment_id, filters or {})
        except IntegrationError as exc:
            self._lookup_failed(segment_id, exc)
        return unwrap_page(raw)

    def refresh(self, segment_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().refresh(segment_id)
        except IntegrationError as exc:
            self._lookup_failed(segment_id, exc)
        return transform_segment(raw)

    def get_stats(self, segment_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().find(segment_id)
        except IntegrationError as exc:
            self._lookup_failed(segment_id, exc)
        return transform_segment_stats(raw)

    def activate(self, segment_id: str) -> Dict[str, Any]:
        return self.update(segment_id, {"active": True})

    def deactivate(self, segment_id: str) -> Dict[str, Any]:
        return self.update(segment_id, {"active": False})

    def _lookup_failed(self, segment_id: str, exc: IntegrationError) -> NoReturn:
        if is_not_found(exc):
            self._fail(SegmentNotFoundError.with_id(segment_id), exc)
        self._reraise(exc)

    def _update_failed(self, segment_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(SegmentNotFoundError.with_id(segment_id), exc)
        if is_invalid_data(exc):
            self._fail(SegmentUpdateError.invalid_data(segment_id, ["Validation failed"], exc), exc)
        if mentions(exc, "filter"):
            self._fail(SegmentUpdateError.invalid_filters(segment_id, [str(exc)]), exc)
        self._fail(SegmentUpdateError.make(segment_id, str(exc), exc), exc)
