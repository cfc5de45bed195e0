"""
MailerLite implementation of ``CampaignsApi``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, NoReturn, Optional

from ...api.campaigns import SCHEDULE_FORMAT, Campaign
from ...core.errors import (
    CampaignCreateError,
    CampaignDeleteError,
    CampaignNotFoundError,
    CampaignSendError,
    CampaignUpdateError,
    IntegrationError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_invalid_data,
    is_not_found,
    mentions,
    payload_of,
    scan_pages,
    unwrap_page,
    unwrap_resource,
)
from .campaign_mapper import transform_campaign


logger = get_logger("mailerlite.resources.campaigns")


class CampaignService(BaseService):
    """
    Campaign operations backed by the MailerLite API.
    """

    endpoint_name = "campaigns"

    def create(self, campaign: Campaign) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(campaign.to_dict())
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_invalid_data(exc):
                self._fail(
                    CampaignCreateError.invalid_data(campaign.subject, ["Validation failed"], exc),
                    exc,
                )
            if mentions(exc, "recipient"):
                self._fail(CampaignCreateError.no_recipients(campaign.subject, exc), exc)
            self._fail(CampaignCreateError.make(campaign.subject, str(exc), exc), exc)

        logger.info("Created campaign %r", campaign.subject)
        return transform_campaign(raw)

    def draft(self, campaign: Campaign) -> Dict[str, Any]:
        """
        Campaigns are created as drafts; this is ``create`` under another name.
        """

        return self.create(campaign)

    def get_by_id(self, campaign_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(campaign_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_campaign(raw)

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        First campaign whose ``name`` equals ``name`` exactly.

        Linear scan over every page of ``list()``.
        """

        return scan_pages(self.list, lambda item: item.get("name") == name)

    def require_by_name(self, name: str) -> Dict[str, Any]:
        """
        Like ``find_by_name`` but raises ``CampaignNotFoundError`` on a miss.
        """

        campaign = self.find_by_name(name)
        if campaign is None:
            raise CampaignNotFoundError.with_identifier(name)
        return campaign

    def update(self, campaign_id: str, campaign: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(campaign_id, payload_of(campaign))
        except IntegrationError as exc:
            self._update_failed(campaign_id, exc)
        return transform_campaign(raw)

    def delete(self, campaign_id: str) -> bool:
        try:
            self._endpoint().delete(campaign_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(CampaignNotFoundError.with_id(campaign_id), exc)
            if mentions(exc, "cannot be deleted", "sent"):
                self._fail(CampaignDeleteError.cannot_delete(campaign_id, "sent", exc), exc)
            self._fail(CampaignDeleteError.make(campaign_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_campaign)

    def schedule(self, campaign_id: str, schedule_at: datetime) -> Dict[str, Any]:
        payload = {"schedule_at": schedule_at.strftime(SCHEDULE_FORMAT)}
        try:
            raw = self._endpoint().schedule(campaign_id, payload)
        except IntegrationError as exc:
            self._send_failed(campaign_id, exc)
        return transform_campaign(raw)

    def send(self, campaign_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().send(campaign_id)
        except IntegrationError as exc:
            self._send_failed(campaign_id, exc)
        logger.info("Sent campaign %s", campaign_id)
        return transform_campaign(raw)

    def cancel(self, campaign_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().cancel(campaign_id)
        except IntegrationError as exc:
            self._update_failed(campaign_id, exc)
        return transform_campaign(raw)

    def get_stats(self, campaign_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_stats(campaign_id)
        except IntegrationError as exc:
            self._lookup_failed(campaign_id, exc)
        return unwrap_resource(raw)

    def get_subscribers(
        self, campaign_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_subscribers(campaign_id, filters or {})
        except IntegrationError as exc:
            self._lookup_failed(campaign_id, exc)
        return unwrap_page(raw)

    # Error classification

    def _lookup_failed(self, campaign_id: str, exc: IntegrationError) -> NoReturn:
        if is_not_found(exc):
            self._fail(CampaignNotFoundError.with_id(campaign_id), exc)
        self._reraise(exc)

    def _update_failed(self, campaign_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(CampaignNotFoundError.with_id(campaign_id), exc)
        if is_invalid_data(exc):
            self._fail(
                CampaignUpdateError.invalid_data(campaign_id, ["Validation failed"], exc), exc
            )
        if mentions(exc, "cannot be updated", "sent"):
            self._fail(CampaignUpdateError.cannot_update(campaign_id, "sent", exc), exc)
        self._fail(CampaignUpdateError.make(campaign_id, str(exc), exc), exc)

    def _send_failed(self, campaign_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(CampaignNotFoundError.with_id(campaign_id), exc)
        if mentions(exc, "no recipients", "empty"):
            self._fail(CampaignSendError.no_recipients(campaign_id, exc), exc)
        if mentions(exc, "cannot be sent", "already sent"):
            self._fail(CampaignSendError.cannot_send(campaign_id, "sent", exc), exc)
        self._fail(CampaignSendError.make(campaign_id, str(exc), exc), exc)
