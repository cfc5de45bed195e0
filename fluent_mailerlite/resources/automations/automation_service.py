"""
MailerLite implementation of ``AutomationsApi``.
"""

from __future__ import annotations

from typing import Any, Dict, NoReturn, Optional

from ...api.automations import Automation
from ...core.errors import (
    AutomationCreateError,
    AutomationDeleteError,
    AutomationNotFoundError,
    AutomationStateError,
    AutomationUpdateError,
    IntegrationError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_duplicate,
    is_invalid_data,
    is_not_found,
    mentions,
    payload_of,
    scan_pages,
    unwrap_page,
    unwrap_resource,
)
from .automation_mapper import transform_automation


logger = get_logger("mailerlite.resources.automations")

# State an automation ends up in after each action.
_STATE_AFTER = {"start": "active", "stop": "stopped", "pause": "paused", "resume": "active"}


class AutomationService(BaseService):
    """
    Automation operations backed by the MailerLite API.
    """

    endpoint_name = "automations"

    def create(self, automation: Automation) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(automation.to_dict())
        except IntegrationError as exc:
            self._create_failed(automation.name, exc)

        logger.info("Created automation %r", automation.name)
        return transform_automation(raw)

    def get_by_id(self, automation_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(automation_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_automation(raw)

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Linear scan of every automation page for an exact name match.
        """

        return scan_pages(self.list, lambda item: item.get("name") == name)

    def update(self, automation_id: str, automation: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(automation_id, payload_of(automation))
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(AutomationNotFoundError.with_id(automation_id), exc)
            if is_invalid_data(exc):
                self._fail(
                    AutomationUpdateError.invalid_data(automation_id, ["Validation failed"], exc),
                    exc,
                )
            if mentions(exc, "cannot be updated", "active"):
                self._fail(AutomationUpdateError.cannot_update(automation_id, "active", exc), exc)
            self._fail(AutomationUpdateError.make(automation_id, str(exc), exc), exc)
        return transform_automation(raw)

    def delete(self, automation_id: str) -> bool:
        try:
            self._endpoint().delete(automation_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(AutomationNotFoundError.with_id(automation_id), exc)
            if mentions(exc, "cannot be deleted", "active"):
                self._fail(AutomationDeleteError.cannot_delete(automation_id, "active", exc), exc)
            self._fail(AutomationDeleteError.make(automation_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_automation)

    # State transitions

    def start(self, automation_id: str) -> Dict[str, Any]:
        return self._transition(automation_id, "start")

    def stop(self, automation_id: str) -> Dict[str, Any]:
        return self._transition(automation_id, "stop")

    def pause(self, automation_id: str) -> Dict[str, Any]:
        return self._transition(automation_id, "pause")

    def resume(self, automation_id: str) -> Dict[str, Any]:
        return self._transition(automation_id, "resume")

    def enable(self, automation_id: str) -> Dict[str, Any]:
        return self.start(automation_id)

    def disable(self, automation_id: str) -> Dict[str, Any]:
        return self.stop(automation_id)

    def _transition(self, automation_id: str, action: str) -> Dict[str, Any]:
        try:
            raw = getattr(self._endpoint(), action)(automation_id)
        except IntegrationError as exc:
            self._state_failed(automation_id, action, exc)
        logger.info("Automation %s: %s", automation_id, action)
        return transform_automation(raw)

    # Reporting

    def get_subscribers(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_subscribers(automation_id, filters or {})
        except IntegrationError as exc:
            self._lookup_failed(automation_id, exc)
        return unwrap_page(raw)

    def get_activity(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_activity(automation_id, filters or {})
        except IntegrationError as exc:
            self._lookup_failed(automation_id, exc)
        return unwrap_page(raw)

    def get_stats(self, automation_id: str) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_stats(automation_id)
        except IntegrationError as exc:
            self._lookup_failed(automation_id, exc)
        return unwrap_resource(raw)

    # Error classification

    def _create_failed(self, name: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_duplicate(exc):
            self._fail(AutomationCreateError.already_exists(name, exc), exc)
        if is_invalid_data(exc):
            self._fail(AutomationCreateError.invalid_data(name, ["Validation failed"], exc), exc)
        if mentions(exc, "trigger"):
            self._fail(AutomationCreateError.invalid_triggers(name, exc), exc)
        if mentions(exc, "step", "action"):
            self._fail(AutomationCreateError.invalid_steps(name, exc), exc)
        self._fail(AutomationCreateError.make(name, str(exc), exc), exc)

    def _state_failed(self, automation_id: str, action: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(AutomationNotFoundError.with_id(automation_id), exc)
        if mentions(exc, "cannot be started"):
            self._fail(AutomationStateError.cannot_start(automation_id, "unknown", exc), exc)
        if mentions(exc, "cannot be stopped"):
            self._fail(AutomationStateError.cannot_stop(automation_id, "unknown", exc), exc)
        if mentions(exc, "already"):
            self._fail(
                AutomationStateError.already_in_state(
                    automation_id, _STATE_AFTER.get(action, action), exc, action=action
                ),
                exc,
            )
        self._fail(AutomationStateError.make(automation_id, action, str(exc), exc), exc)

    def _lookup_failed(self, automation_id: str, exc: IntegrationError) -> NoReturn:
        if is_not_found(exc):
            self._fail(AutomationNotFoundError.with_id(automation_id), exc)
        self._reraise(exc)
