"""
Fluent builder for automations.

Reads as a workflow description::

    mailerlite.automations() \\
        .create("Welcome series") \\
        .when_subscriber_joins_group("123") \\
        .then_send_email("welcome") \\
        .then_delay_days(3) \\
        .then_send_email("tips") \\
        .start()

Both ``and_`` and ``then_`` prefixes are accepted for chaining.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ...api.automations import Automation, AutomationsApi, AutomationStatus
from ...core.errors import ValidationError
from ..base import FluentBuilder


class AutomationBuilder(FluentBuilder):
    chain_prefixes = ("and", "then")

    def __init__(self, service: AutomationsApi) -> None:
        super().__init__(service)

    def _reset_state(self) -> None:
        self._name: Optional[str] = None
        self._description: Optional[str] = None
        self._enabled = True
        self._status = AutomationStatus.DRAFT.value
        self._triggers: List[Dict[str, Any]] = []
        self._steps: List[Dict[str, Any]] = []
        self._settings: Dict[str, Any] = {}
        self._conditions: List[Dict[str, Any]] = []

    # Identity

    def create(self, name: str) -> "AutomationBuilder":
        """
        Start describing an automation called ``name``. Use ``save()`` to
        send it to MailerLite.
        """

        self._name = name
        return self

    def named(self, name: str) -> "AutomationBuilder":
        self._name = name
        return self

    def description(self, description: str) -> "AutomationBuilder":
        self._description = description
        return self

    def enabled(self, enabled: bool = True) -> "AutomationBuilder":
        self._enabled = enabled
        return self

    def disabled(self) -> "AutomationBuilder":
        return self.enabled(False)

    def status(self, status: str) -> "AutomationBuilder":
        self._status = status
        return self

    # Triggers

    def trigger(
        self,
        trigger_type: str,
        event: Optional[str] = None,
        target: Any = None,
        **attributes: Any,
    ) -> "AutomationBuilder":
        entry: Dict[str, Any] = {"type": trigger_type}
        if event is not None:
            entry["event"] = event
        if target is not None:
            entry["target"] = target
        entry.update(attributes)
        self._triggers.append(entry)
        return self

    def when_subscriber_joins_group(self, group_id: Any) -> "AutomationBuilder":
        return self.trigger("subscriber", "joins_group", group_id)

    def when_subscriber_subscribes(self) -> "AutomationBuilder":
        return self.trigger("subscriber", "subscribes")

    def when_subscriber_updates_field(self, field_name: str) -> "AutomationBuilder":
        return self.trigger("subscriber", "updates_field", field_name)

    def when_date_reached(self, field_name: str, offset: int = 0) -> "AutomationBuilder":
        return self.trigger("date", field=field_name, offset=offset, unit="days")

    def when_api_called(self, endpoint: str) -> "AutomationBuilder":
        return self.trigger("api", endpoint=endpoint)

    def when_webhook_received(self, endpoint: str) -> "AutomationBuilder":
        return self.trigger("webhook", endpoint=endpoint)

    # Steps

    def step(self, step_type: str, **attributes: Any) -> "AutomationBuilder":
        self._steps.append({"type": step_type, **attributes})
        return self

    def send_email(self, template_id: Any) -> "AutomationBuilder":
        return self.step("email", template_id=template_id)

    def send_campaign(self, campaign_id: Any) -> "AutomationBuilder":
        return self.step("email", campaign_id=campaign_id)

    def delay(self, duration: int, unit: str = "days") -> "AutomationBuilder":
        return self.step("delay", duration=duration, unit=unit)

    def delay_minutes(self, minutes: int) -> "AutomationBuilder":
        return self.delay(minutes, "minutes")

    def delay_hours(self, hours: int) -> "AutomationBuilder":
        return self.delay(hours, "hours")

    def delay_days(self, days: int) -> "AutomationBuilder":
        return self.delay(days, "days")

    def delay_weeks(self, weeks: int) -> "AutomationBuilder":
        return self.delay(weeks, "weeks")

    def condition(self, conditions: List[Dict[str, Any]]) -> "AutomationBuilder":
        return self.step("condition", conditions=list(conditions))

    def if_field(self, field_name: str, operator: str, value: Any) -> "AutomationBuilder":
        return self.condition([{"field": field_name, "operator": operator, "value": value}])

    def add_tag(self, tag: str) -> "AutomationBuilder":
        return self.step("tag", action="add", tag=tag)

    def remove_tag(self, tag: str) -> "AutomationBuilder":
        return self.step("tag", action="remove", tag=tag)

    def update_field(self, field_name: str, value: Any) -> "AutomationBuilder":
        return self.step("field_update", field=field_name, value=value)

    def call_webhook(self, url: str, data: Optional[Dict[str, Any]] = None) -> "AutomationBuilder":
        return self.step("webhook", url=url, data=dict(data or {}))

    # Settings and conditions

    def with_settings(self, settings: Dict[str, Any]) -> "AutomationBuilder":
        self._settings.update(settings)
        return self

    def with_setting(self, key: str, value: Any) -> "AutomationBuilder":
        self._settings[key] = value
        return self

    def timezone(self, timezone: str) -> "AutomationBuilder":
        return self.with_setting("timezone", timezone)

    def send_time_between(self, start: str, end: str) -> "AutomationBuilder":
        return self.with_setting("send_time", {"start": start, "end": end})

    def frequency_cap(self, limit: int) -> "AutomationBuilder":
        return self.with_setting("frequency_cap", limit)

    def with_conditions(self, conditions: List[Dict[str, Any]]) -> "AutomationBuilder":
        self._conditions.extend(conditions)
        return self

    def with_condition(self, field_name: str, operator: str, value: Any) -> "AutomationBuilder":
        self._conditions.append({"field": field_name, "operator": operator, "value": value})
        return self

    def to_dto(self) -> Automation:
        if not self._name:
            raise ValidationError("Name is required to create AutomationDTO")

        return Automation(
            name=self._name,
            enabled=self._enabled,
            triggers=list(self._triggers),
            steps=list(self._steps),
            description=self._description,
            settings=dict(self._settings),
            conditions=list(self._conditions),
            status=self._status,
        )

    # Terminal operations

    def save(self) -> Dict[str, Any]:
        return self._service.create(self.to_dto())

    def start(self) -> Dict[str, Any]:
        automation = self.save()
        return self._service.start(automation["id"])

    def find(self, automation_id: str) -> Optional[Dict[str, Any]]:
        return self._service.get_by_id(automation_id)

    def find_by_name(self, name: Optional[str] = None) -> Optional[Dict[str, Any]]:
        lookup = name or self._name
        if not lookup:
            raise ValidationError("Name is required to find automation by name")
        return self._service.find_by_name(lookup)

    def update(self, automation_id: str) -> Dict[str, Any]:
        return self._service.update(automation_id, self.to_dto())

    def delete(self, automation_id: str) -> bool:
        return self._service.delete(automation_id)

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._service.list(filters or {})

    def all(self) -> Dict[str, Any]:
        return self.list()

    def start_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.start(automation_id)

    def stop_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.stop(automation_id)

    def pause_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.pause(automation_id)

    def resume_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.resume(automation_id)

    def enable_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.enable(automation_id)

    def disable_by_id(self, automation_id: str) -> Dict[str, Any]:
        return self._service.disable(automation_id)

    def stats(self, automation_id: str) -> Dict[str, Any]:
        return self._service.get_stats(automation_id)

    def subscribers(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._service.get_subscribers(automation_id, filters or {})

    def activity(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._service.get_activity(automation_id, filters or {})
