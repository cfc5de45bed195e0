"""
Automation DTO and service interface.

An automation is a list of triggers (what starts it) and a list of steps
(what it does). Both are plain dicts with a ``type`` discriminator::

    triggers=[{"type": "subscriber", "event": "joins_group", "target": "123"}]
    steps=[{"type": "delay", "duration": 1, "unit": "days"},
           {"type": "email", "template_id": "welcome"}]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, FrozenSet, List, Optional, Protocol
from zoneinfo import available_timezones

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..core.validation import is_valid_url, max_length, one_of


class AutomationStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    DISABLED = "disabled"


TRIGGER_TYPES = ("subscriber", "date", "api", "webhook", "custom_field")
SUBSCRIBER_EVENTS = (
    "joins_group",
    "subscribes",
    "unsubscribes",
    "updates_field",
    "completes_automation",
)
STEP_TYPES = ("email", "delay", "condition", "action", "webhook", "tag", "field_update")
DELAY_UNITS = ("minutes", "hours", "days", "weeks")
CONDITION_OPERATORS = (
    "equals",
    "not_equals",
    "contains",
    "not_contains",
    "greater_than",
    "less_than",
    "exists",
    "not_exists",
)


@lru_cache(maxsize=1)
def _timezones() -> FrozenSet[str]:
    return frozenset(available_timezones())


def _typed_entries(entries: List[Any], label: str, valid_types: tuple) -> None:
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValidationError(f"{label} at index {index} must be an array.")
        if "type" not in entry:
            raise ValidationError(f"{label} at index {index} must have a 'type' field.")
        if entry["type"] not in valid_types:
            raise ValidationError(
                f"Invalid {label.lower()} type '{entry['type']}' at index {index}. "
                f"Valid types: {', '.join(valid_types)}"
            )


def validate_triggers(triggers: List[Any]) -> None:
    if not triggers:
        raise ValidationError("Automation must have at least one trigger.")
    _typed_entries(triggers, "Trigger", TRIGGER_TYPES)

    for index, trigger in enumerate(triggers):
        kind = trigger["type"]
        if kind == "subscriber":
            if "event" not in trigger:
                raise ValidationError(
                    f"Subscriber trigger at index {index} must have an 'event' field."
                )
            if trigger["event"] not in SUBSCRIBER_EVENTS:
                raise ValidationError(
                    f"Invalid subscriber event '{trigger['event']}' at index {index}. "
                    f"Valid events: {', '.join(SUBSCRIBER_EVENTS)}"
                )
        elif kind == "date":
            if "field" not in trigger:
                raise ValidationError(f"Date trigger at index {index} must have a 'field' field.")
            if "offset" not in trigger:
                raise ValidationError(f"Date trigger at index {index} must have an 'offset' field.")
        elif kind in ("api", "webhook") and "endpoint" not in trigger:
            raise ValidationError(
                f"{kind} trigger at index {index} must have an 'endpoint' field."
            )


def validate_steps(steps: List[Any]) -> None:
    if not steps:
        raise ValidationError("Automation must have at least one step.")
    _typed_entries(steps, "Step", STEP_TYPES)

    for index, step in enumerate(steps):
        kind = step["type"]
        if kind == "email" and "campaign_id" not in step and "template_id" not in step:
            raise ValidationError(
                f"Email step at index {index} must have either 'campaign_id' or 'template_id'."
            )
        if kind == "delay":
            if "duration" not in step or "unit" not in step:
                raise ValidationError(
                    f"Delay step at index {index} must have 'duration' and 'unit' fields."
                )
            if step["unit"] not in DELAY_UNITS:
                raise ValidationError(
                    f"Invalid delay unit '{step['unit']}' at index {index}. "
                    f"Valid units: {', '.join(DELAY_UNITS)}"
                )
        if kind == "condition" and "conditions" not in step:
            raise ValidationError(
                f"Condition step at index {index} must have 'conditions' field."
            )
        if kind == "webhook":
            if "url" not in step:
                raise ValidationError(f"Webhook step at index {index} must have 'url' field.")
            if not is_valid_url(step["url"]):
                raise ValidationError(f"Invalid webhook URL at step index {index}.")


def validate_settings(settings: Dict[str, Any]) -> None:
    timezone = settings.get("timezone")
    if timezone is not None and timezone not in _timezones():
        raise ValidationError(f"Invalid timezone '{timezone}'.")

    if settings.get("send_time") is not None and not isinstance(settings["send_time"], dict):
        raise ValidationError("Send time settings must be an array.")

    cap = settings.get("frequency_cap")
    if cap is not None and (isinstance(cap, bool) or not isinstance(cap, int) or cap < 1):
        raise ValidationError("Frequency cap must be a positive integer.")


def validate_conditions(conditions: List[Any]) -> None:
    for index, condition in enumerate(conditions):
        if not isinstance(condition, dict):
            raise ValidationError(f"Condition at index {index} must be an array.")
        if any(condition.get(key) is None for key in ("field", "operator", "value")):
            raise ValidationError(
                f"Condition at index {index} must have 'field', 'operator', and 'value' fields."
            )
        if condition["operator"] not in CONDITION_OPERATORS:
            raise ValidationError(
                f"Invalid condition operator '{condition['operator']}' at index {index}. "
                f"Valid operators: {', '.join(CONDITION_OPERATORS)}"
            )


@dataclass(frozen=True)
class Automation(BaseDTO):
    """
    Automation create/update payload.

    ``name``, ``enabled`` and ``status`` are always sent.
    """

    name: str
    enabled: bool = True
    triggers: List[Dict[str, Any]] = field(default_factory=list)
    steps: List[Dict[str, Any]] = field(default_factory=list)
    description: Optional[str] = None
    settings: Dict[str, Any] = field(default_factory=dict)
    conditions: List[Dict[str, Any]] = field(default_factory=list)
    status: str = AutomationStatus.DRAFT.value

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Automation name cannot be empty.")
        max_length(self.name, 255, "Automation name cannot exceed 255 characters.")
        validate_triggers(self.triggers)
        validate_steps(self.steps)
        one_of(self.status, [s.value for s in AutomationStatus], "status")
        validate_settings(self.settings)
        validate_conditions(self.conditions)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "enabled": self.enabled,
            "status": self.status,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.triggers:
            data["triggers"] = [dict(trigger) for trigger in self.triggers]
        if self.steps:
            data["steps"] = [dict(step) for step in self.steps]
        if self.settings:
            data["settings"] = dict(self.settings)
        if self.conditions:
            data["conditions"] = [dict(condition) for condition in self.conditions]
        return data

    # Named constructors

    @classmethod
    def create(
        cls,
        name: str,
        triggers: List[Dict[str, Any]],
        steps: List[Dict[str, Any]],
        enabled: bool = True,
    ) -> "Automation":
        return cls(name=name, enabled=enabled, triggers=list(triggers), steps=list(steps))

    @classmethod
    def create_with_flow(
        cls, name: str, triggers: List[Dict[str, Any]], steps: List[Dict[str, Any]]
    ) -> "Automation":
        return cls.create(name, triggers, steps)

    @classmethod
    def create_subscriber_automation(
        cls, name: str, event: str, steps: List[Dict[str, Any]]
    ) -> "Automation":
        return cls.create(name, [{"type": "subscriber", "event": event}], steps)

    @classmethod
    def create_date_automation(
        cls, name: str, date_field: str, offset_days: int, steps: List[Dict[str, Any]]
    ) -> "Automation":
        trigger = {"type": "date", "field": date_field, "offset": offset_days, "unit": "days"}
        return cls.create(name, [trigger], steps)

    # Immutable updates

    def with_name(self, name: str) -> "Automation":
        return self.with_(name=name)

    def with_enabled(self, enabled: bool) -> "Automation":
        return self.with_(enabled=enabled)

    def with_description(self, description: str) -> "Automation":
        return self.with_(description=description)

    def with_triggers(self, triggers: List[Dict[str, Any]]) -> "Automation":
        return self.with_(triggers=list(triggers))

    def with_steps(self, steps: List[Dict[str, Any]]) -> "Automation":
        return self.with_(steps=list(steps))

    def with_status(self, status: str) -> "Automation":
        return self.with_(status=status)


class AutomationsApi(Protocol):
    """
    Operations offered for automations.
    """

    def create(self, automation: Automation) -> Dict[str, Any]:
        ...

    def get_by_id(self, automation_id: str) -> Optional[Dict[str, Any]]:
        ...

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def update(self, automation_id: str, automation: Automation) -> Dict[str, Any]:
        ...

    def delete(self, automation_id: str) -> bool:
        ...

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    def start(self, automation_id: str) -> Dict[str, Any]:
        ...

    def stop(self, automation_id: str) -> Dict[str, Any]:
        ...

    def pause(self, automation_id: str) -> Dict[str, Any]:
        ...

    def resume(self, automation_id: str) -> Dict[str, Any]:
        ...

    def enable(self, automation_id: str) -> Dict[str, Any]:
        ...

    def disable(self, automation_id: str) -> Dict[str, Any]:
        ...

    def get_subscribers(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...

    def get_activity(
        self, automation_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...

    def get_stats(self, automation_id: str) -> Dict[str, Any]:
        ...
