"""
Unit tests for the automation DTO, service and builder.
"""

from unittest.mock import Mock

import pytest

from fluent_mailerlite.api.automations import Automation
from fluent_mailerlite.core.errors import (
    AutomationCreateError,
    AutomationNotFoundError,
    AutomationStateError,
    AutomationUpdateError,
    ValidationError,
)
from fluent_mailerlite.resources.automations.automation_builder import AutomationBuilder
from fluent_mailerlite.resources.automations.automation_service import AutomationService


TRIGGER = {"type": "subscriber", "event": "joins_group", "target": "g1"}
STEP = {"type": "email", "template_id": "welcome"}


class TestAutomationDTO:
    """Test Automation validation and serialization."""

    def test_payload(self):
        """Test name, enabled and status are always sent."""
        automation = Automation.create("Welcome", [TRIGGER], [STEP], enabled=False)
        assert automation.to_dict() == {
            "name": "Welcome",
            "enabled": False,
            "status": "draft",
            "triggers": [TRIGGER],
            "steps": [STEP],
        }

    def test_date_automation(self):
        """Test the date trigger factory."""
        automation = Automation.create_date_automation("Birthday", "birthday", 0, [STEP])
        assert automation.triggers == [
            {"type": "date", "field": "birthday", "offset": 0, "unit": "days"}
        ]

    @pytest.mark.parametrize(
        "triggers,message",
        [
            ([], "Automation must have at least one trigger."),
            (["x"], "Trigger at index 0 must be an array."),
            ([{"event": "subscribes"}], "Trigger at index 0 must have a 'type' field."),
            ([{"type": "moon"}], "Invalid trigger type 'moon' at index 0"),
            ([{"type": "subscriber"}], "Subscriber trigger at index 0 must have an 'event' field."),
            ([{"type": "subscriber", "event": "dances"}], "Invalid subscriber event 'dances'"),
            ([{"type": "date", "field": "birthday"}], "Date trigger at index 0 must have an 'offset' field."),
            ([{"type": "api"}], "api trigger at index 0 must have an 'endpoint' field."),
        ],
    )
    def test_invalid_triggers(self, triggers, message):
        """Test trigger validation."""
        with pytest.raises(ValidationError, match=message):
            Automation.create("Flow", triggers, [STEP])

    @pytest.mark.parametrize(
        "steps,message",
        [
            ([], "Automation must have at least one step."),
            ([{"type": "email"}], "must have either 'campaign_id' or 'template_id'"),
            ([{"type": "delay", "duration": 1}], "must have 'duration' and 'unit' fields."),
            ([{"type": "delay", "duration": 1, "unit": "years"}], "Invalid delay unit 'years'"),
            ([{"type": "condition"}], "Condition step at index 0 must have 'conditions' field."),
            ([{"type": "webhook"}], "Webhook step at index 0 must have 'url' field."),
            ([{"type": "webhook", "url": "nope"}], "Invalid webhook URL at step index 0."),
        ],
    )
    def test_invalid_steps(self, steps, message):
        """Test step validation."""
        with pytest.raises(ValidationError, match=message):
            Automation.create("Flow", [TRIGGER], steps)

    @pytest.mark.parametrize(
        "settings,message",
        [
            ({"timezone": "Mars/Olympus"}, "Invalid timezone 'Mars/Olympus'."),
            ({"send_time": "9am"}, "Send time settings must be an array."),
            ({"frequency_cap": 0}, "Frequency cap must be a positive integer."),
        ],
    )
    def test_invalid_settings(self, settings, message):
        """Test settings validation."""
        with pytest.raises(ValidationError, match=message):
            Automation(name="Flow", triggers=[TRIGGER], steps=[STEP], settings=settings)

    def test_invalid_condition_operator(self):
        """Test condition operators."""
        with pytest.raises(ValidationError, match="Invalid condition operator 'like'"):
            Automation(
                name="Flow",
                triggers=[TRIGGER],
                steps=[STEP],
                conditions=[{"field": "country", "operator": "like", "value": "NL"}],
            )

    def test_invalid_status(self):
        """Test the status is a closed set."""
        with pytest.raises(ValidationError, match="Invalid status 'running'"):
            Automation(name="Flow", triggers=[TRIGGER], steps=[STEP], status="running")


class TestAutomationService:
    """Test AutomationService against a mocked client."""

    def test_start(self, manager, client):
        """Test start calls the start action."""
        client.automations.start.return_value = {"data": {"id": "a1", "status": "active", "enabled": True}}

        result = AutomationService(manager).start("a1")

        client.automations.start.assert_called_once_with("a1")
        assert result["status"] == "active"
        assert result["steps"] == []

    def test_enable_and_disable_alias_start_and_stop(self, manager, client):
        """Test enable/disable."""
        service = AutomationService(manager)
        service.enable("a1")
        service.disable("a1")
        client.automations.start.assert_called_once_with("a1")
        client.automations.stop.assert_called_once_with("a1")

    def test_already_active(self, manager, client, api_error):
        """Test an 'already' response maps to already_in_state."""
        client.automations.start.side_effect = api_error(422, "Automation is already active")

        with pytest.raises(AutomationStateError) as exc_info:
            AutomationService(manager).start("a1")

        assert exc_info.value.context["action"] == "start"
        assert "Automation is already active" in exc_info.value.message

    def test_cannot_be_stopped(self, manager, client, api_error):
        """Test a stop rejection."""
        client.automations.stop.side_effect = api_error(422, "Draft automation cannot be stopped")

        with pytest.raises(AutomationStateError, match="cannot be stopped"):
            AutomationService(manager).stop("a1")

    def test_pause_not_found(self, manager, client, api_error):
        """Test state changes on a missing automation."""
        client.automations.pause.side_effect = api_error(404)

        with pytest.raises(AutomationNotFoundError):
            AutomationService(manager).pause("a1")

    def test_update_active_automation(self, manager, client, api_error):
        """Test an update rejected because the automation is running."""
        client.automations.update.side_effect = api_error(400, "Automation cannot be updated")

        with pytest.raises(AutomationUpdateError, match="with status 'active' cannot be updated"):
            AutomationService(manager).update("a1", {"name": "Renamed"})

    def test_update_validation_wins_over_state(self, manager, client, api_error):
        """Test a 422 is invalid data even when the message mentions a state."""
        client.automations.update.side_effect = api_error(
            422, "Validation failed: inactive group selected"
        )

        with pytest.raises(AutomationUpdateError, match="Invalid data"):
            AutomationService(manager).update("a1", {"name": "Renamed"})

    def test_create_invalid_trigger(self, manager, client, api_error):
        """Test trigger complaints during create."""
        client.automations.create.side_effect = api_error(400, "Unknown trigger")

        with pytest.raises(AutomationCreateError, match="Automation must have valid triggers"):
            AutomationService(manager).create(Automation.create("Flow", [TRIGGER], [STEP]))

    def test_get_activity(self, manager, client, page):
        """Test activity pages are passed through."""
        client.automations.get_activity.return_value = page([{"event": "email_sent"}])

        result = AutomationService(manager).get_activity("a1", {"limit": 5})

        client.automations.get_activity.assert_called_once_with("a1", {"limit": 5})
        assert result["data"] == [{"event": "email_sent"}]


class TestAutomationBuilder:
    """Test AutomationBuilder."""

    def test_workflow_chain(self):
        """Test then_ chaining builds triggers and steps in order."""
        dto = (
            AutomationBuilder(Mock())
            .create("Welcome series")
            .when_subscriber_joins_group("g1")
            .then_send_email("welcome")
            .then_delay_days(3)
            .thenSendEmail("tips")
            .and_add_tag("onboarded")
            .to_dto()
        )

        assert dto.triggers == [{"type": "subscriber", "event": "joins_group", "target": "g1"}]
        assert dto.steps == [
            {"type": "email", "template_id": "welcome"},
            {"type": "delay", "duration": 3, "unit": "days"},
            {"type": "email", "template_id": "tips"},
            {"type": "tag", "action": "add", "tag": "onboarded"},
        ]

    def test_name_required(self):
        """Test the DTO needs a name."""
        with pytest.raises(ValidationError, match="Name is required to create AutomationDTO"):
            AutomationBuilder(Mock()).when_subscriber_subscribes().send_email("t").to_dto()

    def test_start_saves_first(self):
        """Test start creates the automation, then starts it."""
        service = Mock()
        service.create.return_value = {"id": "a7"}

        (
            AutomationBuilder(service)
            .create("Welcome")
            .when_subscriber_subscribes()
            .send_email("welcome")
            .start()
        )

        service.start.assert_called_once_with("a7")

    def test_settings_helpers(self):
        """Test settings and conditions helpers."""
        dto = (
            AutomationBuilder(Mock())
            .named("Capped")
            .when_api_called("/hooks/start")
            .call_webhook("https://example.com/hook", {"a": 1})
            .frequency_cap(2)
            .send_time_between("09:00", "17:00")
            .with_condition("country", "equals", "NL")
            .to_dto()
        )

        assert dto.settings == {"frequency_cap": 2, "send_time": {"start": "09:00", "end": "17:00"}}
        assert dto.conditions == [{"field": "country", "operator": "equals", "value": "NL"}]
        assert dto.steps == [{"type": "webhook", "url": "https://example.com/hook", "data": {"a": 1}}]
