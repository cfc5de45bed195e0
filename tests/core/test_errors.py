"""
Unit tests for the error taxonomy and its factories.
"""

import pytest

from fluent_mailerlite.core.errors import (
    AuthenticationError,
    AutomationStateError,
    CampaignCreateError,
    CampaignSendError,
    CreateError,
    GroupNotFoundError,
    IntegrationError,
    MailerLiteApiError,
    MailerLiteError,
    NotFoundError,
    SegmentCreateError,
    SubscriberCreateError,
    SubscriberNotFoundError,
    ValidationError,
    WebhookCreateError,
    WebhookNotFoundError,
)


class TestMailerLiteError:
    """Test the base error."""

    def test_carries_message_code_cause_and_context(self):
        """Test all attributes are kept."""
        cause = RuntimeError("boom")
        error = MailerLiteError("failed", code=500, cause=cause, context={"type": "x"})

        assert str(error) == "failed"
        assert error.message == "failed"
        assert error.code == 500
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.context == {"type": "x"}

    def test_with_context_returns_merged_copy(self):
        """Test with_context leaves the original untouched."""
        error = MailerLiteError("failed", context={"type": "x", "id": 1})
        enriched = error.with_context({"id": 2, "extra": True})

        assert enriched is not error
        assert enriched.context == {"type": "x", "id": 2, "extra": True}
        assert error.context == {"type": "x", "id": 1}

    def test_validation_error_is_value_error(self):
        """Test ValidationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise ValidationError("bad input")

    def test_api_error_is_integration_error(self):
        """Test MailerLiteApiError keeps the HTTP details."""
        error = MailerLiteApiError("MailerLite error 422", status_code=422, payload={"message": "x"})

        assert isinstance(error, IntegrationError)
        assert error.status_code == 422
        assert error.code == 422
        assert error.payload == {"message": "x"}


class TestAuthenticationError:
    """Test authentication factories."""

    def test_missing_api_key(self):
        """Test the missing key error."""
        error = AuthenticationError.missing_api_key()
        assert error.code == 401
        assert error.context["type"] == "missing_api_key"
        assert "MAILERLITE_API_KEY" in error.message

    def test_invalid_api_key_keeps_cause(self):
        """Test the invalid key error chains its cause."""
        cause = MailerLiteApiError("401", status_code=401)
        error = AuthenticationError.invalid_api_key(cause)
        assert error.code == 401
        assert error.cause is cause
        assert error.context["type"] == "invalid_api_key"

    def test_insufficient_permissions(self):
        """Test the permissions error names the resource."""
        error = AuthenticationError.insufficient_permissions("campaigns")
        assert error.code == 403
        assert error.message.endswith("to access campaigns.")
        assert error.context["resource"] == "campaigns"

    def test_insufficient_permissions_without_resource(self):
        """Test the permissions error without a resource."""
        error = AuthenticationError.insufficient_permissions()
        assert error.message == "The MailerLite API key does not have sufficient permissions."


class TestResourceErrors:
    """Test the operation family factories."""

    def test_not_found_with_id(self):
        """Test the generic not-found message."""
        error = GroupNotFoundError.with_id("42")
        assert isinstance(error, NotFoundError)
        assert error.code == 404
        assert error.message == "Group with ID '42' was not found."
        assert error.context == {"type": "group_not_found", "id": "42"}

    def test_subscriber_not_found_variants(self):
        """Test the subscriber-specific not-found messages."""
        by_email = SubscriberNotFoundError.with_email("a@example.com")
        by_id = SubscriberNotFoundError.with_id("7")

        assert by_email.message == "Subscriber not found with email: a@example.com"
        assert by_id.message == "Subscriber not found with ID: 7"
        assert by_id.context["search_type"] == "ID"

    def test_create_error_already_exists(self):
        """Test the duplicate factory renders the subscriber target."""
        error = SubscriberCreateError.already_exists("a@example.com")
        assert isinstance(error, CreateError)
        assert error.message == (
            "Failed to create subscriber with email a@example.com: Subscriber already exists"
        )
        assert error.context["type"] == "subscriber_create_failed"
        assert error.context["identifier"] == "a@example.com"

    def test_invalid_data_lists_errors(self):
        """Test invalid_data keeps the error list in context."""
        error = CampaignCreateError.invalid_data("Hello", ["subject too long", "bad email"])
        assert "Invalid data: subject too long, bad email" in error.message
        assert error.context["errors"] == ["subject too long", "bad email"]

    def test_campaign_send_error_no_recipients(self):
        """Test the send family."""
        error = CampaignSendError.no_recipients("c-1")
        assert error.code == 422
        assert error.context["type"] == "campaign_send_failed"
        assert "has no recipients" in error.message

    def test_state_error_already_in_state(self):
        """Test the state family records the action."""
        error = AutomationStateError.already_in_state("a-1", "active", action="start")
        assert error.message == "Failed to start automation 'a-1': Automation is already active"
        assert error.context["type"] == "automation_state_failed"
        assert error.context["action"] == "start"

    def test_state_error_cannot_stop(self):
        """Test cannot_stop names the status."""
        error = AutomationStateError.cannot_stop("a-1", "draft")
        assert error.context["action"] == "stop"
        assert "with status 'draft' cannot be stopped" in error.message

    def test_segment_not_supported(self):
        """Test segment creation reports 501."""
        error = SegmentCreateError.not_supported("VIPs")
        assert error.code == 501
        assert error.context["supported"] is False
        assert error.context["identifier"] == "VIPs"

    def test_webhook_factories(self):
        """Test the webhook-specific factories."""
        url = "https://example.com/hook"
        assert WebhookNotFoundError.with_url(url).context["url"] == url
        assert "Invalid or unreachable webhook URL" in WebhookCreateError.invalid_url(url).message
        invalid_event = WebhookCreateError.invalid_event("nope", url)
        assert invalid_event.context["event"] == "nope"
        assert "webhook for URL 'https://example.com/hook'" in invalid_event.message
