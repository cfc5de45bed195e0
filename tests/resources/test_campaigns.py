"""
Unit tests for the campaign DTO, service and builder.
"""

from datetime import datetime, timedelta
from unittest.mock import Mock

import pytest

from fluent_mailerlite.api.campaigns import Campaign, parse_schedule
from fluent_mailerlite.core.errors import (
    CampaignCreateError,
    CampaignDeleteError,
    CampaignNotFoundError,
    CampaignSendError,
    CampaignUpdateError,
    ValidationError,
)
from fluent_mailerlite.resources.campaigns.campaign_builder import CampaignBuilder
from fluent_mailerlite.resources.campaigns.campaign_service import CampaignService


def _campaign(**overrides):
    values = {
        "subject": "October news",
        "from_name": "ACME",
        "from_email": "news@acme.com",
        "html": "<p>Hello</p>",
    }
    values.update(overrides)
    return Campaign(**values)


class TestCampaignDTO:
    """Test Campaign validation and serialization."""

    def test_payload_always_carries_type(self):
        """Test the required keys plus type are sent."""
        assert _campaign().to_dict() == {
            "subject": "October news",
            "from_name": "ACME",
            "from_email": "news@acme.com",
            "html": "<p>Hello</p>",
            "type": "regular",
        }

    def test_schedule_is_formatted(self):
        """Test schedule_at is serialized as YYYY-MM-DD HH:MM:SS."""
        when = (datetime.now() + timedelta(days=2)).replace(microsecond=0)
        payload = _campaign(schedule_at=when, groups=["1"]).to_dict()

        assert payload["schedule_at"] == when.strftime("%Y-%m-%d %H:%M:%S")
        assert payload["groups"] == ["1"]

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"subject": " "}, "Campaign subject cannot be empty."),
            ({"subject": "x" * 256}, "Campaign subject cannot exceed 255 characters."),
            ({"from_name": "x" * 101}, "From name cannot exceed 100 characters."),
            ({"from_email": "nope"}, "Invalid from email address: nope"),
            ({"html": None}, "Campaign must have either HTML or plain text content."),
            ({"html": "  "}, "HTML content cannot be empty if provided."),
            ({"type": "flash"}, "Invalid campaign type 'flash'"),
            ({"type": "ab"}, 'A/B test settings are required when campaign type is "ab".'),
            ({"ab_settings": {"test_type": "subject"}}, "can only be used with campaign type"),
        ],
    )
    def test_invalid_values(self, overrides, message):
        """Test construction rejects invalid input."""
        with pytest.raises(ValidationError, match=message):
            _campaign(**overrides)

    def test_past_schedule_is_rejected(self):
        """Test schedule_at must be in the future."""
        with pytest.raises(ValidationError, match="Schedule time must be in the future."):
            _campaign(schedule_at=datetime.now() - timedelta(minutes=1))

    @pytest.mark.parametrize("send_size", [9, 51, "20", True])
    def test_ab_send_size_bounds(self, send_size):
        """Test the A/B send size must be an integer in 10..50."""
        with pytest.raises(ValidationError, match="send size"):
            _campaign(type="ab", ab_settings={"test_type": "subject", "send_size": send_size})

    def test_ab_campaign(self):
        """Test a valid A/B campaign."""
        campaign = _campaign(type="ab", ab_settings={"test_type": "content", "send_size": 25})
        assert campaign.to_dict()["ab_settings"] == {"test_type": "content", "send_size": 25}

    def test_with_groups_merges(self):
        """Test with_groups keeps existing groups."""
        campaign = _campaign(groups=["1"])
        assert campaign.with_groups(["1", "2"]).groups == ["1", "2"]

    def test_from_dict_parses_schedule(self):
        """Test string schedules are parsed."""
        future = (datetime.now() + timedelta(days=1)).strftime("%Y-%m-%d %H:%M:%S")
        campaign = Campaign.from_dict(
            {
                "subject": "Hi",
                "from_name": "ACME",
                "from_email": "news@acme.com",
                "plain": "Hello",
                "schedule_at": future,
            }
        )
        assert isinstance(campaign.schedule_at, datetime)

    def test_from_dict_missing_from_email(self):
        """Test the missing key is named."""
        with pytest.raises(ValidationError, match="From email is required"):
            Campaign.from_dict({"subject": "Hi", "from_name": "ACME"})

    def test_parse_schedule_rejects_junk(self):
        """Test unparseable schedules."""
        assert parse_schedule("2030-01-02T03:04:05") == datetime(2030, 1, 2, 3, 4, 5)
        with pytest.raises(ValidationError, match="Invalid schedule time"):
            parse_schedule("tomorrow")


class TestCampaignService:
    """Test CampaignService against a mocked client."""

    def test_create(self, manager, client):
        """Test create sends the payload and reshapes the response."""
        client.campaigns.create.return_value = {
            "data": {"id": "c1", "subject": "October news", "status": "draft", "stats": None}
        }

        result = CampaignService(manager).create(_campaign())

        assert result["id"] == "c1"
        assert result["stats"] == {}
        assert client.campaigns.create.call_args.args[0]["subject"] == "October news"

    def test_create_failure_names_subject(self, manager, client, api_error):
        """Test create failures use the subject as identifier."""
        client.campaigns.create.side_effect = api_error(500, "Server error")

        with pytest.raises(CampaignCreateError) as exc_info:
            CampaignService(manager).create(_campaign())
        assert "campaign with subject 'October news'" in exc_info.value.message

    def test_create_without_recipients(self, manager, client, api_error):
        """Test recipient complaints map to no_recipients."""
        client.campaigns.create.side_effect = api_error(400, "Campaign has no recipients")

        with pytest.raises(CampaignCreateError, match="must have at least one group or segment"):
            CampaignService(manager).create(_campaign())

    def test_schedule_payload(self, manager, client):
        """Test schedule posts the formatted time."""
        client.campaigns.schedule.return_value = {"data": {"id": "c1", "status": "ready"}}

        CampaignService(manager).schedule("c1", datetime(2030, 5, 1, 9, 30))

        client.campaigns.schedule.assert_called_once_with(
            "c1", {"schedule_at": "2030-05-01 09:30:00"}
        )

    def test_send_classification(self, manager, client, api_error):
        """Test send failures map to the send family."""
        service = CampaignService(manager)

        client.campaigns.send.side_effect = api_error(404)
        with pytest.raises(CampaignNotFoundError):
            service.send("c1")

        client.campaigns.send.side_effect = api_error(422, "Campaign has no recipients")
        with pytest.raises(CampaignSendError, match="has no recipients"):
            service.send("c1")

        client.campaigns.send.side_effect = api_error(422, "Campaign was already sent")
        with pytest.raises(CampaignSendError, match="cannot be sent"):
            service.send("c1")

    def test_update_sent_campaign(self, manager, client, api_error):
        """Test updating a sent campaign."""
        client.campaigns.update.side_effect = api_error(400, "Campaign cannot be updated")

        with pytest.raises(CampaignUpdateError, match="with status 'sent' cannot be updated"):
            CampaignService(manager).update("c1", {"subject": "x"})

    def test_update_validation_wins_over_state(self, manager, client, api_error):
        """Test a 422 is invalid data even when the message reads like a state error."""
        client.campaigns.update.side_effect = api_error(
            422, "Validation failed: the html field must be present"
        )

        with pytest.raises(CampaignUpdateError, match="Invalid data") as exc_info:
            CampaignService(manager).update("c1", {"subject": "x"})

        assert exc_info.value.context["errors"] == ["Validation failed"]

    def test_delete_sent_campaign(self, manager, client, api_error):
        """Test deleting a sent campaign."""
        client.campaigns.delete.side_effect = api_error(422, "Sent campaigns cannot be deleted")

        with pytest.raises(CampaignDeleteError, match="cannot be deleted"):
            CampaignService(manager).delete("c1")

    def test_get_by_id_soft_miss(self, manager, client, api_error):
        """Test a missing campaign returns None."""
        client.campaigns.find.side_effect = api_error(404)
        assert CampaignService(manager).get_by_id("c1") is None

    def test_find_by_name_scans_pages(self, manager, client, page):
        """Test find_by_name walks pages until a match."""
        client.campaigns.get.side_effect = [
            page([{"id": "c1", "name": "Spring"}], next_link="?page=2"),
            page([{"id": "c2", "name": "Autumn"}]),
        ]

        found = CampaignService(manager).find_by_name("Autumn")

        assert found["id"] == "c2"
        assert client.campaigns.get.call_count == 2

    def test_require_by_name_miss(self, manager, client, page):
        """Test the strict lookup raises with the name as identifier."""
        client.campaigns.get.return_value = page([{"id": "c1", "name": "Spring"}])

        with pytest.raises(CampaignNotFoundError, match="Campaign 'Autumn' was not found.") as exc_info:
            CampaignBuilder(CampaignService(manager)).require_by_name("Autumn")

        assert exc_info.value.context["identifier"] == "Autumn"

    def test_get_stats_returns_raw_resource(self, manager, client):
        """Test stats are returned unwrapped but otherwise raw."""
        client.campaigns.get_stats.return_value = {"data": {"id": "c1", "stats": {"sent": 10}}}
        assert CampaignService(manager).get_stats("c1") == {"id": "c1", "stats": {"sent": 10}}


class TestCampaignBuilder:
    """Test CampaignBuilder."""

    def _builder(self, service=None):
        return (
            CampaignBuilder(service or Mock())
            .subject("October news")
            .from_("ACME", "news@acme.com")
            .html("<p>Hello</p>")
        )

    def test_required_order(self):
        """Test missing values are reported in subject, from name, from email order."""
        with pytest.raises(ValidationError, match="Subject is required to create CampaignDTO"):
            CampaignBuilder(Mock()).from_name("ACME").to_dto()
        with pytest.raises(ValidationError, match="From name is required to create CampaignDTO"):
            CampaignBuilder(Mock()).subject("Hi").to_dto()
        with pytest.raises(ValidationError, match="From email is required to create CampaignDTO"):
            CampaignBuilder(Mock()).subject("Hi").from_name("ACME").to_dto()

    def test_chain_with_aliases(self):
        """Test and_ chaining and recipient de-duplication."""
        dto = self._builder().to_group("1").and_to_groups(["1", "2"]).andToSegment("s1").to_dto()
        assert dto.groups == ["1", "2"]
        assert dto.segments == ["s1"]

    def test_send_creates_then_sends(self):
        """Test send uses the id returned by create."""
        service = Mock()
        service.create.return_value = {"id": "c9"}

        self._builder(service).send()

        service.send.assert_called_once_with("c9")

    def test_send_stops_when_create_fails(self):
        """Test a failed create never sends."""
        service = Mock()
        service.create.side_effect = CampaignCreateError.make("October news", "boom")

        with pytest.raises(CampaignCreateError):
            self._builder(service).send()
        service.send.assert_not_called()

    def test_schedule_requires_time(self):
        """Test schedule needs schedule_at."""
        with pytest.raises(ValidationError, match="Schedule time is required"):
            self._builder().schedule()

    def test_schedule_creates_then_schedules(self):
        """Test schedule passes the configured time."""
        service = Mock()
        service.create.return_value = {"id": "c9"}
        when = datetime.now() + timedelta(hours=3)

        self._builder(service).schedule_at(when).schedule()

        service.schedule.assert_called_once_with("c9", when)

    def test_draft_routes_to_draft(self):
        """Test draft mode uses the draft operation."""
        service = Mock()
        self._builder(service).draft().create()
        service.draft.assert_called_once()
        service.create.assert_not_called()
