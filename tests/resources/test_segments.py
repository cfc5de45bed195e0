"""
Unit tests for the segment DTO, service and builder.
"""

from unittest.mock import Mock

import pytest

from fluent_mailerlite.api.segments import Segment, field_filter, group_filter
from fluent_mailerlite.core.errors import (
    SegmentCreateError,
    SegmentNotFoundError,
    SegmentUpdateError,
    ValidationError,
)
from fluent_mailerlite.resources.segments.segment_builder import SegmentBuilder
from fluent_mailerlite.resources.segments.segment_service import SegmentService


class TestSegmentDTO:
    """Test Segment validation and serialization."""

    def test_payload(self):
        """Test filters and non-default values are sent."""
        segment = Segment.field("Dutch", "country", "equals", "NL").deactivate()
        assert segment.to_dict() == {
            "name": "Dutch",
            "filters": [{"type": "field", "field": "country", "operator": "equals", "value": "NL"}],
            "active": False,
        }

    def test_update_payload_never_sends_filters(self):
        """Test partial update payloads."""
        segment = Segment.for_update("Renamed").with_description("New description")
        assert segment.to_dict() == {"name": "Renamed", "description": "New description"}

    def test_group_filter_operator(self):
        """Test membership maps to in/not_in."""
        assert group_filter("g1")["operator"] == "in"
        assert group_filter("g1", is_member=False)["operator"] == "not_in"

    @pytest.mark.parametrize(
        "filters,message",
        [
            ([], "At least one filter is required"),
            (["x"], "Filter at index 0 must be an array."),
            ([{}], "Filter at index 0 must have a 'type' field."),
            ([{"type": "weather"}], "Invalid filter type 'weather' at index 0"),
            (
                [{"type": "field", "field": "country"}],
                "Field filter at index 0 must have 'field', 'operator', and 'value'.",
            ),
            ([{"type": "group", "group_id": "1"}], "Group filter at index 0 must have 'group_id' and 'operator'."),
            ([{"type": "email_activity"}], "Email activity filter at index 0 must have 'activity'."),
        ],
    )
    def test_invalid_filters(self, filters, message):
        """Test filter validation messages."""
        with pytest.raises(ValidationError, match=message):
            Segment.create("Segment", filters)

    def test_survey_filter_needs_only_type(self):
        """Test filter types without required keys."""
        assert Segment.create("Survey", [{"type": "survey"}]).filters == [{"type": "survey"}]

    def test_name_rules_shared_with_groups(self):
        """Test invalid characters in names."""
        with pytest.raises(ValidationError, match="Segment name contains invalid characters"):
            Segment.group("a/b", "g1")


class TestSegmentService:
    """Test SegmentService against a mocked client."""

    def test_create_is_not_supported(self, manager, client):
        """Test create never reaches the API."""
        with pytest.raises(SegmentCreateError) as exc_info:
            SegmentService(manager).create(Segment.group("Members", "g1"))

        assert exc_info.value.code == 501
        assert exc_info.value.context["supported"] is False
        client.segments.create.assert_not_called()

    def test_update_invalid_filters(self, manager, client, api_error):
        """Test filter complaints map to invalid_filters."""
        client.segments.update.side_effect = api_error(400, "The filters are invalid")

        with pytest.raises(SegmentUpdateError, match="Invalid filters"):
            SegmentService(manager).update("s1", Segment.for_update("Renamed"))

    def test_update_validation_wins_over_filters(self, manager, client, api_error):
        """Test a 422 mentioning filters is still invalid data."""
        client.segments.update.side_effect = api_error(
            422, "Validation failed: filters.0.value is required"
        )

        with pytest.raises(SegmentUpdateError, match="Invalid data"):
            SegmentService(manager).update("s1", Segment.for_update("Renamed"))

    def test_update_payload(self, manager, client):
        """Test updates send the partial payload."""
        client.segments.update.return_value = {"data": {"id": "s1", "name": "Renamed"}}

        result = SegmentService(manager).update("s1", Segment.for_update("Renamed"))

        client.segments.update.assert_called_once_with("s1", {"name": "Renamed"})
        assert result["active"] is True
        assert result["subscribers_count"] == 0

    def test_get_stats(self, manager, client):
        """Test stats are read from the segment itself."""
        client.segments.find.return_value = {"data": {"id": "s1", "subscribers_count": 9}}

        stats = SegmentService(manager).get_stats("s1")

        assert stats["subscribers_count"] == 9
        assert stats["growth_rate"] == 0.0

    def test_refresh_not_found(self, manager, client, api_error):
        """Test refreshing a missing segment."""
        client.segments.refresh.side_effect = api_error(404)

        with pytest.raises(SegmentNotFoundError):
            SegmentService(manager).refresh("s1")

    def test_deactivate(self, manager, client):
        """Test deactivate is an update."""
        client.segments.update.return_value = {"data": {"id": "s1", "active": False}}

        assert SegmentService(manager).deactivate("s1")["active"] is False
        client.segments.update.assert_called_once_with("s1", {"active": False})


class TestSegmentBuilder:
    """Test SegmentBuilder."""

    def test_filters_accumulate(self):
        """Test the filter shortcuts."""
        dto = (
            SegmentBuilder(Mock())
            .named("Engaged")
            .where_field("country", "equals", "NL")
            .and_who_opened(days=30)
            .and_not_in_group("g9")
            .created_after("2030-01-01")
            .to_dto()
        )

        assert dto.filters == [
            field_filter("country", "equals", "NL"),
            {"type": "email_activity", "activity": "opened", "days": 30},
            {"type": "group", "group_id": "g9", "operator": "not_in"},
            {"type": "date", "field": "created_at", "operator": "after", "value": "2030-01-01"},
        ]

    def test_requires_name_then_filters(self):
        """Test required checks."""
        with pytest.raises(ValidationError, match="Name is required to create SegmentDTO"):
            SegmentBuilder(Mock()).in_group("g1").to_dto()
        with pytest.raises(ValidationError, match="At least one filter is required"):
            SegmentBuilder(Mock()).named("Empty").to_dto()

    def test_update_uses_partial_payload(self):
        """Test update does not require filters."""
        service = Mock()
        SegmentBuilder(service).named("Renamed").update("s1")

        dto = service.update.call_args.args[1]
        assert dto.is_update is True
        assert "filters" not in dto.to_dict()
