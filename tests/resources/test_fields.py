"""
Unit tests for the custom field DTO, service and builder.
"""

from unittest.mock import Mock

import pytest

from fluent_mailerlite.api.fields import Field
from fluent_mailerlite.core.errors import (
    FieldCreateError,
    FieldNotFoundError,
    ValidationError,
)
from fluent_mailerlite.resources.fields.field_builder import FieldBuilder
from fluent_mailerlite.resources.fields.field_service import FieldService


class TestFieldDTO:
    """Test Field validation and serialization."""

    def test_title_is_never_sent(self):
        """Test the local title stays out of the payload."""
        field = Field.text("company", title="Company name")
        assert field.title == "Company name"
        assert field.to_dict() == {"name": "company", "type": "text"}

    def test_select_options(self):
        """Test select fields carry their options."""
        assert Field.select("plan", ["free", "pro"]).to_dict() == {
            "name": "plan",
            "type": "text",
            "options": {"type": "select", "values": ["free", "pro"]},
        }

    def test_required_flag(self):
        """Test make_required/make_optional round the flag."""
        field = Field.number("age").make_required()
        assert field.to_dict()["required"] is True
        assert "required" not in field.make_optional().to_dict()

    @pytest.mark.parametrize(
        "factory,default,message",
        [
            (Field.text, 5, "Default value for text field must be a string."),
            (Field.number, "5", "Default value for number field must be numeric."),
            (Field.number, True, "Default value for number field must be numeric."),
            (Field.boolean, "yes", "Default value for boolean field must be a boolean."),
            (Field.date, "01/02/2030", "Default value for date field must be in YYYY-MM-DD format."),
        ],
    )
    def test_default_value_types(self, factory, default, message):
        """Test defaults must match the field type."""
        with pytest.raises(ValidationError, match=message):
            factory("f", default_value=default)

    def test_valid_defaults(self):
        """Test defaults of the right type are sent."""
        assert Field.date("birthday", default_value="2030-01-02").to_dict()["default_value"] == "2030-01-02"
        assert Field.number("score", default_value=1.5).to_dict()["default_value"] == 1.5

    def test_invalid_type(self):
        """Test unknown field types."""
        with pytest.raises(ValidationError, match="Invalid field type 'color'"):
            Field(name="f", type="color")

    def test_name_limit(self):
        """Test the name length limit."""
        with pytest.raises(ValidationError, match="cannot exceed 255 characters"):
            Field.text("n" * 256)


class TestFieldService:
    """Test FieldService against a mocked client."""

    def test_create(self, manager, client):
        """Test create reshapes the response."""
        client.fields.create.return_value = {"data": {"id": "f1", "name": "company", "type": "text"}}

        result = FieldService(manager).create(Field.text("company"))

        assert result["id"] == "f1"
        assert result["options"] == {}
        assert result["required"] is False

    def test_create_duplicate(self, manager, client, api_error):
        """Test a duplicate field name."""
        client.fields.create.side_effect = api_error(409, "Field already exists")

        with pytest.raises(FieldCreateError, match="Field already exists"):
            FieldService(manager).create(Field.text("company"))

    def test_get_usage_defaults_to_zero(self, manager, client):
        """Test missing usage counters are reported as zero."""
        client.fields.usage.return_value = {"data": {"subscribers_count": 12}}

        assert FieldService(manager).get_usage("f1") == {
            "subscribers_count": 12,
            "filled_count": 0,
            "empty_count": 0,
            "usage_percentage": 0.0,
        }

    def test_get_usage_not_found(self, manager, client, api_error):
        """Test usage of a missing field."""
        client.fields.usage.side_effect = api_error(404)

        with pytest.raises(FieldNotFoundError, match="Field with ID 'f1' was not found."):
            FieldService(manager).get_usage("f1")

    def test_find_by_name(self, manager, client, page):
        """Test the client-side name lookup."""
        client.fields.get.return_value = page([{"id": "f1", "name": "company", "type": "text"}])
        assert FieldService(manager).find_by_name("company")["id"] == "f1"

    def test_require_by_name_miss(self, manager, client, page):
        """Test the strict lookup raises when no field matches."""
        client.fields.get.return_value = page([])

        with pytest.raises(FieldNotFoundError, match="Field with name 'company' was not found."):
            FieldService(manager).require_by_name("company")

    def test_builder_require_by_name(self):
        """Test the builder uses its own name for the strict lookup."""
        service = Mock()
        FieldBuilder(service).name("company").require_by_name()
        service.require_by_name.assert_called_once_with("company")


class TestFieldBuilder:
    """Test FieldBuilder."""

    def test_requires_name_then_type(self):
        """Test the order of required checks."""
        with pytest.raises(ValidationError, match="Name is required to create FieldDTO"):
            FieldBuilder(Mock()).as_text().to_dto()
        with pytest.raises(ValidationError, match="Type is required to create FieldDTO"):
            FieldBuilder(Mock()).name("company").to_dto()

    def test_shortcut_constructors(self):
        """Test the classmethod shortcuts keep the title apart from the name."""
        dto = FieldBuilder.text(Mock(), "company", title="Company").to_dto()
        assert dto.name == "company"
        assert dto.title == "Company"
        assert dto.type == "text"

    def test_select_and_validation_options(self):
        """Test option helpers."""
        dto = (
            FieldBuilder(Mock())
            .name("plan")
            .as_select(["free", "pro"])
            .and_required()
            .to_dto()
        )
        assert dto.options == {"type": "select", "values": ["free", "pro"]}
        assert dto.required is True

    def test_email_field(self):
        """Test as_email is a validated text field."""
        dto = FieldBuilder(Mock()).name("backup_email").as_email().max_length(120).to_dto()
        assert dto.options == {"validation": "email", "max_length": 120}

    def test_create(self):
        """Test create hands the DTO to the service."""
        service = Mock()
        FieldBuilder.number(service, "score").create()
        assert service.create.call_args.args[0].type == "number"
