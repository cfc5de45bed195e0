"""
Shared fixtures: a mocked collaborator client behind a mocked manager.
"""

from unittest.mock import Mock

import pytest

from fluent_mailerlite.core.errors import MailerLiteApiError


@pytest.fixture
def client():
    return Mock()


@pytest.fixture
def manager(client):
    manager = Mock()
    manager.get_client.return_value = client
    return manager


@pytest.fixture
def api_error():
    """Factory for API errors as raised by the HTTP client."""

    def make(status_code, message="error"):
        return MailerLiteApiError(
            f"MailerLite error {status_code}: {message}",
            status_code=status_code,
            payload={"message": message},
        )

    return make


@pytest.fixture
def page():
    """Factory for list response envelopes."""

    def make(items, next_link=None):
        return {
            "data": list(items),
            "meta": {"current_page": 1},
            "links": {"next": next_link},
        }

    return make
