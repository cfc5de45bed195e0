"""
fluent-mailerlite: fluent builders, DTOs and services for the MailerLite API.
"""

from .api.automations import Automation
from .api.campaigns import Campaign
from .api.fields import Field
from .api.groups import Group
from .api.segments import Segment
from .api.subscribers import Subscriber
from .api.webhooks import Webhook
from .core.errors import (
    AuthenticationError,
    ConfigError,
    CreateError,
    DeleteError,
    IntegrationError,
    MailerLiteApiError,
    MailerLiteError,
    NotFoundError,
    SendError,
    StateError,
    UpdateError,
    ValidationError,
)
from .mailerlite import MailerLite
from .manager import MailerLiteManager

__all__ = [
    "MailerLite",
    "MailerLiteManager",
    "Automation",
    "Campaign",
    "Field",
    "Group",
    "Segment",
    "Subscriber",
    "Webhook",
    "AuthenticationError",
    "ConfigError",
    "CreateError",
    "DeleteError",
    "IntegrationError",
    "MailerLiteApiError",
    "MailerLiteError",
    "NotFoundError",
    "SendError",
    "StateError",
    "UpdateError",
    "ValidationError",
]

__version__ = "0.1.0"
