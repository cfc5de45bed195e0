"""
Core error types for fluent-mailerlite.

Every raised error derives from ``MailerLiteError`` so callers can handle
them in one place. Errors carry a numeric ``code``, the wrapped ``cause``
(if any) and a ``context`` dict that always contains a ``type``
discriminator plus the identifiers involved.

Resource errors are built through named factories rather than direct
construction, e.g. ``SubscriberNotFoundError.with_email(email)`` or
``AutomationStateError.cannot_start(automation_id, status)``.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar


T_Error = TypeVar("T_Error", bound="MailerLiteError")


class MailerLiteError(Exception):
    """
    Base exception for all fluent-mailerlite errors.
    """

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
        self.context: Dict[str, Any] = dict(context or {})
        if cause is not None:
            self.__cause__ = cause

    def with_context(self: T_Error, extra: Dict[str, Any]) -> T_Error:
        """
        Return a copy of this error with ``extra`` merged into its context.
        """

        clone = copy.copy(self)
        clone.context = {**self.context, **extra}
        return clone


class ConfigError(MailerLiteError):
    """
    Raised when configuration is missing, invalid, or inconsistent.
    """


class ValidationError(MailerLiteError, ValueError):
    """
    Raised when DTO or builder input fails local validation.
    """


class IntegrationError(MailerLiteError):
    """
    Raised when the MailerLite API cannot be reached or returns an
    unexpected response.
    """


class MailerLiteApiError(IntegrationError):
    """
    Non-success HTTP response from the MailerLite API.
    """

    def __init__(
        self,
        message: str = "",
        status_code: Optional[int] = None,
        payload: Any = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message,
            code=status_code or 0,
            cause=cause,
            context={"type": "api_error", "status_code": status_code},
        )
        self.status_code = status_code
        self.payload = payload


class AuthenticationError(MailerLiteError):
    """
    Credential missing, invalid or lacking permissions. Never retried.
    """

    @classmethod
    def missing_api_key(cls) -> "AuthenticationError":
        return cls(
            "MailerLite API key is missing. Please set MAILERLITE_API_KEY "
            "in your environment or config.",
            code=401,
            context={"type": "missing_api_key"},
        )

    @classmethod
    def invalid_api_key(cls, cause: Optional[BaseException] = None) -> "AuthenticationError":
        return cls(
            "The provided MailerLite API key is invalid or has been revoked.",
            code=401,
            cause=cause,
            context={"type": "invalid_api_key"},
        )

    @classmethod
    def insufficient_permissions(
        cls, resource: Optional[str] = None, cause: Optional[BaseException] = None
    ) -> "AuthenticationError":
        message = "The MailerLite API key does not have sufficient permissions"
        if resource:
            message += f" to access {resource}"
        return cls(
            message + ".",
            code=403,
            cause=cause,
            context={"type": "insufficient_permissions", "resource": resource},
        )


# ----------------------------------------------------------------------
# Operation families
# ----------------------------------------------------------------------


class ResourceError(MailerLiteError):
    """
    Base for errors tied to one MailerLite resource.

    ``resource`` is the lowercase label used in messages and in the
    context ``type`` discriminator. ``target`` renders the identifier in
    messages.
    """

    resource = "resource"
    operation = "request"
    target = "{resource} '{identifier}'"
    default_code = 422

    @classmethod
    def title(cls) -> str:
        return cls.resource.capitalize()

    @classmethod
    def _describe(cls, identifier: Any) -> str:
        return cls.target.format(resource=cls.resource, identifier=identifier)

    @classmethod
    def make(
        cls: Type[T_Error],
        identifier: Any,
        reason: str,
        cause: Optional[BaseException] = None,
        **context: Any,
    ) -> T_Error:
        description = cls._describe(identifier)  # type: ignore[attr-defined]
        return cls(
            f"Failed to {cls.operation} {description}: {reason}",  # type: ignore[attr-defined]
            code=cls.default_code,  # type: ignore[attr-defined]
            cause=cause,
            context={
                "type": f"{cls.resource}_{cls.operation}_failed",  # type: ignore[attr-defined]
                "identifier": identifier,
                "reason": reason,
                **context,
            },
        )

    @classmethod
    def invalid_data(
        cls: Type[T_Error],
        identifier: Any,
        errors: Iterable[str],
        cause: Optional[BaseException] = None,
    ) -> T_Error:
        error_list: List[str] = list(errors)
        return cls.make(  # type: ignore[attr-defined]
            identifier,
            "Invalid data: " + ", ".join(error_list),
            cause,
            errors=error_list,
        )


class NotFoundError(ResourceError):
    """
    The requested resource does not exist.
    """

    default_code = 404

    @classmethod
    def with_id(cls, identifier: Any) -> "NotFoundError":
        return cls(
            f"{cls.title()} with ID '{identifier}' was not found.",
            code=cls.default_code,
            context={"type": f"{cls.resource}_not_found", "id": identifier},
        )

    @classmethod
    def with_identifier(cls, identifier: Any) -> "NotFoundError":
        return cls(
            f"{cls.title()} '{identifier}' was not found.",
            code=cls.default_code,
            context={"type": f"{cls.resource}_not_found", "identifier": identifier},
        )


class CreateError(ResourceError):
    """
    Creating a resource failed.
    """

    operation = "create"

    @classmethod
    def already_exists(cls, identifier: Any, cause: Optional[BaseException] = None) -> "CreateError":
        return cls.make(identifier, f"{cls.title()} already exists", cause)


class UpdateError(ResourceError):
    """
    Updating a resource failed.
    """

    operation = "update"

    @classmethod
    def cannot_update(
        cls, identifier: Any, status: str, cause: Optional[BaseException] = None
    ) -> "UpdateError":
        return cls.make(
            identifier,
            f"{cls.title()} with status '{status}' cannot be updated",
            cause,
            status=status,
        )


class DeleteError(ResourceError):
    """
    Deleting a resource failed.
    """

    operation = "delete"

    @classmethod
    def cannot_delete(
        cls, identifier: Any, status: str, cause: Optional[BaseException] = None
    ) -> "DeleteError":
        return cls.make(
            identifier,
            f"{cls.title()} with status '{status}' cannot be deleted",
            cause,
            status=status,
        )


class StateError(ResourceError):
    """
    A state transition (start, stop, pause, resume) was rejected.
    """

    operation = "change state of"

    @classmethod
    def make(  # type: ignore[override]
        cls,
        identifier: Any,
        action: str,
        reason: str,
        cause: Optional[BaseException] = None,
    ) -> "StateError":
        return cls(
            f"Failed to {action} {cls._describe(identifier)}: {reason}",
            code=cls.default_code,
            cause=cause,
            context={
                "type": f"{cls.resource}_state_failed",
                "identifier": identifier,
                "action": action,
                "reason": reason,
            },
        )

    @classmethod
    def cannot_start(
        cls, identifier: Any, status: str, cause: Optional[BaseException] = None
    ) -> "StateError":
        return cls.make(
            identifier, "start", f"{cls.title()} with status '{status}' cannot be started", cause
        )

    @classmethod
    def cannot_stop(
        cls, identifier: Any, status: str, cause: Optional[BaseException] = None
    ) -> "StateError":
        return cls.make(
            identifier, "stop", f"{cls.title()} with status '{status}' cannot be stopped", cause
        )

    @classmethod
    def already_in_state(
        cls,
        identifier: Any,
        state: str,
        cause: Optional[BaseException] = None,
        action: Optional[str] = None,
    ) -> "StateError":
        return cls.make(
            identifier, action or cls.operation, f"{cls.title()} is already {state}", cause
        )


class SendError(ResourceError):
    """
    Sending a campaign failed.
    """

    operation = "send"

    @classmethod
    def cannot_send(
        cls, identifier: Any, status: str, cause: Optional[BaseException] = None
    ) -> "SendError":
        return cls.make(
            identifier,
            f"{cls.title()} with status '{status}' cannot be sent",
            cause,
            status=status,
        )

    @classmethod
    def no_recipients(cls, identifier: Any, cause: Optional[BaseException] = None) -> "SendError":
        return cls.make(identifier, f"{cls.title()} has no recipients to send to", cause)


# ----------------------------------------------------------------------
# Subscribers
# ----------------------------------------------------------------------


class SubscriberNotFoundError(NotFoundError):
    resource = "subscriber"

    @classmethod
    def make(  # type: ignore[override]
        cls, identifier: Any, search_type: str = "email"
    ) -> "SubscriberNotFoundError":
        return cls(
            f"Subscriber not found with {search_type}: {identifier}",
            code=cls.default_code,
            context={
                "type": "subscriber_not_found",
                "identifier": identifier,
                "search_type": search_type,
            },
        )

    @classmethod
    def with_email(cls, email: str) -> "SubscriberNotFoundError":
        return cls.make(email, "email")

    @classmethod
    def with_id(cls, identifier: Any) -> "SubscriberNotFoundError":  # type: ignore[override]
        return cls.make(identifier, "ID")


class SubscriberCreateError(CreateError):
    resource = "subscriber"
    target = "subscriber with email {identifier}"


class SubscriberUpdateError(UpdateError):
    resource = "subscriber"
    target = "subscriber {identifier}"


class SubscriberDeleteError(DeleteError):
    resource = "subscriber"
    target = "subscriber {identifier}"


# ----------------------------------------------------------------------
# Campaigns
# ----------------------------------------------------------------------


class CampaignNotFoundError(NotFoundError):
    resource = "campaign"


class CampaignCreateError(CreateError):
    resource = "campaign"
    target = "campaign with subject '{identifier}'"

    @classmethod
    def no_recipients(
        cls, subject: str, cause: Optional[BaseException] = None
    ) -> "CampaignCreateError":
        return cls.make(subject, "Campaign must have at least one group or segment", cause)


class CampaignUpdateError(UpdateError):
    resource = "campaign"


class CampaignDeleteError(DeleteError):
    resource = "campaign"


class CampaignSendError(SendError):
    resource = "campaign"


# ----------------------------------------------------------------------
# Groups
# ----------------------------------------------------------------------


class GroupNotFoundError(NotFoundError):
    resource = "group"

    @classmethod
    def with_name(cls, name: str) -> "GroupNotFoundError":
        return cls(
            f"Group with name '{name}' was not found.",
            code=cls.default_code,
            context={"type": "group_not_found", "name": name},
        )


class GroupCreateError(CreateError):
    resource = "group"


class GroupUpdateError(UpdateError):
    resource = "group"


class GroupDeleteError(DeleteError):
    resource = "group"


# ----------------------------------------------------------------------
# Fields
# ----------------------------------------------------------------------


class FieldNotFoundError(NotFoundError):
    resource = "field"

    @classmethod
    def with_name(cls, name: str) -> "FieldNotFoundError":
        return cls(
            f"Field with name '{name}' was not found.",
            code=cls.default_code,
            context={"type": "field_not_found", "name": name},
        )


class FieldCreateError(CreateError):
    resource = "field"


class FieldUpdateError(UpdateError):
    resource = "field"


class FieldDeleteError(DeleteError):
    resource = "field"


# ----------------------------------------------------------------------
# Segments
# ----------------------------------------------------------------------


class SegmentNotFoundError(NotFoundError):
    resource = "segment"


class SegmentCreateError(CreateError):
    resource = "segment"

    @classmethod
    def invalid_filters(cls, name: str, errors: Iterable[str]) -> "SegmentCreateError":
        error_list = list(errors)
        return cls.make(
            name, "Invalid filters: " + ", ".join(error_list), errors=error_list
        )

    @classmethod
    def not_supported(cls, name: str) -> "SegmentCreateError":
        error = cls.make(
            name,
            "Segment creation is not supported by the MailerLite API. "
            "Create the segment in the MailerLite dashboard, then manage it here by ID.",
            supported=False,
        )
        error.code = 501
        return error


class SegmentUpdateError(UpdateError):
    resource = "segment"

    @classmethod
    def invalid_filters(cls, identifier: Any, errors: Iterable[str]) -> "SegmentUpdateError":
        error_list = list(errors)
        return cls.make(
            identifier, "Invalid filters: " + ", ".join(error_list), errors=error_list
        )


class SegmentDeleteError(DeleteError):
    resource = "segment"


# ----------------------------------------------------------------------
# Automations
# ----------------------------------------------------------------------


class AutomationNotFoundError(NotFoundError):
    resource = "automation"


class AutomationCreateError(CreateError):
    resource = "automation"

    @classmethod
    def invalid_triggers(
        cls, name: str, cause: Optional[BaseException] = None
    ) -> "AutomationCreateError":
        return cls.make(name, "Automation must have valid triggers", cause)

    @classmethod
    def invalid_steps(
        cls, name: str, cause: Optional[BaseException] = None
    ) -> "AutomationCreateError":
        return cls.make(name, "Automation must have valid steps/actions", cause)


class AutomationUpdateError(UpdateError):
    resource = "automation"


class AutomationDeleteError(DeleteError):
    resource = "automation"


class AutomationStateError(StateError):
    resource = "automation"


# ----------------------------------------------------------------------
# Webhooks
# ----------------------------------------------------------------------


class WebhookNotFoundError(NotFoundError):
    resource = "webhook"

    @classmethod
    def with_url(cls, url: str) -> "WebhookNotFoundError":
        return cls(
            f"Webhook with URL '{url}' was not found.",
            code=cls.default_code,
            context={"type": "webhook_not_found", "url": url},
        )


class WebhookCreateError(CreateError):
    resource = "webhook"
    target = "webhook for URL '{identifier}'"

    @classmethod
    def invalid_url(
        cls, url: str, cause: Optional[BaseException] = None
    ) -> "WebhookCreateError":
        return cls.make(url, "Invalid or unreachable webhook URL", cause)

    @classmethod
    def invalid_event(
        cls, event: str, url: str, cause: Optional[BaseException] = None
    ) -> "WebhookCreateError":
        return cls.make(url, f"Invalid webhook event '{event}'", cause, event=event)

    @classmethod
    def already_exists(  # type: ignore[override]
        cls, url: str, cause: Optional[BaseException] = None
    ) -> "WebhookCreateError":
        return cls.make(url, "Webhook already exists for this URL and event", cause)


class WebhookUpdateError(UpdateError):
    resource = "webhook"


class WebhookDeleteError(DeleteError):
    resource = "webhook"
