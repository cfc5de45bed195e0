"""
Owner of the MailerLite client handle.

The manager validates the credential up front, builds the client on first
use, checks it against the API once, and hands the same instance to every
service afterwards.
"""

from __future__ import annotations

from typing import Optional

from .core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, MailerLiteConfig, load_config
from .core.errors import AuthenticationError, IntegrationError, MailerLiteApiError
from .core.logging import get_logger
from .integrations.mailerlite.mailerlite_client import MailerLiteClient


logger = get_logger("mailerlite.manager")


class MailerLiteManager:
    """
    Lazily creates and caches a validated ``MailerLiteClient``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[MailerLiteClient] = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise AuthenticationError.missing_api_key()

        self.config = MailerLiteConfig(
            api_key=api_key,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout_seconds=timeout_seconds,
        )
        self._client = client
        self._validated = False

    @classmethod
    def from_config(cls, config: MailerLiteConfig) -> "MailerLiteManager":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
        )

    @classmethod
    def from_env(cls) -> "MailerLiteManager":
        """
        Build a manager from MAILERLITE_* environment variables.
        """

        config = load_config().mailerlite or MailerLiteConfig(api_key="")
        return cls.from_config(config)

    def get_client(self) -> MailerLiteClient:
        """
        Return the cached client, creating and validating it on first call.
        """

        if self._client is None:
            self._client = MailerLiteClient.from_config(self.config)

        if not self._validated:
            self._validate(self._client)
            self._validated = True

        return self._client

    def _validate(self, client: MailerLiteClient) -> None:
        """
        Cheap authenticated call to catch a revoked key early.

        Only a 401 is fatal. Anything else (network trouble, 5xx) is left
        for the first real request to report.
        """

        try:
            client.timezones.get()
        except MailerLiteApiError as exc:
            if exc.status_code == 401 or "401" in str(exc) or "unauthorized" in str(exc).lower():
                raise AuthenticationError.invalid_api_key(cause=exc) from exc
            logger.warning("MailerLite connection check failed: %s", exc)
        except IntegrationError as exc:
            logger.warning("MailerLite connection check failed: %s", exc)
