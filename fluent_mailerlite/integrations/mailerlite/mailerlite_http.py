"""
Low-level HTTP client for MailerLite.

This module is responsible for:
- authentication (Bearer API key header)
- building URLs
- making HTTP requests
- turning non-success responses into ``MailerLiteApiError``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ...core.config import DEFAULT_BASE_URL
from ...core.errors import IntegrationError, MailerLiteApiError
from ...core.logging import get_logger


logger = get_logger("mailerlite.integrations.http")


@dataclass
class MailerLiteHttpClient:
    """
    Simple HTTP client for the MailerLite REST API.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: int = 30

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Make an HTTP request to MailerLite and return the parsed JSON body.

        Empty bodies (e.g. ``204 No Content`` on delete) return ``{}``.
        """

        url = build_url(self.base_url, path)
        logger.debug(
            "MailerLite HTTP request",
            extra={"method": method, "url": url, "params": params},
        )

        try:
            response = requests.request(
                method=method.upper(),
                url=url,
                headers=self._headers(),
                json=json,
                params=params,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise IntegrationError(f"MailerLite request failed: {exc}", cause=exc) from exc

        handle_mailerlite_error(response)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as exc:
            raise IntegrationError(
                f"MailerLite response did not contain valid JSON (status={response.status_code})",
                cause=exc,
            ) from exc

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.request("POST", path, json=json)

    def put(
        self,
        path: str,
        json: Dict[str, Any],
    ) -> Dict[str, Any]:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> None:
        self.request("DELETE", path)


def build_url(base_url: str, path: str) -> str:
    """
    Join base URL and path safely.
    """

    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def handle_mailerlite_error(response: requests.Response) -> None:
    """
    Raise a MailerLiteApiError for non-success responses from MailerLite.
    """

    if 200 <= response.status_code < 300:
        return

    try:
        payload = response.json()
    except ValueError:
        payload = {"raw": response.text}

    logger.error(
        "MailerLite HTTP error",
        extra={
            "status_code": response.status_code,
            "payload": payload,
        },
    )

    detail = payload.get("message") if isinstance(payload, dict) else None
    raise MailerLiteApiError(
        f"MailerLite error {response.status_code}: {detail or payload}",
        status_code=response.status_code,
        payload=payload,
    )
