"""
Small validation helpers shared by the resource DTOs.

Every helper raises ``ValidationError`` with a message naming the
violated constraint.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from .errors import ValidationError


EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or "")) and ".." not in value


def is_valid_url(value: str) -> bool:
    parsed = urlparse(value or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def max_length(value: str, limit: int, message: str) -> None:
    if value is not None and len(value) > limit:
        raise ValidationError(message)


def one_of(value: str, allowed: Iterable[str], label: str) -> None:
    """
    Enforce a closed set of string literals.

    ``label`` is used as ``Invalid {label} 'x'. Valid {label}s: ...``.
    """

    allowed = list(allowed)
    if value not in allowed:
        raise ValidationError(
            f"Invalid {label} '{value}'. Valid {_plural(label)}: {', '.join(allowed)}"
        )


def id_list(values: Iterable[Any], label: str) -> None:
    """
    Group/segment style identifier lists: strings or integers, never empty.
    """

    for value in values:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValidationError(f"{label} IDs must be strings or integers.")
        if isinstance(value, str) and value.strip() == "":
            raise ValidationError(f"{label} IDs cannot be empty strings.")


def string_keys(mapping: Mapping[Any, Any], message: str) -> None:
    for key in mapping:
        if not isinstance(key, str) or key.strip() == "":
            raise ValidationError(message)


def unique(values: Iterable[Any]) -> list:
    """
    De-duplicate while keeping first-seen order.
    """

    return list(dict.fromkeys(values))


def _plural(label: str) -> str:
    if label.endswith("s"):
        return label + "es"
    return label + "s"
