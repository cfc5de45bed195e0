"""
Common DTO utilities for fluent-mailerlite.

DTOs are frozen dataclasses validated in ``__post_init__``. This module
provides the shared base with a consistent API:

- ``to_dict`` returns the request payload sent to MailerLite
- ``with_`` returns a re-validated copy with some attributes replaced
- ``from_dict`` builds a DTO from a plain dict, naming the first missing
  required key
"""

from __future__ import annotations

from dataclasses import MISSING, asdict, dataclass, fields, replace
from typing import Any, Dict, Type, TypeVar

from .errors import ValidationError


T_BaseDTO = TypeVar("T_BaseDTO", bound="BaseDTO")


@dataclass(frozen=True)
class BaseDTO:
    """
    Base class for request DTOs.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this DTO into a plain dict (recursively).

        Resource DTOs override this to emit only non-default values.
        """

        return asdict(self)

    def with_(self: T_BaseDTO, **changes: Any) -> T_BaseDTO:
        """
        Return a new DTO with ``changes`` applied; the original is untouched.

        Validation runs again on the new instance.
        """

        return replace(self, **changes)

    @classmethod
    def _required_fields(cls) -> list:
        return [
            f.name
            for f in fields(cls)
            if f.init and f.default is MISSING and f.default_factory is MISSING  # type: ignore[misc]
        ]

    @classmethod
    def _prepare(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Hook for subclasses to coerce raw values before construction.
        """

        return data

    @classmethod
    def from_dict(cls: Type[T_BaseDTO], data: Dict[str, Any]) -> T_BaseDTO:
        """
        Construct this DTO from a dict of attributes.

        Unknown keys are ignored. A missing required key raises
        ``ValidationError`` naming that key.
        """

        data = cls._prepare(dict(data))
        for name in cls._required_fields():
            if data.get(name) is None:
                label = name.replace("_", " ").capitalize()
                raise ValidationError(f"{label} is required")

        known = {f.name for f in fields(cls) if f.init}
        return cls(**{key: value for key, value in data.items() if key in known})
