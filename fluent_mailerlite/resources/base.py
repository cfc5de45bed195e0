"""
Shared plumbing for the resource services and builders.

- ``unwrap_resource`` / ``unwrap_page`` normalize the response envelopes
  the API returns (``{"body": {"data": ...}}``, ``{"data": ...}`` or a
  bare object) in one place.
- ``is_unauthorized`` and friends classify collaborator errors, using the
  HTTP status code when the error carries one and falling back to
  case-insensitive message matching otherwise.
- ``BaseService`` gives every service its client accessor and the
  authentication check.
- ``FluentBuilder`` resolves ``and_<method>`` (and ``then_<method>``)
  chaining through an alias table built when the class is defined.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, NoReturn, Optional, Tuple

from ..core.errors import AuthenticationError, MailerLiteError
from ..core.logging import get_logger


logger = get_logger("mailerlite.resources")


# ----------------------------------------------------------------------
# Response envelopes
# ----------------------------------------------------------------------


def _body(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    body = raw.get("body")
    if isinstance(body, dict):
        return body
    return raw


def unwrap_resource(raw: Any) -> Dict[str, Any]:
    """
    Return the single resource object from any supported envelope.
    """

    body = _body(raw)
    data = body.get("data")
    if isinstance(data, dict):
        return data
    return body


def unwrap_page(
    raw: Any, transform: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """
    Return ``{"data", "meta", "links"}`` for a list response.

    ``meta`` and ``links`` are passed through verbatim; missing ones become
    empty dicts. Items go through ``transform`` when one is given.
    """

    body = _body(raw)
    items = body.get("data")
    if not isinstance(items, list):
        items = []
    if transform is not None:
        items = [transform(item) for item in items]
    return {
        "data": items,
        "meta": body.get("meta") or {},
        "links": body.get("links") or {},
    }


def value(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    """
    ``data[key]`` unless it is absent or null.
    """

    found = data.get(key)
    return default if found is None else found


# ----------------------------------------------------------------------
# Error classification
# ----------------------------------------------------------------------


def _status(exc: BaseException) -> Optional[int]:
    return getattr(exc, "status_code", None)


def mentions(exc: BaseException, *needles: str) -> bool:
    text = str(exc).lower()
    return any(needle.lower() in text for needle in needles)


def is_unauthorized(exc: BaseException) -> bool:
    status = _status(exc)
    if status is not None:
        return status == 401
    return mentions(exc, "401", "unauthorized")


def is_forbidden(exc: BaseException) -> bool:
    status = _status(exc)
    if status is not None:
        return status == 403
    return mentions(exc, "403", "forbidden")


def is_not_found(exc: BaseException) -> bool:
    status = _status(exc)
    if status is not None:
        return status == 404
    return mentions(exc, "404", "not found", "does not exist")


def is_invalid_data(exc: BaseException) -> bool:
    return _status(exc) == 422 or mentions(exc, "422", "validation")


def is_duplicate(exc: BaseException) -> bool:
    return _status(exc) == 409 or mentions(exc, "already exists", "duplicate")


class BaseService:
    """
    Common behaviour for resource services.

    ``manager`` is anything with a ``get_client()`` method returning a
    ``MailerLiteClient``; the service picks its endpoint group by
    ``endpoint_name``.
    """

    endpoint_name = ""

    def __init__(self, manager: Any) -> None:
        self._manager = manager

    def _endpoint(self) -> Any:
        return getattr(self._manager.get_client(), self.endpoint_name)

    def _check_auth(self, exc: BaseException) -> None:
        if is_unauthorized(exc):
            raise AuthenticationError.invalid_api_key(cause=exc) from exc
        if is_forbidden(exc):
            raise AuthenticationError.insufficient_permissions(
                self.endpoint_name or None, cause=exc
            ) from exc

    def _reraise(self, exc: BaseException) -> NoReturn:
        """
        Authentication check, then re-raise ``exc`` unchanged.
        """

        self._check_auth(exc)
        raise exc

    def _fail(self, error: MailerLiteError, exc: BaseException) -> NoReturn:
        logger.warning(
            "MailerLite %s request failed: %s",
            self.endpoint_name,
            error.message,
            extra={"context": error.context},
        )
        raise error from exc


# ----------------------------------------------------------------------
# Fluent builders
# ----------------------------------------------------------------------


def _camel(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_") if part)


class FluentBuilder:
    """
    Base for the mutable resource builders.

    Every public method ``m`` is also reachable as ``and_m`` / ``andM``
    (plus ``then_m`` / ``thenM`` where ``chain_prefixes`` says so). The
    alias table is computed once per class; unknown names raise
    ``AttributeError``.
    """

    chain_prefixes: Tuple[str, ...] = ("and",)
    _chain_aliases: Dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        aliases: Dict[str, str] = {}
        for name in _public_methods(cls):
            for prefix in cls.chain_prefixes:
                aliases[f"{prefix}_{name.rstrip('_')}"] = name
                aliases[f"{prefix}{_camel(name)}"] = name
        cls._chain_aliases = aliases

    def __init__(self, service: Any) -> None:
        self._service = service
        self._reset_state()

    def _reset_state(self) -> None:
        raise NotImplementedError

    def __getattr__(self, name: str) -> Any:
        target = type(self)._chain_aliases.get(name)
        if target is None:
            raise AttributeError(
                f"Method {name!r} does not exist on {type(self).__name__}"
            )
        return getattr(self, target)

    def reset(self) -> "FluentBuilder":
        """
        Clear all accumulated state, keeping the service.
        """

        self._reset_state()
        return self

    def fresh(self) -> "FluentBuilder":
        """
        A brand-new builder sharing this builder's service.
        """

        return type(self)(self._service)

    @property
    def service(self) -> Any:
        return self._service


def _public_methods(cls: type) -> Iterable[str]:
    for name in dir(cls):
        if name.startswith("_"):
            continue
        if callable(getattr(cls, name, None)):
            yield name


def payload_of(data: Any) -> Dict[str, Any]:
    """
    Request payload from a DTO or a plain dict.
    """

    if hasattr(data, "to_dict"):
        return data.to_dict()
    return dict(data or {})


def scan_pages(
    list_page: Callable[[Dict[str, Any]], Dict[str, Any]],
    predicate: Callable[[Dict[str, Any]], bool],
    filters: Optional[Dict[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """
    Walk every page of a list endpoint and return the first matching item.

    There is no server-side lookup for these cases, so this is a linear
    scan over all records (one request per page).
    """

    page = 1
    while True:
        result = list_page({**(filters or {}), "page": page})
        for item in result["data"]:
            if predicate(item):
                return item
        if not result["links"].get("next"):
            return None
        page += 1
