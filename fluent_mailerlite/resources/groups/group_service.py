"""
MailerLite implementation of ``GroupsApi``.
"""

from __future__ import annotations

from typing import Any, Dict, List, NoReturn, Optional, Union

from ...api.groups import Group
from ...core.errors import (
    GroupCreateError,
    GroupDeleteError,
    GroupNotFoundError,
    GroupUpdateError,
    IntegrationError,
    MailerLiteError,
)
from ...core.logging import get_logger
from ..base import (
    BaseService,
    is_duplicate,
    is_invalid_data,
    is_not_found,
    payload_of,
    scan_pages,
    unwrap_page,
    unwrap_resource,
)
from .group_mapper import transform_group


logger = get_logger("mailerlite.resources.groups")


class GroupService(BaseService):
    """
    Group operations backed by the MailerLite API.
    """

    endpoint_name = "groups"

    def create(self, group: Group) -> Dict[str, Any]:
        try:
            raw = self._endpoint().create(group.to_dict())
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_duplicate(exc):
                self._fail(GroupCreateError.already_exists(group.name, exc), exc)
            if is_invalid_data(exc):
                self._fail(GroupCreateError.invalid_data(group.name, ["Validation failed"], exc), exc)
            self._fail(GroupCreateError.make(group.name, str(exc), exc), exc)

        logger.info("Created group %r", group.name)
        return transform_group(raw)

    def get(self, group_id: str) -> Optional[Dict[str, Any]]:
        return self.get_by_id(group_id)

    def get_by_id(self, group_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = self._endpoint().find(group_id)
        except IntegrationError as exc:
            if is_not_found(exc):
                return None
            self._reraise(exc)
        return transform_group(raw)

    def get_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Linear scan of every group page for an exact name match.
        """

        return scan_pages(self.list, lambda item: item.get("name") == name)

    def require_by_name(self, name: str) -> Dict[str, Any]:
        group = self.get_by_name(name)
        if group is None:
            raise GroupNotFoundError.with_name(name)
        return group

    def update(self, group_id: str, group: Any) -> Dict[str, Any]:
        try:
            raw = self._endpoint().update(group_id, payload_of(group))
        except IntegrationError as exc:
            self._update_failed(group_id, exc)
        return transform_group(raw)

    def delete(self, group_id: str) -> bool:
        try:
            self._endpoint().delete(group_id)
        except IntegrationError as exc:
            self._check_auth(exc)
            if is_not_found(exc):
                self._fail(GroupNotFoundError.with_id(group_id), exc)
            self._fail(GroupDeleteError.make(group_id, str(exc), exc), exc)
        return True

    def list(self, filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get(filters or {})
        except IntegrationError as exc:
            self._reraise(exc)
        return unwrap_page(raw, transform_group)

    def get_subscribers(
        self, group_id: str, filters: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        try:
            raw = self._endpoint().get_subscribers(group_id, filters or {})
        except IntegrationError as exc:
            if is_not_found(exc):
                self._fail(GroupNotFoundError.with_id(group_id), exc)
            self._reraise(exc)
        return unwrap_page(raw)

    def add_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> Dict[str, Any]:
        """
        Assign each subscriber to the group, one request per subscriber.
        """

        assigned = []
        processed: List[Union[str, int]] = []
        for subscriber_id in subscriber_ids:
            try:
                raw = self._endpoint().assign_subscriber(group_id, subscriber_id)
            except IntegrationError as exc:
                self._batch_failed(group_id, subscriber_id, processed, exc)
            assigned.append(unwrap_resource(raw))
            processed.append(subscriber_id)
        return {"group_id": group_id, "data": assigned}

    def assign_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> Dict[str, Any]:
        return self.add_subscribers(group_id, subscriber_ids)

    def remove_subscribers(
        self, group_id: str, subscriber_ids: List[Union[str, int]]
    ) -> bool:
        processed: List[Union[str, int]] = []
        for subscriber_id in subscriber_ids:
            try:
                self._endpoint().unassign_subscriber(group_id, subscriber_id)
            except IntegrationError as exc:
                self._batch_failed(group_id, subscriber_id, processed, exc)
            processed.append(subscriber_id)
        return True

    def _batch_failed(
        self,
        group_id: str,
        subscriber_id: Union[str, int],
        processed: List[Union[str, int]],
        exc: IntegrationError,
    ) -> NoReturn:
        # Earlier requests in the batch are already applied.
        try:
            self._update_failed(group_id, exc)
        except MailerLiteError as error:
            raise error.with_context(
                {"processed_ids": list(processed), "failed_id": subscriber_id}
            ) from exc

    def _update_failed(self, group_id: str, exc: IntegrationError) -> NoReturn:
        self._check_auth(exc)
        if is_not_found(exc):
            self._fail(GroupNotFoundError.with_id(group_id), exc)
        if is_invalid_data(exc):
            self._fail(GroupUpdateError.invalid_data(group_id, ["Validation failed"], exc), exc)
        self._fail(GroupUpdateError.make(group_id, str(exc), exc), exc)
