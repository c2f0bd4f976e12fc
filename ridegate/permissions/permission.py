"""
Permission
----------

A permission is an async callable that takes the view (and the objects the
view was given) and raises :class:`RoutePermissionError` when it fails.
Permissions compose with ``|``: the composite passes if any of them does.
"""

from abc import ABC, abstractmethod
from itertools import chain
from typing import List

from aiohttp.web_urldispatcher import View


class RoutePermissionError(Exception):

    def __init__(self, *messages, sub_errors: List['RoutePermissionError'] = None):
        """
        :param sub_errors: The errors of the permissions that were tried.
        """
        if messages and sub_errors is not None:
            raise ValueError("RoutePermissionError may either have messages or sub errors.")

        super().__init__(*messages)
        self.messages = messages
        self.sub_errors = sub_errors if sub_errors is not None else []

    def __str__(self):
        """Joins the messages, or the reasons each alternative failed, into one sentence."""
        if self.sub_errors:
            reasons = [str(error) for error in self.sub_errors]
            if len(reasons) > 1:
                reasons[-1] = f"or {reasons[-1]}"
            return ", ".join(reasons)

        return ", ".join(m.lower().strip(".") for m in self.messages)

    def serialize(self) -> List[str]:
        """Lists the messages of the error and of all its sub-errors."""
        return list(self.messages) + list(chain.from_iterable(err.serialize() for err in self.sub_errors))


class Permission(ABC):
    """
    The base class for permissions.
    """

    def __or__(self, other):
        """Compose permissions using the "|" operator."""
        permissions = []
        for elem in (self, other):
            if isinstance(elem, AnyPermission):
                permissions += elem.permissions
            else:
                permissions.append(elem)
        return AnyPermission(*permissions)

    @abstractmethod
    async def __call__(self, view: View, **kwargs) -> None:
        """
        Evaluates the permission object.

        :raises RoutePermissionError: If the permission failed.
        """


class AnyPermission(Permission):
    """Passes when any of its permissions passes."""

    def __init__(self, *permissions: Permission):
        self.permissions = list(permissions)

    async def __call__(self, view, **kwargs):
        errors = []

        for permission in self.permissions:
            try:
                await permission(view, **kwargs)
                return
            except RoutePermissionError as error:
                errors.append(error)

        raise RoutePermissionError(sub_errors=errors)

    def __repr__(self):
        return "(" + " | ".join(repr(p) for p in self.permissions) + ")"

    def __len__(self):
        return len(self.permissions)
