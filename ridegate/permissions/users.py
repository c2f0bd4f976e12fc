from aiohttp.web_urldispatcher import View

from ridegate.models import User
from ridegate.permissions.permission import RoutePermissionError, Permission
from ridegate.service.access.users import get_user


async def session_user(view: View) -> User:
    """Gets the user behind the access token, caching it on the request."""
    if "session_user" not in view.request:
        view.request["session_user"] = await get_user(user_id=view.request.get("user_id"))
    return view.request["session_user"]


class UserMatchesSession(Permission):
    """Asserts that the given user is the one who is logged in."""

    async def __call__(self, view: View, user: User = None, **kwargs):
        if user is None or view.request.get("user_id") != user.id:
            raise RoutePermissionError("The supplied session doesn't have access to this resource.")


class UserIsOperator(Permission):
    """Asserts that the logged in user is a ride operator."""

    async def __call__(self, view: View, **kwargs):
        user = await session_user(view)
        if user is None or not user.is_operator:
            raise RoutePermissionError("The supplied session doesn't have operator rights.")
