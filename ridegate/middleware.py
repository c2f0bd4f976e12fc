"""
Middleware
----------

The session gate. Every request either matches an entry of :data:`EXEMPT_ROUTES`
or must carry a valid access token in the ``ACCESS_TOKEN`` cookie. The verified
user id is stored on the request as ``user_id``; no other claim is trusted.
"""
import re
from http import HTTPStatus
from typing import Pattern, Tuple

from aiohttp import web
from aiohttp.abc import Request
from aiohttp.web_middlewares import middleware

from ridegate import logger
from ridegate.config import api_root
from ridegate.serializer import JSendSchema
from ridegate.serializer.jsend import fail
from ridegate.service.exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError, AuthenticationError
from ridegate.service.tokens import ACCESS

ACCESS_COOKIE = "ACCESS_TOKEN"
REFRESH_COOKIE = "REFRESH_TOKEN"
SESSION_COOKIE = "SESSION_ID"
AUTH_FLAG_COOKIE = "APP_AUTH"

EXEMPT_ROUTES: Tuple[Tuple[str, Pattern], ...] = (
    ("OPTIONS", re.compile(r".*")),
    ("POST", re.compile(rf"{api_root}/(login|signup|refresh)")),
    ("GET", re.compile(rf"{api_root}/rides(/[^/]+)?")),
    ("GET", re.compile(r"/")),
)
"""Pairs of method and path pattern that need no access token. A pattern must match the whole path."""

response_schema = JSendSchema()


def is_exempt(method: str, path: str) -> bool:
    return any(
        method == exempt_method and pattern.fullmatch(path)
        for exempt_method, pattern in EXEMPT_ROUTES
    )


def authenticate(request: Request) -> int:
    """
    Validates the access token cookie of a request.

    :return: The id of the user the token belongs to.
    :raises AuthenticationError: When the token is missing, expired or invalid.
    """
    token = request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise TokenMissingError("Access token not found")

    token_service = request.app["token_service"]
    try:
        token_service.validate(token)
    except TokenExpiredError as e:
        raise TokenExpiredError("Access token has expired") from e
    except TokenInvalidError as e:
        raise TokenInvalidError("Invalid access token") from e

    if token_service.type_of(token) != ACCESS:
        raise TokenInvalidError("Invalid access token")

    return token_service.subject_of(token)


@middleware
async def session_gate_middleware(request: Request, handler):
    """
    Rejects any request that is not exempt and does not carry a valid access token.
    """
    if is_exempt(request.method, request.path):
        return await handler(request)

    try:
        request["user_id"] = authenticate(request)
    except AuthenticationError as error:
        logger.info("Rejected %s %s: %s", request.method, request.path, error.message)
        return web.json_response(
            response_schema.dump(fail(error.message)),
            status=HTTPStatus.UNAUTHORIZED
        )

    return await handler(request)
