"""
Auth Related Views
-------------------------

Handles signing up, logging in and out, and refreshing the session.

A session lives in four cookies:

- ``ACCESS_TOKEN`` the short-lived token checked on every request
- ``REFRESH_TOKEN`` the long-lived token exchanged at ``/refresh``
- ``SESSION_ID`` a random id for the frontend, with no authority
- ``APP_AUTH`` a flag the frontend can read to know it is logged in
"""
from http import HTTPStatus
from uuid import uuid4

from aiohttp import web
from marshmallow import fields

from ridegate import logger
from ridegate.config import cookie_secure
from ridegate.middleware import ACCESS_COOKIE, REFRESH_COOKIE, SESSION_COOKIE, AUTH_FLAG_COOKIE
from ridegate.models import User
from ridegate.serializer import JSendSchema, JSendStatus, expects, returns
from ridegate.serializer.jsend import fail
from ridegate.serializer.models import UserSchema, CredentialsSchema, SignupSchema
from ridegate.service.access.users import authenticate, create_user, UserExistsError
from ridegate.service.exceptions import AuthenticationError, TokenMissingError
from ridegate.service.tokens import TokenPair
from ridegate.views.base import BaseView

SESSION_COOKIES = (ACCESS_COOKIE, REFRESH_COOKIE, SESSION_COOKIE, AUTH_FLAG_COOKIE)

user_response_schema = JSendSchema.of(user=UserSchema())
message_response_schema = JSendSchema.of(message=fields.String())
response_schema = JSendSchema()


def set_session_cookies(view: BaseView, response: web.StreamResponse, pair: TokenPair):
    options = {"path": "/", "samesite": "Lax", "secure": cookie_secure}
    access_age = int(view.token_service.access_lifetime.total_seconds())
    refresh_age = int(view.token_service.refresh_lifetime.total_seconds())

    response.set_cookie(ACCESS_COOKIE, pair.access, max_age=access_age, httponly=True, **options)
    response.set_cookie(REFRESH_COOKIE, pair.refresh, max_age=refresh_age, httponly=True, **options)
    response.set_cookie(SESSION_COOKIE, str(uuid4()), max_age=refresh_age, httponly=True, **options)
    response.set_cookie(AUTH_FLAG_COOKIE, "1", max_age=refresh_age, httponly=False, **options)


def delete_session_cookies(response: web.StreamResponse):
    for name in SESSION_COOKIES:
        response.del_cookie(name, path="/")


def unauthorized(message: str) -> web.Response:
    return web.json_response(response_schema.dump(fail(message)), status=HTTPStatus.UNAUTHORIZED)


class SignupView(BaseView):
    """
    Creates a new user.
    """
    url = "/signup"
    name = "signup"

    @expects(SignupSchema())
    @returns(
        created=(user_response_schema, HTTPStatus.CREATED),
        exists=(JSendSchema(), HTTPStatus.BAD_REQUEST),
    )
    async def post(self):
        try:
            user = await create_user(self.request["data"]["username"], self.request["data"]["password"])
        except UserExistsError as error:
            logger.info("Signup rejected, %s is taken", self.request["data"]["username"])
            return "exists", {
                "status": JSendStatus.FAIL,
                "data": {"message": "username already exists", "errors": error.errors}
            }

        logger.info("Signed up %s", user)
        return "created", {
            "status": JSendStatus.SUCCESS,
            "data": {"user": user.serialize()}
        }


class LoginView(BaseView):
    """
    Logs a user in, setting the session cookies.
    """
    url = "/login"
    name = "login"

    @expects(CredentialsSchema())
    async def post(self):
        user: User = await authenticate(self.request["data"]["username"], self.request["data"]["password"])
        if user is None:
            logger.info("Failed login for %s", self.request["data"]["username"])
            return unauthorized("invalid credentials")

        pair = await self.token_service.issue_pair(user)
        logger.info("Logged in %s", user)

        response = web.json_response(user_response_schema.dump({
            "status": JSendStatus.SUCCESS,
            "data": {"user": user.serialize()}
        }))
        set_session_cookies(self, response, pair)
        return response


class RefreshView(BaseView):
    """
    Exchanges the refresh cookie for a new pair of tokens.

    On failure the cookies are left as they are.
    """
    url = "/refresh"
    name = "refresh"

    async def post(self):
        try:
            token = self.request.cookies.get(REFRESH_COOKIE)
            if not token:
                raise TokenMissingError("Refresh token not found")
            pair = await self.token_service.rotate(token)
        except AuthenticationError as error:
            logger.info("Refresh rejected: %s", error.message)
            return unauthorized(error.message)

        response = web.json_response(message_response_schema.dump({
            "status": JSendStatus.SUCCESS,
            "data": {"message": "Tokens refreshed"}
        }))
        set_session_cookies(self, response, pair)
        return response


class LogoutView(BaseView):
    """
    Revokes the refresh credential and clears the session cookies.
    """
    url = "/logout"
    name = "logout"

    async def post(self):
        await self.token_service.revoke(self.request["user_id"])

        response = web.json_response(message_response_schema.dump({
            "status": JSendStatus.SUCCESS,
            "data": {"message": "Logged out"}
        }))
        delete_session_cookies(response)
        return response
