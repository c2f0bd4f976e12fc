"""
Config
------

Every setting is read once from the environment at import time.
"""
import os
from datetime import timedelta

server_mode = os.getenv("SERVER_MODE", "development")
"""The operational mode of the server."""

api_root = "/api"
"""The base url for the api."""

database_uri = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
"""The tortoise connection string for the relational store."""

jwt_secret = os.getenv("JWT_SECRET")
"""The shared secret used to sign both token kinds. Required outside development."""

jwt_issuer = os.getenv("JWT_ISSUER", "ridegate")
"""The issuer claim written into, and required on, every token."""

access_token_lifetime = timedelta(minutes=int(os.getenv("ACCESS_TOKEN_MINUTES", "60")))
"""How long an access token stays valid."""

refresh_token_lifetime = timedelta(days=int(os.getenv("REFRESH_TOKEN_DAYS", "30")))
"""How long a refresh token stays valid."""

queue_server_url = os.getenv("QUEUE_SERVER_URL", "http://localhost:8081")
"""The base url of the remote queue service."""

queue_timeout = timedelta(seconds=float(os.getenv("QUEUE_TIMEOUT_SECONDS", "10")))
"""The hard limit on any single call to the remote queue service."""

park_timezone = os.getenv("PARK_TIMEZONE", "UTC")
"""The timezone whose calendar day decides which ticket is usable today."""

frontend_url = os.getenv("FRONTEND_URL", "http://localhost:3001")
"""The origin allowed to make credentialed cross-origin requests."""

cookie_secure = os.getenv("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")
"""Whether the auth cookies carry the Secure attribute."""

sentry_dsn = os.getenv("SENTRY_DSN")
"""The sentry DSN. Exception tracking is disabled when unset."""


def get_jwt_secret() -> str:
    """
    Gets the signing secret, falling back to a placeholder in development.

    :raises RuntimeError: If no secret is configured outside development.
    """
    if jwt_secret:
        return jwt_secret

    if server_mode in ("development", "testing"):
        return "development-secret"

    raise RuntimeError("You must specify JWT_SECRET in the environment variables.")
