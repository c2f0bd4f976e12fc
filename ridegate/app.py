"""
App
-----
"""

import sentry_sdk
from aiohttp import web
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from ridegate import server_mode, logger
from ridegate.config import (
    api_root, get_jwt_secret, jwt_issuer, access_token_lifetime, refresh_token_lifetime,
    queue_server_url, queue_timeout, park_timezone, sentry_dsn
)
from ridegate.middleware import session_gate_middleware
from ridegate.service.background.credential_sweeper import CredentialSweeper
from ridegate.service.entitlements import EntitlementResolver
from ridegate.service.manager.queue_orchestrator import QueueOrchestrator
from ridegate.service.manager.reservation_manager import ReservationManager
from ridegate.service.queue_gateway import HTTPQueueGateway, QueueGateway
from ridegate.service.tokens import TokenService
from ridegate.signals import register_signals
from ridegate.version import __version__, name
from ridegate.views import register_views


def build_app(db_uri=None, *, queue_gateway: QueueGateway = None, init_database=True):
    """
    Sets up the app and all the services it shares between requests.

    :param db_uri: The tortoise connection string.
    :param queue_gateway: The remote queue gateway, defaulting to the http gateway at the configured url.
    :param init_database: Whether the app opens and closes the database itself.
    """
    app = web.Application(middlewares=[session_gate_middleware])

    app['database_uri'] = db_uri if db_uri is not None else 'sqlite://:memory:'
    app['token_service'] = TokenService(
        get_jwt_secret(), jwt_issuer,
        access_lifetime=access_token_lifetime,
        refresh_lifetime=refresh_token_lifetime,
    )
    app['entitlement_resolver'] = EntitlementResolver(park_timezone)
    app['reservation_manager'] = ReservationManager()
    app['queue_gateway'] = queue_gateway if queue_gateway is not None else HTTPQueueGateway(
        queue_server_url, queue_timeout
    )
    app['queue_orchestrator'] = QueueOrchestrator(
        app['entitlement_resolver'], app['reservation_manager'], app['queue_gateway']
    )
    app['credential_sweeper'] = CredentialSweeper()

    # set up the background tasks
    register_signals(app, init_database)

    # register views
    register_views(app, api_root)

    # set up sentry exception tracking
    if server_mode != "development" and sentry_dsn:
        logger.info("Starting Sentry Logging")
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=server_mode,
            release=f"{name}@{__version__}",
            integrations=[AioHttpIntegration()]
        )

    return app
