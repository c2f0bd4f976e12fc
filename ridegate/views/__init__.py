"""
.. autoclasstree:: ridegate.views

This package contains the server API for logging in, browsing rides,
and joining and leaving ride queues.

API Conventions
---------------

* Routes are ordered in terms of resources where it makes sense (rides, users, ride usages)
  and in terms of actions for the queue, mirroring the remote queue service.
* JSON keys are camelCase.
* Every response is JSend formatted, except DELETE which responds with 204 no content.
* Only the routes in :data:`~ridegate.middleware.EXEMPT_ROUTES` can be used without logging in.
"""

import aiohttp_cors
from aiohttp.abc import Application

from ridegate import logger
from ridegate.config import frontend_url
from .auth import SignupView, LoginView, RefreshView, LogoutView
from .misc import index
from .queue import EnqueueView, QueueStatusView, CompleteRideView, CancelView
from .ride_usages import UserRideUsagesView, RideUsageNoShowView, RideUsageView
from .rides import RidesView, RideView

views = [
    SignupView, LoginView, RefreshView, LogoutView,
    EnqueueView, QueueStatusView, CompleteRideView, CancelView,
    RidesView, RideView,
    UserRideUsagesView, RideUsageNoShowView, RideUsageView,
]


def register_views(app: Application, base: str):
    """
    Registers all the API views onto the given router at a specific root url.

    :param app: The app to register the views to.
    :param base: The base URL.
    """
    cors = aiohttp_cors.setup(app, defaults={
        frontend_url: aiohttp_cors.ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    })

    for view in views:
        logger.info("Registered %s at %s", view.__name__, base + view.url)
        view.register_route(app, base)
        view.enable_cors(cors)

    app.router.add_get("/", index)
