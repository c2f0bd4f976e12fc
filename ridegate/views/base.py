"""
Base
------------------------

The base view for the API. This view contains functionality
required in all other views.
"""
from http import HTTPStatus
from typing import Optional, Tuple, Dict, Any

from aiohttp.abc import Application
from aiohttp.web import View, AbstractRoute
from aiohttp_cors import CorsConfig, CorsViewMixin, ResourceOptions

from ridegate.config import frontend_url
from ridegate.serializer import JSendSchema
from ridegate.serializer import jsend
from ridegate.service.entitlements import EntitlementResolver
from ridegate.service.exceptions import (
    RideGateError, AuthenticationError, AuthorizationError, EntitlementDataMissingError, UpstreamError
)
from ridegate.service.manager.queue_orchestrator import QueueOrchestrator
from ridegate.service.manager.reservation_manager import ReservationManager
from ridegate.service.queue_gateway import QueueGateway
from ridegate.service.tokens import TokenService

FAILURE_OUTCOMES = {
    "unauthenticated": (JSendSchema(), HTTPStatus.UNAUTHORIZED),
    "forbidden": (JSendSchema(), HTTPStatus.FORBIDDEN),
    "rejected": (JSendSchema(), HTTPStatus.BAD_REQUEST),
    "faulted": (JSendSchema(), HTTPStatus.INTERNAL_SERVER_ERROR),
}
"""The named outcomes a route may return through :func:`failure`. Spread them into ``@returns``."""


def failure(error: RideGateError) -> Tuple[str, Dict[str, Any]]:
    """
    Converts a service error into one of the :data:`FAILURE_OUTCOMES`.

    Upstream and integrity faults are errors; everything else is the user's failure.
    """
    if isinstance(error, (UpstreamError, EntitlementDataMissingError)):
        return "faulted", jsend.error(error.message)

    if isinstance(error, AuthenticationError):
        outcome = "unauthenticated"
    elif isinstance(error, AuthorizationError):
        outcome = "forbidden"
    else:
        outcome = "rejected"

    return outcome, jsend.fail(error.message, reason=type(error).__name__)


class ViewConfigurationError(Exception):
    """
    Raised if the view doesn't provide a URL.
    """


class BaseView(View, CorsViewMixin):
    """
    The base view that all other views extend. Contains some useful
    helper functions that the extending classes can use.
    """

    url: str
    name: Optional[str]
    route: AbstractRoute
    token_service: TokenService
    entitlement_resolver: EntitlementResolver
    reservation_manager: ReservationManager
    queue_gateway: QueueGateway
    queue_orchestrator: QueueOrchestrator

    cors_config = {
        frontend_url: ResourceOptions(
            allow_credentials=True,
            expose_headers="*",
            allow_headers="*",
            allow_methods="*",
        )
    }

    @classmethod
    def register_route(cls, app: Application, base: Optional[str] = None):
        """
        Registers the view with the given router.

        :raises ViewConfigurationError: If the URL hasn't been set on the given view.
        """
        try:
            url = base + cls.url if base is not None else cls.url
        except AttributeError:
            raise ViewConfigurationError("No URL provided!")

        kwargs = {}
        name = getattr(cls, "name", None)
        if name is not None:
            kwargs["name"] = name

        cls.route = app.router.add_view(url, cls, **kwargs)
        cls.token_service = app["token_service"]
        cls.entitlement_resolver = app["entitlement_resolver"]
        cls.reservation_manager = app["reservation_manager"]
        cls.queue_gateway = app["queue_gateway"]
        cls.queue_orchestrator = app["queue_orchestrator"]

    @classmethod
    def enable_cors(cls, cors: CorsConfig):
        """Enables CORS on the view."""
        try:
            cors.add(cls.route)
        except AttributeError as error:
            raise ViewConfigurationError("No route assigned. Please register the route first.") from error
