"""
Ride Usage Related Views
-------------------------

Lets users see how their tickets were used, and lets operators resolve
reservations by hand.
"""
from http import HTTPStatus

from aiohttp import web
from marshmallow.fields import List, Nested

from ridegate.models import User, RideUsage
from ridegate.permissions import requires, UserMatchesSession, UserIsOperator
from ridegate.serializer import JSendSchema, JSendStatus, returns
from ridegate.serializer.models import RideUsageSchema
from ridegate.service.access.ride_usages import get_ride_usages, get_ride_usage
from ridegate.service.access.users import get_user
from ridegate.service.exceptions import StateConflictError
from ridegate.views.base import BaseView, FAILURE_OUTCOMES, failure
from ridegate.views.decorators import match_getter


class UserRideUsagesView(BaseView):
    """
    Gets the ride usages of a user.
    """
    url = r"/users/{id:\d+}/ride-usages"
    name = "user_ride_usages"
    with_user = match_getter(get_user, "user", user_id="id")

    @with_user
    @requires(UserMatchesSession() | UserIsOperator())
    @returns(JSendSchema.of(rideUsages=List(Nested(RideUsageSchema()))))
    async def get(self, user: User):
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rideUsages": [usage.serialize() for usage in await get_ride_usages(user_id=user.id)]}
        }


class RideUsageNoShowView(BaseView):
    """
    Marks a waiting reservation as a no show.
    """
    url = r"/ride-usages/{id:\d+}/no-show"
    name = "ride_usage_no_show"
    with_usage = match_getter(get_ride_usage, "usage", usage_id="id")

    @with_usage
    @requires(UserIsOperator())
    @returns(marked=JSendSchema.of(rideUsage=RideUsageSchema()), **FAILURE_OUTCOMES)
    async def patch(self, usage: RideUsage):
        try:
            usage = await self.reservation_manager.mark_no_show(usage)
        except StateConflictError as error:
            return failure(error)

        return "marked", {
            "status": JSendStatus.SUCCESS,
            "data": {"rideUsage": usage.serialize()}
        }


class RideUsageView(BaseView):
    """
    Deletes a waiting reservation without telling the remote queue.
    """
    url = r"/ride-usages/{id:\d+}"
    name = "ride_usage"
    with_usage = match_getter(get_ride_usage, "usage", usage_id="id")

    @with_usage
    @requires(UserIsOperator())
    @returns(**FAILURE_OUTCOMES)
    async def delete(self, usage: RideUsage):
        try:
            await self.reservation_manager.delete(usage)
        except StateConflictError as error:
            return failure(error)

        raise web.HTTPNoContent
