"""
Ride Related Views
-------------------------

Read-only browsing of the ride catalog. These routes need no session.

Each ride carries its current wait times from the remote queue. When the queue
cannot be reached the rides are still listed, with no wait times.
"""
from typing import Dict, List, Any

from marshmallow.fields import List as ListField, Nested

from ridegate import logger
from ridegate.models import Ride
from ridegate.serializer import JSendSchema, JSendStatus, returns
from ridegate.serializer.models import RideSchema
from ridegate.service.access.rides import get_rides, get_ride
from ridegate.service.exceptions import UpstreamError
from ridegate.views.base import BaseView
from ridegate.views.decorators import match_getter


class RideViewMixin:
    """Fetches the wait times of every ride, or nothing if the queue is down."""

    async def wait_times(self) -> Dict[int, List[Dict[str, Any]]]:
        try:
            return await self.queue_gateway.rides_info()
        except UpstreamError as error:
            logger.warning("Listing rides without wait times: %s", error.message)
            return {}


class RidesView(BaseView, RideViewMixin):
    """
    Gets the list of rides.
    """
    url = "/rides"
    name = "rides"

    @returns(JSendSchema.of(rides=ListField(Nested(RideSchema()))))
    async def get(self):
        wait_times = await self.wait_times()
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"rides": [ride.serialize(wait_times.get(ride.id)) for ride in await get_rides()]}
        }


class RideView(BaseView, RideViewMixin):
    """
    Gets a single ride.
    """
    url = "/rides/{id}"
    name = "ride"
    with_ride = match_getter(get_ride, "ride", ride_id="id")

    @with_ride
    @returns(JSendSchema.of(ride=RideSchema()))
    async def get(self, ride: Ride):
        wait_times = await self.wait_times()
        return {
            "status": JSendStatus.SUCCESS,
            "data": {"ride": ride.serialize(wait_times.get(ride.id))}
        }
