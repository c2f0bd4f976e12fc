"""
Queue Related Views
-------------------------

Joining, leaving and boarding ride queues, and listing the queues a user is in.
Users may only act on their own queues.
"""
from marshmallow.fields import List, Nested

from ridegate.serializer import JSendSchema, JSendStatus, expects, returns
from ridegate.serializer.models import (
    EnqueueRequestSchema, EnqueueResultSchema, UserRideSchema, QueueStatusItemSchema, RideUsageSchema
)
from ridegate.service.exceptions import RideGateError
from ridegate.views.base import BaseView, FAILURE_OUTCOMES, failure


class EnqueueView(BaseView):
    """
    Puts the user in a ride's queue using today's ticket.
    """
    url = "/queue/enqueue"
    name = "queue_enqueue"

    @expects(EnqueueRequestSchema())
    @returns(queued=JSendSchema.of(**EnqueueResultSchema().fields), **FAILURE_OUTCOMES)
    async def post(self):
        data = self.request["data"]
        try:
            result = await self.queue_orchestrator.enqueue(
                self.request["user_id"], data["user_id"], data["ride_id"], data["ticket_type"]
            )
        except RideGateError as error:
            return failure(error)

        return "queued", {
            "status": JSendStatus.SUCCESS,
            "data": result._asdict()
        }


class QueueStatusView(BaseView):
    """
    Lists every queue the user is in, with their position and wait.
    """
    url = r"/queue/status/{id:\d+}"
    name = "queue_status"

    @returns(listed=JSendSchema.of(items=List(Nested(QueueStatusItemSchema()))), **FAILURE_OUTCOMES)
    async def get(self):
        try:
            items = await self.queue_orchestrator.status(self.request["user_id"], int(self.request.match_info["id"]))
        except RideGateError as error:
            return failure(error)

        return "listed", {
            "status": JSendStatus.SUCCESS,
            "data": {"items": items}
        }


class CompleteRideView(BaseView):
    """
    Marks the user as having boarded a ride they were waiting for.
    """
    url = "/queue/complete"
    name = "queue_complete"

    @expects(UserRideSchema())
    @returns(completed=JSendSchema.of(rideUsage=RideUsageSchema()), **FAILURE_OUTCOMES)
    async def post(self):
        data = self.request["data"]
        try:
            usage = await self.queue_orchestrator.complete_ride(self.request["user_id"], data["user_id"], data["ride_id"])
        except RideGateError as error:
            return failure(error)

        return "completed", {
            "status": JSendStatus.SUCCESS,
            "data": {"rideUsage": usage.serialize()}
        }


class CancelView(BaseView):
    """
    Takes the user out of a ride's queue.
    """
    url = "/queue/cancel"
    name = "queue_cancel"

    @expects(UserRideSchema())
    @returns(cancelled=JSendSchema.of(rideUsage=RideUsageSchema()), **FAILURE_OUTCOMES)
    async def post(self):
        data = self.request["data"]
        try:
            usage = await self.queue_orchestrator.cancel(self.request["user_id"], data["user_id"], data["ride_id"])
        except RideGateError as error:
            return failure(error)

        return "cancelled", {
            "status": JSendStatus.SUCCESS,
            "data": {"rideUsage": usage.serialize()}
        }
