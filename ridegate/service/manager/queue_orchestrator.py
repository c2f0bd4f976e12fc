"""
Queue Orchestrator
==================

Implements the queue use cases by combining today's ticket, the local ride usage
records and the remote queue service.

There is no transaction spanning the local store and the remote queue, so the
order of the steps is what keeps them from drifting apart:

- everything that can be checked locally is checked before the remote call
- a WAITED record is only written after the remote queue accepted the user
- a WAITED record is only deleted after the remote queue let the user go

If the process dies between a remote success and the local write, the user is
queued remotely with no local record. The user may queue again, as far as this
side is concerned.
"""
from typing import List, Dict, Any

from tortoise.exceptions import BaseORMException

from ridegate import logger
from ridegate.models import RideUsage
from ridegate.models.util import TicketCategory
from ridegate.service.access.rides import get_ride_names
from ridegate.service.entitlements import EntitlementResolver
from ridegate.service.exceptions import (
    NotOwnerError, TicketTypeMismatchError, AlreadyWaitingOrCompletedError, NoWaitingReservationError
)
from ridegate.service.manager.reservation_manager import ReservationManager
from ridegate.service.queue_gateway import QueueGateway, EnqueueResult

UNKNOWN_RIDE_NAME = "Unknown"


class QueueOrchestrator:

    def __init__(self, resolver: EntitlementResolver, reservations: ReservationManager, gateway: QueueGateway):
        self.resolver = resolver
        self.reservations = reservations
        self.gateway = gateway

    @staticmethod
    def _assert_owner(caller_id: int, target_user_id: int):
        if caller_id != target_user_id:
            logger.warning("User %s tried to act on the queue of user %s", caller_id, target_user_id)
            raise NotOwnerError()

    async def enqueue(
        self, caller_id: int, target_user_id: int, ride_id: int, requested: TicketCategory
    ) -> EnqueueResult:
        """
        Queues the user for a ride using today's ticket.

        :raises NotOwnerError: When the caller is not the target user.
        :raises NoActiveTicketTodayError: When the user has no ticket for today.
        :raises TicketTypeMismatchError: When the ticket is not of the requested category.
        :raises AlreadyWaitingOrCompletedError: When the ticket was already used for the ride.
        :raises UpstreamError: When the remote queue failed. Nothing was written locally.
        """
        logger.info("User %s enqueueing for ride %s as %s", target_user_id, ride_id, requested.value)
        self._assert_owner(caller_id, target_user_id)

        order = await self.resolver.resolve_today(target_user_id)
        actual = await self.resolver.category_of(order)
        if actual is not requested:
            logger.warning("User %s holds a %s ticket but asked for %s", target_user_id, actual.value, requested.value)
            raise TicketTypeMismatchError(actual, requested)

        if not await self.reservations.can_enqueue(order.id, ride_id):
            logger.warning("Ticket order %s already used for ride %s", order.id, ride_id)
            raise AlreadyWaitingOrCompletedError()

        result = await self.gateway.enqueue(target_user_id, ride_id, actual)
        await self.reservations.begin(target_user_id, ride_id, order.id)

        logger.info(
            "User %s queued for ride %s at position %s (%s minutes)",
            target_user_id, ride_id, result.position, result.estimated_wait_minutes
        )
        return result

    async def cancel(self, caller_id: int, target_user_id: int, ride_id: int) -> RideUsage:
        """
        Takes the user out of a ride's queue.

        :raises NotOwnerError: When the caller is not the target user.
        :raises NoActiveTicketTodayError: When the user has no ticket for today.
        :raises NoWaitingReservationError: When the user is not waiting for the ride.
        :raises UpstreamError: When the remote queue failed. The local record is kept.
        """
        logger.info("User %s cancelling ride %s", target_user_id, ride_id)
        self._assert_owner(caller_id, target_user_id)

        order = await self.resolver.resolve_today(target_user_id)
        category = await self.resolver.category_of(order)

        if await self.reservations.waiting(target_user_id, ride_id) is None:
            logger.warning("User %s is not waiting for ride %s", target_user_id, ride_id)
            raise NoWaitingReservationError()

        await self.gateway.cancel(target_user_id, ride_id, category)
        return await self.reservations.cancel(target_user_id, ride_id)

    async def complete_ride(self, caller_id: int, target_user_id: int, ride_id: int) -> RideUsage:
        """
        Marks the user as having boarded. The remote queue already let them go.

        :raises NotOwnerError: When the caller is not the target user.
        :raises NoWaitingReservationError: When the user is not waiting for the ride.
        """
        logger.info("User %s completing ride %s", target_user_id, ride_id)
        self._assert_owner(caller_id, target_user_id)
        return await self.reservations.complete(target_user_id, ride_id)

    async def status(self, caller_id: int, target_user_id: int) -> List[Dict[str, Any]]:
        """
        Lists the user's queues, naming each ride from the local catalog.

        A ride the catalog cannot name keeps the remote name, or ``Unknown``.

        :raises NotOwnerError: When the caller is not the target user.
        :raises UpstreamError: When the remote queue failed.
        """
        self._assert_owner(caller_id, target_user_id)
        items = await self.gateway.status(target_user_id)

        try:
            names = await get_ride_names(item["ride_id"] for item in items)
        except BaseORMException as e:
            logger.warning("Could not name the rides in the queue of user %s: %s", target_user_id, e)
            names = {}

        return [
            {**item, "ride_name": names.get(item["ride_id"]) or item.get("ride_name") or UNKNOWN_RIDE_NAME}
            for item in items
        ]
