"""
Reservation Manager
===================

Owns the lifecycle of a user's ride usage records.

A record starts as WAITED when the remote queue accepts the user, and then
either becomes COMPLETED when the user boards, NO_SHOW when an operator says
they never turned up, or is deleted when the user cancels. Nothing leaves
COMPLETED or NO_SHOW.

A ticket is good for one go per ride. While a record is WAITED or COMPLETED
it holds the ``claim_key`` of its (ticket order, ride) pair, and the unique index
on that column stops a second record from claiming the same pair even when two
requests race past :meth:`ReservationManager.can_enqueue`. A NO_SHOW record
releases its claim, so the ticket may queue for that ride again.

Responsibilities
----------------

- check whether a ticket may still queue for a ride
- record a new WAITED reservation
- complete, cancel or mark no-show
"""
from typing import Optional

from tortoise import timezone
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from ridegate import logger
from ridegate.models import RideUsage
from ridegate.models.ride_usage import make_claim_key
from ridegate.models.util import RideUsageStatus
from ridegate.service.exceptions import (
    AlreadyWaitingOrCompletedError, NoWaitingReservationError, InvalidTransitionError
)


class ReservationManager:

    async def can_enqueue(self, ticket_order_id: int, ride_id: int) -> bool:
        """True when no WAITED or COMPLETED record exists for the ticket and ride."""
        return not await RideUsage.filter(
            ticket_order_id=ticket_order_id,
            ride_id=ride_id,
            status__in=RideUsageStatus.claiming_statuses(),
        ).exists()

    async def begin(self, user_id: int, ride_id: int, ticket_order_id: int) -> RideUsage:
        """
        Records a new WAITED reservation. Only call this once the remote queue has accepted the user.

        :raises AlreadyWaitingOrCompletedError: When the ticket already claims the ride.
        """
        try:
            async with in_transaction():
                usage = await RideUsage.create(
                    user_id=user_id,
                    ride_id=ride_id,
                    ticket_order_id=ticket_order_id,
                    status=RideUsageStatus.WAITED,
                    claim_key=make_claim_key(ticket_order_id, ride_id),
                )
        except IntegrityError as e:
            logger.warning("Ticket order %s already claims ride %s", ticket_order_id, ride_id)
            raise AlreadyWaitingOrCompletedError() from e

        logger.info("%s is now waiting", usage)
        return usage

    async def waiting(self, user_id: int, ride_id: int) -> Optional[RideUsage]:
        """Gets the user's WAITED record for the ride, if any."""
        return await RideUsage.filter(
            user_id=user_id, ride_id=ride_id, status=RideUsageStatus.WAITED
        ).order_by("id").first()

    async def complete(self, user_id: int, ride_id: int) -> RideUsage:
        """
        Marks the user's WAITED record for the ride as COMPLETED.

        :raises NoWaitingReservationError: When the user is not waiting for the ride.
        """
        async with in_transaction():
            usage = await self.waiting(user_id, ride_id)
            if usage is None:
                raise NoWaitingReservationError()

            usage.status = RideUsageStatus.COMPLETED
            usage.completed_at = timezone.now()
            await usage.save()

        logger.info("%s completed", usage)
        return usage

    async def cancel(self, user_id: int, ride_id: int) -> RideUsage:
        """
        Deletes the user's WAITED record for the ride.

        :raises NoWaitingReservationError: When the user is not waiting for the ride.
        """
        async with in_transaction():
            usage = await self.waiting(user_id, ride_id)
            if usage is None:
                raise NoWaitingReservationError()
            await usage.delete()

        logger.info("%s cancelled", usage)
        return usage

    async def mark_no_show(self, usage: RideUsage) -> RideUsage:
        """
        Marks a WAITED record as NO_SHOW, releasing its claim on the ride.

        :raises InvalidTransitionError: When the record is not WAITED.
        """
        self._assert_waiting(usage, RideUsageStatus.NO_SHOW)

        usage.status = RideUsageStatus.NO_SHOW
        usage.claim_key = None
        await usage.save()

        logger.info("%s marked as no show", usage)
        return usage

    async def delete(self, usage: RideUsage):
        """
        Deletes a WAITED record without telling the remote queue.

        :raises InvalidTransitionError: When the record is not WAITED.
        """
        self._assert_waiting(usage, "deleted")

        await usage.delete()
        logger.info("%s deleted", usage)

    @staticmethod
    def _assert_waiting(usage: RideUsage, target):
        if usage.status is not RideUsageStatus.WAITED:
            raise InvalidTransitionError(usage.status, target)
