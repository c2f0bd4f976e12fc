"""
Entitlements
------------

Works out which ticket a user may use today.

"Today" is the calendar day in the park's timezone. A ticket order is usable
while it is ACTIVE and its slot's availability date falls inside that day.
"""
from datetime import datetime, timedelta, timezone
from typing import Tuple
from zoneinfo import ZoneInfo

from ridegate import logger
from ridegate.models import TicketOrder, TicketSlot, Ticket
from ridegate.models.util import ActiveStatus, TicketCategory
from ridegate.service.exceptions import NoActiveTicketTodayError, EntitlementDataMissingError


class EntitlementResolver:

    def __init__(self, tz: str = "UTC"):
        self.tz = ZoneInfo(tz)

    def today_bounds(self, now: datetime = None) -> Tuple[datetime, datetime]:
        """The start of today and the start of tomorrow, in UTC."""
        if now is None:
            now = datetime.now(timezone.utc)
        start = now.astimezone(self.tz).replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

    async def resolve_today(self, user_id: int, now: datetime = None) -> TicketOrder:
        """
        Gets the first ACTIVE ticket order whose slot is available today.

        :raises NoActiveTicketTodayError: When the user has no such order.
        """
        start, end = self.today_bounds(now)
        order = await TicketOrder.filter(
            user_id=user_id,
            status=ActiveStatus.ACTIVE,
            slot__available_at__gte=start,
            slot__available_at__lt=end,
        ).order_by("id").first()

        if order is None:
            logger.warning("User %s has no active ticket between %s and %s", user_id, start, end)
            raise NoActiveTicketTodayError("No active ticket for today")

        return order

    async def category_of(self, order: TicketOrder) -> TicketCategory:
        """
        Follows the order through its slot to the ticket product's category.

        :raises EntitlementDataMissingError: When the slot or the product is gone.
        """
        slot = await TicketSlot.get_or_none(id=order.slot_id)
        if slot is None or slot.ticket_id is None:
            logger.error("Ticket order %s points at a missing slot", order.id)
            raise EntitlementDataMissingError("Ticket slot information not found")

        ticket = await Ticket.get_or_none(id=slot.ticket_id)
        if ticket is None:
            logger.error("Ticket slot %s points at a missing ticket", slot.id)
            raise EntitlementDataMissingError("Ticket information not found")

        return ticket.ticket_type
