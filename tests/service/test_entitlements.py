from datetime import datetime, timedelta, timezone

import pytest
from tortoise import timezone as tortoise_timezone

from ridegate.models import TicketSlot
from ridegate.models.util import TicketCategory, ActiveStatus
from ridegate.service.entitlements import EntitlementResolver
from ridegate.service.exceptions import NoActiveTicketTodayError, EntitlementDataMissingError


class TestTodayBounds:

    def test_utc(self):
        start, end = EntitlementResolver("UTC").today_bounds(datetime(2026, 10, 19, 13, 30, tzinfo=timezone.utc))
        assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
        assert end == datetime(2026, 10, 20, tzinfo=timezone.utc)

    def test_park_timezone(self):
        """Assert that today is the calendar day at the park, not in UTC."""
        resolver = EntitlementResolver("Asia/Seoul")
        start, end = resolver.today_bounds(datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc))
        assert start == datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)
        assert end == datetime(2026, 10, 20, 15, 0, tzinfo=timezone.utc)


class TestResolveToday:

    async def test_resolves_active_ticket(self, entitlement_resolver, random_user, todays_ticket):
        order = await entitlement_resolver.resolve_today(random_user.id)
        assert order.id == todays_ticket.id

    async def test_no_tickets(self, entitlement_resolver, random_user):
        with pytest.raises(NoActiveTicketTodayError):
            await entitlement_resolver.resolve_today(random_user.id)

    async def test_inactive_ticket(self, entitlement_resolver, random_user, ticket_order_factory):
        await ticket_order_factory(random_user, status=ActiveStatus.INACTIVE)
        with pytest.raises(NoActiveTicketTodayError):
            await entitlement_resolver.resolve_today(random_user.id)

    @pytest.mark.parametrize("offset", [timedelta(days=1), timedelta(days=-1)])
    async def test_ticket_for_another_day(self, entitlement_resolver, random_user, ticket_order_factory, offset):
        await ticket_order_factory(random_user, available_at=tortoise_timezone.now() + offset)
        with pytest.raises(NoActiveTicketTodayError):
            await entitlement_resolver.resolve_today(random_user.id)

    async def test_someone_elses_ticket(self, entitlement_resolver, random_user_factory, ticket_order_factory):
        owner = await random_user_factory()
        other = await random_user_factory()
        await ticket_order_factory(owner)
        with pytest.raises(NoActiveTicketTodayError):
            await entitlement_resolver.resolve_today(other.id)

    async def test_first_of_many(self, entitlement_resolver, random_user, ticket_order_factory):
        first = await ticket_order_factory(random_user, TicketCategory.PREMIUM)
        await ticket_order_factory(random_user, TicketCategory.GENERAL)
        assert (await entitlement_resolver.resolve_today(random_user.id)).id == first.id


class TestCategoryOf:

    async def test_category(self, entitlement_resolver, random_user, ticket_order_factory):
        order = await ticket_order_factory(random_user, TicketCategory.PREMIUM)
        assert await entitlement_resolver.category_of(order) is TicketCategory.PREMIUM

    async def test_missing_ticket(self, entitlement_resolver, todays_ticket):
        """Assert that a slot with no ticket product is reported as missing data."""
        await TicketSlot.filter(id=todays_ticket.slot_id).update(ticket_id=None)
        with pytest.raises(EntitlementDataMissingError):
            await entitlement_resolver.category_of(todays_ticket)
