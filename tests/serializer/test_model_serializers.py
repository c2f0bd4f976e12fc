import pytest
from marshmallow import ValidationError

from ridegate.models.util import TicketCategory
from ridegate.serializer.models import EnqueueRequestSchema, RideSchema, RideUsageSchema, RidesInfoSchema


class TestEnqueueRequestSchema:

    def test_load(self):
        data = EnqueueRequestSchema().load({"userId": 1, "rideId": 2, "ticketType": "PREMIUM"})
        assert data == {"user_id": 1, "ride_id": 2, "ticket_type": TicketCategory.PREMIUM}

    @pytest.mark.parametrize("ticket_type", ["VIP", "general", "", None, 1])
    def test_unknown_ticket_type(self, ticket_type):
        with pytest.raises(ValidationError) as error:
            EnqueueRequestSchema().load({"userId": 1, "rideId": 2, "ticketType": ticket_type})
        assert "ticketType" in error.value.messages

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as error:
            EnqueueRequestSchema().load({})
        assert set(error.value.messages) == {"userId", "rideId", "ticketType"}


class TestRideSerializer:

    async def test_serialize_without_wait_times(self, random_ride):
        data = RideSchema().dump(random_ride.serialize())
        assert data["waitTimes"] == []
        assert data["capacityPremium"] == random_ride.capacity_premium

    async def test_serialize_wait_times(self, random_ride):
        wait_times = [{"ticket_type": TicketCategory.GENERAL, "estimated_wait_minutes": 4, "waiting": 1}]
        data = RideSchema().dump(random_ride.serialize(wait_times))
        assert data["waitTimes"] == [{"ticketType": "GENERAL", "estimatedWaitMinutes": 4, "waiting": 1}]


class TestRideUsageSerializer:

    async def test_serialize_waiting(self, reservation_manager, random_user, todays_ticket):
        usage = await reservation_manager.begin(random_user.id, 5, todays_ticket.id)
        data = RideUsageSchema().dump(usage.serialize())
        assert data["status"] == "WAITED"
        assert data["ticketOrderId"] == todays_ticket.id
        assert "completedAt" not in data


class TestRidesInfoSchema:

    def test_ignores_unknown_keys(self):
        """Assert that extra keys from the queue service are dropped rather than rejected."""
        data = RidesInfoSchema().load({"rides": [{"rideId": 1, "waitTimes": [], "crowd": "high"}], "version": 2})
        assert data == {"rides": [{"ride_id": 1, "wait_times": []}]}
