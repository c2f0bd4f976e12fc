from aiohttp.test_utils import TestClient
from marshmallow.fields import List, Nested

from fakequeue.queue import QueueState
from ridegate.models.util import TicketCategory
from ridegate.serializer import JSendSchema, JSendStatus
from ridegate.serializer.models import RideSchema


class TestRidesView:

    async def test_get_rides(self, client: TestClient, queue_state: QueueState, random_ride_factory):
        """Assert that anyone can list the rides, each with its current wait times."""
        busy, quiet = await random_ride_factory(), await random_ride_factory()
        queue_state.enqueue(1001, busy.id, TicketCategory.GENERAL)
        queue_state.enqueue(1002, busy.id, TicketCategory.GENERAL)

        response = await client.get("/api/rides")

        assert response.status == 200
        response_data = JSendSchema.of(rides=List(Nested(RideSchema()))).load(await response.json())
        rides = {ride["id"]: ride for ride in response_data["data"]["rides"]}
        assert rides.keys() == {busy.id, quiet.id}
        general = next(wait for wait in rides[busy.id]["wait_times"] if wait["ticket_type"] is TicketCategory.GENERAL)
        assert general["estimated_wait_minutes"] == 8
        assert general["waiting"] == 2
        assert rides[quiet.id]["wait_times"] == []

    async def test_get_rides_queue_down(self, client: TestClient, queue_state: QueueState, random_ride):
        """Assert that the rides are still listed when the queue service is down, without wait times."""
        queue_state.failing.add("rides_info")

        response = await client.get("/api/rides")

        assert response.status == 200
        rides = (await response.json())["data"]["rides"]
        assert [ride["id"] for ride in rides] == [random_ride.id]
        assert rides[0]["waitTimes"] == []


class TestRideView:

    async def test_get_ride(self, client: TestClient, queue_state: QueueState, random_ride):
        queue_state.enqueue(1001, random_ride.id, TicketCategory.PREMIUM)

        response = await client.get(f"/api/rides/{random_ride.id}")

        assert response.status == 200
        ride = (await response.json())["data"]["ride"]
        assert ride["name"] == random_ride.name
        assert ride["capacityTotal"] == random_ride.capacity_total
        assert {"ticketType": "PREMIUM", "estimatedWaitMinutes": 2, "waiting": 1} in ride["waitTimes"]

    async def test_get_missing_ride(self, client: TestClient, database):
        response = await client.get("/api/rides/404")

        assert response.status == 404
        response_data = JSendSchema().load(await response.json())
        assert response_data["status"] == JSendStatus.FAIL
        assert response_data["data"]["message"] == "Could not find ride with the given params."
        assert response_data["data"]["params"] == {"ride_id": 404}

    async def test_get_ride_bad_id(self, client: TestClient, database):
        """Assert that a non-numeric id is a bad request, not a missing session."""
        response = await client.get("/api/rides/coaster")

        assert response.status == 400
        response_data = JSendSchema().load(await response.json())
        assert response_data["data"]["message"] == "Errors with your request."
        assert response_data["data"]["errors"] == ['Could not convert url parameter "coaster" to expected type int.']


class TestIndex:

    async def test_index(self, client: TestClient):
        response = await client.get("/")

        assert response.status == 200
        assert (await response.json())["name"] == "ridegate"
