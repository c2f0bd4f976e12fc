from aiohttp.test_utils import TestClient

from ridegate.models import RideUsage
from ridegate.models.util import TicketCategory, RideUsageStatus
from ridegate.serializer import JSendSchema


class TestUserRideUsagesView:

    async def test_get_own_usages(self, client: TestClient, queue_orchestrator, random_user, todays_ticket,
                                  session_for):
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)

        response = await client.get(f"/api/users/{random_user.id}/ride-usages", cookies=session_for(random_user))

        assert response.status == 200
        usages = (await response.json())["data"]["rideUsages"]
        assert [(usage["rideId"], usage["status"]) for usage in usages] == [(5, "WAITED")]

    async def test_operator_gets_usages(self, client: TestClient, random_user, random_operator, session_for):
        response = await client.get(f"/api/users/{random_user.id}/ride-usages", cookies=session_for(random_operator))

        assert response.status == 200
        assert (await response.json())["data"]["rideUsages"] == []

    async def test_get_other_usages(self, client: TestClient, random_user_factory, session_for):
        user, other = await random_user_factory(), await random_user_factory()

        response = await client.get(f"/api/users/{user.id}/ride-usages", cookies=session_for(other))

        assert response.status == 403
        response_data = JSendSchema().load(await response.json())
        assert len(response_data["data"]["reasons"]) == 2

    async def test_get_missing_user(self, client: TestClient, random_operator, session_for):
        response = await client.get("/api/users/9999/ride-usages", cookies=session_for(random_operator))
        assert response.status == 404


class TestRideUsageNoShowView:

    async def test_mark_no_show(self, client: TestClient, queue_orchestrator, random_user, random_operator,
                                todays_ticket, session_for):
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)
        usage = await RideUsage.get(user_id=random_user.id)

        response = await client.patch(f"/api/ride-usages/{usage.id}/no-show", cookies=session_for(random_operator))

        assert response.status == 200
        assert (await response.json())["data"]["rideUsage"]["status"] == "NO_SHOW"
        await usage.refresh_from_db()
        assert usage.status is RideUsageStatus.NO_SHOW
        assert usage.claim_key is None

    async def test_mark_completed_no_show(self, client: TestClient, queue_orchestrator, random_user,
                                          random_operator, todays_ticket, session_for):
        """Assert that a record that left WAITED cannot be changed again."""
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)
        usage = await queue_orchestrator.complete_ride(random_user.id, random_user.id, 5)

        response = await client.patch(f"/api/ride-usages/{usage.id}/no-show", cookies=session_for(random_operator))

        assert response.status == 400
        assert (await response.json())["data"]["reason"] == "InvalidTransitionError"

    async def test_user_cannot_mark(self, client: TestClient, queue_orchestrator, random_user, todays_ticket,
                                    session_for):
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)
        usage = await RideUsage.get(user_id=random_user.id)

        response = await client.patch(f"/api/ride-usages/{usage.id}/no-show", cookies=session_for(random_user))

        assert response.status == 403
        await usage.refresh_from_db()
        assert usage.status is RideUsageStatus.WAITED


class TestRideUsageView:

    async def test_delete(self, client: TestClient, queue_orchestrator, queue_state, random_user, random_operator,
                          todays_ticket, session_for):
        """Assert that an operator can drop a waiting reservation without telling the queue service."""
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)
        usage = await RideUsage.get(user_id=random_user.id)

        response = await client.delete(f"/api/ride-usages/{usage.id}", cookies=session_for(random_operator))

        assert response.status == 204
        assert not await RideUsage.all().exists()
        assert not queue_state.calls_to("cancel")

    async def test_delete_completed(self, client: TestClient, queue_orchestrator, random_user, random_operator,
                                    todays_ticket, session_for):
        await queue_orchestrator.enqueue(random_user.id, random_user.id, 5, TicketCategory.GENERAL)
        usage = await queue_orchestrator.complete_ride(random_user.id, random_user.id, 5)

        response = await client.delete(f"/api/ride-usages/{usage.id}", cookies=session_for(random_operator))

        assert response.status == 400
        assert await RideUsage.filter(id=usage.id).exists()

    async def test_delete_missing(self, client: TestClient, random_operator, session_for):
        response = await client.delete("/api/ride-usages/9999", cookies=session_for(random_operator))
        assert response.status == 404
