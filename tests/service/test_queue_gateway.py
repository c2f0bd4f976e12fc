from datetime import timedelta

import pytest
from aiohttp import web

from fakequeue.queue import QueueState
from ridegate.models.util import TicketCategory
from ridegate.service.exceptions import (
    UpstreamTimeoutError, UpstreamUnreachableError, UnexpectedUpstreamResponseError
)
from ridegate.service.queue_gateway import HTTPQueueGateway, EnqueueResult


class TestQueueGateway:

    async def test_enqueue(self, queue_gateway: HTTPQueueGateway, queue_state: QueueState):
        result = await queue_gateway.enqueue(1, 5, TicketCategory.PREMIUM)

        assert result == EnqueueResult(position=1, estimated_wait_minutes=2)
        assert queue_state.calls_to("enqueue") == [
            {"user_id": 1, "ride_id": 5, "ticket_type": TicketCategory.PREMIUM}
        ]

    async def test_status(self, queue_gateway: HTTPQueueGateway, queue_state: QueueState):
        queue_state.enqueue(2, 5, TicketCategory.GENERAL)
        await queue_gateway.enqueue(1, 5, TicketCategory.GENERAL)

        items = await queue_gateway.status(1)

        assert items == [{
            "ride_id": 5,
            "ticket_type": TicketCategory.GENERAL,
            "position": 2,
            "estimated_wait_minutes": 8,
        }]

    async def test_cancel(self, queue_gateway: HTTPQueueGateway, queue_state: QueueState):
        await queue_gateway.enqueue(1, 5, TicketCategory.GENERAL)
        await queue_gateway.cancel(1, 5, TicketCategory.GENERAL)
        assert await queue_gateway.status(1) == []

    async def test_rides_info(self, queue_gateway: HTTPQueueGateway, queue_state: QueueState):
        queue_state.enqueue(1, 3, TicketCategory.GENERAL)

        info = await queue_gateway.rides_info()

        assert list(info) == [3]
        general = next(wait for wait in info[3] if wait["ticket_type"] is TicketCategory.GENERAL)
        assert general["estimated_wait_minutes"] == 4

    async def test_error_status(self, queue_gateway: HTTPQueueGateway, queue_state: QueueState):
        """Assert that an error status from the queue service is raised with its message."""
        queue_state.failing.add("enqueue")
        with pytest.raises(UnexpectedUpstreamResponseError) as error:
            await queue_gateway.enqueue(1, 5, TicketCategory.GENERAL)
        assert "unavailable" in error.value.message

    async def test_cancel_unknown(self, queue_gateway: HTTPQueueGateway):
        with pytest.raises(UnexpectedUpstreamResponseError):
            await queue_gateway.cancel(1, 5, TicketCategory.GENERAL)

    async def test_timeout(self, queue_server, queue_state: QueueState):
        """Assert that a slow queue service is abandoned after the timeout."""
        queue_state.delay = 1
        gateway = HTTPQueueGateway(str(queue_server.make_url("")), timedelta(seconds=0.1))
        try:
            with pytest.raises(UpstreamTimeoutError):
                await gateway.enqueue(1, 5, TicketCategory.GENERAL)
        finally:
            await gateway.close()

    async def test_unreachable(self):
        gateway = HTTPQueueGateway("http://127.0.0.1:1", timedelta(seconds=2))
        try:
            with pytest.raises(UpstreamUnreachableError):
                await gateway.status(1)
        finally:
            await gateway.close()

    async def test_malformed_body(self, aiohttp_server):
        """Assert that a body that does not match the contract is rejected."""
        async def enqueue(request):
            return web.json_response({"place": "front"})

        app = web.Application()
        app.router.add_post("/api/queue/enqueue", enqueue)
        server = await aiohttp_server(app)

        gateway = HTTPQueueGateway(str(server.make_url("")))
        try:
            with pytest.raises(UnexpectedUpstreamResponseError):
                await gateway.enqueue(1, 5, TicketCategory.GENERAL)
        finally:
            await gateway.close()
