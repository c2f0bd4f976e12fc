"""
Serves a :class:`~fakequeue.queue.QueueState` over the remote queue service's http contract.
"""
import asyncio
from functools import wraps
from http import HTTPStatus
from json import JSONDecodeError

from aiohttp import web
from marshmallow import ValidationError

from fakequeue import logger
from fakequeue.queue import QueueState
from ridegate.serializer.models import (
    EnqueueRequestSchema, EnqueueResultSchema, QueueStatusSchema, RidesInfoSchema
)

enqueue_schema = EnqueueRequestSchema()
status_schema = QueueStatusSchema()
rides_info_schema = RidesInfoSchema()
result_schema = EnqueueResultSchema()


def operation(name):
    """Records the call, applies the configured delay, and fails if told to."""

    def decorator(handler):

        @wraps(handler)
        async def new_handler(request: web.Request):
            state: QueueState = request.app["state"]
            if state.delay:
                await asyncio.sleep(state.delay)
            if name in state.failing:
                logger.info("Failing %s on purpose", name)
                return web.json_response({"message": f"{name} is unavailable"}, status=HTTPStatus.SERVICE_UNAVAILABLE)
            return await handler(request, state)

        return new_handler

    return decorator


async def load_request(request: web.Request):
    try:
        return enqueue_schema.load(await request.json())
    except (JSONDecodeError, ValidationError) as error:
        raise web.HTTPBadRequest(text=str(error))


@operation("enqueue")
async def enqueue(request: web.Request, state: QueueState):
    data = await load_request(request)
    state.record("enqueue", **data)

    position = state.enqueue(data["user_id"], data["ride_id"], data["ticket_type"])
    if position is None:
        return web.json_response({"message": "User is already in this queue"}, status=HTTPStatus.CONFLICT)

    logger.info("User %s joined ride %s at position %s", data["user_id"], data["ride_id"], position)
    return web.json_response(result_schema.dump({
        "position": position,
        "estimated_wait_minutes": state.estimate(data["ticket_type"], position),
    }))


@operation("cancel")
async def cancel(request: web.Request, state: QueueState):
    data = await load_request(request)
    state.record("cancel", **data)

    if not state.cancel(data["user_id"], data["ride_id"], data["ticket_type"]):
        return web.json_response({"message": "User is not in this queue"}, status=HTTPStatus.NOT_FOUND)

    logger.info("User %s left ride %s", data["user_id"], data["ride_id"])
    return web.Response(status=HTTPStatus.NO_CONTENT)


@operation("status")
async def status(request: web.Request, state: QueueState):
    try:
        user_id = int(request.query["userId"])
    except (KeyError, ValueError):
        raise web.HTTPBadRequest(text="userId is required")

    state.record("status", user_id=user_id)
    return web.json_response(status_schema.dump({"items": state.status(user_id)}))


@operation("rides_info")
async def rides_info(request: web.Request, state: QueueState):
    state.record("rides_info")
    return web.json_response(rides_info_schema.dump({"rides": state.rides_info()}))


def build_app(state: QueueState = None) -> web.Application:
    app = web.Application()
    app["state"] = state if state is not None else QueueState()
    app.router.add_post("/api/queue/enqueue", enqueue)
    app.router.add_post("/api/queue/cancel", cancel)
    app.router.add_get("/api/queue/status/all", status)
    app.router.add_get("/api/queue/rides/info", rides_info)
    return app
