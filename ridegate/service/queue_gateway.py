"""
Queue Gateway
-------------

Talks to the remote queue service, which owns queue positions and wait estimates.

Every call is bounded by a single timeout and is never retried. Whatever goes
wrong is raised as an :class:`~ridegate.service.exceptions.UpstreamError` so the
caller can abort before touching local state.
"""
import abc
import asyncio
from datetime import timedelta
from typing import List, Dict, Any, NamedTuple, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout, ClientResponse
from marshmallow import Schema, ValidationError

from ridegate import logger
from ridegate.models.util import TicketCategory
from ridegate.serializer.models import EnqueueResultSchema, QueueStatusSchema, RidesInfoSchema
from ridegate.service.exceptions import (
    UpstreamTimeoutError, UpstreamUnreachableError, UnexpectedUpstreamResponseError
)


class EnqueueResult(NamedTuple):
    position: int
    estimated_wait_minutes: int


class QueueGateway(abc.ABC):

    @abc.abstractmethod
    async def enqueue(self, user_id: int, ride_id: int, category: TicketCategory) -> EnqueueResult:
        """Puts the user at the back of the ride's queue for the category."""

    @abc.abstractmethod
    async def cancel(self, user_id: int, ride_id: int, category: TicketCategory):
        """Takes the user out of the ride's queue for the category."""

    @abc.abstractmethod
    async def status(self, user_id: int) -> List[Dict[str, Any]]:
        """Lists every queue the user is in."""

    @abc.abstractmethod
    async def rides_info(self) -> Dict[int, List[Dict[str, Any]]]:
        """Maps each ride id to its current wait times."""

    async def start(self):
        pass

    async def close(self):
        pass


class HTTPQueueGateway(QueueGateway):

    def __init__(self, base_url: str, timeout: timedelta = timedelta(seconds=10)):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: Optional[ClientSession] = None

    async def start(self):
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout.total_seconds()))

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(self, method: str, path: str, schema: Schema = None, **kwargs):
        """
        Makes a single request, loading the body into the schema if one is given.

        :raises UpstreamTimeoutError: When the remote does not answer in time.
        :raises UpstreamUnreachableError: When no connection could be made.
        :raises UnexpectedUpstreamResponseError: On an error status or a malformed body.
        """
        await self.start()
        url = self.base_url + path

        try:
            async with self._session.request(method, url, **kwargs) as response:
                await self._raise_for_status(method, url, response)
                if schema is None:
                    return None
                return schema.load(await response.json())
        except asyncio.TimeoutError as e:
            logger.error("%s %s timed out after %s", method, url, self.timeout)
            raise UpstreamTimeoutError() from e
        except aiohttp.ClientConnectionError as e:
            logger.error("%s %s could not connect: %s", method, url, e)
            raise UpstreamUnreachableError() from e
        except (aiohttp.ContentTypeError, ValueError) as e:
            logger.error("%s %s sent a body that is not JSON: %s", method, url, e)
            raise UnexpectedUpstreamResponseError() from e
        except ValidationError as e:
            logger.error("%s %s sent an unexpected body: %s", method, url, e.messages)
            raise UnexpectedUpstreamResponseError() from e

    @staticmethod
    async def _raise_for_status(method: str, url: str, response: ClientResponse):
        if response.status < 400:
            return

        message = None
        try:
            body = await response.json()
            message = body.get("message") if isinstance(body, dict) else None
        except (aiohttp.ContentTypeError, ValueError):
            pass

        logger.error("%s %s answered %s: %s", method, url, response.status, message)
        raise UnexpectedUpstreamResponseError(message or f"The queue server answered with status {response.status}.")

    async def enqueue(self, user_id: int, ride_id: int, category: TicketCategory) -> EnqueueResult:
        data = await self._request(
            "POST", "/api/queue/enqueue", EnqueueResultSchema(),
            json={"userId": user_id, "rideId": ride_id, "ticketType": category.value}
        )
        return EnqueueResult(data["position"], data["estimated_wait_minutes"])

    async def cancel(self, user_id: int, ride_id: int, category: TicketCategory):
        await self._request(
            "POST", "/api/queue/cancel",
            json={"userId": user_id, "rideId": ride_id, "ticketType": category.value}
        )

    async def status(self, user_id: int) -> List[Dict[str, Any]]:
        data = await self._request(
            "GET", "/api/queue/status/all", QueueStatusSchema(),
            params={"userId": str(user_id)}
        )
        return data["items"]

    async def rides_info(self) -> Dict[int, List[Dict[str, Any]]]:
        data = await self._request("GET", "/api/queue/rides/info", RidesInfoSchema())
        return {ride["ride_id"]: ride["wait_times"] for ride in data["rides"]}
