"""
Signals
-------

Defines a number of signals that the aiohttp server uses
to facilitate some of the advanced functionality.

Each signal must accept the ``app`` argument.
"""
import asyncio
from asyncio import CancelledError
from contextlib import suppress

from aiohttp.abc import Application
from tortoise import Tortoise

from ridegate import logger


async def initialize_database(app: Application):
    """Initializes and generates the schema for our database."""
    await Tortoise.init(
        db_url=app['database_uri'],
        modules={'models': ['ridegate.models']}
    )
    await Tortoise.generate_schemas(safe=True)


async def close_database_connections(app: Application):
    """Closes the open database connections."""
    await Tortoise.close_connections()


async def start_queue_gateway(app: Application):
    """Opens the http session to the remote queue service."""
    await app['queue_gateway'].start()


async def close_queue_gateway(app: Application):
    await app['queue_gateway'].close()


async def start_background_tasks(app: Application):
    """Starts the background tasks."""
    logger.info("Starting Background Tasks")
    loop = asyncio.get_event_loop()
    app['credential_sweeper_task'] = loop.create_task(app['credential_sweeper'].run())


async def stop_background_tasks(app: Application):
    """
    Stops the background tasks.

    .. note: We suppress CancelledError so that coroutines that do not handle it don't cause issues.
    """
    task = app.get('credential_sweeper_task')
    if task is None:
        return
    task.cancel()
    with suppress(CancelledError):
        await task


def register_signals(app: Application, init_database=True):
    """Registers all the signals at the appropriate hooks."""
    if init_database:
        app.on_startup.append(initialize_database)

    app.on_startup.append(start_queue_gateway)
    app.on_startup.append(start_background_tasks)

    app.on_cleanup.append(stop_background_tasks)
    app.on_cleanup.append(close_queue_gateway)
    if init_database:
        app.on_cleanup.append(close_database_connections)
