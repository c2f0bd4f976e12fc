"""
The entry point for the CLI tool
"""
import asyncio

import uvloop
from aiohttp import web

from ridegate import logger, server_mode
from ridegate.app import build_app
from ridegate.config import database_uri
from ridegate.version import __version__, name


def run():
    """Runs the app on a uvloop event loop."""
    loop = uvloop.new_event_loop()
    asyncio.set_event_loop(loop)
    if server_mode == "development":
        loop.set_debug(True)

    logger.info('Starting %s %s!', name, __version__)
    web.run_app(build_app(database_uri), loop=loop)


if __name__ == '__main__':
    run()
