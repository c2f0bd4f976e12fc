"""
Runs the fake queue service on port 8081, where the gateway expects it by default.

Rides can be pre-registered by listing their ids: ``python -m fakequeue.run 1 2 3``
"""
import sys

from aiohttp import web

from fakequeue import logger
from fakequeue.queue import QueueState
from fakequeue.server import build_app

PORT = 8081


def run(argv=None):
    ride_ids = [int(arg) for arg in (argv if argv is not None else sys.argv[1:])]
    logger.info("Serving fake queues for rides %s on port %s", ride_ids, PORT)
    web.run_app(build_app(QueueState(ride_ids)), port=PORT)


if __name__ == '__main__':
    run()
