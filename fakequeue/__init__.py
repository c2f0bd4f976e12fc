"""
A stand-in for the remote queue service, for local development and the tests.

It keeps every queue in memory and can be told to fail or to answer slowly.
"""

import logging

logger = logging.getLogger(__name__)
handler = logging.StreamHandler()
formatter = logging.Formatter('%(asctime)s %(name)-12s %(levelname)-8s %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)
logger.setLevel(logging.DEBUG)
