"""
Credential Sweeper
------------------

Periodically deletes refresh credentials that have expired. Rotation already
treats them as absent, so this only keeps the table from growing.
"""
import asyncio
from datetime import timedelta

from tortoise.exceptions import BaseORMException

from ridegate import logger
from ridegate.service.access.credentials import delete_expired


class CredentialSweeper:

    def __init__(self, period: timedelta = timedelta(hours=1)):
        self.period = period

    async def sweep(self) -> int:
        removed = await delete_expired()
        if removed:
            logger.info("Removed %s expired refresh credentials", removed)
        return removed

    async def run(self):
        """Sweeps once per period, forever. A failed sweep is logged and retried next period."""
        while True:
            try:
                await self.sweep()
            except BaseORMException:
                logger.exception("Could not sweep expired refresh credentials")
            await asyncio.sleep(self.period.total_seconds())
