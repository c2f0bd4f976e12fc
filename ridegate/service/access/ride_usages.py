"""
Ride Usages
-----------
"""
from typing import List, Optional

from ridegate.models import RideUsage


async def get_ride_usages(*, user_id: int = None) -> List[RideUsage]:
    query = RideUsage.all()

    if user_id is not None:
        query = query.filter(user_id=user_id)

    return await query.order_by("-created_at", "-id")


async def get_ride_usage(usage_id: int) -> Optional[RideUsage]:
    return await RideUsage.get_or_none(id=usage_id)
