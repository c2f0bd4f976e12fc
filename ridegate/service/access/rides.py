"""
Rides
-----
"""
from typing import List, Optional, Dict, Iterable

from ridegate.models import Ride


async def get_rides() -> List[Ride]:
    return await Ride.all().order_by("id")


async def get_ride(ride_id: int) -> Optional[Ride]:
    return await Ride.get_or_none(id=ride_id)


async def get_ride_names(ride_ids: Iterable[int]) -> Dict[int, str]:
    """Maps each of the given ride ids that exists in the catalog to its name."""
    ride_ids = set(ride_ids)
    if not ride_ids:
        return {}
    rides = await Ride.filter(id__in=ride_ids).values("id", "name")
    return {ride["id"]: ride["name"] for ride in rides}
