from collections import defaultdict, deque
from typing import Deque, Dict, Tuple, List, Set, Optional

from ridegate.models.util import TicketCategory

MINUTES_PER_PERSON = {
    TicketCategory.GENERAL: 4,
    TicketCategory.PREMIUM: 2,
}
"""How long each person ahead of you (and you) adds to the wait, per category."""


class QueueState:
    """
    One first-in first-out queue per ride and ticket category.

    :ivar failing: the operations that should answer with a server error
    :ivar delay: seconds to wait before answering anything
    :ivar calls: every operation received, with its arguments, in order
    """

    def __init__(self, ride_ids=()):
        self.queues: Dict[Tuple[int, TicketCategory], Deque[int]] = defaultdict(deque)
        self.rides: Set[int] = set(ride_ids)
        self.failing: Set[str] = set()
        self.delay: float = 0
        self.calls: List[Tuple[str, dict]] = []

    def record(self, operation: str, **arguments):
        self.calls.append((operation, arguments))

    def calls_to(self, operation: str) -> List[dict]:
        return [arguments for name, arguments in self.calls if name == operation]

    @staticmethod
    def estimate(category: TicketCategory, position: int) -> int:
        return position * MINUTES_PER_PERSON[category]

    def enqueue(self, user_id: int, ride_id: int, category: TicketCategory) -> Optional[int]:
        """Adds the user to the back of the queue, returning their position or None if already queued."""
        queue = self.queues[(ride_id, category)]
        if user_id in queue:
            return None
        self.rides.add(ride_id)
        queue.append(user_id)
        return len(queue)

    def cancel(self, user_id: int, ride_id: int, category: TicketCategory) -> bool:
        queue = self.queues[(ride_id, category)]
        if user_id not in queue:
            return False
        queue.remove(user_id)
        return True

    def board(self, ride_id: int, category: TicketCategory) -> Optional[int]:
        """Lets the person at the front of the queue on, returning who it was."""
        queue = self.queues[(ride_id, category)]
        return queue.popleft() if queue else None

    def status(self, user_id: int) -> List[dict]:
        items = []
        for (ride_id, category), queue in sorted(self.queues.items()):
            if user_id in queue:
                position = queue.index(user_id) + 1
                items.append({
                    "ride_id": ride_id,
                    "ticket_type": category,
                    "position": position,
                    "estimated_wait_minutes": self.estimate(category, position),
                })
        return items

    def rides_info(self) -> List[dict]:
        return [
            {
                "ride_id": ride_id,
                "wait_times": [
                    {
                        "ticket_type": category,
                        "waiting": len(self.queues.get((ride_id, category), ())),
                        "estimated_wait_minutes": self.estimate(
                            category, len(self.queues.get((ride_id, category), ()))
                        ),
                    }
                    for category in TicketCategory
                ]
            }
            for ride_id in sorted(self.rides)
        ]
