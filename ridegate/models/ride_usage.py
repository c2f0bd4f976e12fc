"""
Ride Usage
----------

Tracks one ticket's attempt to use one ride's queue.

``claim_key`` is ``"<ticket order id>:<ride id>"`` while the record is WAITED or
COMPLETED and NULL otherwise. Its unique index is what makes a ticket good for
exactly one go per ride, even when two requests race past the existence check.
"""

from tortoise import Model, fields

from ridegate.models.fields import EnumField
from ridegate.models.util import RideUsageStatus


def make_claim_key(ticket_order_id: int, ride_id: int) -> str:
    return f"{ticket_order_id}:{ride_id}"


class RideUsage(Model):
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="ride_usages")
    ride_id = fields.IntField()
    ticket_order = fields.ForeignKeyField("models.TicketOrder", related_name="ride_usages")
    status: RideUsageStatus = EnumField(RideUsageStatus, default=RideUsageStatus.WAITED)
    arrived_at = fields.DatetimeField(null=True)
    completed_at = fields.DatetimeField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    claim_key = fields.CharField(max_length=64, null=True, unique=True)

    class Meta:
        table = "ride_usage"

    def serialize(self):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "ride_id": self.ride_id,
            "ticket_order_id": self.ticket_order_id,
            "status": self.status,
            "created_at": self.created_at,
        }

        if self.arrived_at is not None:
            data["arrived_at"] = self.arrived_at

        if self.completed_at is not None:
            data["completed_at"] = self.completed_at

        return data

    def __str__(self):
        return f"[{self.id}] user {self.user_id} on ride {self.ride_id} ({self.status.value})"
