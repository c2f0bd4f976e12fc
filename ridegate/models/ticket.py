"""
Tickets
-------

A :class:`Ticket` is a product (its category and price), a :class:`TicketSlot`
is the stock of a product for one availability date, and a :class:`TicketOrder`
is a user's purchased entitlement to one slot.
"""

from tortoise import Model, fields

from ridegate.models.fields import EnumField
from ridegate.models.util import TicketCategory, ActiveStatus


class Ticket(Model):
    id = fields.IntField(pk=True)
    ticket_type: TicketCategory = EnumField(TicketCategory)
    ticket_count = fields.IntField(default=1)
    price = fields.IntField()


class TicketSlot(Model):
    id = fields.IntField(pk=True)
    ticket = fields.ForeignKeyField("models.Ticket", related_name="slots", null=True, on_delete=fields.SET_NULL)
    available_at = fields.DatetimeField()
    stock = fields.IntField(default=0)

    class Meta:
        table = "ticket_slot"


class TicketOrder(Model):
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="ticket_orders")
    slot = fields.ForeignKeyField("models.TicketSlot", related_name="orders")
    payment_date = fields.DatetimeField(auto_now_add=True)
    status: ActiveStatus = EnumField(ActiveStatus, default=ActiveStatus.INACTIVE)

    class Meta:
        table = "ticket_order"

    def __str__(self):
        return f"[{self.id}] order of user {self.user_id} for slot {self.slot_id} ({self.status.value})"
