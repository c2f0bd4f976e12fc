"""
Ride
----

The local ride catalog. Queue positions and wait times are not stored here;
they belong to the remote queue service.
"""

from tortoise import Model, fields


class Ride(Model):
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=64)
    riding_time = fields.IntField()
    is_active = fields.BooleanField(default=True)
    capacity_total = fields.IntField()
    capacity_premium = fields.IntField()
    capacity_general = fields.IntField()
    short_description = fields.CharField(max_length=128, null=True)
    long_description = fields.CharField(max_length=1024, null=True)
    photo = fields.CharField(max_length=300, null=True)
    operating_time = fields.CharField(max_length=20, null=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    def serialize(self, wait_times=None):
        return {
            "id": self.id,
            "name": self.name,
            "riding_time": self.riding_time,
            "is_active": self.is_active,
            "capacity_total": self.capacity_total,
            "capacity_premium": self.capacity_premium,
            "capacity_general": self.capacity_general,
            "short_description": self.short_description,
            "long_description": self.long_description,
            "photo": self.photo,
            "operating_time": self.operating_time,
            "wait_times": wait_times if wait_times is not None else [],
        }

    def __str__(self):
        return f"[{self.id}] {self.name}"
