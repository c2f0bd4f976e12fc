"""
User
---------------------------
"""

from tortoise import Model, fields

from ridegate.models.fields import EnumField
from ridegate.models.util import UserType


class User(Model):
    """
    Represents a User in the system.

    Only the password hash may change once the user is created.
    """

    id = fields.IntField(pk=True)
    username = fields.CharField(max_length=64, unique=True)
    password_hash = fields.CharField(max_length=255)
    type: UserType = EnumField(UserType, default=UserType.USER)
    created_at = fields.DatetimeField(auto_now_add=True)

    @property
    def is_operator(self) -> bool:
        return self.type is UserType.OPERATOR

    def serialize(self):
        return {
            "id": self.id,
            "username": self.username,
            "type": self.type,
        }

    def __str__(self):
        return f"[{self.id}] {self.username}"
