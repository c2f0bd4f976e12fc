from enum import Enum
from typing import TypeVar

from tortoise.exceptions import ConfigurationError
from tortoise.fields import CharField

T = TypeVar("T")


class EnumField(CharField):
    """Stores an :class:`~enum.Enum` member as its string value."""

    def __init__(self, enum_type: T, *args, **kwargs):
        super().__init__(32, *args, **kwargs)
        if not issubclass(enum_type, Enum):
            raise ConfigurationError(f"{enum_type} is not a subclass of Enum!")
        self._enum_type = enum_type

    def to_db_value(self, value: T, instance) -> str:
        if value is None:
            return None
        return self._enum_type(value).value

    def to_python_value(self, value: str) -> T:
        if value is None or isinstance(value, self._enum_type):
            return value
        try:
            return self._enum_type(value)
        except ValueError:
            raise ValueError(f"Database value {value} does not exist on Enum {self._enum_type}.")
