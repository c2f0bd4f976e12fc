"""
Model Serializers
-----------------

Defines serializers for the various models in the system, and for the
request bodies of the queue routes. Wire names are camelCase.
"""

from marshmallow import Schema, EXCLUDE, validate
from marshmallow.fields import Integer, String, DateTime, Nested, Boolean, List

from ridegate.models.util import TicketCategory, RideUsageStatus, UserType
from .fields import EnumField


class UserSchema(Schema):
    """The schema corresponding to the :class:`~ridegate.models.user.User` model."""

    id = Integer(dump_only=True)
    username = String(required=True)
    type = EnumField(UserType, dump_only=True)


class CredentialsSchema(Schema):
    username = String(required=True, validate=validate.Length(min=1, max=64))
    password = String(required=True, load_only=True, validate=validate.Length(min=1))


class SignupSchema(CredentialsSchema):
    password = String(required=True, load_only=True, validate=validate.Length(min=8))


class EnqueueRequestSchema(Schema):
    user_id = Integer(required=True, data_key="userId")
    ride_id = Integer(required=True, data_key="rideId")
    ticket_type = EnumField(TicketCategory, required=True, data_key="ticketType")


class UserRideSchema(Schema):
    """Identifies one user's place on one ride, for completing or cancelling it."""

    user_id = Integer(required=True, data_key="userId")
    ride_id = Integer(required=True, data_key="rideId")


class EnqueueResultSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    position = Integer(required=True)
    estimated_wait_minutes = Integer(required=True, data_key="estimatedWaitMinutes")


class QueueStatusItemSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    ride_id = Integer(required=True, data_key="rideId")
    ride_name = String(allow_none=True, data_key="rideName")
    ticket_type = EnumField(TicketCategory, required=True, data_key="ticketType")
    position = Integer(required=True)
    estimated_wait_minutes = Integer(required=True, data_key="estimatedWaitMinutes")


class QueueStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    items = List(Nested(QueueStatusItemSchema()), required=True)


class WaitTimeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    ticket_type = EnumField(TicketCategory, required=True, data_key="ticketType")
    estimated_wait_minutes = Integer(required=True, data_key="estimatedWaitMinutes")
    waiting = Integer()


class RideInfoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    ride_id = Integer(required=True, data_key="rideId")
    wait_times = List(Nested(WaitTimeSchema()), required=True, data_key="waitTimes")


class RidesInfoSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    rides = List(Nested(RideInfoSchema()), required=True)


class RideSchema(Schema):
    """The schema corresponding to the :class:`~ridegate.models.ride.Ride` model."""

    id = Integer(required=True)
    name = String(required=True)
    riding_time = Integer(data_key="ridingTime")
    is_active = Boolean(data_key="isActive")
    capacity_total = Integer(data_key="capacityTotal")
    capacity_premium = Integer(data_key="capacityPremium")
    capacity_general = Integer(data_key="capacityGeneral")
    short_description = String(allow_none=True, data_key="shortDescription")
    long_description = String(allow_none=True, data_key="longDescription")
    photo = String(allow_none=True)
    operating_time = String(allow_none=True, data_key="operatingTime")
    wait_times = List(Nested(WaitTimeSchema()), data_key="waitTimes")


class RideUsageSchema(Schema):
    """The schema corresponding to the :class:`~ridegate.models.ride_usage.RideUsage` model."""

    id = Integer(required=True)
    user_id = Integer(required=True, data_key="userId")
    ride_id = Integer(required=True, data_key="rideId")
    ticket_order_id = Integer(required=True, data_key="ticketOrderId")
    status = EnumField(RideUsageStatus, required=True)
    arrived_at = DateTime(data_key="arrivedAt")
    completed_at = DateTime(data_key="completedAt")
    created_at = DateTime(data_key="createdAt")
