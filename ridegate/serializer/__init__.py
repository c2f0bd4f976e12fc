"""
.. autoclasstree:: ridegate.serializer

The serializer package houses all the schemas for the input/output in the system.
The serializers are used to generate and validate any raw data (such as JSON)
going in and out of the system, including the responses of the remote queue server.
"""

from .fields import EnumField
from .jsend import JSendSchema, JSendStatus
from .decorators import expects, returns
