"""
The models package contains all the models used on the server.

.. autoclasstree:: ridegate.models
"""

from .credential import RefreshCredential
from .ride import Ride
from .ride_usage import RideUsage
from .ticket import Ticket, TicketSlot, TicketOrder
from .user import User
