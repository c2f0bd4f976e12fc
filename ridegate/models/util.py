from enum import Enum


class TicketCategory(str, Enum):
    """
    The category of a ticket product.

    This is also the ``ticketType`` contract shared with the remote queue service,
    so anything outside these values is rejected before it leaves the process.
    """
    GENERAL = "GENERAL"
    PREMIUM = "PREMIUM"


class ActiveStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RideUsageStatus(str, Enum):
    WAITED = "WAITED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"

    @staticmethod
    def claiming_statuses():
        """The statuses that use up a ticket for a ride."""
        return RideUsageStatus.WAITED, RideUsageStatus.COMPLETED


class UserType(str, Enum):
    USER = "user"
    OPERATOR = "operator"
