"""
.. autoclasstree:: ridegate.service

The service layer for the system. Acts as the internal API.
Each interface should use the service layer to implement
its logic.

The service layer implements the use cases for the system, such
that they may be reused by any program that needs to access it.
It is designed to represent the business logic.
"""

from .entitlements import EntitlementResolver
from .manager.queue_orchestrator import QueueOrchestrator
from .manager.reservation_manager import ReservationManager
from .queue_gateway import QueueGateway, HTTPQueueGateway, EnqueueResult
from .tokens import TokenService, TokenPair
