from datetime import timedelta
from itertools import count

import pytest
from aiohttp.test_utils import TestClient
from faker import Faker
from faker.providers import internet, lorem, person
from tortoise import Tortoise, timezone

from fakequeue.queue import QueueState
from fakequeue.server import build_app as build_queue_app
from ridegate.app import build_app
from ridegate.middleware import ACCESS_COOKIE
from ridegate.models import User, Ride, Ticket, TicketSlot, TicketOrder
from ridegate.models.util import TicketCategory, ActiveStatus, UserType
from ridegate.service.access.users import create_user
from ridegate.service.entitlements import EntitlementResolver
from ridegate.service.manager.queue_orchestrator import QueueOrchestrator
from ridegate.service.manager.reservation_manager import ReservationManager
from ridegate.service.queue_gateway import HTTPQueueGateway
from ridegate.service.tokens import TokenService

fake = Faker()
fake.add_provider(internet)
fake.add_provider(lorem)
fake.add_provider(person)

PASSWORD = "correct horse battery staple"


@pytest.fixture
async def database():
    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={'models': ['ridegate.models']},
    )
    await Tortoise.generate_schemas(safe=True)
    yield
    await Tortoise.close_connections()


@pytest.fixture
def random_user_factory(database):
    user_id = count(1)

    async def create(user_type=UserType.USER, password=PASSWORD) -> User:
        return await create_user(f"{fake.user_name()}{next(user_id)}", password, user_type)

    return create


@pytest.fixture
async def random_user(random_user_factory) -> User:
    """Creates a random user in the database."""
    return await random_user_factory()


@pytest.fixture
async def random_operator(random_user_factory) -> User:
    return await random_user_factory(UserType.OPERATOR)


@pytest.fixture
def random_ride_factory(database):
    async def create() -> Ride:
        return await Ride.create(
            name=fake.first_name() + " Coaster",
            riding_time=5,
            capacity_total=40,
            capacity_premium=10,
            capacity_general=30,
            short_description=fake.sentence(),
        )

    return create


@pytest.fixture
async def random_ride(random_ride_factory) -> Ride:
    return await random_ride_factory()


@pytest.fixture
def ticket_order_factory(database):
    async def create(
        user: User, category=TicketCategory.GENERAL, status=ActiveStatus.ACTIVE, available_at=None
    ) -> TicketOrder:
        ticket = await Ticket.create(ticket_type=category, price=30000 if category is TicketCategory.PREMIUM else 15000)
        slot = await TicketSlot.create(
            ticket=ticket,
            available_at=available_at if available_at is not None else timezone.now(),
            stock=100,
        )
        return await TicketOrder.create(user=user, slot=slot, status=status)

    return create


@pytest.fixture
async def todays_ticket(ticket_order_factory, random_user) -> TicketOrder:
    """An active general ticket for today, belonging to the random user."""
    return await ticket_order_factory(random_user)


@pytest.fixture
def queue_state() -> QueueState:
    return QueueState()


@pytest.fixture
async def queue_server(aiohttp_server, queue_state):
    return await aiohttp_server(build_queue_app(queue_state))


@pytest.fixture
async def queue_gateway(queue_server) -> HTTPQueueGateway:
    gateway = HTTPQueueGateway(str(queue_server.make_url("")), timedelta(seconds=2))
    await gateway.start()
    yield gateway
    await gateway.close()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService("test-secret", "ridegate")


@pytest.fixture
def entitlement_resolver() -> EntitlementResolver:
    return EntitlementResolver("UTC")


@pytest.fixture
def reservation_manager(database) -> ReservationManager:
    return ReservationManager()


@pytest.fixture
def queue_orchestrator(entitlement_resolver, reservation_manager, queue_gateway) -> QueueOrchestrator:
    return QueueOrchestrator(entitlement_resolver, reservation_manager, queue_gateway)


@pytest.fixture
async def client(aiohttp_client, database, queue_gateway) -> TestClient:
    app = build_app(queue_gateway=queue_gateway, init_database=False)  # we get the database from a fixture
    return await aiohttp_client(app)


@pytest.fixture
def session_for(client):
    """Makes the cookies of a logged in session for the given user."""

    def cookies(user: User):
        return {ACCESS_COOKIE: client.app["token_service"].issue_access(user)}

    return cookies
