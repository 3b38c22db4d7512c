"""
Fixtures compartidas.

- Adaptadores in-memory con reloj y generador de ids deterministas
- Usuarios y tours sembrados (turista, guía, staff)
- Fábricas de bookings y custom trips guardados directamente en el repo
- Cliente HTTP sobre la app FastAPI con los adaptadores inyectados
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tourbook.api.dependencies import Adapters, build_use_cases, get_adapters
from tourbook.application.interfaces.clock import FakeClock
from tourbook.application.interfaces.id_generator import FakeIdGenerator
from tourbook.config import Settings
from tourbook.domain.constants import ROLE_GUIDE, ROLE_STAFF, ROLE_TOURIST
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import (
    CustomTrip,
    RequestDetails,
    StaffAssignment,
    TotalBudget,
)
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User
from tourbook.infrastructure.gateways import PdfInvoiceRenderer
from tourbook.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryCustomTripRepo,
    InMemoryNotificationOutboxRepo,
    InMemoryTourRepo,
    InMemoryTransactionManager,
    InMemoryUserRepo,
    RecordingMessagingGateway,
    RecordingNotificationGateway,
)

NOW = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)

TOURIST_ID = "user-tourist"
OTHER_TOURIST_ID = "user-other"
GUIDE_ID = "user-guide"
STAFF_ID = "user-staff"
TOUR_ID = "tour-1"


@pytest.fixture
def tourist() -> User:
    return User(id=TOURIST_ID, first_name="Ana", last_name="Silva", email="ana@example.com", role=ROLE_TOURIST)


@pytest.fixture
def other_tourist() -> User:
    return User(id=OTHER_TOURIST_ID, first_name="Luis", last_name="Mora", email="luis@example.com", role=ROLE_TOURIST)


@pytest.fixture
def guide() -> User:
    return User(id=GUIDE_ID, first_name="Kamal", last_name="Perera", email="kamal@example.com", role=ROLE_GUIDE)


@pytest.fixture
def staff() -> User:
    return User(id=STAFF_ID, first_name="Nora", last_name="Diaz", email="nora@example.com", role=ROLE_STAFF)


@pytest.fixture
def tour() -> Tour:
    return Tour(
        id=TOUR_ID,
        title="Kandy Cultural Tour",
        description="Temple of the Tooth and botanical gardens",
        price=Decimal("100.00"),
        duration=3,
        location_name="Kandy",
        guide_id=GUIDE_ID,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, use_in_memory=True)


@pytest.fixture
def adapters(clock, tourist, other_tourist, guide, staff, tour) -> Adapters:
    return Adapters(
        booking_repo=InMemoryBookingRepo(),
        custom_trip_repo=InMemoryCustomTripRepo(),
        tour_repo=InMemoryTourRepo([tour]),
        user_repo=InMemoryUserRepo([tourist, other_tourist, guide, staff]),
        outbox_repo=InMemoryNotificationOutboxRepo(),
        notification_gateway=RecordingNotificationGateway(),
        messaging_gateway=RecordingMessagingGateway(),
        renderer=PdfInvoiceRenderer(),
        clock=clock,
        id_generator=FakeIdGenerator("rec"),
        tx_manager=InMemoryTransactionManager(),
    )


@pytest.fixture
def use_cases(adapters, settings) -> dict:
    return build_use_cases(adapters, settings)


@pytest.fixture
def booking_factory(adapters):
    """Guarda un Booking directamente en el repo in-memory."""
    counter = {"n": 0}

    async def _make(**overrides) -> Booking:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "id": f"bk-{n:03d}",
            "booking_reference": f"{1736935200000 + n}-ABCDEFGH{n % 10}",
            "user_id": TOURIST_ID,
            "tour_id": TOUR_ID,
            "guide_id": GUIDE_ID,
            "booking_kind": "tour",
            "start_date": NOW + timedelta(days=10),
            "end_date": NOW + timedelta(days=13),
            "duration": 3,
            "group_size": 2,
            "total_amount": Decimal("200.00"),
            "created_at": NOW - timedelta(hours=n),
            "updated_at": NOW - timedelta(hours=n),
        }
        values.update(overrides)
        return await adapters.booking_repo.create(Booking(**values))

    return _make


@pytest.fixture
def custom_trip_factory(adapters):
    """Guarda un CustomTrip directamente en el repo in-memory."""
    counter = {"n": 0}

    async def _make(**overrides) -> CustomTrip:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "id": f"ct-{n:03d}",
            "customer_id": TOURIST_ID,
            "request_details": RequestDetails(
                destination="Ella",
                start_date=NOW + timedelta(days=20),
                end_date=NOW + timedelta(days=25),
                group_size=4,
                budget=Decimal("1500.00"),
                interests=["hiking", "tea"],
            ),
            "staff_assignment": StaffAssignment(
                assigned_guide_id=GUIDE_ID,
                total_budget=TotalBudget(
                    guide_fees=Decimal("400.00"),
                    vehicle_costs=Decimal("300.00"),
                    hotel_costs=Decimal("900.00"),
                    total_amount=Decimal("1600.00"),
                ),
            ),
            "created_at": NOW - timedelta(minutes=30 * n),
            "updated_at": NOW - timedelta(minutes=30 * n),
        }
        values.update(overrides)
        return await adapters.custom_trip_repo.create(CustomTrip(**values))

    return _make


@pytest_asyncio.fixture
async def client(adapters, settings):
    from tourbook.config import get_settings
    from tourbook.main import app

    app.dependency_overrides[get_adapters] = lambda: adapters
    app.dependency_overrides[get_settings] = lambda: settings
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()