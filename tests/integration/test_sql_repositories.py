"""
Adaptadores SQLAlchemy sobre SQLite (aiosqlite), en memoria y en disco.

Cubre el mapeo de filas, el update condicional por lock_version y un
flujo completo de use cases sobre los repositorios SQL, incluido el
commit antes de notificar.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tourbook.api.dependencies import Adapters, build_use_cases
from tourbook.api.schemas.bookings import CreateTourBookingRequest
from tourbook.application.interfaces.booking_repo import BookingFilter
from tourbook.application.interfaces.clock import FakeClock
from tourbook.application.interfaces.id_generator import FakeIdGenerator
from tourbook.application.interfaces.notification_gateway import NotificationGateway
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip, RequestDetails, StaffAssignment, TotalBudget
from tourbook.domain.entities.notification import Notification, NotificationStatus
from tourbook.domain.errors import ConcurrentModificationError
from tourbook.infrastructure.db.repositories import (
    BookingRepoSQL,
    CustomTripRepoSQL,
    NotificationOutboxRepoSQL,
    TourRepoSQL,
    UserRepoSQL,
)
from tourbook.infrastructure.db.tables import bookings, metadata, tours, users
from tourbook.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from tourbook.infrastructure.gateways import PdfInvoiceRenderer
from tourbook.infrastructure.in_memory import RecordingMessagingGateway, RecordingNotificationGateway

NOW = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


async def _seed_catalog(session: AsyncSession) -> None:
    await session.execute(
        insert(users),
        [
            {"id": "user-tourist", "first_name": "Ana", "last_name": "Silva", "email": "ana@example.com", "role": "tourist"},
            {"id": "user-guide", "first_name": "Kamal", "last_name": "Perera", "email": "kamal@example.com", "role": "guide"},
        ],
    )
    await session.execute(
        insert(tours).values(
            id="tour-1",
            title="Kandy Cultural Tour",
            description="Temple of the Tooth",
            price=Decimal("100.00"),
            duration=3,
            location_name="Kandy",
            guide_id="user-guide",
            images=["kandy.jpg"],
            itinerary=["Temple", "Gardens"],
        )
    )
    await session.commit()


def _sql_adapters(session: AsyncSession, notification_gateway: NotificationGateway) -> Adapters:
    return Adapters(
        booking_repo=BookingRepoSQL(session),
        custom_trip_repo=CustomTripRepoSQL(session),
        tour_repo=TourRepoSQL(session),
        user_repo=UserRepoSQL(session),
        outbox_repo=NotificationOutboxRepoSQL(session),
        notification_gateway=notification_gateway,
        messaging_gateway=RecordingMessagingGateway(),
        renderer=PdfInvoiceRenderer(),
        clock=FakeClock(NOW),
        id_generator=FakeIdGenerator("sql"),
        tx_manager=SQLAlchemyTransactionManager(session),
    )


def _tour_request() -> CreateTourBookingRequest:
    return CreateTourBookingRequest(
        tour_id="tour-1",
        start_date=NOW + timedelta(days=10),
        end_date=NOW + timedelta(days=12),
        group_size=3,
    )


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await _seed_catalog(session)
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """SQLite en disco: cada sesión usa su propia conexión y solo ve lo confirmado."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


class BookingStatusSnapshotGateway(NotificationGateway):
    """Al entregar, lee el estado del booking desde otra conexión."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory
        self.seen: list[str | None] = []

    async def send(self, payload: dict[str, Any]) -> None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(bookings.c.status).where(bookings.c.id == payload["relatedBookingId"])
            )
            self.seen.append(result.scalar_one_or_none())


def _booking(**overrides) -> Booking:
    values = {
        "id": "bk-001",
        "booking_reference": "1736935200000-ABCDEFGHI",
        "user_id": "user-tourist",
        "guide_id": "user-guide",
        "booking_kind": "guide",
        "start_date": NOW + timedelta(days=3),
        "end_date": NOW + timedelta(days=4),
        "duration": "full-day",
        "group_size": 3,
        "total_amount": Decimal("150.00"),
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Booking(**values)


@pytest.mark.asyncio
class TestBookingRepoSQL:
    async def test_round_trip_keeps_duration_types(self, db_session):
        repo = BookingRepoSQL(db_session)

        guide_booking = await repo.create(_booking())
        tour_booking = await repo.create(
            _booking(id="bk-002", tour_id="tour-1", booking_kind="tour", duration=3)
        )

        assert guide_booking.duration == "full-day"
        assert tour_booking.duration == 3
        assert guide_booking.total_amount == Decimal("150.00")
        assert guide_booking.start_date == NOW + timedelta(days=3)
        assert guide_booking.start_date.tzinfo is not None

    async def test_conditional_update(self, db_session):
        repo = BookingRepoSQL(db_session)
        await repo.create(_booking())

        first = await repo.get_by_id("bk-001")
        second = await repo.get_by_id("bk-001")

        first.cancel("first")
        await repo.update(first)
        second.cancel("second")
        with pytest.raises(ConcurrentModificationError):
            await repo.update(second)

        stored = await repo.get_by_id("bk-001")
        assert stored.lock_version == 1
        assert stored.cancellation_reason == "first"
        assert stored.refund_amount == Decimal("150.00")

    async def test_find_sorted_and_paginated(self, db_session):
        repo = BookingRepoSQL(db_session)
        for n in range(1, 5):
            await repo.create(_booking(id=f"bk-{n:03d}", created_at=NOW - timedelta(hours=n)))
        await repo.create(_booking(id="bk-900", user_id="someone-else", guide_id="other"))

        filters = BookingFilter(guide_id="user-guide")
        page = await repo.find(filters, skip=1, limit=2)

        assert [b.id for b in page] == ["bk-002", "bk-003"]
        assert await repo.count(filters) == 4


@pytest.mark.asyncio
class TestCustomTripRepoSQL:
    async def test_nested_sections_round_trip(self, db_session):
        repo = CustomTripRepoSQL(db_session)
        trip = CustomTrip(
            id="ct-001",
            customer_id="user-tourist",
            request_details=RequestDetails(
                destination="Ella",
                start_date=NOW + timedelta(days=20),
                end_date=NOW + timedelta(days=25),
                group_size=4,
                budget=Decimal("1500.00"),
                interests=["hiking"],
            ),
            staff_assignment=StaffAssignment(
                assigned_guide_id="user-guide",
                total_budget=TotalBudget(total_amount=Decimal("1600.00")),
            ),
            created_at=NOW,
            updated_at=NOW,
        )

        await repo.create(trip)
        loaded = await repo.get_by_id("ct-001")

        assert loaded.request_details.destination == "Ella"
        assert loaded.request_details.start_date == NOW + timedelta(days=20)
        assert loaded.request_details.budget == Decimal("1500.00")
        assert loaded.total_amount == Decimal("1600.00")
        assert loaded.staff_assignment.assigned_guide_id == "user-guide"

        loaded.cancel()
        await repo.update(loaded)
        assert (await repo.find_by_customer("user-tourist", status="cancelled"))[0].id == "ct-001"


@pytest.mark.asyncio
class TestNotificationOutboxRepoSQL:
    async def test_due_entries(self, db_session):
        repo = NotificationOutboxRepoSQL(db_session)
        fresh = await repo.add(Notification(recipient_id="user-guide", type="booking", title="t", message="m", created_at=NOW))
        later = await repo.add(Notification(recipient_id="user-guide", type="booking", title="t", message="m", created_at=NOW))
        later.mark_retry(NOW, "refused")
        await repo.save(later)

        due_now = await repo.list_due(NOW)
        due_later = await repo.list_due(NOW + timedelta(minutes=1))

        assert [n.id for n in due_now] == [fresh.id]
        assert [n.id for n in due_later] == [fresh.id, later.id]
        assert due_later[1].status == NotificationStatus.RETRY
        assert due_later[1].attempts == 1


@pytest.mark.asyncio
class TestUseCasesOverSQL:
    async def test_create_list_and_cancel(self, db_session, settings):
        adapters = _sql_adapters(db_session, RecordingNotificationGateway())
        use_cases = build_use_cases(adapters, settings)
        tourist = await adapters.user_repo.get_by_id("user-tourist")

        created = await use_cases["create_tour_booking"].execute(request=_tour_request(), actor=tourist)
        listed = await use_cases["list_user_trips"].execute(owner_id=tourist.id)
        cancelled = await use_cases["cancel_trip"].execute(record_id=created.data.id, actor=tourist)

        assert created.data.total_amount == Decimal("300.00")
        assert [item.id for item in listed.data.items] == [created.data.id]
        assert cancelled.data.status == "cancelled"
        outbox = await adapters.outbox_repo.list_for_booking(created.data.id)
        assert [n.type for n in outbox] == ["booking", "cancellation"]
        assert all(n.status == NotificationStatus.DONE for n in outbox)

    async def test_notifications_go_out_after_commit(self, file_engine, settings):
        session_factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
        gateway = BookingStatusSnapshotGateway(session_factory)

        async with session_factory() as session:
            await _seed_catalog(session)
            adapters = _sql_adapters(session, gateway)
            use_cases = build_use_cases(adapters, settings)
            # La lectura del actor abre la transacción antes del caso de uso
            tourist = await adapters.user_repo.get_by_id("user-tourist")

            created = await use_cases["create_tour_booking"].execute(request=_tour_request(), actor=tourist)
            await use_cases["cancel_trip"].execute(record_id=created.data.id, actor=tourist)

        assert gateway.seen == ["pending", "cancelled"]

    async def test_failed_write_is_rolled_back(self, file_engine, settings):
        session_factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)

        async with session_factory() as session:
            await _seed_catalog(session)
            repo = BookingRepoSQL(session)
            tx_manager = SQLAlchemyTransactionManager(session)
            async with tx_manager.start():
                await repo.create(_booking())

            stale = await repo.get_by_id("bk-001")
            stale.lock_version = 7
            stale.cancel("late")
            with pytest.raises(ConcurrentModificationError):
                async with tx_manager.start():
                    await repo.update(stale)

        async with session_factory() as reader:
            stored = await BookingRepoSQL(reader).get_by_id("bk-001")
        assert stored.status == "pending"
        assert stored.lock_version == 0
