from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.application.interfaces.booking_repo import BookingFilter, BookingRepo
from tourbook.domain.entities.booking import Booking
from tourbook.domain.errors import ConcurrentModificationError
from tourbook.infrastructure.db.datetimes import as_utc
from tourbook.infrastructure.db.tables import bookings


def _duration_to_db(value: int | str | None) -> str | None:
    return None if value is None else str(value)


def _duration_from_db(value: str | None) -> int | str | None:
    # Los tours guardan días; los servicios de guía, un valor de GUIDE_DURATIONS
    if value is not None and value.isdigit():
        return int(value)
    return value


def _to_row(booking: Booking) -> dict[str, Any]:
    return {
        "id": booking.id,
        "booking_reference": booking.booking_reference,
        "user_id": booking.user_id,
        "tour_id": booking.tour_id,
        "guide_id": booking.guide_id,
        "custom_trip_id": booking.custom_trip_id,
        "booking_kind": booking.booking_kind,
        "booking_date": booking.booking_date,
        "start_date": booking.start_date,
        "end_date": booking.end_date,
        "duration": _duration_to_db(booking.duration),
        "group_size": booking.group_size,
        "total_amount": booking.total_amount,
        "amount_paid": booking.amount_paid,
        "payment_date": booking.payment_date,
        "refund_amount": booking.refund_amount,
        "status": booking.status,
        "payment_status": booking.payment_status,
        "special_requests": booking.special_requests,
        "notes": booking.notes,
        "cancellation_reason": booking.cancellation_reason,
        "created_at": booking.created_at,
        "updated_at": booking.updated_at,
    }


def _from_row(row: Any) -> Booking:
    return Booking(
        id=row["id"],
        booking_reference=row["booking_reference"],
        user_id=row["user_id"],
        tour_id=row["tour_id"],
        guide_id=row["guide_id"],
        custom_trip_id=row["custom_trip_id"],
        booking_kind=row["booking_kind"],
        booking_date=as_utc(row["booking_date"]),
        start_date=as_utc(row["start_date"]),
        end_date=as_utc(row["end_date"]),
        duration=_duration_from_db(row["duration"]),
        group_size=row["group_size"],
        total_amount=row["total_amount"],
        amount_paid=row["amount_paid"],
        payment_date=as_utc(row["payment_date"]),
        refund_amount=row["refund_amount"],
        status=row["status"],
        payment_status=row["payment_status"],
        special_requests=row["special_requests"],
        notes=row["notes"],
        cancellation_reason=row["cancellation_reason"],
        lock_version=row["lock_version"],
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )


def _where(filters: BookingFilter) -> list:
    clauses = []
    if filters.user_id is not None:
        clauses.append(bookings.c.user_id == filters.user_id)
    if filters.guide_id is not None:
        clauses.append(bookings.c.guide_id == filters.guide_id)
    if filters.status:
        clauses.append(bookings.c.status == filters.status)
    return clauses


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, booking_id: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _from_row(row) if row else None

    async def find(
        self,
        filters: BookingFilter,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        stmt = (
            select(bookings)
            .where(*_where(filters))
            .order_by(bookings.c.created_at.desc(), bookings.c.id)
            .offset(skip)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [_from_row(row) for row in result.mappings().all()]

    async def count(self, filters: BookingFilter) -> int:
        stmt = select(func.count()).select_from(bookings).where(*_where(filters))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, booking: Booking) -> Booking:
        values = _to_row(booking)
        values["lock_version"] = booking.lock_version
        await self._session.execute(insert(bookings).values(values))
        return await self.get_by_id(booking.id)

    async def update(self, booking: Booking) -> None:
        values = _to_row(booking)
        values.pop("id")
        values["lock_version"] = booking.lock_version + 1
        stmt = (
            update(bookings)
            .where(
                bookings.c.id == booking.id,
                bookings.c.lock_version == booking.lock_version,
            )
            .values(values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError(booking.id, booking.lock_version)
        booking.lock_version += 1
