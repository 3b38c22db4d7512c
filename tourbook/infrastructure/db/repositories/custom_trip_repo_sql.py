from typing import Any

from pydantic import TypeAdapter
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.domain.entities.custom_trip import (
    ApprovalDetails,
    CustomTrip,
    RequestDetails,
    StaffAssignment,
)
from tourbook.domain.errors import ConcurrentModificationError
from tourbook.infrastructure.db.datetimes import as_utc
from tourbook.infrastructure.db.tables import custom_trips

# Las secciones anidadas se guardan como JSON
_request_details = TypeAdapter(RequestDetails)
_staff_assignment = TypeAdapter(StaffAssignment)
_approval_details = TypeAdapter(ApprovalDetails)


def _to_row(trip: CustomTrip) -> dict[str, Any]:
    return {
        "id": trip.id,
        "customer_id": trip.customer_id,
        "request_details": _request_details.dump_python(trip.request_details, mode="json"),
        "staff_assignment": _staff_assignment.dump_python(trip.staff_assignment, mode="json"),
        "approval_details": _approval_details.dump_python(trip.approval_details, mode="json"),
        "status": trip.status,
        "payment_status": trip.payment_status,
        "booking_id": trip.booking_id,
        "created_at": trip.created_at,
        "updated_at": trip.updated_at,
    }


def _from_row(row: Any) -> CustomTrip:
    return CustomTrip(
        id=row["id"],
        customer_id=row["customer_id"],
        request_details=_request_details.validate_python(row["request_details"] or {}),
        staff_assignment=_staff_assignment.validate_python(row["staff_assignment"] or {}),
        approval_details=_approval_details.validate_python(row["approval_details"] or {}),
        status=row["status"],
        payment_status=row["payment_status"],
        booking_id=row["booking_id"],
        lock_version=row["lock_version"],
        created_at=as_utc(row["created_at"]),
        updated_at=as_utc(row["updated_at"]),
    )


class CustomTripRepoSQL(CustomTripRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, trip_id: str) -> CustomTrip | None:
        stmt = select(custom_trips).where(custom_trips.c.id == trip_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _from_row(row) if row else None

    async def find_by_customer(
        self,
        customer_id: str,
        status: str | None = None,
    ) -> list[CustomTrip]:
        stmt = select(custom_trips).where(custom_trips.c.customer_id == customer_id)
        if status:
            stmt = stmt.where(custom_trips.c.status == status)
        stmt = stmt.order_by(custom_trips.c.created_at.desc(), custom_trips.c.id)
        result = await self._session.execute(stmt)
        return [_from_row(row) for row in result.mappings().all()]

    async def create(self, trip: CustomTrip) -> CustomTrip:
        values = _to_row(trip)
        values["lock_version"] = trip.lock_version
        await self._session.execute(insert(custom_trips).values(values))
        return await self.get_by_id(trip.id)

    async def update(self, trip: CustomTrip) -> None:
        values = _to_row(trip)
        values.pop("id")
        values["lock_version"] = trip.lock_version + 1
        stmt = (
            update(custom_trips)
            .where(
                custom_trips.c.id == trip.id,
                custom_trips.c.lock_version == trip.lock_version,
            )
            .values(values)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationError(trip.id, trip.lock_version)
        trip.lock_version += 1
