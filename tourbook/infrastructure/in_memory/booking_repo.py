import copy
from datetime import datetime, timezone

from tourbook.application.interfaces.booking_repo import BookingFilter, BookingRepo
from tourbook.domain.entities.booking import Booking
from tourbook.domain.errors import ConcurrentModificationError

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _matches(booking: Booking, filters: BookingFilter) -> bool:
    if filters.user_id is not None and booking.user_id != filters.user_id:
        return False
    if filters.guide_id is not None and booking.guide_id != filters.guide_id:
        return False
    if filters.status and booking.status != filters.status:
        return False
    return True


def _detached(booking: Booking) -> Booking:
    stored = copy.deepcopy(booking)
    stored.tour = None
    stored.guide = None
    stored.user = None
    return stored


class InMemoryBookingRepo(BookingRepo):
    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}

    async def get_by_id(self, booking_id: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return copy.deepcopy(booking) if booking else None

    async def find(
        self,
        filters: BookingFilter,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        matched = [b for b in self.bookings.values() if _matches(b, filters)]
        matched.sort(key=lambda b: b.created_at or _OLDEST, reverse=True)
        end = None if limit is None else skip + limit
        return [copy.deepcopy(b) for b in matched[skip:end]]

    async def count(self, filters: BookingFilter) -> int:
        return sum(1 for b in self.bookings.values() if _matches(b, filters))

    async def create(self, booking: Booking) -> Booking:
        if booking.id in self.bookings:
            raise ValueError("Booking id already exists")
        self.bookings[booking.id] = _detached(booking)
        return copy.deepcopy(self.bookings[booking.id])

    async def update(self, booking: Booking) -> None:
        stored = self.bookings.get(booking.id)
        if stored is None or stored.lock_version != booking.lock_version:
            raise ConcurrentModificationError(booking.id, booking.lock_version)
        booking.lock_version += 1
        self.bookings[booking.id] = _detached(booking)
