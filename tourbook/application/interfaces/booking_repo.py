from dataclasses import dataclass

from tourbook.domain.entities.booking import Booking


@dataclass
class BookingFilter:
    user_id: str | None = None
    guide_id: str | None = None
    status: str | None = None


class BookingRepo:
    async def get_by_id(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def find(
        self,
        filters: BookingFilter,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        """Bookings que cumplen el filtro, ordenados por created_at descendente."""
        raise NotImplementedError

    async def count(self, filters: BookingFilter) -> int:
        raise NotImplementedError

    async def create(self, booking: Booking) -> Booking:
        raise NotImplementedError

    async def update(self, booking: Booking) -> None:
        """
        Escritura condicional sobre ``booking.lock_version``.

        Raises:
            ConcurrentModificationError: si la versión guardada ya no coincide.
        """
        raise NotImplementedError
