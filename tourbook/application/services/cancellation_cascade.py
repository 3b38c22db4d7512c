import logging
from datetime import datetime

from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.domain.constants import BOOKING_STATUS_CANCELLED
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip
from tourbook.domain.errors import TransitionError

logger = logging.getLogger(__name__)


class CancellationCascade:
    """
    Única rutina de cancelación para bookings y custom trips.

    La cascada va solo de CustomTrip a su booking sombra. Cancelar un
    booking no busca ni toca el custom trip que pudiera referenciarlo.
    """

    def __init__(self, booking_repo: BookingRepo, custom_trip_repo: CustomTripRepo) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo

    async def cancel_booking(
        self, booking: Booking, reason: str | None, now: datetime | None = None
    ) -> Booking:
        if not booking.can_be_cancelled:
            raise TransitionError(
                message="Booking cannot be cancelled in current status",
                current_status=booking.status,
                operation="cancel",
            )
        booking.cancel(reason)
        booking.updated_at = now or booking.updated_at
        await self._booking_repo.update(booking)
        logger.info(
            "Booking cancelled",
            extra={"booking_id": booking.id, "refund_amount": str(booking.refund_amount)},
        )
        return booking

    async def cancel_custom_trip(
        self, trip: CustomTrip, reason: str | None, now: datetime | None = None
    ) -> Booking | None:
        """Cancela el viaje y su booking sombra; retorna el booking sombra si se canceló."""
        if not trip.can_be_cancelled:
            raise TransitionError(
                message="Custom trip cannot be cancelled in current status",
                current_status=trip.status,
                operation="cancel",
            )
        trip.cancel()
        trip.updated_at = now or trip.updated_at
        await self._custom_trip_repo.update(trip)
        logger.info("Custom trip cancelled", extra={"custom_trip_id": trip.id})

        if not trip.booking_id:
            return None
        linked = await self._booking_repo.get_by_id(trip.booking_id)
        if linked is None:
            logger.warning(
                "Linked booking not found for cancelled custom trip",
                extra={"custom_trip_id": trip.id, "booking_id": trip.booking_id},
            )
            return None
        if linked.status == BOOKING_STATUS_CANCELLED:
            return None
        linked.cancel(reason)
        linked.updated_at = now or linked.updated_at
        await self._booking_repo.update(linked)
        logger.info(
            "Linked booking cancelled by custom trip cascade",
            extra={"custom_trip_id": trip.id, "booking_id": linked.id},
        )
        return linked
