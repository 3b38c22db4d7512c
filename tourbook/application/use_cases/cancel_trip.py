import logging

from tourbook.api.schemas.bookings import ApiResponse, BookingView
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.booking_notifier import BookingNotifier
from tourbook.application.services.cancellation_cascade import CancellationCascade
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthorizationError, BookingNotFoundError


class CancelTripUseCase:
    """
    Cancela un booking genérico o un custom trip a partir de un solo id.

    Booking: lo puede cancelar el turista dueño o el guía asignado.
    Custom trip: solo el cliente dueño; arrastra a su booking sombra.
    Las notificaciones salen después de confirmar la escritura.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        cascade: CancellationCascade,
        relation_loader: RelationLoader,
        projector: TripProjector,
        notifier: BookingNotifier,
        clock: Clock,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._cascade = cascade
        self._relation_loader = relation_loader
        self._projector = projector
        self._notifier = notifier
        self._clock = clock
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, record_id: str, actor: User, reason: str | None = None) -> ApiResponse[BookingView]:
        booking = await self._booking_repo.get_by_id(record_id)
        if booking:
            if not booking.is_owned_by(actor.id) and not booking.is_guided_by(actor.id):
                raise AuthorizationError()
            async with self._transaction_manager.start():
                booking = await self._cascade.cancel_booking(booking, reason, self._clock.now())

            self._logger.info(
                "Booking cancellation completed",
                extra={"booking_id": booking.id, "cancelled_by": actor.id},
            )
            await self._notifier.booking_cancelled(booking, actor)
            await self._relation_loader.populate_bookings([booking])
            return ApiResponse(
                message="Booking cancelled successfully",
                data=self._projector.booking_view(booking),
            )

        trip = await self._custom_trip_repo.get_by_id(record_id)
        if trip:
            if not trip.is_owned_by(actor.id):
                raise AuthorizationError()
            async with self._transaction_manager.start():
                linked = await self._cascade.cancel_custom_trip(trip, reason, self._clock.now())

            self._logger.info(
                "Custom trip cancellation completed",
                extra={
                    "custom_trip_id": trip.id,
                    "linked_booking_id": linked.id if linked else None,
                    "cancelled_by": actor.id,
                },
            )
            await self._notifier.custom_trip_cancelled(trip, actor, reason, linked)
            await self._relation_loader.populate_custom_trips([trip])
            return ApiResponse(
                message="Custom trip cancelled successfully",
                data=self._projector.custom_trip_view(trip),
            )

        raise BookingNotFoundError(record_id)
