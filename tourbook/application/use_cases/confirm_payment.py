import logging
from decimal import Decimal

from tourbook.api.schemas.bookings import ApiResponse, BookingView
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthorizationError, BookingNotFoundError, TransitionError


class ConfirmPaymentUseCase:
    """
    Registra el pago de un booking una vez que el procesador lo confirmó.

    El booking pasa a paid/confirmed. Si es la sombra de un custom trip, el
    viaje también se marca confirmado/pagado; un fallo en ese paso se
    registra en el log y no revierte el pago del booking.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        clock: Clock,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._clock = clock
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        record_id: str,
        actor: User,
        amount_paid: Decimal | None = None,
    ) -> ApiResponse[BookingView]:
        now = self._clock.now()
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(record_id)
            if not booking:
                raise BookingNotFoundError(record_id)
            if not booking.is_owned_by(actor.id):
                raise AuthorizationError()
            if booking.is_terminal:
                raise TransitionError(
                    message="Payment cannot be confirmed in current status",
                    current_status=booking.status,
                    operation="confirm_payment",
                )
            booking.mark_as_paid(amount_paid if amount_paid is not None else booking.total_amount, now)
            booking.updated_at = now
            await self._booking_repo.update(booking)

        self._logger.info(
            "Booking payment confirmed",
            extra={"booking_id": booking.id, "amount_paid": str(booking.amount_paid)},
        )

        if booking.custom_trip_id:
            await self._confirm_custom_trip(booking.custom_trip_id, booking.id)

        await self._relation_loader.populate_bookings([booking])
        return ApiResponse(
            message="Payment confirmed successfully",
            data=self._projector.booking_view(booking),
        )

    async def _confirm_custom_trip(self, trip_id: str, booking_id: str) -> None:
        try:
            async with self._transaction_manager.start():
                trip = await self._custom_trip_repo.get_by_id(trip_id)
                if not trip:
                    self._logger.warning(
                        "Custom trip linked to paid booking not found",
                        extra={"custom_trip_id": trip_id, "booking_id": booking_id},
                    )
                    return
                trip.mark_as_paid()
                trip.updated_at = self._clock.now()
                await self._custom_trip_repo.update(trip)
        except Exception as exc:
            self._logger.error(
                "Error updating custom trip payment status",
                exc_info=exc,
                extra={"custom_trip_id": trip_id, "booking_id": booking_id},
            )
