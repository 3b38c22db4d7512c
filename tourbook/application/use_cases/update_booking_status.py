import logging

from tourbook.api.schemas.bookings import ApiResponse, BookingView, UpdateBookingStatusRequest
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.constants import BOOKING_STATUSES, STATUS_UPDATE_ROLES
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthorizationError, BookingNotFoundError, InvalidStatusError


class UpdateBookingStatusUseCase:
    """
    Cambio directo de estado de un booking genérico.

    Solo se valida la pertenencia al vocabulario de estados; no hay grafo
    de transiciones (pending -> completed es válido).
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        clock: Clock,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._clock = clock
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        record_id: str,
        request: UpdateBookingStatusRequest,
        actor: User,
    ) -> ApiResponse[BookingView]:
        if request.status not in BOOKING_STATUSES:
            raise InvalidStatusError(request.status, BOOKING_STATUSES)

        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(record_id)
            if not booking:
                raise BookingNotFoundError(record_id)
            if not booking.is_owned_by(actor.id) and not actor.has_role(*STATUS_UPDATE_ROLES):
                raise AuthorizationError()

            previous_status = booking.status
            booking.change_status(request.status, request.notes)
            booking.updated_at = self._clock.now()
            await self._booking_repo.update(booking)

        self._logger.info(
            "Booking status updated",
            extra={
                "booking_id": booking.id,
                "from_status": previous_status,
                "to_status": booking.status,
                "updated_by": actor.id,
            },
        )
        await self._relation_loader.populate_bookings([booking])
        return ApiResponse(
            message="Booking status updated successfully",
            data=self._projector.booking_view(booking),
        )
