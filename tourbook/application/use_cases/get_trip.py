from tourbook.api.schemas.bookings import ApiResponse, BookingView
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthorizationError, BookingNotFoundError


class GetTripUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._relation_loader = relation_loader
        self._projector = projector

    async def execute(self, record_id: str, actor: User) -> ApiResponse[BookingView]:
        # Booking genérico primero; si no existe, custom trip
        booking = await self._booking_repo.get_by_id(record_id)
        if booking:
            if not booking.is_owned_by(actor.id):
                raise AuthorizationError()
            await self._relation_loader.populate_bookings([booking])
            return ApiResponse(data=self._projector.booking_view(booking))

        trip = await self._custom_trip_repo.get_by_id(record_id)
        if trip:
            if not trip.is_owned_by(actor.id):
                raise AuthorizationError()
            await self._relation_loader.populate_custom_trips([trip])
            return ApiResponse(data=self._projector.custom_trip_view(trip))

        raise BookingNotFoundError(record_id)
