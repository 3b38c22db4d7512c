from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.document_renderer import (
    TEMPLATE_CUSTOM_TRIP,
    TEMPLATE_REGULAR,
    DocumentContext,
)
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.domain.entities.user import User
from tourbook.domain.errors import AuthorizationError, BookingNotFoundError


class BookingDocumentResolver:
    """
    Resuelve "el booking" para facturas y emails a partir de un solo id.

    Busca primero un Booking y luego un CustomTrip. La plantilla se elige
    por la presencia del enlace a custom trip, no por el tipo del listado.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        relation_loader: RelationLoader,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._relation_loader = relation_loader

    async def resolve(self, record_id: str, actor: User, denied_message: str) -> DocumentContext:
        booking = await self._booking_repo.get_by_id(record_id)
        if booking:
            if not booking.is_owned_by(actor.id):
                raise AuthorizationError(denied_message)
            await self._relation_loader.populate_bookings([booking])

            trip = None
            if booking.custom_trip_id:
                trip = await self._custom_trip_repo.get_by_id(booking.custom_trip_id)
            if trip:
                await self._relation_loader.populate_custom_trips([trip])
                return DocumentContext(
                    template=TEMPLATE_CUSTOM_TRIP,
                    user=booking.user,
                    booking=booking,
                    custom_trip=trip,
                    guide=trip.assigned_guide,
                )
            # Enlace roto: sin custom trip poblado se usa la plantilla regular
            return DocumentContext(
                template=TEMPLATE_REGULAR,
                user=booking.user,
                booking=booking,
                tour=booking.tour,
                guide=booking.guide,
            )

        trip = await self._custom_trip_repo.get_by_id(record_id)
        if trip:
            if not trip.is_owned_by(actor.id):
                raise AuthorizationError(denied_message)
            await self._relation_loader.populate_custom_trips([trip])
            linked = None
            if trip.booking_id:
                linked = await self._booking_repo.get_by_id(trip.booking_id)
            return DocumentContext(
                template=TEMPLATE_CUSTOM_TRIP,
                user=trip.customer,
                booking=linked,
                custom_trip=trip,
                guide=trip.assigned_guide,
            )

        raise BookingNotFoundError(record_id)
