import logging

from tourbook.api.schemas.bookings import ApiResponse, BookingView
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.id_generator import IdGenerator
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.constants import SHADOW_BOOKING_ROLES
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.user import User
from tourbook.domain.errors import (
    AuthorizationError,
    CustomTripNotFoundError,
    TransitionError,
    ValidationError,
)
from tourbook.domain.value_objects.booking_reference import BookingReference
from tourbook.domain.value_objects.date_range import DateRange


class CreateShadowBookingUseCase:
    """Staff cierra los términos de un custom trip creando su booking sombra."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        clock: Clock,
        id_generator: IdGenerator,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._clock = clock
        self._id_generator = id_generator
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, trip_id: str, actor: User) -> ApiResponse[BookingView]:
        if not actor.has_role(*SHADOW_BOOKING_ROLES):
            raise AuthorizationError()

        async with self._transaction_manager.start():
            trip = await self._custom_trip_repo.get_by_id(trip_id)
            if not trip:
                raise CustomTripNotFoundError(trip_id)
            if trip.is_terminal:
                raise TransitionError(
                    message="Custom trip cannot be booked in current status",
                    current_status=trip.status,
                    operation="create_booking",
                )
            if trip.booking_id:
                raise ValidationError("Custom trip already has a linked booking", fields=["booking"])

            request = trip.request_details
            duration = None
            if request.start_date and request.end_date and request.start_date < request.end_date:
                duration = DateRange(start=request.start_date, end=request.end_date).days

            now = self._clock.now()
            booking = Booking(
                id=self._id_generator.generate_id(),
                booking_reference=BookingReference.generate(
                    now, BookingReference.CUSTOM_TRIP_PREFIX
                ).value,
                user_id=trip.customer_id,
                guide_id=trip.staff_assignment.assigned_guide_id,
                custom_trip_id=trip.id,
                booking_date=now,
                start_date=request.start_date,
                end_date=request.end_date,
                duration=duration,
                group_size=request.group_size,
                total_amount=trip.total_amount,
                special_requests=request.special_requests,
                created_at=now,
                updated_at=now,
            )
            booking = await self._booking_repo.create(booking)

            trip.link_booking(booking.id)
            trip.updated_at = now
            await self._custom_trip_repo.update(trip)

        self._logger.info(
            "Shadow booking created for custom trip",
            extra={
                "custom_trip_id": trip.id,
                "booking_id": booking.id,
                "total_amount": str(booking.total_amount),
                "created_by": actor.id,
            },
        )
        await self._relation_loader.populate_bookings([booking])
        return ApiResponse(
            message="Custom trip booking created successfully",
            data=self._projector.booking_view(booking),
        )
