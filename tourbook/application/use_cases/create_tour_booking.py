import logging

from tourbook.api.schemas.bookings import ApiResponse, BookingView, CreateTourBookingRequest
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.catalog_repo import TourRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.id_generator import IdGenerator
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.booking_notifier import BookingNotifier
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.constants import KIND_TOUR
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.user import User
from tourbook.domain.errors import MissingFieldsError, TourNotFoundError, ValidationError
from tourbook.domain.value_objects.booking_reference import BookingReference
from tourbook.domain.value_objects.date_range import DateRange, ensure_utc


def build_date_range(request) -> DateRange:
    try:
        return DateRange(start=ensure_utc(request.start_date), end=ensure_utc(request.end_date))
    except ValueError as exc:
        raise ValidationError(
            "End date must be after start date", fields=["startDate", "endDate"]
        ) from exc


class CreateTourBookingUseCase:
    def __init__(
        self,
        booking_repo: BookingRepo,
        tour_repo: TourRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        notifier: BookingNotifier,
        clock: Clock,
        id_generator: IdGenerator,
        transaction_manager: TransactionManager,
    ) -> None:
        self._booking_repo = booking_repo
        self._tour_repo = tour_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._notifier = notifier
        self._clock = clock
        self._id_generator = id_generator
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateTourBookingRequest, actor: User) -> ApiResponse[BookingView]:
        required = {
            "tourId": request.tour_id,
            "startDate": request.start_date,
            "endDate": request.end_date,
            "groupSize": request.group_size,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise MissingFieldsError(missing)

        tour = await self._tour_repo.get_by_id(request.tour_id)
        if not tour:
            raise TourNotFoundError(request.tour_id)

        date_range = build_date_range(request)
        now = self._clock.now()
        booking = Booking(
            id=self._id_generator.generate_id(),
            booking_reference=BookingReference.generate(now, BookingReference.TOUR_PREFIX).value,
            user_id=actor.id,
            tour_id=tour.id,
            guide_id=tour.guide_id,
            booking_kind=KIND_TOUR,
            booking_date=now,
            start_date=date_range.start,
            end_date=date_range.end,
            duration=date_range.days,
            group_size=request.group_size,
            total_amount=tour.price * request.group_size,
            special_requests=request.special_requests,
            created_at=now,
            updated_at=now,
        )

        async with self._transaction_manager.start():
            booking = await self._booking_repo.create(booking)

        self._logger.info(
            "Tour booking created",
            extra={
                "booking_id": booking.id,
                "tour_id": tour.id,
                "group_size": booking.group_size,
                "total_amount": str(booking.total_amount),
            },
        )

        await self._relation_loader.populate_bookings([booking])
        await self._notifier.tour_booking_created(booking, tour, actor)

        return ApiResponse(
            message="Tour booking created successfully",
            data=self._projector.booking_view(booking),
        )
