import logging
from decimal import Decimal

from tourbook.api.schemas.bookings import ApiResponse, BookingView, CreateGuideBookingRequest
from tourbook.application.interfaces.booking_repo import BookingRepo
from tourbook.application.interfaces.catalog_repo import UserRepo
from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.id_generator import IdGenerator
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.application.services.booking_notifier import BookingNotifier
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.application.use_cases.create_tour_booking import build_date_range
from tourbook.domain.constants import GUIDE_DURATIONS, KIND_GUIDE, ROLE_GUIDE, ROLE_TOURIST
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.user import User
from tourbook.domain.errors import GuideNotFoundError, MissingFieldsError, ValidationError
from tourbook.domain.value_objects.booking_reference import BookingReference

GUEST_FIELDS = ("firstName", "lastName", "email", "phone")


class CreateGuideBookingUseCase:
    """
    Reserva directa de un guía, sin tour.

    Precio: tarifa por persona y día * groupSize * días del rango.
    La variante guest aprovisiona un usuario turista mínimo por email.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        user_repo: UserRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        notifier: BookingNotifier,
        clock: Clock,
        id_generator: IdGenerator,
        transaction_manager: TransactionManager,
        rate_per_person_per_day: Decimal = Decimal("50"),
    ) -> None:
        self._booking_repo = booking_repo
        self._user_repo = user_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._notifier = notifier
        self._clock = clock
        self._id_generator = id_generator
        self._transaction_manager = transaction_manager
        self._rate = Decimal(rate_per_person_per_day)
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateGuideBookingRequest, actor: User) -> ApiResponse[BookingView]:
        self._validate(request)
        guide = await self._get_guide(request.guide_id)

        async with self._transaction_manager.start():
            booking = await self._create(request, actor, BookingReference.GUIDE_PREFIX)

        return await self._finish(booking, actor, guide, is_guest=False)

    async def execute_guest(self, request: CreateGuideBookingRequest) -> ApiResponse[BookingView]:
        self._validate(request)
        guest = request.guest_info
        guest_values = {
            "firstName": guest.first_name if guest else None,
            "lastName": guest.last_name if guest else None,
            "email": guest.email if guest else None,
            "phone": guest.phone if guest else None,
        }
        if not all(guest_values.values()):
            raise ValidationError(
                f"Guest information is required: {', '.join(GUEST_FIELDS)}",
                fields=[name for name, value in guest_values.items() if not value],
            )
        guide = await self._get_guide(request.guide_id)

        async with self._transaction_manager.start():
            tourist = await self._user_repo.get_by_email(str(guest.email))
            if not tourist:
                tourist = await self._user_repo.create(
                    User(
                        id=self._id_generator.generate_id(),
                        first_name=guest.first_name,
                        last_name=guest.last_name,
                        email=str(guest.email),
                        phone=guest.phone,
                        role=ROLE_TOURIST,
                        is_verified=False,
                        is_active=True,
                        is_guest=True,
                        created_at=self._clock.now(),
                    )
                )
                self._logger.info("Guest user provisioned", extra={"user_id": tourist.id})
            booking = await self._create(request, tourist, BookingReference.GUEST_GUIDE_PREFIX)

        return await self._finish(booking, tourist, guide, is_guest=True)

    # === Internos ===

    def _validate(self, request: CreateGuideBookingRequest) -> None:
        required = {
            "guideId": request.guide_id,
            "startDate": request.start_date,
            "endDate": request.end_date,
            "duration": request.duration,
            "groupSize": request.group_size,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise MissingFieldsError(missing)
        if request.duration not in GUIDE_DURATIONS:
            raise ValidationError(
                f"Invalid duration. Must be one of: {', '.join(GUIDE_DURATIONS)}",
                fields=["duration"],
            )

    async def _get_guide(self, guide_id: str) -> User:
        guide = await self._user_repo.get_by_id(guide_id)
        if not guide or not guide.has_role(ROLE_GUIDE):
            raise GuideNotFoundError(guide_id)
        return guide

    async def _create(self, request: CreateGuideBookingRequest, tourist: User, prefix: str) -> Booking:
        date_range = build_date_range(request)
        now = self._clock.now()
        booking = Booking(
            id=self._id_generator.generate_id(),
            booking_reference=BookingReference.generate(now, prefix).value,
            user_id=tourist.id,
            guide_id=request.guide_id,
            booking_kind=KIND_GUIDE,
            booking_date=now,
            start_date=date_range.start,
            end_date=date_range.end,
            duration=request.duration,
            group_size=request.group_size,
            total_amount=self._rate * request.group_size * date_range.days,
            special_requests=request.special_requests,
            created_at=now,
            updated_at=now,
        )
        return await self._booking_repo.create(booking)

    async def _finish(self, booking: Booking, tourist: User, guide: User, is_guest: bool) -> ApiResponse[BookingView]:
        self._logger.info(
            "Guide booking created",
            extra={
                "booking_id": booking.id,
                "guide_id": guide.id,
                "is_guest": is_guest,
                "total_amount": str(booking.total_amount),
            },
        )
        await self._relation_loader.populate_bookings([booking])
        await self._notifier.guide_booking_created(booking, tourist, is_guest=is_guest)
        return ApiResponse(
            message="Guide booking created successfully",
            data=self._projector.booking_view(booking),
        )
