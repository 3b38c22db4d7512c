from tourbook.api.schemas.bookings import ApiResponse, Pagination, TripPage
from tourbook.application.interfaces.booking_repo import BookingFilter, BookingRepo
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.entities.user import User
from tourbook.domain.value_objects.page_request import PageRequest


class ListGuideBookingsUseCase:
    """Bookings donde el actor es el guía asignado, paginados en el store."""

    def __init__(
        self,
        booking_repo: BookingRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self._booking_repo = booking_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def execute(
        self,
        actor: User,
        status: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> ApiResponse[TripPage]:
        page_request = PageRequest.clamped(
            page,
            self._default_page_size if limit is None else limit,
            self._max_page_size,
        )
        filters = BookingFilter(guide_id=actor.id, status=status)
        bookings = await self._booking_repo.find(
            filters, skip=page_request.offset, limit=page_request.limit
        )
        total = await self._booking_repo.count(filters)
        await self._relation_loader.populate_bookings(bookings)

        return ApiResponse(
            data=TripPage(
                items=[self._projector.booking_summary(b, include_tourist=True) for b in bookings],
                pagination=Pagination(
                    current=page_request.page,
                    pages=page_request.total_pages(total),
                    total=total,
                    limit=page_request.limit,
                ),
            )
        )
