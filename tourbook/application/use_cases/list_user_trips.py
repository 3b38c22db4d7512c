import logging
from datetime import datetime, timezone

from tourbook.api.schemas.bookings import ApiResponse, Pagination, TripPage, TripSummary
from tourbook.application.interfaces.booking_repo import BookingFilter, BookingRepo
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector
from tourbook.domain.classifier import resolve_booking_kind
from tourbook.domain.constants import KIND_GUIDE
from tourbook.domain.value_objects.page_request import PageRequest

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _created_at(summary: TripSummary) -> datetime:
    return summary.created_at or _OLDEST


class ListUserTripsUseCase:
    """
    Vista unificada de bookings y custom trips de un usuario.

    Ambas fuentes se leen completas; el orden, el filtro por tipo y la
    paginación se aplican sobre la secuencia ya unificada, así el total
    refleja el conjunto filtrado y no lo que devolvió cada fuente.
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        custom_trip_repo: CustomTripRepo,
        relation_loader: RelationLoader,
        projector: TripProjector,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ) -> None:
        self._booking_repo = booking_repo
        self._custom_trip_repo = custom_trip_repo
        self._relation_loader = relation_loader
        self._projector = projector
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        owner_id: str,
        status: str | None = None,
        kind: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> ApiResponse[TripPage]:
        page_request = PageRequest.clamped(
            page,
            self._default_page_size if limit is None else limit,
            self._max_page_size,
        )

        bookings = await self._booking_repo.find(BookingFilter(user_id=owner_id, status=status))
        trips = await self._custom_trip_repo.find_by_customer(owner_id, status=status)
        await self._relation_loader.populate_bookings(bookings)
        await self._relation_loader.populate_custom_trips(trips)

        tour_items: list[TripSummary] = []
        guide_items: list[TripSummary] = []
        for booking in bookings:
            booking_kind = resolve_booking_kind(booking)
            summary = self._projector.booking_summary(booking, booking_kind)
            if booking_kind == KIND_GUIDE:
                guide_items.append(summary)
            else:
                tour_items.append(summary)
        custom_items = [self._projector.custom_trip_summary(trip) for trip in trips]

        unified = sorted(tour_items + custom_items + guide_items, key=_created_at, reverse=True)
        if kind:
            unified = [item for item in unified if item.kind == kind]

        total = len(unified)
        self._logger.info(
            "User trips listed",
            extra={
                "owner_id": owner_id,
                "status": status,
                "kind": kind,
                "page": page_request.page,
                "total": total,
            },
        )
        return ApiResponse(
            data=TripPage(
                items=page_request.slice(unified),
                pagination=Pagination(
                    current=page_request.page,
                    pages=page_request.total_pages(total),
                    total=total,
                    limit=page_request.limit,
                ),
            )
        )
