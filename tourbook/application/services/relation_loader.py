from typing import Iterable

from tourbook.application.interfaces.catalog_repo import TourRepo, UserRepo
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip


class RelationLoader:
    """Resuelve las referencias (tour, guía, usuario) de bookings y custom trips."""

    def __init__(self, tour_repo: TourRepo, user_repo: UserRepo) -> None:
        self._tour_repo = tour_repo
        self._user_repo = user_repo

    async def populate_bookings(self, bookings: Iterable[Booking]) -> None:
        bookings = list(bookings)
        if not bookings:
            return
        tour_ids = {b.tour_id for b in bookings if b.tour_id}
        user_ids = {b.guide_id for b in bookings if b.guide_id}
        user_ids |= {b.user_id for b in bookings if b.user_id}
        tours = await self._tour_repo.get_many(tour_ids) if tour_ids else {}
        users = await self._user_repo.get_many(user_ids) if user_ids else {}
        for booking in bookings:
            # Un tour borrado deja booking.tour en None; la vista degrada a valores por defecto
            booking.tour = tours.get(booking.tour_id) if booking.tour_id else None
            booking.guide = users.get(booking.guide_id) if booking.guide_id else None
            booking.user = users.get(booking.user_id)

    async def populate_custom_trips(self, trips: Iterable[CustomTrip]) -> None:
        trips = list(trips)
        if not trips:
            return
        user_ids = {t.customer_id for t in trips if t.customer_id}
        user_ids |= {
            t.staff_assignment.assigned_guide_id
            for t in trips
            if t.staff_assignment.assigned_guide_id
        }
        users = await self._user_repo.get_many(user_ids) if user_ids else {}
        for trip in trips:
            trip.customer = users.get(trip.customer_id)
            guide_id = trip.staff_assignment.assigned_guide_id
            trip.assigned_guide = users.get(guide_id) if guide_id else None
