import copy
from datetime import datetime, timezone

from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.domain.entities.custom_trip import CustomTrip
from tourbook.domain.errors import ConcurrentModificationError

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _detached(trip: CustomTrip) -> CustomTrip:
    stored = copy.deepcopy(trip)
    stored.customer = None
    stored.assigned_guide = None
    return stored


class InMemoryCustomTripRepo(CustomTripRepo):
    def __init__(self) -> None:
        self.trips: dict[str, CustomTrip] = {}

    async def get_by_id(self, trip_id: str) -> CustomTrip | None:
        trip = self.trips.get(trip_id)
        return copy.deepcopy(trip) if trip else None

    async def find_by_customer(
        self,
        customer_id: str,
        status: str | None = None,
    ) -> list[CustomTrip]:
        matched = [
            t
            for t in self.trips.values()
            if t.customer_id == customer_id and (not status or t.status == status)
        ]
        matched.sort(key=lambda t: t.created_at or _OLDEST, reverse=True)
        return [copy.deepcopy(t) for t in matched]

    async def create(self, trip: CustomTrip) -> CustomTrip:
        if trip.id in self.trips:
            raise ValueError("Custom trip id already exists")
        self.trips[trip.id] = _detached(trip)
        return copy.deepcopy(self.trips[trip.id])

    async def update(self, trip: CustomTrip) -> None:
        stored = self.trips.get(trip.id)
        if stored is None or stored.lock_version != trip.lock_version:
            raise ConcurrentModificationError(trip.id, trip.lock_version)
        trip.lock_version += 1
        self.trips[trip.id] = _detached(trip)
