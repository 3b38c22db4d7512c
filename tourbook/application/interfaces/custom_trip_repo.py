from tourbook.domain.entities.custom_trip import CustomTrip


class CustomTripRepo:
    async def get_by_id(self, trip_id: str) -> CustomTrip | None:
        raise NotImplementedError

    async def find_by_customer(
        self,
        customer_id: str,
        status: str | None = None,
    ) -> list[CustomTrip]:
        """Custom trips del cliente, ordenados por created_at descendente."""
        raise NotImplementedError

    async def create(self, trip: CustomTrip) -> CustomTrip:
        raise NotImplementedError

    async def update(self, trip: CustomTrip) -> None:
        """
        Escritura condicional sobre ``trip.lock_version``.

        Raises:
            ConcurrentModificationError: si la versión guardada ya no coincide.
        """
        raise NotImplementedError
