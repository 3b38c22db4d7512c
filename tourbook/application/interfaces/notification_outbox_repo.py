from datetime import datetime

from tourbook.domain.entities.notification import Notification


class NotificationOutboxRepo:
    async def add(self, notification: Notification) -> Notification:
        raise NotImplementedError

    async def save(self, notification: Notification) -> None:
        raise NotImplementedError

    async def list_due(self, now: datetime, limit: int = 50) -> list[Notification]:
        """Entradas NEW o RETRY cuyo próximo intento ya venció."""
        raise NotImplementedError

    async def list_for_booking(self, booking_id: str) -> list[Notification]:
        raise NotImplementedError
