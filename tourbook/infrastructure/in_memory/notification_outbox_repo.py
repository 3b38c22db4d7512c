import copy
from datetime import datetime

from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.domain.entities.notification import Notification


class InMemoryNotificationOutboxRepo(NotificationOutboxRepo):
    def __init__(self) -> None:
        self.notifications: dict[int, Notification] = {}
        self._next_id = 1

    async def add(self, notification: Notification) -> Notification:
        notification.id = self._next_id
        self._next_id += 1
        self.notifications[notification.id] = copy.deepcopy(notification)
        return notification

    async def save(self, notification: Notification) -> None:
        if notification.id not in self.notifications:
            raise ValueError("Notification not found")
        self.notifications[notification.id] = copy.deepcopy(notification)

    async def list_due(self, now: datetime, limit: int = 50) -> list[Notification]:
        due = [n for n in self.notifications.values() if n.is_due(now)]
        due.sort(key=lambda n: n.id)
        return [copy.deepcopy(n) for n in due[:limit]]

    async def list_for_booking(self, booking_id: str) -> list[Notification]:
        return [
            copy.deepcopy(n)
            for n in sorted(self.notifications.values(), key=lambda n: n.id)
            if n.related_booking_id == booking_id
        ]
