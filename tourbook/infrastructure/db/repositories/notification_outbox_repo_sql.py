from datetime import datetime
from typing import Any

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.domain.entities.notification import Notification, NotificationStatus
from tourbook.infrastructure.db.datetimes import as_utc
from tourbook.infrastructure.db.tables import notifications


def _state(notification: Notification) -> dict[str, Any]:
    return {
        "status": notification.status.value,
        "attempts": notification.attempts,
        "next_attempt_at": notification.next_attempt_at,
        "last_error": notification.last_error,
        "delivered_at": notification.delivered_at,
    }


def _from_row(row: Any) -> Notification:
    return Notification(
        id=row["id"],
        recipient_id=row["recipient_id"],
        type=row["type"],
        title=row["title"],
        message=row["message"],
        priority=row["priority"],
        related_booking_id=row["related_booking_id"],
        action_url=row["action_url"],
        action_text=row["action_text"],
        metadata=dict(row["metadata"] or {}),
        status=NotificationStatus(row["status"]),
        attempts=row["attempts"],
        max_attempts=row["max_attempts"],
        next_attempt_at=as_utc(row["next_attempt_at"]),
        last_error=row["last_error"],
        created_at=as_utc(row["created_at"]),
        delivered_at=as_utc(row["delivered_at"]),
    )


class NotificationOutboxRepoSQL(NotificationOutboxRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, notification: Notification) -> Notification:
        stmt = insert(notifications).values(
            recipient_id=notification.recipient_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            priority=notification.priority,
            related_booking_id=notification.related_booking_id,
            action_url=notification.action_url,
            action_text=notification.action_text,
            metadata=notification.metadata,
            max_attempts=notification.max_attempts,
            created_at=notification.created_at,
            **_state(notification),
        )
        result = await self._session.execute(stmt)
        notification.id = result.inserted_primary_key[0]
        return notification

    async def save(self, notification: Notification) -> None:
        stmt = (
            update(notifications)
            .where(notifications.c.id == notification.id)
            .values(**_state(notification))
        )
        await self._session.execute(stmt)

    async def list_due(self, now: datetime, limit: int = 50) -> list[Notification]:
        stmt = (
            select(notifications)
            .where(
                notifications.c.status.in_(
                    (NotificationStatus.NEW.value, NotificationStatus.RETRY.value)
                ),
                or_(
                    notifications.c.next_attempt_at.is_(None),
                    notifications.c.next_attempt_at <= now,
                ),
            )
            .order_by(notifications.c.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [_from_row(row) for row in result.mappings().all()]

    async def list_for_booking(self, booking_id: str) -> list[Notification]:
        stmt = (
            select(notifications)
            .where(notifications.c.related_booking_id == booking_id)
            .order_by(notifications.c.id)
        )
        result = await self._session.execute(stmt)
        return [_from_row(row) for row in result.mappings().all()]
