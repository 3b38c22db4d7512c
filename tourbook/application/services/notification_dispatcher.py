"""Despacho de notificaciones vía outbox con entrega best-effort inmediata."""

import logging
from typing import Any

from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.notification_gateway import NotificationGateway
from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.application.interfaces.transaction_manager import TransactionManager
from tourbook.domain.entities.notification import Notification, NotificationStatus

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Persiste cada notificación en el outbox y hace un intento de entrega.

    Ningún fallo (persistencia o entrega) se propaga al llamador: la
    operación de booking que disparó la notificación nunca falla por esto.
    Los intentos fallidos quedan en RETRY para ProcessNotificationOutbox.
    """

    def __init__(
        self,
        outbox_repo: NotificationOutboxRepo,
        gateway: NotificationGateway,
        clock: Clock,
        transaction_manager: TransactionManager,
        max_attempts: int = 5,
        base_backoff_seconds: int = 15,
    ) -> None:
        self._outbox_repo = outbox_repo
        self._gateway = gateway
        self._clock = clock
        self._transaction_manager = transaction_manager
        self._max_attempts = max_attempts
        self._base_backoff_seconds = base_backoff_seconds

    async def dispatch(
        self,
        recipient_id: str,
        type: str,
        title: str,
        message: str,
        priority: str,
        related_booking_id: str | None,
        metadata: dict[str, Any] | None = None,
        action_url: str | None = None,
        action_text: str | None = None,
    ) -> Notification | None:
        notification = Notification(
            recipient_id=recipient_id,
            type=type,
            title=title,
            message=message,
            priority=priority,
            related_booking_id=related_booking_id,
            metadata=metadata or {},
            action_url=action_url,
            action_text=action_text,
            status=NotificationStatus.NEW,
            max_attempts=self._max_attempts,
            created_at=self._clock.now(),
        )
        try:
            async with self._transaction_manager.start():
                notification = await self._outbox_repo.add(notification)
        except Exception as exc:
            logger.error(
                "Error persisting notification",
                exc_info=exc,
                extra={"recipient_id": recipient_id, "booking_id": related_booking_id},
            )
            return None

        await self.deliver(notification)
        return notification

    async def deliver(self, notification: Notification) -> bool:
        """Un intento de entrega; actualiza el estado de la entrada en el outbox."""
        now = self._clock.now()
        delivered = False
        try:
            await self._gateway.send(notification.payload())
        except Exception as exc:
            notification.mark_retry(now, str(exc), self._base_backoff_seconds)
            if notification.status == NotificationStatus.FAILED:
                logger.error(
                    "Notification moved to dead letter",
                    extra={
                        "notification_id": notification.id,
                        "booking_id": notification.related_booking_id,
                        "attempts": notification.attempts,
                        "error": str(exc),
                    },
                )
            else:
                logger.warning(
                    "Notification delivery failed, retry scheduled",
                    extra={
                        "notification_id": notification.id,
                        "booking_id": notification.related_booking_id,
                        "attempt": notification.attempts,
                        "next_attempt_at": notification.next_attempt_at.isoformat(),
                    },
                )
        else:
            notification.mark_done(now)
            delivered = True

        try:
            async with self._transaction_manager.start():
                await self._outbox_repo.save(notification)
        except Exception as exc:
            logger.error(
                "Error updating notification outbox entry",
                exc_info=exc,
                extra={"notification_id": notification.id},
            )
        return delivered
