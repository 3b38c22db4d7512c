import logging

from tourbook.application.interfaces.clock import Clock
from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.application.services.notification_dispatcher import NotificationDispatcher
from tourbook.domain.entities.notification import NotificationStatus


class ProcessNotificationOutboxUseCase:
    """Reintenta las notificaciones vencidas (NEW/RETRY) del outbox."""

    def __init__(
        self,
        outbox_repo: NotificationOutboxRepo,
        dispatcher: NotificationDispatcher,
        clock: Clock,
    ) -> None:
        self._outbox_repo = outbox_repo
        self._dispatcher = dispatcher
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, limit: int = 50) -> dict:
        due = await self._outbox_repo.list_due(self._clock.now(), limit=limit)
        summary = {"processed": 0, "delivered": 0, "retrying": 0, "failed": 0}
        for notification in due:
            delivered = await self._dispatcher.deliver(notification)
            summary["processed"] += 1
            if delivered:
                summary["delivered"] += 1
            elif notification.status == NotificationStatus.FAILED:
                summary["failed"] += 1
            else:
                summary["retrying"] += 1

        if summary["processed"]:
            self._logger.info("Notification outbox processed", extra=summary)
        return summary
