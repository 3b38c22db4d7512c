"""Entidad Notification - entrada del outbox de notificaciones."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any


class NotificationStatus(str, Enum):
    """Estados de una notificación en el outbox."""

    NEW = "NEW"
    RETRY = "RETRY"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass
class Notification:
    """
    Notificación a un usuario, persistida antes de intentar la entrega.

    La entrega es at-least-once: una entrada en RETRY se reintenta con
    backoff exponencial hasta ``max_attempts`` y luego queda en FAILED
    (dead letter).
    """

    id: int | None = None

    recipient_id: str = ""
    type: str = ""
    title: str = ""
    message: str = ""
    priority: str = "medium"
    related_booking_id: str | None = None
    action_url: str | None = None
    action_text: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    status: NotificationStatus = NotificationStatus.NEW
    attempts: int = 0
    max_attempts: int = 5
    next_attempt_at: datetime | None = None
    last_error: str | None = None

    created_at: datetime | None = None
    delivered_at: datetime | None = None

    @property
    def is_final(self) -> bool:
        return self.status in (NotificationStatus.DONE, NotificationStatus.FAILED)

    def is_due(self, now: datetime) -> bool:
        if self.is_final:
            return False
        return self.next_attempt_at is None or self.next_attempt_at <= now

    @property
    def can_retry(self) -> bool:
        return self.attempts < self.max_attempts

    def payload(self) -> dict[str, Any]:
        """Payload que recibe el subsistema de notificaciones."""
        return {
            "recipientUserId": self.recipient_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "priority": self.priority,
            "relatedBookingId": self.related_booking_id,
            "actionUrl": self.action_url,
            "actionText": self.action_text,
            "metadata": self.metadata,
        }

    def mark_done(self, now: datetime) -> None:
        self.attempts += 1
        self.status = NotificationStatus.DONE
        self.delivered_at = now
        self.last_error = None

    def mark_retry(self, now: datetime, error: str, base_backoff_seconds: int = 15) -> None:
        """Registra un intento fallido; pasa a FAILED al agotar los intentos."""
        self.attempts += 1
        self.last_error = error
        if not self.can_retry:
            self.status = NotificationStatus.FAILED
            self.next_attempt_at = None
            return
        self.status = NotificationStatus.RETRY
        backoff_seconds = min(base_backoff_seconds * (2 ** (self.attempts - 1)), 300)
        self.next_attempt_at = now + timedelta(seconds=backoff_seconds)
