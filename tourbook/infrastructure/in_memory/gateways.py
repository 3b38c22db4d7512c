"""Gateways in-memory: registran lo enviado en lugar de llamar servicios externos."""

from typing import Any

from tourbook.application.interfaces.document_renderer import DocumentContext, MessagingGateway
from tourbook.application.interfaces.notification_gateway import NotificationGateway


class RecordingNotificationGateway(NotificationGateway):
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail_with: Exception | None = None

    async def send(self, payload: dict[str, Any]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(payload)

    def sent_to(self, recipient_id: str) -> list[dict[str, Any]]:
        return [p for p in self.sent if p["recipientUserId"] == recipient_id]


class RecordingMessagingGateway(MessagingGateway):
    def __init__(self) -> None:
        self.sent: list[DocumentContext] = []
        self.fail_with: Exception | None = None

    async def send_booking_confirmation(self, context: DocumentContext) -> dict[str, Any] | None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(context)
        recipient = context.user.email if context.user else None
        return {"recipient": recipient, "template": context.template}
