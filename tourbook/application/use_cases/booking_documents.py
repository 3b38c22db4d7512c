"""Factura PDF y email de confirmación de un booking o custom trip."""

import logging
from dataclasses import dataclass

from tourbook.api.schemas.bookings import ApiResponse
from tourbook.application.interfaces.document_renderer import DocumentRenderer, MessagingGateway
from tourbook.application.services.document_resolver import BookingDocumentResolver
from tourbook.domain.entities.user import User
from tourbook.domain.errors import DependencyFailure


@dataclass
class InvoiceDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


class DownloadInvoiceUseCase:
    def __init__(self, resolver: BookingDocumentResolver, renderer: DocumentRenderer) -> None:
        self._resolver = resolver
        self._renderer = renderer
        self._logger = logging.getLogger(__name__)

    async def execute(self, record_id: str, actor: User) -> InvoiceDocument:
        context = await self._resolver.resolve(
            record_id, actor, denied_message="Not authorized to download this booking"
        )
        try:
            content = await self._renderer.render_invoice(context)
        except Exception as exc:
            self._logger.error(
                "Error generating PDF",
                exc_info=exc,
                extra={"record_id": record_id, "template": context.template},
            )
            raise DependencyFailure(dependency="document_renderer", message="Error generating PDF") from exc

        self._logger.info(
            "Invoice generated",
            extra={"record_id": record_id, "template": context.template, "size": len(content)},
        )
        return InvoiceDocument(filename=context.filename, content=content)


class SendConfirmationEmailUseCase:
    def __init__(self, resolver: BookingDocumentResolver, messaging_gateway: MessagingGateway) -> None:
        self._resolver = resolver
        self._messaging_gateway = messaging_gateway
        self._logger = logging.getLogger(__name__)

    async def execute(self, record_id: str, actor: User) -> ApiResponse[dict]:
        context = await self._resolver.resolve(
            record_id, actor, denied_message="Not authorized to send email for this booking"
        )
        try:
            result = await self._messaging_gateway.send_booking_confirmation(context)
        except Exception as exc:
            self._logger.error(
                "Error sending email",
                exc_info=exc,
                extra={"record_id": record_id, "template": context.template},
            )
            raise DependencyFailure(dependency="messaging", message="Error sending email") from exc

        self._logger.info(
            "Confirmation email sent",
            extra={"record_id": record_id, "template": context.template},
        )
        return ApiResponse(message="Confirmation email sent successfully", data=result)
