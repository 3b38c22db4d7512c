from dataclasses import dataclass
from typing import Any

from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User

TEMPLATE_CUSTOM_TRIP = "custom_trip"
TEMPLATE_REGULAR = "regular"


@dataclass
class DocumentContext:
    """Datos resueltos para renderizar factura o email de confirmación."""

    template: str
    user: User | None
    booking: Booking | None = None
    custom_trip: CustomTrip | None = None
    tour: Tour | None = None
    guide: User | None = None

    @property
    def document_id(self) -> str:
        if self.template == TEMPLATE_CUSTOM_TRIP and self.custom_trip and not self.booking:
            return self.custom_trip.id or ""
        return (self.booking.id if self.booking else None) or ""

    @property
    def filename(self) -> str:
        if self.template == TEMPLATE_CUSTOM_TRIP and self.booking is None:
            return f"custom-trip-invoice-{self.document_id}.pdf"
        return f"booking-confirmation-{self.document_id}.pdf"


class DocumentRenderer:
    async def render_invoice(self, context: DocumentContext) -> bytes:
        raise NotImplementedError


class MessagingGateway:
    async def send_booking_confirmation(self, context: DocumentContext) -> dict[str, Any] | None:
        raise NotImplementedError
