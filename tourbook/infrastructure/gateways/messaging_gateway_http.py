import logging
from typing import Any

import httpx

from tourbook.application.interfaces.document_renderer import (
    TEMPLATE_CUSTOM_TRIP,
    DocumentContext,
    MessagingGateway,
)
from tourbook.infrastructure.circuit_breaker import call_with_breaker, messaging_breaker

logger = logging.getLogger(__name__)


def _money(value) -> str | None:
    return None if value is None else format(value, ".2f")


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def build_confirmation_payload(context: DocumentContext) -> dict[str, Any]:
    """Datos que consume la plantilla de email de confirmación."""
    user = context.user
    booking = context.booking
    payload: dict[str, Any] = {
        "template": context.template,
        "to": user.email if user else None,
        "customerName": user.full_name if user else None,
        "bookingId": context.document_id,
        "bookingReference": booking.booking_reference if booking else None,
        "guideName": context.guide.full_name if context.guide else None,
    }
    if context.template == TEMPLATE_CUSTOM_TRIP and context.custom_trip:
        trip = context.custom_trip
        staff = trip.staff_assignment
        budget = staff.total_budget
        payload.update(
            {
                "title": trip.title,
                "destination": trip.request_details.destination,
                "startDate": _iso(trip.request_details.start_date),
                "endDate": _iso(trip.request_details.end_date),
                "groupSize": trip.request_details.group_size,
                "totalAmount": _money(trip.total_amount),
                "hotels": [h.hotel_name or h.hotel_id for h in staff.hotel_bookings],
                "vehicles": [v.vehicle_label or v.vehicle_id for v in staff.assigned_vehicles],
                "itineraryDays": len(staff.itinerary),
                "budgetBreakdown": {
                    "guideFees": _money(budget.guide_fees),
                    "vehicleCosts": _money(budget.vehicle_costs),
                    "hotelCosts": _money(budget.hotel_costs),
                    "activityCosts": _money(budget.activity_costs),
                    "additionalFees": _money(budget.additional_fees),
                }
                if budget
                else None,
            }
        )
    elif booking:
        payload.update(
            {
                "title": context.tour.title if context.tour else "Guide Service",
                "startDate": _iso(booking.start_date),
                "endDate": _iso(booking.end_date),
                "duration": booking.duration,
                "groupSize": booking.group_size,
                "totalAmount": _money(booking.total_amount),
                "status": booking.status,
                "paymentStatus": booking.payment_status,
            }
        )
    return payload


class MessagingGatewayHTTP(MessagingGateway):
    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def send_booking_confirmation(self, context: DocumentContext) -> dict[str, Any] | None:
        url = f"{self._base_url}/emails/booking-confirmation"
        payload = build_confirmation_payload(context)

        async def _make_request() -> httpx.Response:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response

        response = await call_with_breaker(messaging_breaker, _make_request)
        try:
            body = response.json()
        except ValueError:
            body = None
        logger.info(
            "Confirmation email accepted by messaging service",
            extra={"booking_id": context.document_id, "template": context.template},
        )
        return body if isinstance(body, dict) else {"recipient": payload["to"]}
