"""Mensajes de notificación emitidos por las transiciones de bookings."""

from datetime import datetime

from tourbook.application.services.notification_dispatcher import NotificationDispatcher
from tourbook.domain.constants import (
    NOTIFICATION_PRIORITY_HIGH,
    NOTIFICATION_PRIORITY_MEDIUM,
    NOTIFICATION_TYPE_BOOKING,
    NOTIFICATION_TYPE_CANCELLATION,
)
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User

GUIDE_DASHBOARD_URL = "/guide/dashboard?tab=bookings"
TOURIST_BOOKINGS_URL = "/bookings"


def _date(value: datetime | None) -> str:
    if value is None:
        return "an unscheduled date"
    return f"{value.month}/{value.day}/{value.year}"


def _duration(value: int | str | None) -> str:
    if isinstance(value, int):
        return f"{value} day" if value == 1 else f"{value} days"
    return value or "the trip"


class BookingNotifier:
    def __init__(self, dispatcher: NotificationDispatcher) -> None:
        self._dispatcher = dispatcher

    async def tour_booking_created(self, booking: Booking, tour: Tour, tourist: User) -> None:
        if not tour.guide_id:
            return
        await self._dispatcher.dispatch(
            recipient_id=tour.guide_id,
            type=NOTIFICATION_TYPE_BOOKING,
            title="New Tour Booking Request",
            message=(
                f"{tourist.first_name} {tourist.last_name} wants to book your tour "
                f'"{tour.title}" for {booking.group_size} people starting {_date(booking.start_date)}'
            ),
            priority=NOTIFICATION_PRIORITY_HIGH,
            related_booking_id=booking.id,
            action_url=GUIDE_DASHBOARD_URL,
            action_text="View Booking",
            metadata={
                "bookingId": booking.id,
                "tourTitle": tour.title,
                "groupSize": booking.group_size,
                "totalAmount": str(booking.total_amount),
                "startDate": booking.start_date.isoformat() if booking.start_date else None,
            },
        )

    async def guide_booking_created(self, booking: Booking, tourist: User, is_guest: bool = False) -> None:
        guest_tag = " (Guest)" if is_guest else ""
        metadata = {
            "bookingId": booking.id,
            "duration": booking.duration,
            "groupSize": booking.group_size,
            "totalAmount": str(booking.total_amount),
        }
        if is_guest:
            metadata["isGuest"] = True
        await self._dispatcher.dispatch(
            recipient_id=booking.guide_id,
            type=NOTIFICATION_TYPE_BOOKING,
            title="New Guest Guide Booking Request" if is_guest else "New Guide Booking Request",
            message=(
                f"{tourist.first_name} {tourist.last_name}{guest_tag} wants to book your services "
                f"for {_duration(booking.duration)} starting {_date(booking.start_date)}"
            ),
            priority=NOTIFICATION_PRIORITY_HIGH,
            related_booking_id=booking.id,
            action_url=GUIDE_DASHBOARD_URL,
            action_text="View Booking",
            metadata=metadata,
        )

    async def booking_cancelled(self, booking: Booking, actor: User) -> None:
        """Avisa a la contraparte que no inició la cancelación (nunca al propio actor)."""
        metadata = {
            "bookingId": booking.id,
            "cancellationReason": booking.cancellation_reason,
            "cancelledBy": actor.id,
        }
        when = f"{_duration(booking.duration)} starting {_date(booking.start_date)}"

        if booking.guide_id and booking.guide_id != actor.id:
            await self._dispatcher.dispatch(
                recipient_id=booking.guide_id,
                type=NOTIFICATION_TYPE_CANCELLATION,
                title="Booking Cancelled",
                message=f"{actor.first_name} {actor.last_name} cancelled their booking for {when}",
                priority=NOTIFICATION_PRIORITY_MEDIUM,
                related_booking_id=booking.id,
                action_url=GUIDE_DASHBOARD_URL,
                action_text="View Details",
                metadata=metadata,
            )

        if booking.user_id != actor.id:
            await self._dispatcher.dispatch(
                recipient_id=booking.user_id,
                type=NOTIFICATION_TYPE_CANCELLATION,
                title="Booking Cancelled",
                message=f"Your booking for {when} has been cancelled",
                priority=NOTIFICATION_PRIORITY_MEDIUM,
                related_booking_id=booking.id,
                action_url=TOURIST_BOOKINGS_URL,
                action_text="View Details",
                metadata=metadata,
            )

    async def custom_trip_cancelled(
        self,
        trip: CustomTrip,
        actor: User,
        reason: str | None,
        linked_booking: Booking | None,
    ) -> None:
        guide_id = trip.staff_assignment.assigned_guide_id
        if not guide_id or guide_id == actor.id:
            return
        await self._dispatcher.dispatch(
            recipient_id=guide_id,
            type=NOTIFICATION_TYPE_CANCELLATION,
            title="Booking Cancelled",
            message=(
                f"{actor.first_name} {actor.last_name} cancelled their booking for "
                f"{trip.title} starting {_date(trip.request_details.start_date)}"
            ),
            priority=NOTIFICATION_PRIORITY_MEDIUM,
            related_booking_id=linked_booking.id if linked_booking else None,
            action_url=GUIDE_DASHBOARD_URL,
            action_text="View Details",
            metadata={
                "bookingId": linked_booking.id if linked_booking else None,
                "customTripId": trip.id,
                "cancellationReason": reason,
                "cancelledBy": actor.id,
            },
        )
