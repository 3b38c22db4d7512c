"""Cancelación de bookings y custom trips, cascada y control de concurrencia."""

from decimal import Decimal

import pytest

from tourbook.application.services import CancellationCascade
from tourbook.domain.errors import (
    AuthorizationError,
    BookingNotFoundError,
    ConcurrentModificationError,
    TransitionError,
)


class TestCancelBooking:
    async def test_owner_cancels_confirmed_booking(self, use_cases, adapters, booking_factory, tourist, guide):
        booking = await booking_factory(status="confirmed")

        response = await use_cases["cancel_trip"].execute(
            record_id=booking.id, actor=tourist, reason="Change of plans"
        )

        assert response.message == "Booking cancelled successfully"
        assert response.data.status == "cancelled"
        assert response.data.payment_status == "refunded"
        assert response.data.refund_amount == Decimal("200.00")
        assert response.data.cancellation_reason == "Change of plans"

        assert len(adapters.notification_gateway.sent) == 1
        [payload] = adapters.notification_gateway.sent_to(guide.id)
        assert payload["type"] == "cancellation"
        assert payload["metadata"] == {
            "bookingId": booking.id,
            "cancellationReason": "Change of plans",
            "cancelledBy": tourist.id,
        }
        assert adapters.notification_gateway.sent_to(tourist.id) == []

    async def test_guide_cancel_notifies_tourist_only(self, use_cases, adapters, booking_factory, tourist, guide):
        booking = await booking_factory()

        await use_cases["cancel_trip"].execute(record_id=booking.id, actor=guide)

        [payload] = adapters.notification_gateway.sent
        assert payload["recipientUserId"] == tourist.id
        assert payload["actionUrl"] == "/bookings"

    async def test_stranger_cannot_cancel(self, use_cases, adapters, booking_factory, other_tourist):
        booking = await booking_factory()

        with pytest.raises(AuthorizationError):
            await use_cases["cancel_trip"].execute(record_id=booking.id, actor=other_tourist)

        stored = await adapters.booking_repo.get_by_id(booking.id)
        assert stored.status == "pending"

    @pytest.mark.parametrize("terminal", ["cancelled", "completed"])
    async def test_terminal_booking_left_untouched(self, use_cases, adapters, booking_factory, tourist, terminal):
        booking = await booking_factory(status=terminal, payment_status="paid")
        before = await adapters.booking_repo.get_by_id(booking.id)

        with pytest.raises(TransitionError) as exc_info:
            await use_cases["cancel_trip"].execute(record_id=booking.id, actor=tourist)

        assert "cannot be cancelled in current status" in exc_info.value.message
        assert await adapters.booking_repo.get_by_id(booking.id) == before
        assert adapters.notification_gateway.sent == []

    async def test_refund_set_once(self, use_cases, adapters, booking_factory, tourist):
        booking = await booking_factory(total_amount=Decimal("320.00"))
        cancel = use_cases["cancel_trip"]

        await cancel.execute(record_id=booking.id, actor=tourist)
        with pytest.raises(TransitionError):
            await cancel.execute(record_id=booking.id, actor=tourist)

        stored = await adapters.booking_repo.get_by_id(booking.id)
        assert stored.refund_amount == Decimal("320.00")
        assert stored.lock_version == 1

    async def test_booking_cancel_does_not_touch_custom_trip(
        self, use_cases, adapters, booking_factory, custom_trip_factory, tourist
    ):
        trip = await custom_trip_factory(booking_id="bk-001", status="confirmed")
        shadow = await booking_factory(tour_id=None, booking_kind=None, custom_trip_id=trip.id)

        await use_cases["cancel_trip"].execute(record_id=shadow.id, actor=tourist)

        stored_trip = await adapters.custom_trip_repo.get_by_id(trip.id)
        assert stored_trip.status == "confirmed"
        assert stored_trip.payment_status == "pending"

    async def test_unknown_id(self, use_cases, tourist):
        with pytest.raises(BookingNotFoundError):
            await use_cases["cancel_trip"].execute(record_id="nope", actor=tourist)


class TestCancelCustomTrip:
    async def test_cascades_to_linked_booking(
        self, use_cases, adapters, booking_factory, custom_trip_factory, tourist, guide
    ):
        trip = await custom_trip_factory(booking_id="bk-001")
        shadow = await booking_factory(
            tour_id=None, booking_kind=None, custom_trip_id=trip.id, total_amount=Decimal("1600.00")
        )

        response = await use_cases["cancel_trip"].execute(
            record_id=trip.id, actor=tourist, reason="Flights cancelled"
        )

        assert response.message == "Custom trip cancelled successfully"
        assert response.data.kind == "custom"
        assert response.data.status == "cancelled"

        linked = await adapters.booking_repo.get_by_id(shadow.id)
        assert linked.status == "cancelled"
        assert linked.payment_status == "refunded"
        assert linked.refund_amount == Decimal("1600.00")
        assert linked.cancellation_reason == "Flights cancelled"

        [payload] = adapters.notification_gateway.sent_to(guide.id)
        assert payload["metadata"]["customTripId"] == trip.id
        assert payload["metadata"]["bookingId"] == shadow.id

    async def test_without_linked_booking(self, use_cases, adapters, custom_trip_factory, tourist):
        trip = await custom_trip_factory()

        response = await use_cases["cancel_trip"].execute(record_id=trip.id, actor=tourist)

        assert response.data.status == "cancelled"
        assert response.data.payment_status == "refunded"
        assert adapters.booking_repo.bookings == {}

    async def test_only_customer_may_cancel(self, use_cases, custom_trip_factory, guide):
        trip = await custom_trip_factory()
        with pytest.raises(AuthorizationError):
            await use_cases["cancel_trip"].execute(record_id=trip.id, actor=guide)

    async def test_completed_trip_rejected(self, use_cases, adapters, custom_trip_factory, tourist):
        trip = await custom_trip_factory(status="completed")

        with pytest.raises(TransitionError):
            await use_cases["cancel_trip"].execute(record_id=trip.id, actor=tourist)

        assert (await adapters.custom_trip_repo.get_by_id(trip.id)).status == "completed"


class TestConcurrentCancellation:
    """Dos cancelaciones que leyeron la misma versión: solo una puede escribir."""

    async def test_second_writer_rejected(self, adapters, booking_factory):
        booking = await booking_factory()
        cascade_reads = [
            await adapters.booking_repo.get_by_id(booking.id),
            await adapters.booking_repo.get_by_id(booking.id),
        ]

        cascade = CancellationCascade(adapters.booking_repo, adapters.custom_trip_repo)
        await cascade.cancel_booking(cascade_reads[0], "first")
        with pytest.raises(ConcurrentModificationError) as exc_info:
            await cascade.cancel_booking(cascade_reads[1], "second")

        assert exc_info.value.status_code == 409
        stored = await adapters.booking_repo.get_by_id(booking.id)
        assert stored.cancellation_reason == "first"
        assert stored.lock_version == 1

    async def test_losing_request_sends_no_notification(self, use_cases, adapters, booking_factory, tourist, monkeypatch):
        booking = await booking_factory()
        stale = await adapters.booking_repo.get_by_id(booking.id)

        # Otro request cancela entre la lectura y la escritura
        await use_cases["cancel_trip"].execute(record_id=booking.id, actor=tourist, reason="first")
        sent_before = len(adapters.notification_gateway.sent)

        async def stale_read(booking_id):
            return stale

        monkeypatch.setattr(adapters.booking_repo, "get_by_id", stale_read)
        with pytest.raises(ConcurrentModificationError):
            await use_cases["cancel_trip"].execute(record_id=booking.id, actor=tourist, reason="second")

        assert len(adapters.notification_gateway.sent) == sent_before
