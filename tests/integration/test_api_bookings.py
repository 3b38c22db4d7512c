"""
Flujo HTTP de bookings sobre la app FastAPI con adaptadores in-memory.

Verifica el envelope {success, message, data|error} y el mapeo de
errores de dominio a códigos HTTP.
"""

from datetime import timedelta

import pytest

TOURIST = {"X-User-Id": "user-tourist"}
GUIDE = {"X-User-Id": "user-guide"}
STAFF = {"X-User-Id": "user-staff"}
OTHER = {"X-User-Id": "user-other"}


def _iso(value) -> str:
    return value.isoformat()


@pytest.mark.asyncio
class TestBookingEndpoints:
    async def test_create_tour_booking(self, client, clock, adapters):
        resp = await client.post(
            "/api/v1/bookings",
            json={
                "tourId": "tour-1",
                "startDate": _iso(clock.now() + timedelta(days=10)),
                "endDate": _iso(clock.now() + timedelta(days=13)),
                "groupSize": 2,
            },
            headers=TOURIST,
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Tour booking created successfully"
        assert body["data"]["totalAmount"] == "200.00"
        assert body["data"]["status"] == "pending"
        assert body["data"]["paymentStatus"] == "pending"
        assert body["data"]["kind"] == "tour"
        assert len(adapters.notification_gateway.sent_to("user-guide")) == 1

    async def test_missing_fields_envelope(self, client):
        resp = await client.post("/api/v1/bookings", json={"tourId": "tour-1"}, headers=TOURIST)

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Missing required fields: startDate, endDate, groupSize"
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["fields"] == ["startDate", "endDate", "groupSize"]

    async def test_malformed_body_is_400(self, client):
        resp = await client.post("/api/v1/bookings", json={"groupSize": "many"}, headers=TOURIST)

        assert resp.status_code == 400
        assert resp.json()["error"]["fields"] == ["groupSize"]

    async def test_requires_user_header(self, client):
        resp = await client.get("/api/v1/bookings/user")

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    async def test_unknown_user(self, client):
        resp = await client.get("/api/v1/bookings/user", headers={"X-User-Id": "ghost"})
        assert resp.status_code == 401

    async def test_guest_guide_booking_without_auth(self, client, clock):
        resp = await client.post(
            "/api/v1/bookings/guide/guest",
            json={
                "guideId": "user-guide",
                "startDate": _iso(clock.now() + timedelta(days=3)),
                "endDate": _iso(clock.now() + timedelta(days=4)),
                "duration": "full-day",
                "groupSize": 3,
                "guestInfo": {
                    "firstName": "Mia",
                    "lastName": "Rossi",
                    "email": "mia@example.com",
                    "phone": "+94 77 000 0000",
                },
            },
        )

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["totalAmount"] == "150.00"
        assert data["bookingReference"].startswith("GB-GUEST-")

    async def test_list_user_trips(self, client, booking_factory, custom_trip_factory):
        await booking_factory()
        await booking_factory(tour_id=None, booking_kind="guide", duration="half-day")
        await custom_trip_factory()

        resp = await client.get("/api/v1/bookings/user?type=custom&page=1&limit=5", headers=TOURIST)

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert [item["kind"] for item in data["items"]] == ["custom"]
        assert data["pagination"] == {"current": 1, "pages": 1, "total": 1, "limit": 5}

    async def test_list_clamps_bad_pagination(self, client, booking_factory):
        await booking_factory()

        resp = await client.get("/api/v1/bookings/user?page=-2&limit=0", headers=TOURIST)

        assert resp.json()["data"]["pagination"]["current"] == 1
        assert resp.json()["data"]["pagination"]["limit"] == 1

    async def test_list_guide_bookings(self, client, booking_factory):
        await booking_factory()

        resp = await client.get("/api/v1/bookings/guide", headers=GUIDE)

        assert resp.status_code == 200
        assert resp.json()["data"]["pagination"]["total"] == 1
        assert resp.json()["data"]["items"][0]["tourist"]["email"] == "ana@example.com"

    async def test_get_trip_forbidden(self, client, booking_factory):
        booking = await booking_factory()

        resp = await client.get(f"/api/v1/bookings/{booking.id}", headers=OTHER)

        assert resp.status_code == 403
        assert resp.json() == {
            "success": False,
            "message": "Access denied",
            "error": {"code": "ACCESS_DENIED"},
        }

    async def test_get_trip_not_found(self, client):
        resp = await client.get("/api/v1/bookings/missing", headers=TOURIST)

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "BOOKING_NOT_FOUND"

    async def test_cancel_twice(self, client, booking_factory):
        booking = await booking_factory(status="confirmed")

        first = await client.put(
            f"/api/v1/bookings/{booking.id}/cancel",
            json={"cancellationReason": "Sick"},
            headers=TOURIST,
        )
        second = await client.put(f"/api/v1/bookings/{booking.id}/cancel", headers=TOURIST)

        assert first.status_code == 200
        assert first.json()["data"]["status"] == "cancelled"
        assert first.json()["data"]["paymentStatus"] == "refunded"
        assert first.json()["data"]["refundAmount"] == "200.00"
        assert second.status_code == 400
        assert second.json()["error"]["code"] == "INVALID_TRANSITION"
        assert second.json()["message"] == "Booking cannot be cancelled in current status"

    async def test_concurrent_modification_is_409(self, client, adapters, booking_factory, monkeypatch):
        booking = await booking_factory()
        stale = await adapters.booking_repo.get_by_id(booking.id)
        await client.put(f"/api/v1/bookings/{booking.id}/cancel", headers=TOURIST)

        async def stale_read(booking_id):
            return stale

        monkeypatch.setattr(adapters.booking_repo, "get_by_id", stale_read)
        resp = await client.put(f"/api/v1/bookings/{booking.id}/cancel", headers=GUIDE)

        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "CONCURRENT_MODIFICATION"

    async def test_update_status(self, client, booking_factory):
        booking = await booking_factory()

        ok = await client.put(
            f"/api/v1/bookings/{booking.id}/status",
            json={"status": "completed"},
            headers=STAFF,
        )
        bad = await client.put(
            f"/api/v1/bookings/{booking.id}/status",
            json={"status": "archived"},
            headers=STAFF,
        )

        assert ok.status_code == 200
        assert ok.json()["data"]["status"] == "completed"
        assert bad.status_code == 400
        assert bad.json()["error"]["fields"] == ["status"]

    async def test_confirm_payment(self, client, booking_factory):
        booking = await booking_factory()

        resp = await client.post(f"/api/v1/bookings/{booking.id}/confirm-payment", headers=TOURIST)

        assert resp.status_code == 200
        assert resp.json()["data"]["paymentStatus"] == "paid"
        assert resp.json()["data"]["amountPaid"] == "200.00"

    async def test_shadow_booking(self, client, custom_trip_factory):
        trip = await custom_trip_factory()

        created = await client.post(f"/api/v1/custom-trips/{trip.id}/booking", headers=STAFF)
        denied = await client.post(f"/api/v1/custom-trips/{trip.id}/booking", headers=TOURIST)

        assert created.status_code == 201
        assert created.json()["data"]["customTripId"] == trip.id
        assert denied.status_code == 403

    async def test_download_pdf(self, client, booking_factory):
        booking = await booking_factory()

        resp = await client.get(f"/api/v1/bookings/{booking.id}/download-pdf", headers=TOURIST)

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert resp.headers["content-disposition"] == (
            f'attachment; filename="booking-confirmation-{booking.id}.pdf"'
        )
        assert resp.content.startswith(b"%PDF")

    async def test_send_email_dependency_failure(self, client, adapters, booking_factory):
        booking = await booking_factory()
        adapters.messaging_gateway.fail_with = ConnectionError("smtp down")

        resp = await client.post(f"/api/v1/bookings/{booking.id}/send-confirmation-email", headers=TOURIST)

        assert resp.status_code == 500
        assert resp.json()["message"] == "Error sending email"
        assert resp.json()["error"]["code"] == "DEPENDENCY_FAILURE"

    async def test_unexpected_error_hides_details(self, client, adapters, monkeypatch):
        async def explode(*args, **kwargs):
            raise RuntimeError("secret connection string")

        monkeypatch.setattr(adapters.booking_repo, "find", explode)

        resp = await client.get("/api/v1/bookings/user", headers=TOURIST)

        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "INTERNAL_ERROR"
        assert "errorId" in body["error"]
        assert "secret" not in resp.text

    async def test_process_notifications_worker(self, client, adapters, clock, booking_factory):
        adapters.notification_gateway.fail_with = ConnectionError("down")
        booking = await booking_factory()
        await client.put(f"/api/v1/bookings/{booking.id}/cancel", headers=TOURIST)
        adapters.notification_gateway.fail_with = None
        clock.advance(minutes=1)

        resp = await client.post("/api/v1/workers/notifications/process")

        assert resp.status_code == 200
        assert resp.json() == {"processed": 1, "delivered": 1, "retrying": 0, "failed": 0}


@pytest.mark.asyncio
class TestHealthEndpoints:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.json() == {"status": "ok", "service": "tour-bookings-api"}

    async def test_ready_in_memory(self, client):
        resp = await client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"]["database"] == "in_memory"
