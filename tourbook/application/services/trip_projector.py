"""Proyección de bookings y custom trips a la forma unificada TripSummary / BookingView."""

from dataclasses import asdict

from tourbook.api.schemas.bookings import (
    BookingView,
    CustomTripDetails,
    HotelSummary,
    ItineraryDaySummary,
    PersonSummary,
    TourSummary,
    TripSummary,
    VehicleSummary,
)
from tourbook.domain.classifier import resolve_booking_kind
from tourbook.domain.constants import KIND_CUSTOM, KIND_GUIDE
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import CustomTrip
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User

DEFAULT_LOCATION = "Sri Lanka"


def _person(user: User | None) -> PersonSummary | None:
    if user is None or user.id is None:
        return None
    return PersonSummary(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        phone=user.phone,
    )


def _tour(tour: Tour | None) -> TourSummary | None:
    if tour is None or tour.id is None:
        return None
    return TourSummary(
        id=tour.id,
        title=tour.title,
        description=tour.description,
        price=tour.price,
        duration=tour.duration,
        location=tour.location_name,
        images=list(tour.images),
        itinerary=list(tour.itinerary),
    )


class TripProjector:
    def __init__(self, default_location: str = DEFAULT_LOCATION) -> None:
        self._default_location = default_location

    # === Listados ===

    def booking_summary(
        self,
        booking: Booking,
        kind: str | None = None,
        include_tourist: bool = False,
    ) -> TripSummary:
        """``include_tourist`` agrega quién reservó; lo usan los listados del guía."""
        fields = self._booking_fields(booking, kind or resolve_booking_kind(booking))
        if include_tourist:
            fields["tourist"] = _person(booking.user)
        return TripSummary(**fields)

    def custom_trip_summary(self, trip: CustomTrip) -> TripSummary:
        return TripSummary(**self._custom_trip_fields(trip))

    # === Detalle ===

    def booking_view(self, booking: Booking) -> BookingView:
        kind = resolve_booking_kind(booking)
        return BookingView(
            **self._booking_fields(booking, kind),
            user_id=booking.user_id,
            tour=_tour(booking.tour),
            custom_trip_id=booking.custom_trip_id,
            refund_amount=booking.refund_amount,
            amount_paid=booking.amount_paid,
            cancellation_reason=booking.cancellation_reason,
            notes=booking.notes,
        )

    def custom_trip_view(self, trip: CustomTrip) -> BookingView:
        staff = trip.staff_assignment
        budget = staff.total_budget
        return BookingView(
            **self._custom_trip_fields(trip),
            user_id=trip.customer_id,
            linked_booking_id=trip.booking_id,
            itinerary=[ItineraryDaySummary(**asdict(day)) for day in staff.itinerary],
            vehicles=[
                VehicleSummary(
                    vehicle_id=v.vehicle_id,
                    vehicle_label=v.vehicle_label,
                    driver_id=v.driver_id,
                    driver_name=v.driver_name,
                    cost=v.cost,
                )
                for v in staff.assigned_vehicles
            ],
            budget_breakdown=asdict(budget) if budget else None,
        )

    # === Internos ===

    def _booking_fields(self, booking: Booking, kind: str) -> dict:
        tour = booking.tour
        if kind == KIND_GUIDE:
            guide = booking.guide
            guide_name = f"{guide.first_name} {guide.last_name}" if guide else "Guide"
            title = f"Guide Service with {guide_name}"
            description = "Personal Guide Service"
            location = self._default_location
        else:
            title = tour.title if tour else "Tour Booking"
            description = tour.description if tour else ""
            location = (tour.location_name if tour else None) or self._default_location
        return {
            "id": booking.id,
            "kind": kind,
            "title": title,
            "description": description,
            "images": list(tour.images) if tour and kind != KIND_GUIDE else [],
            "start_date": booking.start_date,
            "end_date": booking.end_date,
            "duration": booking.duration,
            "group_size": booking.group_size,
            "total_amount": booking.total_amount,
            "status": booking.status,
            "payment_status": booking.payment_status,
            "location": location,
            "guide": _person(booking.guide),
            "special_requests": booking.special_requests,
            "booking_reference": booking.booking_reference,
            "created_at": booking.created_at,
            "booking_date": booking.booking_date,
        }

    def _custom_trip_fields(self, trip: CustomTrip) -> dict:
        request = trip.request_details
        staff = trip.staff_assignment
        return {
            "id": trip.id,
            "kind": KIND_CUSTOM,
            "title": trip.title,
            "description": f"Personalized {request.destination} adventure",
            "images": [],
            "start_date": request.start_date,
            "end_date": request.end_date,
            "duration": "multi-day",
            "group_size": request.group_size,
            "total_amount": trip.total_amount,
            "status": trip.status,
            "payment_status": trip.payment_status,
            "location": request.destination or self._default_location,
            "guide": _person(trip.assigned_guide),
            "special_requests": request.special_requests,
            "created_at": trip.created_at,
            "booking_date": trip.created_at,
            "hotels": [HotelSummary(**asdict(hotel)) for hotel in staff.hotel_bookings],
            "custom_trip_details": CustomTripDetails(
                interests=list(request.interests),
                accommodation=request.accommodation,
                transport=request.transport,
                activities=list(request.activities),
                dietary_requirements=request.dietary_requirements,
                accessibility=request.accessibility,
            ),
        }
