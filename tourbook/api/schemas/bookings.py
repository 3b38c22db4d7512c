from datetime import datetime
from decimal import Decimal
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, condecimal, constr, field_serializer
from pydantic.alias_generators import to_camel

Money = condecimal(max_digits=12, decimal_places=2)

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Requests ===


class CreateTourBookingRequest(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    tour_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    group_size: int | None = Field(default=None, ge=1)
    special_requests: str | None = None


class GuestInfo(CamelModel):
    first_name: constr(strip_whitespace=True) | None = None
    last_name: constr(strip_whitespace=True) | None = None
    email: EmailStr | None = None
    phone: str | None = None


class CreateGuideBookingRequest(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    guide_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    duration: str | None = None
    group_size: int | None = Field(default=None, ge=1)
    special_requests: str | None = None
    guest_info: GuestInfo | None = None


class CancelTripRequest(CamelModel):
    cancellation_reason: str | None = None


class UpdateBookingStatusRequest(CamelModel):
    status: str | None = None
    notes: str | None = None


class ConfirmPaymentRequest(CamelModel):
    amount_paid: Money | None = None


# === Views ===


class PersonSummary(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class TourSummary(CamelModel):
    id: str
    title: str
    description: str = ""
    price: Money
    duration: int
    location: str | None = None
    images: list[str] = Field(default_factory=list)
    itinerary: list[str] = Field(default_factory=list)


class HotelSummary(CamelModel):
    hotel_id: str
    hotel_name: str | None = None
    city: str | None = None
    check_in: datetime | None = None
    check_out: datetime | None = None
    rooms: int = 1
    room_type: str | None = None
    cost: Money = Decimal("0")


class VehicleSummary(CamelModel):
    vehicle_id: str
    vehicle_label: str | None = None
    driver_id: str | None = None
    driver_name: str | None = None
    cost: Money = Decimal("0")


class ItineraryDaySummary(CamelModel):
    day: int
    date: datetime | None = None
    location: str = ""
    activities: list[str] = Field(default_factory=list)
    accommodation: str | None = None
    meals: list[str] = Field(default_factory=list)


class CustomTripDetails(CamelModel):
    interests: list[str] = Field(default_factory=list)
    accommodation: str | None = None
    transport: str | None = None
    activities: list[str] = Field(default_factory=list)
    dietary_requirements: str | None = None
    accessibility: str | None = None


class TripSummary(CamelModel):
    """Proyección unificada de un booking o custom trip para listados."""

    id: str
    kind: str
    title: str
    description: str = ""
    images: list[str] = Field(default_factory=list)
    start_date: datetime | None = None
    end_date: datetime | None = None
    duration: int | str | None = None
    group_size: int
    total_amount: Money
    status: str
    payment_status: str
    location: str
    guide: PersonSummary | None = None
    tourist: PersonSummary | None = None
    special_requests: str | None = None
    booking_reference: str | None = None
    created_at: datetime | None = None
    booking_date: datetime | None = None
    hotels: list[HotelSummary] = Field(default_factory=list)
    custom_trip_details: CustomTripDetails | None = None

    @field_serializer("total_amount")
    def serialize_total_amount(self, value: Decimal) -> str:
        return format(value, ".2f")


class BookingView(TripSummary):
    """Vista detallada que devuelven las operaciones sobre un solo registro."""

    user_id: str | None = None
    tour: TourSummary | None = None
    custom_trip_id: str | None = None
    linked_booking_id: str | None = None
    refund_amount: Money | None = None
    amount_paid: Money | None = None
    cancellation_reason: str | None = None
    notes: str | None = None
    itinerary: list[ItineraryDaySummary] = Field(default_factory=list)
    vehicles: list[VehicleSummary] = Field(default_factory=list)
    budget_breakdown: dict[str, Money] | None = None


class Pagination(CamelModel):
    current: int
    pages: int
    total: int
    limit: int


class TripPage(CamelModel):
    items: list[TripSummary]
    pagination: Pagination


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: T | None = None


class ErrorBody(CamelModel):
    code: str
    fields: list[str] | None = None
    detail: Any | None = None
    error_id: str | None = None


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: ErrorBody
