"""Entidad CustomTrip - itinerario a medida curado por staff."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from tourbook.domain.constants import (
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
    PAYMENT_STATUS_REFUNDED,
    TERMINAL_STATUSES,
)
from tourbook.domain.value_objects.money import to_money

if TYPE_CHECKING:
    from tourbook.domain.entities.user import User


@dataclass
class RequestDetails:
    """Lo que el cliente pidió originalmente."""

    destination: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    group_size: int = 1
    budget: Decimal = Decimal("0")
    interests: list[str] = field(default_factory=list)
    activities: list[str] = field(default_factory=list)
    accommodation: str | None = None
    transport: str | None = None
    special_requests: str | None = None
    dietary_requirements: str | None = None
    accessibility: str | None = None

    def __post_init__(self) -> None:
        self.budget = to_money(self.budget)


@dataclass
class HotelBooking:
    hotel_id: str = ""
    hotel_name: str | None = None
    city: str | None = None
    check_in: datetime | None = None
    check_out: datetime | None = None
    rooms: int = 1
    room_type: str | None = None
    cost: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.cost = to_money(self.cost)


@dataclass
class AssignedVehicle:
    vehicle_id: str = ""
    vehicle_label: str | None = None
    driver_id: str | None = None
    driver_name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    cost: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.cost = to_money(self.cost)


@dataclass
class ItineraryDay:
    day: int = 1
    date: datetime | None = None
    location: str = ""
    activities: list[str] = field(default_factory=list)
    accommodation: str | None = None
    meals: list[str] = field(default_factory=list)


@dataclass
class TotalBudget:
    guide_fees: Decimal = Decimal("0")
    vehicle_costs: Decimal = Decimal("0")
    hotel_costs: Decimal = Decimal("0")
    activity_costs: Decimal = Decimal("0")
    additional_fees: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in (
            "guide_fees",
            "vehicle_costs",
            "hotel_costs",
            "activity_costs",
            "additional_fees",
            "total_amount",
        ):
            setattr(self, name, to_money(getattr(self, name)))


@dataclass
class StaffAssignment:
    """Asignaciones que el staff completa de forma incremental."""

    assigned_guide_id: str | None = None
    hotel_bookings: list[HotelBooking] = field(default_factory=list)
    assigned_vehicles: list[AssignedVehicle] = field(default_factory=list)
    itinerary: list[ItineraryDay] = field(default_factory=list)
    total_budget: TotalBudget | None = None
    notes: str | None = None


@dataclass
class ApprovalDetails:
    approved_by: str | None = None
    approved_at: datetime | None = None
    rejected_by: str | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None


@dataclass
class CustomTrip:
    """
    Viaje a medida.

    Una vez acordados los términos se crea un Booking sombra y se enlaza
    en ``booking_id``. La cancelación del viaje arrastra al booking sombra.
    """

    id: str | None = None
    customer_id: str = ""

    request_details: RequestDetails = field(default_factory=RequestDetails)
    staff_assignment: StaffAssignment = field(default_factory=StaffAssignment)
    approval_details: ApprovalDetails = field(default_factory=ApprovalDetails)

    status: str = BOOKING_STATUS_PENDING
    payment_status: str = PAYMENT_STATUS_PENDING

    booking_id: str | None = None

    lock_version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Relaciones resueltas (no persistidas)
    customer: "User | None" = None
    assigned_guide: "User | None" = None

    @property
    def title(self) -> str:
        return f"Custom Trip to {self.request_details.destination}"

    @property
    def total_amount(self) -> Decimal:
        """Total asignado por staff; si no existe, el presupuesto pedido por el cliente."""
        budget = self.staff_assignment.total_budget
        if budget and budget.total_amount:
            return budget.total_amount
        return self.request_details.budget

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def can_be_cancelled(self) -> bool:
        return not self.is_terminal

    def is_owned_by(self, user_id: str) -> bool:
        return self.customer_id == user_id

    def cancel(self) -> None:
        self.status = BOOKING_STATUS_CANCELLED
        self.payment_status = PAYMENT_STATUS_REFUNDED

    def mark_as_paid(self) -> None:
        self.status = BOOKING_STATUS_CONFIRMED
        self.payment_status = PAYMENT_STATUS_PAID

    def link_booking(self, booking_id: str) -> None:
        self.booking_id = booking_id
