"""Entidades del dominio de bookings."""

from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.custom_trip import (
    ApprovalDetails,
    AssignedVehicle,
    CustomTrip,
    HotelBooking,
    ItineraryDay,
    RequestDetails,
    StaffAssignment,
    TotalBudget,
)
from tourbook.domain.entities.notification import Notification, NotificationStatus
from tourbook.domain.entities.tour import Tour
from tourbook.domain.entities.user import User

__all__ = [
    # Booking
    "Booking",
    # CustomTrip
    "CustomTrip",
    "RequestDetails",
    "StaffAssignment",
    "HotelBooking",
    "AssignedVehicle",
    "ItineraryDay",
    "TotalBudget",
    "ApprovalDetails",
    # Catalog
    "Tour",
    "User",
    # Notification
    "Notification",
    "NotificationStatus",
]
