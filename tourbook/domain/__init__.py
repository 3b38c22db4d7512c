"""
Capa de Dominio - Motor de bookings.

Lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Booking, CustomTrip, User, Tour, Notification
- value_objects/: BookingReference, DateRange, PageRequest
- classifier.py: clasificación tour / guía de bookings genéricos
- errors.py: excepciones del dominio
- constants.py: vocabulario de estados, tipos y roles
"""

from tourbook.domain.classifier import classify_legacy_booking, resolve_booking_kind
from tourbook.domain.entities import Booking, CustomTrip, Notification, Tour, User
from tourbook.domain.errors import (
    AuthorizationError,
    BookingNotFoundError,
    ConcurrentModificationError,
    DependencyFailure,
    DomainError,
    NotFoundError,
    TransitionError,
    ValidationError,
)
from tourbook.domain.value_objects import BookingReference, DateRange, PageRequest

__all__ = [
    "classify_legacy_booking",
    "resolve_booking_kind",
    # Entities
    "Booking",
    "CustomTrip",
    "Notification",
    "Tour",
    "User",
    # Value Objects
    "BookingReference",
    "DateRange",
    "PageRequest",
    # Errors
    "DomainError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "BookingNotFoundError",
    "TransitionError",
    "ConcurrentModificationError",
    "DependencyFailure",
]
