"""Interfaces (Puertos) de la capa de aplicación."""

from tourbook.application.interfaces.booking_repo import BookingFilter, BookingRepo
from tourbook.application.interfaces.catalog_repo import TourRepo, UserRepo
from tourbook.application.interfaces.clock import Clock, FakeClock, SystemClock
from tourbook.application.interfaces.custom_trip_repo import CustomTripRepo
from tourbook.application.interfaces.document_renderer import (
    DocumentContext,
    DocumentRenderer,
    MessagingGateway,
)
from tourbook.application.interfaces.id_generator import (
    FakeIdGenerator,
    IdGenerator,
    UUIDIdGenerator,
)
from tourbook.application.interfaces.notification_gateway import NotificationGateway
from tourbook.application.interfaces.notification_outbox_repo import NotificationOutboxRepo
from tourbook.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "BookingRepo",
    "BookingFilter",
    "CustomTripRepo",
    "TourRepo",
    "UserRepo",
    "NotificationOutboxRepo",
    # Gateways
    "NotificationGateway",
    "DocumentRenderer",
    "MessagingGateway",
    "DocumentContext",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "UUIDIdGenerator",
    "FakeIdGenerator",
]
