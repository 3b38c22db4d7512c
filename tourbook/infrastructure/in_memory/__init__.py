"""Implementaciones in-memory para testing y desarrollo local."""

from tourbook.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from tourbook.infrastructure.in_memory.catalog_repo import InMemoryTourRepo, InMemoryUserRepo
from tourbook.infrastructure.in_memory.custom_trip_repo import InMemoryCustomTripRepo
from tourbook.infrastructure.in_memory.gateways import (
    RecordingMessagingGateway,
    RecordingNotificationGateway,
)
from tourbook.infrastructure.in_memory.notification_outbox_repo import (
    InMemoryNotificationOutboxRepo,
)
from tourbook.infrastructure.in_memory.transaction_manager import (
    NoopTransactionManager as InMemoryTransactionManager,
)

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    "InMemoryCustomTripRepo",
    "InMemoryTourRepo",
    "InMemoryUserRepo",
    "InMemoryNotificationOutboxRepo",
    # Gateways
    "RecordingNotificationGateway",
    "RecordingMessagingGateway",
    # Infrastructure
    "InMemoryTransactionManager",
]
