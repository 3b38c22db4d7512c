"""Servicios de aplicación compartidos por los casos de uso."""

from tourbook.application.services.booking_notifier import BookingNotifier
from tourbook.application.services.cancellation_cascade import CancellationCascade
from tourbook.application.services.document_resolver import BookingDocumentResolver
from tourbook.application.services.notification_dispatcher import NotificationDispatcher
from tourbook.application.services.relation_loader import RelationLoader
from tourbook.application.services.trip_projector import TripProjector

__all__ = [
    "BookingNotifier",
    "BookingDocumentResolver",
    "CancellationCascade",
    "NotificationDispatcher",
    "RelationLoader",
    "TripProjector",
]
