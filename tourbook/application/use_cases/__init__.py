from tourbook.application.use_cases.booking_documents import (
    DownloadInvoiceUseCase,
    InvoiceDocument,
    SendConfirmationEmailUseCase,
)
from tourbook.application.use_cases.cancel_trip import CancelTripUseCase
from tourbook.application.use_cases.confirm_payment import ConfirmPaymentUseCase
from tourbook.application.use_cases.create_guide_booking import CreateGuideBookingUseCase
from tourbook.application.use_cases.create_shadow_booking import CreateShadowBookingUseCase
from tourbook.application.use_cases.create_tour_booking import CreateTourBookingUseCase
from tourbook.application.use_cases.get_trip import GetTripUseCase
from tourbook.application.use_cases.list_guide_bookings import ListGuideBookingsUseCase
from tourbook.application.use_cases.list_user_trips import ListUserTripsUseCase
from tourbook.application.use_cases.process_notification_outbox import (
    ProcessNotificationOutboxUseCase,
)
from tourbook.application.use_cases.update_booking_status import UpdateBookingStatusUseCase

__all__ = [
    "CancelTripUseCase",
    "ConfirmPaymentUseCase",
    "CreateGuideBookingUseCase",
    "CreateShadowBookingUseCase",
    "CreateTourBookingUseCase",
    "DownloadInvoiceUseCase",
    "GetTripUseCase",
    "InvoiceDocument",
    "ListGuideBookingsUseCase",
    "ListUserTripsUseCase",
    "ProcessNotificationOutboxUseCase",
    "SendConfirmationEmailUseCase",
    "UpdateBookingStatusUseCase",
]
