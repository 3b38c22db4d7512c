"""Constantes del dominio de bookings."""

BOOKING_STATUS_PENDING = "pending"
BOOKING_STATUS_CONFIRMED = "confirmed"
BOOKING_STATUS_CANCELLED = "cancelled"
BOOKING_STATUS_COMPLETED = "completed"

BOOKING_STATUSES = (
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
)
TERMINAL_STATUSES = (BOOKING_STATUS_CANCELLED, BOOKING_STATUS_COMPLETED)

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_FAILED = "failed"
PAYMENT_STATUS_REFUNDED = "refunded"

KIND_TOUR = "tour"
KIND_GUIDE = "guide"
KIND_CUSTOM = "custom"
BOOKING_KINDS = (KIND_TOUR, KIND_GUIDE, KIND_CUSTOM)

# Durations accepted for direct guide bookings.
GUIDE_DURATIONS = ("half-day", "full-day", "multi-day")

ROLE_TOURIST = "tourist"
ROLE_GUIDE = "guide"
ROLE_STAFF = "staff"
ROLE_ADMIN = "admin"
STATUS_UPDATE_ROLES = (ROLE_ADMIN, ROLE_GUIDE, ROLE_STAFF)
SHADOW_BOOKING_ROLES = (ROLE_ADMIN, ROLE_STAFF)

NOTIFICATION_TYPE_BOOKING = "booking"
NOTIFICATION_TYPE_CANCELLATION = "cancellation"
NOTIFICATION_PRIORITY_HIGH = "high"
NOTIFICATION_PRIORITY_MEDIUM = "medium"
