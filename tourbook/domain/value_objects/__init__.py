"""Value Objects del dominio de bookings."""

from tourbook.domain.value_objects.booking_reference import BookingReference
from tourbook.domain.value_objects.date_range import DateRange, ensure_utc
from tourbook.domain.value_objects.money import to_money, to_money_or_none
from tourbook.domain.value_objects.page_request import PageRequest

__all__ = [
    "BookingReference",
    "DateRange",
    "ensure_utc",
    "PageRequest",
    "to_money",
    "to_money_or_none",
]
