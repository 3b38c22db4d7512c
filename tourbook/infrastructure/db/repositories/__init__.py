from tourbook.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from tourbook.infrastructure.db.repositories.catalog_repo_sql import TourRepoSQL, UserRepoSQL
from tourbook.infrastructure.db.repositories.custom_trip_repo_sql import CustomTripRepoSQL
from tourbook.infrastructure.db.repositories.notification_outbox_repo_sql import (
    NotificationOutboxRepoSQL,
)

__all__ = [
    "BookingRepoSQL",
    "CustomTripRepoSQL",
    "NotificationOutboxRepoSQL",
    "TourRepoSQL",
    "UserRepoSQL",
]
