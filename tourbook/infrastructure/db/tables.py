from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("first_name", String(150), nullable=False),
    Column("last_name", String(150), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("phone", String(50)),
    Column("role", String(20), nullable=False),
    Column("is_verified", Boolean, nullable=False, default=False),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("is_guest", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True)),
)

tours = Table(
    "tours",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("price", Numeric(12, 2), nullable=False),
    Column("duration", Integer, nullable=False),
    Column("location_name", String(255)),
    Column("guide_id", String(64)),
    Column("images", JSON),
    Column("itinerary", JSON),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("booking_reference", String(64), nullable=False),
    Column("user_id", String(64), nullable=False, index=True),
    Column("tour_id", String(64)),
    Column("guide_id", String(64), index=True),
    Column("custom_trip_id", String(64)),
    Column("booking_kind", String(16)),
    Column("booking_date", DateTime(timezone=True)),
    Column("start_date", DateTime(timezone=True)),
    Column("end_date", DateTime(timezone=True)),
    # Número de días (tour) o half-day/full-day/multi-day (guía)
    Column("duration", String(32)),
    Column("group_size", Integer, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("amount_paid", Numeric(12, 2)),
    Column("payment_date", DateTime(timezone=True)),
    Column("refund_amount", Numeric(12, 2)),
    Column("status", String(32), nullable=False),
    Column("payment_status", String(32), nullable=False),
    Column("special_requests", Text),
    Column("notes", Text),
    Column("cancellation_reason", Text),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), index=True),
    Column("updated_at", DateTime(timezone=True)),
)

custom_trips = Table(
    "custom_trips",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("customer_id", String(64), nullable=False, index=True),
    Column("request_details", JSON, nullable=False),
    Column("staff_assignment", JSON, nullable=False),
    Column("approval_details", JSON, nullable=False),
    Column("status", String(32), nullable=False),
    Column("payment_status", String(32), nullable=False),
    Column("booking_id", String(64)),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), index=True),
    Column("updated_at", DateTime(timezone=True)),
)

notifications = Table(
    "notifications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("recipient_id", String(64), nullable=False),
    Column("type", String(32), nullable=False),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=False),
    Column("priority", String(16), nullable=False),
    Column("related_booking_id", String(64), index=True),
    Column("action_url", String(255)),
    Column("action_text", String(100)),
    Column("metadata", JSON),
    Column("status", String(16), nullable=False),
    Column("attempts", Integer, nullable=False, default=0),
    Column("max_attempts", Integer, nullable=False, default=5),
    Column("next_attempt_at", DateTime(timezone=True)),
    Column("last_error", Text),
    Column("created_at", DateTime(timezone=True)),
    Column("delivered_at", DateTime(timezone=True)),
)
