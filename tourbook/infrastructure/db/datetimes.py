from datetime import datetime, timezone


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite devuelve datetimes sin zona; se asumen UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
