"""Value Object DateRange - rango de fechas de un viaje."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True)
class DateRange:
    """
    Rango inmutable de fechas de inicio y fin de un viaje.

    Attributes:
        start: Fecha de inicio.
        end: Fecha de fin (estrictamente posterior a start).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"start debe ser anterior a end: {self.start} >= {self.end}")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def days(self) -> int:
        """Días del rango; cualquier fracción de día cuenta como día completo."""
        return math.ceil(self.duration.total_seconds() / 86400)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"


def ensure_utc(value: datetime) -> datetime:
    """Fechas sin zona horaria se interpretan como UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
