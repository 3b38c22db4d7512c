"""Value Object BookingReference - referencia legible de un booking."""

import re
import secrets
import string
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BookingReference:
    """
    Referencia opaca de un booking.

    Formato: ``[PREFIX-]{epoch_ms}-{9 caracteres base36 en mayúsculas}``.
    La unicidad es best-effort: no hay restricción de unicidad en el store.
    """

    value: str

    SUFFIX_LENGTH = 9
    ALLOWED_CHARS = string.digits + string.ascii_uppercase
    PATTERN = re.compile(r"^(?:(?:GB-GUEST|GB|CT)-)?\d+-[0-9A-Z]{9}$")

    TOUR_PREFIX = ""
    GUIDE_PREFIX = "GB-"
    GUEST_GUIDE_PREFIX = "GB-GUEST-"
    CUSTOM_TRIP_PREFIX = "CT-"

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("booking_reference no puede estar vacío")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, now: datetime, prefix: str = "") -> "BookingReference":
        timestamp_ms = int(now.timestamp() * 1000)
        suffix = "".join(secrets.choice(cls.ALLOWED_CHARS) for _ in range(cls.SUFFIX_LENGTH))
        return cls(value=f"{prefix}{timestamp_ms}-{suffix}")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(cls.PATTERN.match(value or ""))
