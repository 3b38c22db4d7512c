"""Entidad Tour - catálogo de tours guiados."""

from dataclasses import dataclass, field
from decimal import Decimal

from tourbook.domain.value_objects.money import to_money


@dataclass
class Tour:
    id: str | None = None
    title: str = ""
    description: str = ""
    price: Decimal = Decimal("0")
    duration: int = 1
    location_name: str | None = None
    guide_id: str | None = None
    images: list[str] = field(default_factory=list)
    itinerary: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.price = to_money(self.price)
