"""Entidad Booking - registro comercial genérico (tour, guía o sombra de custom trip)."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from tourbook.domain.constants import (
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
    PAYMENT_STATUS_REFUNDED,
    TERMINAL_STATUSES,
)
from tourbook.domain.value_objects.date_range import DateRange
from tourbook.domain.value_objects.money import to_money, to_money_or_none

if TYPE_CHECKING:
    from tourbook.domain.entities.tour import Tour
    from tourbook.domain.entities.user import User


@dataclass
class Booking:
    """
    Reserva genérica de un turista.

    Puede representar un tour, un servicio directo de guía o la sombra
    comercial de un CustomTrip confirmado. Nunca se borra físicamente:
    la cancelación es una transición de estado.
    """

    # Identificadores
    id: str | None = None
    booking_reference: str | None = None

    # Referencias
    user_id: str = ""
    tour_id: str | None = None
    guide_id: str | None = None
    custom_trip_id: str | None = None

    # Discriminador explícito; None en registros anteriores a su introducción
    booking_kind: str | None = None

    # Fechas. duration es un número de días (tour) o un valor de GUIDE_DURATIONS (guía)
    booking_date: datetime | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    duration: int | str | None = None

    # Comerciales
    group_size: int = 1
    total_amount: Decimal = Decimal("0")
    amount_paid: Decimal | None = None
    payment_date: datetime | None = None
    refund_amount: Decimal | None = None

    # Estados
    status: str = BOOKING_STATUS_PENDING
    payment_status: str = PAYMENT_STATUS_PENDING

    # Texto libre
    special_requests: str | None = None
    notes: str | None = None
    cancellation_reason: str | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Relaciones resueltas (no persistidas)
    tour: "Tour | None" = None
    guide: "User | None" = None
    user: "User | None" = None

    def __post_init__(self) -> None:
        if self.tour_id and self.custom_trip_id:
            raise ValueError("Un booking no puede ser de tour y sombra de custom trip a la vez")
        self.total_amount = to_money(self.total_amount)
        self.amount_paid = to_money_or_none(self.amount_paid)
        self.refund_amount = to_money_or_none(self.refund_amount)

    # === Propiedades ===

    @property
    def date_range(self) -> DateRange | None:
        if self.start_date and self.end_date and self.start_date < self.end_date:
            return DateRange(start=self.start_date, end=self.end_date)
        return None

    @property
    def is_custom_trip_shadow(self) -> bool:
        return bool(self.custom_trip_id)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def can_be_cancelled(self) -> bool:
        return not self.is_terminal

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id

    def is_guided_by(self, user_id: str) -> bool:
        return bool(self.guide_id) and self.guide_id == user_id

    # === Métodos de negocio ===

    def cancel(self, reason: str | None = None) -> None:
        """Cancela el booking y registra el reembolso total."""
        self.status = BOOKING_STATUS_CANCELLED
        self.payment_status = PAYMENT_STATUS_REFUNDED
        self.refund_amount = self.total_amount
        self.cancellation_reason = reason

    def change_status(self, status: str, notes: str | None = None) -> None:
        self.status = status
        if notes:
            self.notes = notes

    def mark_as_paid(self, amount: Decimal, paid_at: datetime) -> None:
        self.payment_status = PAYMENT_STATUS_PAID
        self.amount_paid = to_money(amount)
        self.payment_date = paid_at
        self.status = BOOKING_STATUS_CONFIRMED
