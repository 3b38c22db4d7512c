"""Montos monetarios del dominio: siempre Decimal con 2 decimales."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    """
    Normaliza un monto a Decimal redondeado a centavos (half-up).

    Acepta Decimal, int, float o str; los float pasan por str para no
    arrastrar errores de representación binaria.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_money_or_none(value) -> Decimal | None:
    return None if value is None else to_money(value)
