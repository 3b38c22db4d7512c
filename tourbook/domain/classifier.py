"""
Clasificación de bookings genéricos en tour / guía.

Los registros antiguos no guardan un discriminador, así que el tipo se
infiere de la forma de los campos. Los nuevos guardan ``booking_kind`` y
la heurística solo aplica como fallback para los anteriores.
"""

from typing import Any

from tourbook.domain.constants import BOOKING_KINDS, GUIDE_DURATIONS, KIND_GUIDE, KIND_TOUR


def classify_legacy_booking(booking: Any) -> str:
    """
    Heurística por forma de campos.

    Es guía si y solo si tiene guía, no tiene tour, no está enlazado a un
    custom trip y ``duration`` es un string de GUIDE_DURATIONS. Cualquier
    otra combinación se trata como tour, incluido un tour cuya referencia
    ya no resuelve.
    """
    duration = getattr(booking, "duration", None)
    if (
        getattr(booking, "guide_id", None)
        and not getattr(booking, "tour_id", None)
        and not getattr(booking, "custom_trip_id", None)
        and isinstance(duration, str)
        and duration in GUIDE_DURATIONS
    ):
        return KIND_GUIDE
    return KIND_TOUR


def resolve_booking_kind(booking: Any) -> str:
    """Usa el discriminador guardado si existe; si no, la heurística."""
    stored = getattr(booking, "booking_kind", None)
    if stored in BOOKING_KINDS:
        return stored
    return classify_legacy_booking(booking)
