"""
Circuit Breakers para los servicios externos de notificaciones y mensajería.

Circuit Breaker Pattern:
- CLOSED: operación normal, las llamadas pasan
- OPEN: demasiados fallos seguidos, las llamadas fallan de inmediato
- HALF_OPEN: se deja pasar una llamada para comprobar si el servicio volvió

Configuration:
- fail_max: fallos consecutivos antes de abrir el circuito
- reset_timeout: segundos antes de pasar a HALF_OPEN
"""

import logging
from typing import Any, Awaitable, Callable, TypeVar

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)

T = TypeVar("T")


notification_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="notification_circuit_breaker",
)

messaging_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="messaging_circuit_breaker",
)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str) -> None:
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        },
    )


class StateChangeLogger(CircuitBreakerListener):
    """Registra en el log cada cambio de estado del circuito."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        log_circuit_state_change(
            self.name,
            old_state.name if old_state else "none",
            new_state.name,
        )


notification_breaker.add_listener(StateChangeLogger("notification"))
messaging_breaker.add_listener(StateChangeLogger("messaging"))


async def call_with_breaker(
    breaker: CircuitBreaker,
    func: Callable[..., Awaitable[T]],
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Ejecuta una corrutina bajo el breaker.

    ``call_async`` de pybreaker depende de tornado; ``calling()`` registra
    el éxito o fallo de la corrutina igual que ``call``.
    """
    with breaker.calling():
        return await func(*args, **kwargs)


__all__ = [
    "notification_breaker",
    "messaging_breaker",
    "call_with_breaker",
    "CircuitBreakerError",
]
