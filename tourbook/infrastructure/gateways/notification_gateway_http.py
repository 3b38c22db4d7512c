import logging
from typing import Any

import httpx

from tourbook.application.interfaces.notification_gateway import NotificationGateway
from tourbook.infrastructure.circuit_breaker import call_with_breaker, notification_breaker

logger = logging.getLogger(__name__)


class NotificationGatewayHTTP(NotificationGateway):
    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def send(self, payload: dict[str, Any]) -> None:
        """
        Publica la notificación en el servicio externo, protegido por circuit breaker.

        Cualquier error (timeout, HTTP no-2xx, circuito abierto) se propaga;
        el NotificationDispatcher lo captura y programa el reintento.
        """
        url = f"{self._base_url}/notifications"

        async def _make_request() -> httpx.Response:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response

        response = await call_with_breaker(notification_breaker, _make_request)
        logger.debug(
            "Notification delivered",
            extra={"recipient_id": payload.get("recipientUserId"), "http_status": response.status_code},
        )
