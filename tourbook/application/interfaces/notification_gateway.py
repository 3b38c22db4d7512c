from typing import Any


class NotificationGateway:
    async def send(self, payload: dict[str, Any]) -> None:
        """
        Entrega una notificación al subsistema externo.

        Raises:
            Exception: cualquier fallo de entrega; el dispatcher lo captura.
        """
        raise NotImplementedError
