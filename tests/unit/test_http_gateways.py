import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from pybreaker import CircuitBreakerError

from tourbook.application.interfaces.document_renderer import DocumentContext
from tourbook.domain.entities.booking import Booking
from tourbook.domain.entities.user import User
from tourbook.infrastructure.circuit_breaker import messaging_breaker, notification_breaker
from tourbook.infrastructure.gateways import MessagingGatewayHTTP, NotificationGatewayHTTP
from tourbook.infrastructure.gateways.messaging_gateway_http import build_confirmation_payload


def _mock_client(mock_client_cls, response=None, error=None):
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    if error is not None:
        mock_client.post.side_effect = error
    else:
        mock_client.post.return_value = response
    mock_client_cls.return_value = mock_client
    return mock_client


class TestNotificationGatewayHTTP(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        notification_breaker.close()
        self.gateway = NotificationGatewayHTTP(base_url="http://notify.test/api/", timeout_seconds=2.0)
        self.payload = {"recipientUserId": "user-guide", "title": "New Tour Booking Request"}

    def tearDown(self):
        notification_breaker.close()

    @patch("httpx.AsyncClient")
    async def test_posts_payload(self, mock_client_cls):
        mock_resp = MagicMock()
        mock_resp.status_code = 201
        mock_client = _mock_client(mock_client_cls, response=mock_resp)

        await self.gateway.send(self.payload)

        args, kwargs = mock_client.post.call_args
        self.assertEqual(args[0], "http://notify.test/api/notifications")
        self.assertEqual(kwargs["json"], self.payload)
        mock_client_cls.assert_called_once_with(timeout=2.0)

    @patch("httpx.AsyncClient")
    async def test_transport_error_propagates(self, mock_client_cls):
        _mock_client(mock_client_cls, error=httpx.ConnectError("refused"))

        with self.assertRaises(httpx.ConnectError):
            await self.gateway.send(self.payload)

    @patch("httpx.AsyncClient")
    async def test_open_circuit_short_circuits(self, mock_client_cls):
        mock_client = _mock_client(mock_client_cls, response=MagicMock())
        notification_breaker.open()

        with self.assertRaises(CircuitBreakerError):
            await self.gateway.send(self.payload)

        mock_client.post.assert_not_called()


class TestMessagingGatewayHTTP(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        messaging_breaker.close()
        self.gateway = MessagingGatewayHTTP(base_url="http://mail.test")
        self.context = DocumentContext(
            template="regular",
            user=User(id="user-tourist", first_name="Ana", last_name="Silva", email="ana@example.com"),
            booking=Booking(id="bk-001", booking_reference="1736935200001-ABCDEFGH1", user_id="user-tourist"),
        )

    def tearDown(self):
        messaging_breaker.close()

    def test_payload_for_guide_service(self):
        payload = build_confirmation_payload(self.context)

        self.assertEqual(payload["to"], "ana@example.com")
        self.assertEqual(payload["customerName"], "Ana Silva")
        self.assertEqual(payload["bookingId"], "bk-001")
        self.assertEqual(payload["title"], "Guide Service")
        self.assertEqual(payload["totalAmount"], "0.00")

    @patch("httpx.AsyncClient")
    async def test_returns_service_body(self, mock_client_cls):
        mock_resp = MagicMock()
        mock_resp.json.return_value = {"messageId": "msg-1"}
        mock_client = _mock_client(mock_client_cls, response=mock_resp)

        result = await self.gateway.send_booking_confirmation(self.context)

        self.assertEqual(result, {"messageId": "msg-1"})
        args, _ = mock_client.post.call_args
        self.assertEqual(args[0], "http://mail.test/emails/booking-confirmation")

    @patch("httpx.AsyncClient")
    async def test_non_json_body(self, mock_client_cls):
        mock_resp = MagicMock()
        mock_resp.json.side_effect = ValueError("no json")
        _mock_client(mock_client_cls, response=mock_resp)

        result = await self.gateway.send_booking_confirmation(self.context)

        self.assertEqual(result, {"recipient": "ana@example.com"})
