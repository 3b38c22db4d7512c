from tourbook.infrastructure.gateways.messaging_gateway_http import MessagingGatewayHTTP
from tourbook.infrastructure.gateways.notification_gateway_http import NotificationGatewayHTTP
from tourbook.infrastructure.gateways.pdf_invoice_renderer import PdfInvoiceRenderer

__all__ = [
    "MessagingGatewayHTTP",
    "NotificationGatewayHTTP",
    "PdfInvoiceRenderer",
]
