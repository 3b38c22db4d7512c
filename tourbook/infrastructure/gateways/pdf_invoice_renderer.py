"""Factura PDF de bookings y custom trips con reportlab."""

import asyncio
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib.colors import black, grey, HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from tourbook.application.interfaces.document_renderer import (
    TEMPLATE_CUSTOM_TRIP,
    DocumentContext,
    DocumentRenderer,
)

BRAND_COLOR = HexColor("#0f766e")


def _money(value) -> str:
    return "-" if value is None else f"${value:,.2f}"


def _date(value) -> str:
    return value.strftime("%B %d, %Y") if value else "-"


class InvoiceDocTemplate(SimpleDocTemplate):
    def afterPage(self):
        canvas = self.canv
        canvas.setAuthor("Tour Bookings")
        canvas.setTitle("Booking Invoice")


class PdfInvoiceRenderer(DocumentRenderer):
    def __init__(self, company_name: str = "Tour Bookings") -> None:
        self._company_name = company_name
        styles = getSampleStyleSheet()
        self._title = ParagraphStyle(
            "InvoiceTitle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=18,
            textColor=BRAND_COLOR,
        )
        self._heading = ParagraphStyle(
            "InvoiceHeading",
            parent=styles["Heading2"],
            fontSize=13,
            spaceBefore=8,
            spaceAfter=8,
            textColor=black,
        )
        self._normal = ParagraphStyle(
            "InvoiceNormal",
            parent=styles["Normal"],
            fontSize=10,
            leading=14,
            spaceAfter=4,
        )
        self._muted = ParagraphStyle("InvoiceMuted", parent=self._normal, textColor=grey)

    async def render_invoice(self, context: DocumentContext) -> bytes:
        # reportlab es síncrono; se ejecuta fuera del event loop
        return await asyncio.to_thread(self._build, context)

    def _build(self, context: DocumentContext) -> bytes:
        buffer = BytesIO()
        doc = InvoiceDocTemplate(buffer, pagesize=A4, topMargin=0.8 * inch)
        story = [Paragraph(escape(self._company_name), self._title)]
        story.extend(self._customer_section(context))
        if context.template == TEMPLATE_CUSTOM_TRIP and context.custom_trip:
            story.extend(self._custom_trip_section(context))
        else:
            story.extend(self._regular_section(context))
        story.append(Spacer(1, 24))
        story.append(Paragraph("Thank you for booking with us.", self._muted))
        doc.build(story)
        return buffer.getvalue()

    def _line(self, label: str, value) -> Paragraph:
        return Paragraph(f"<b>{escape(label)}:</b> {escape(str(value))}", self._normal)

    def _customer_section(self, context: DocumentContext) -> list:
        user = context.user
        booking = context.booking
        flowables = [Paragraph("Invoice", self._heading)]
        flowables.append(self._line("Document", context.document_id))
        if booking and booking.booking_reference:
            flowables.append(self._line("Reference", booking.booking_reference))
        if user:
            flowables.append(self._line("Customer", user.full_name))
            flowables.append(self._line("Email", user.email))
        if context.guide:
            flowables.append(self._line("Guide", context.guide.full_name))
        return flowables

    def _regular_section(self, context: DocumentContext) -> list:
        booking = context.booking
        tour = context.tour
        title = tour.title if tour else f"Guide Service ({booking.duration})"
        return [
            Paragraph("Booking Details", self._heading),
            self._line("Service", title),
            self._line("Start", _date(booking.start_date)),
            self._line("End", _date(booking.end_date)),
            self._line("Group size", booking.group_size),
            self._line("Status", booking.status),
            self._line("Payment", booking.payment_status),
            self._line("Total", _money(booking.total_amount)),
        ]

    def _custom_trip_section(self, context: DocumentContext) -> list:
        trip = context.custom_trip
        request = trip.request_details
        staff = trip.staff_assignment
        flowables = [
            Paragraph(escape(trip.title), self._heading),
            self._line("Start", _date(request.start_date)),
            self._line("End", _date(request.end_date)),
            self._line("Group size", request.group_size),
            self._line("Status", trip.status),
        ]

        if staff.itinerary:
            flowables.append(Paragraph("Itinerary", self._heading))
            for day in staff.itinerary:
                activities = ", ".join(day.activities) or "Free day"
                flowables.append(self._line(f"Day {day.day} - {day.location}", activities))

        if staff.hotel_bookings:
            flowables.append(Paragraph("Hotels", self._heading))
            for hotel in staff.hotel_bookings:
                label = hotel.hotel_name or hotel.hotel_id
                flowables.append(
                    self._line(label, f"{_date(hotel.check_in)} - {_date(hotel.check_out)}, {_money(hotel.cost)}")
                )

        if staff.assigned_vehicles:
            flowables.append(Paragraph("Transport", self._heading))
            for vehicle in staff.assigned_vehicles:
                label = vehicle.vehicle_label or vehicle.vehicle_id
                driver = vehicle.driver_name or "Driver to be assigned"
                flowables.append(self._line(label, f"{driver}, {_money(vehicle.cost)}"))

        flowables.append(Paragraph("Cost Breakdown", self._heading))
        budget = staff.total_budget
        if budget:
            flowables.extend(
                [
                    self._line("Guide fees", _money(budget.guide_fees)),
                    self._line("Vehicles", _money(budget.vehicle_costs)),
                    self._line("Hotels", _money(budget.hotel_costs)),
                    self._line("Activities", _money(budget.activity_costs)),
                    self._line("Additional fees", _money(budget.additional_fees)),
                ]
            )
        flowables.append(self._line("Total", _money(trip.total_amount)))
        return flowables
