"""Export service — trip order PDF generation."""

import io
import logging
from datetime import date
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.data.currency import format_cents
from app.models.activity import Activity
from app.models.itinerary import ItineraryDay
from app.models.trip import Trip
from app.services.financial_summary_service import financial_summary_service
from app.services.trip_status import format_status_label

logger = logging.getLogger(__name__)

HEADER_COLOR = colors.HexColor("#1F4E79")


def _table_style(header_color=colors.grey) -> TableStyle:
    return TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), header_color),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ])


class ExportService:
    """Generates client-facing trip documents."""

    async def generate_trip_order_pdf(self, db: AsyncSession, trip: Trip) -> bytes:
        """Trip order: header, travelers, activities with prices, service fees and totals."""
        summary = await financial_summary_service.get_summary(db, trip)
        currency = summary["trip_currency"]

        result = await db.execute(
            select(Activity, ItineraryDay)
            .join(ItineraryDay, ItineraryDay.id == Activity.itinerary_day_id)
            .options(selectinload(Activity.pricing))
            .where(Activity.trip_id == trip.id)
            .order_by(ItineraryDay.sequence_order, Activity.sequence_order)
        )
        activity_rows = result.all()

        buf = io.BytesIO()
        doc = SimpleDocTemplate(buf, pagesize=letter, topMargin=0.5 * inch)
        styles = getSampleStyleSheet()
        elements = []

        elements.append(Paragraph("Trip Order", styles["Title"]))
        elements.append(Spacer(1, 12))

        dates = "Dates to be confirmed"
        if trip.start_date:
            dates = f"{trip.start_date.isoformat()} to {(trip.end_date or trip.start_date).isoformat()}"
        info = [
            f"<b>Reference:</b> {escape(trip.reference_number or '—')}",
            f"<b>Trip:</b> {escape(trip.name)}",
            f"<b>Dates:</b> {dates}",
            f"<b>Status:</b> {format_status_label(trip.status)}",
            f"<b>Currency:</b> {currency}",
            f"<b>Generated:</b> {date.today().isoformat()}",
        ]
        for line in info:
            elements.append(Paragraph(line, styles["Normal"]))
        elements.append(Spacer(1, 12))

        travelers = summary["traveler_breakdown"]
        if travelers:
            elements.append(Paragraph("<b>Travelers</b>", styles["Heading2"]))
            data = [["Name", "Type", "Primary", "Share"]]
            for t in travelers:
                data.append([
                    t["traveler_name"],
                    t["traveler_type"].title(),
                    "Yes" if t["is_primary"] else "",
                    format_cents(t["total_in_trip_currency_cents"], currency),
                ])
            table = Table(data, colWidths=[2.8 * inch, 1 * inch, 0.8 * inch, 1.6 * inch])
            table.setStyle(_table_style(HEADER_COLOR))
            elements.append(table)
            elements.append(Spacer(1, 12))

        if activity_rows:
            elements.append(Paragraph("<b>Activities</b>", styles["Heading2"]))
            data = [["Day", "Type", "Activity", "Price"]]
            for activity, day in activity_rows:
                pricing = activity.pricing
                price = format_cents(pricing.total_price_cents, pricing.currency) if pricing else "—"
                data.append([
                    f"Day {day.day_number}" if day.day_number else "",
                    activity.activity_type.replace("_", " ").title(),
                    activity.name[:60],
                    price,
                ])
            table = Table(data, colWidths=[0.8 * inch, 1.2 * inch, 3 * inch, 1.2 * inch])
            table.setStyle(_table_style(HEADER_COLOR))
            table.setStyle(TableStyle([("ALIGN", (3, 1), (3, -1), "RIGHT")]))
            elements.append(table)
            elements.append(Spacer(1, 12))

        fees = summary["service_fees_summary"]
        if any(fees["count_by_status"].values()):
            elements.append(Paragraph("<b>Service Fees</b>", styles["Heading2"]))
            data = [["Status", "Count", "Amount"]]
            for status, count in fees["count_by_status"].items():
                if count:
                    data.append([
                        status.replace("_", " ").title(),
                        str(count),
                        format_cents(fees["by_status"][status], currency),
                    ])
            table = Table(data, colWidths=[2.5 * inch, 1 * inch, 2 * inch])
            table.setStyle(_table_style())
            elements.append(table)
            elements.append(Spacer(1, 12))

        grand = summary["grand_total"]
        elements.append(Paragraph("<b>Totals</b>", styles["Heading2"]))
        data = [
            ["", f"Amount ({currency})"],
            ["Activities", format_cents(summary["activities_summary"]["total_in_trip_currency_cents"], currency)],
            ["Service fees", format_cents(fees["total_in_trip_currency_cents"], currency)],
            ["Total", format_cents(grand["total_cost_cents"], currency)],
            ["Collected", format_cents(grand["total_collected_cents"], currency)],
            ["Outstanding", format_cents(grand["outstanding_cents"], currency)],
        ]
        table = Table(data, colWidths=[3 * inch, 3 * inch])
        table.setStyle(_table_style(HEADER_COLOR))
        table.setStyle(TableStyle([("ALIGN", (1, 1), (1, -1), "RIGHT")]))
        elements.append(table)

        doc.build(elements)
        logger.info(f"Generated trip order PDF for {trip.reference_number}")
        return buf.getvalue()


export_service = ExportService()
