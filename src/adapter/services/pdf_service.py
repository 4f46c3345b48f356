"""ReportLab PDF Generation Service Implementation

Renders patient invoices using the ReportLab library.
"""

from datetime import datetime
from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.calculations import days_overdue, is_invoice_overdue
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine

HEADER_BLUE = colors.HexColor("#1F4E79")
MUTED = colors.HexColor("#7F8C8D")
RULE = colors.HexColor("#BDC3C7")
ALERT = colors.HexColor("#C0392B")
COLUMNS = [70 * mm, 30 * mm, 15 * mm, 27 * mm, 28 * mm]


def _money(currency: str, amount) -> str:
    return f"{currency} {amount:,.2f}"


def _category_label(category) -> str:
    return category.value.replace("_", " ").title()


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout: hospital header, invoice/patient details, line items, totals
    breakdown, payment status footer.
    """

    def __init__(self, now: Optional[datetime] = None):
        self._now = now

    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        hospital_name: str,
        hospital_address: str,
    ) -> bytes:
        now = self._now or datetime.utcnow()
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=invoice.invoice_number,
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "HospitalName",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=HEADER_BLUE,
        )
        label_style = ParagraphStyle(
            "DocumentLabel",
            parent=styles["Heading2"],
            fontSize=14,
            spaceAfter=12,
        )
        muted_style = ParagraphStyle("Muted", parent=styles["Normal"], fontSize=9, textColor=MUTED)
        bold_style = ParagraphStyle(
            "Bold", parent=styles["Normal"], fontSize=10, fontName="Helvetica-Bold"
        )
        normal_style = ParagraphStyle("Body", parent=styles["Normal"], fontSize=10)

        elements = [
            Paragraph(hospital_name, title_style),
            Paragraph(hospital_address, muted_style),
            Spacer(1, 8 * mm),
            Paragraph("INVOICE", label_style),
        ]

        details = [
            ["Invoice Number:", invoice.invoice_number],
            ["Status:", invoice.status.value.replace("_", " ").upper()],
            ["Invoice Date:", invoice.invoice_date.strftime("%Y-%m-%d")],
            ["Due Date:", invoice.due_date.strftime("%Y-%m-%d")],
        ]
        if invoice.visit_type:
            details.append(["Visit Type:", invoice.visit_type.value.upper()])
        if invoice.doctor_name:
            details.append(["Attending Doctor:", invoice.doctor_name])

        details_table = Table(details, colWidths=[40 * mm, 100 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements += [details_table, Spacer(1, 8 * mm)]

        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(f"{invoice.patient_name} ({invoice.patient_id})", normal_style))
        elements.append(Spacer(1, 8 * mm))

        currency = invoice.currency
        rows = [["Description", "Category", "Qty", "Unit Price", "Amount"]]
        for line in invoice_lines:
            rows.append(
                [
                    Paragraph(line.description, normal_style),
                    _category_label(line.category),
                    str(line.quantity),
                    _money(currency, line.unit_price),
                    _money(currency, line.total_price),
                ]
            )

        items_table = Table(rows, colWidths=COLUMNS, repeatRows=1)
        items_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("GRID", (0, 0), (-1, -1), 0.5, RULE),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F4F6F7")]),
                ]
            )
        )
        elements += [items_table, Spacer(1, 5 * mm)]

        totals = [
            ["Subtotal:", _money(currency, invoice.subtotal)],
            [f"Discount ({invoice.discount_percentage}%):", f"- {_money(currency, invoice.discount_amount)}"],
            [f"Tax ({invoice.tax_percentage}%):", _money(currency, invoice.tax_amount)],
            ["Total:", _money(currency, invoice.total_amount)],
            ["Paid:", _money(currency, invoice.paid_amount)],
            ["Balance Due:", _money(currency, invoice.balance_amount)],
        ]
        totals_table = Table(totals, colWidths=[140 * mm, 30 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTNAME", (0, 3), (-1, 3), "Helvetica-Bold"),
                    ("FONTNAME", (0, 5), (-1, 5), "Helvetica-Bold"),
                    ("LINEABOVE", (0, 3), (-1, 3), 1.2, HEADER_BLUE),
                ]
            )
        )
        elements += [totals_table, Spacer(1, 12 * mm)]

        if is_invoice_overdue(invoice, now) and invoice.balance_amount > 0:
            overdue_style = ParagraphStyle("Overdue", parent=bold_style, textColor=ALERT)
            late_by = max(0, days_overdue(invoice.due_date, now))
            elements.append(Paragraph(f"OVERDUE by {late_by} day(s)", overdue_style))
        if invoice.notes:
            elements.append(Paragraph(invoice.notes, muted_style))

        elements.append(
            Paragraph(
                f"<i>Generated {now.strftime('%Y-%m-%d %H:%M UTC')}</i>",
                muted_style,
            )
        )

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
