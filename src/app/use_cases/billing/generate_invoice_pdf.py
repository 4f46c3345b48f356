"""GenerateInvoicePdf Use Case

Renders an invoice as a PDF document for download or printing.
"""

import base64
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.pdf_service import PdfService
from src.domain.roles import Actor
from .dtos import InvoicePdfResponseDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must exist (patients can only render their own)
    2. PDF carries hospital header, line items, totals and balance
    3. Returns PDF as base64-encoded string

    Flow:
    1. Retrieve invoice by ID
    2. Retrieve invoice line items
    3. Generate PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        pdf_service: PdfService,
        hospital_name: str,
        hospital_address: str,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.pdf_service = pdf_service
        self.hospital_name = hospital_name
        self.hospital_address = hospital_address

    async def execute(
        self,
        invoice_id: str,
        actor: Optional[Actor] = None,
    ) -> Result[InvoicePdfResponseDTO]:
        """
        Execute invoice PDF generation

        Args:
            invoice_id: Invoice ID to render
            actor: Caller; patients are scoped to their own invoices

        Returns:
            Result[InvoicePdfResponseDTO]: Success with PDF or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id)

            if not invoice or (actor and actor.is_patient and invoice.patient_id != actor.user_id):
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Retrieve invoice line items
            invoice_lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            # Step 3: Generate PDF
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                invoice_lines=invoice_lines,
                hospital_name=self.hospital_name,
                hospital_address=self.hospital_address,
            )

            pdf_base64 = base64.b64encode(pdf_bytes).decode("utf-8")

            # Step 4: Build response
            return Return.ok(
                InvoicePdfResponseDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    file_name=f"invoice-{invoice.invoice_number}.pdf",
                    pdf_base64=pdf_base64,
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_INVOICE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
