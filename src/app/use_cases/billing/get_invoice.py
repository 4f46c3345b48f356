"""GetInvoice Use Case"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.roles import Actor
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_dto


class GetInvoice:
    """
    Use Case: View a single invoice with its line items

    Patients can only see their own invoices.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(
        self,
        invoice_id: str,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[InvoiceResponseDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)

        if not invoice or (actor and actor.is_patient and invoice.patient_id != actor.user_id):
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f"Invoice with ID {invoice_id} not found",
                )
            )

        lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)
        return Return.ok(to_invoice_dto(invoice, lines, now))
