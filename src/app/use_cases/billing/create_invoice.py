"""CreateInvoice Use Case

Raises an invoice for a patient from a list of billed line items.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.calculations import calculate_balance, calculate_invoice_totals
from src.domain.invoice import Invoice
from src.domain.roles import Actor
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO
from .mappers import build_lines, to_invoice_dto

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create invoice for a patient

    Business Rules:
    1. Invoice number is auto-generated (INV-YYYY-NNNNNN)
    2. Totals come from the invoice total calculator, never from the caller
    3. balance = total - paid, with paid = 0 on creation
    4. Status is draft or pending
    5. Due date defaults to invoice date + due_days

    Flow:
    1. Generate unique invoice number
    2. Compute totals from line items, discount and tax
    3. Create invoice and its line items
    4. Commit transaction
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        currency: str = "USD",
        due_days: int = 30,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.currency = currency
        self.due_days = due_days

    async def execute(
        self,
        command: CreateInvoiceCommandDTO,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with patient, items, discount, tax
            actor: Caller recorded as created_by
            now: Invoice date (defaults to current UTC time)

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        now = now or datetime.utcnow()

        try:
            # Step 1: Generate unique invoice number
            invoice_number = await self.invoice_repo.generate_invoice_number()

            # Step 2: Compute totals
            totals = calculate_invoice_totals(
                command.items,
                command.discount_percentage,
                command.tax_percentage,
            )

            # Step 3: Create invoice and line items
            invoice = Invoice(
                invoice_number=invoice_number,
                patient_id=command.patient_id,
                patient_name=command.patient_name,
                visit_id=command.visit_id,
                visit_type=command.visit_type,
                doctor_id=command.doctor_id,
                doctor_name=command.doctor_name,
                status=command.status,
                subtotal=totals.subtotal,
                discount_percentage=command.discount_percentage,
                discount_amount=totals.discount_amount,
                tax_percentage=command.tax_percentage,
                tax_amount=totals.tax_amount,
                total_amount=totals.total_amount,
                paid_amount=Decimal("0"),
                balance_amount=calculate_balance(totals.total_amount, Decimal("0")),
                currency=self.currency,
                invoice_date=now,
                due_date=command.due_date or now + timedelta(days=self.due_days),
                notes=command.notes,
                created_by=actor.user_id if actor else None,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            lines = []
            for line in build_lines(created_invoice.id, command.items):
                lines.append(await self.invoice_line_repo.create(line))

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Invoice {created_invoice.invoice_number} created for patient "
                f"{created_invoice.patient_id}: total {created_invoice.total_amount}"
            )

            # Step 5: Build response
            return Return.ok(to_invoice_dto(created_invoice, lines, now))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
