"""UpdateInvoice Use Case

Edits invoice details, recomputing totals whenever line items, discount or
tax change.
"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.calculations import calculate_balance, calculate_invoice_totals
from src.domain.invoice import InvoiceStatus
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO
from .mappers import build_lines, to_invoice_dto

FINALIZED_STATUSES = (InvoiceStatus.PAID, InvoiceStatus.PARTIALLY_PAID, InvoiceStatus.CANCELLED)
UNPAID_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.PENDING)


class UpdateInvoice:
    """
    Use Case: Edit an invoice

    Business Rules:
    1. Line items, discount and tax are immutable once an invoice is paid,
       partially paid or cancelled, or has any payment recorded against it
    2. Totals are always recomputed by the calculator, never accepted as input
    3. Invoices with recorded payments cannot be cancelled or moved back
       to draft or pending
    4. Paid invoices cannot change status
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(
        self,
        invoice_id: str,
        command: UpdateInvoiceCommandDTO,
        now: Optional[datetime] = None,
    ) -> Result[InvoiceResponseDTO]:
        now = now or datetime.utcnow()

        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            if command.changes_amounts() and (invoice.status in FINALIZED_STATUSES or invoice.paid_amount > 0):
                return Return.err(
                    Error(
                        code="INVOICE_FINALIZED",
                        message=(
                            f"Line items of a {InvoiceStatus(invoice.status).value} invoice cannot be changed"
                            if invoice.status in FINALIZED_STATUSES
                            else "Line items of an invoice with recorded payments cannot be changed"
                        ),
                        reason="Finalized invoices are immutable",
                    )
                )

            if command.status is not None and command.status != invoice.status:
                if invoice.status == InvoiceStatus.PAID:
                    return Return.err(
                        Error(
                            code="INVALID_STATUS_TRANSITION",
                            message="Paid invoices cannot change status",
                        )
                    )
                if command.status == InvoiceStatus.CANCELLED and invoice.paid_amount > 0:
                    return Return.err(
                        Error(
                            code="INVALID_STATUS_TRANSITION",
                            message="Invoices with recorded payments cannot be cancelled",
                        )
                    )
                if command.status in UNPAID_STATUSES and invoice.paid_amount > 0:
                    return Return.err(
                        Error(
                            code="INVALID_STATUS_TRANSITION",
                            message=f"Invoices with recorded payments cannot return to {command.status.value}",
                        )
                    )
                invoice.status = command.status

            for field in ("patient_name", "doctor_id", "doctor_name", "due_date", "notes"):
                value = getattr(command, field)
                if value is not None:
                    setattr(invoice, field, value)

            lines = await self.invoice_line_repo.get_by_invoice_id(invoice.id)

            if command.changes_amounts():
                if command.items is not None:
                    await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
                    lines = [
                        await self.invoice_line_repo.create(line)
                        for line in build_lines(invoice.id, command.items)
                    ]
                if command.discount_percentage is not None:
                    invoice.discount_percentage = command.discount_percentage
                if command.tax_percentage is not None:
                    invoice.tax_percentage = command.tax_percentage

                totals = calculate_invoice_totals(
                    lines, invoice.discount_percentage, invoice.tax_percentage
                )
                invoice.subtotal = totals.subtotal
                invoice.discount_amount = totals.discount_amount
                invoice.tax_amount = totals.tax_amount
                invoice.total_amount = totals.total_amount
                invoice.balance_amount = calculate_balance(totals.total_amount, invoice.paid_amount)

            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            return Return.ok(to_invoice_dto(updated, lines, now))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
