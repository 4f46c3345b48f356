"""DeleteInvoice Use Case

Hard deletion is an administrative override; normal flows cancel instead.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.calculations import can_delete_invoice
from src.domain.roles import Actor
from .dtos import DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice (admin override)

    Business Rules:
    1. Only admins may delete invoices
    2. Invoices with recorded payments are kept for the audit trail
    3. Line items are removed together with the invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_line_repo: InvoiceLineRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_line_repo = invoice_line_repo
        self.payment_repo = payment_repo

    async def execute(self, invoice_id: str, actor: Actor) -> Result[DeleteInvoiceResponseDTO]:
        if not can_delete_invoice(actor.role):
            return Return.err(
                Error(
                    code="PERMISSION_DENIED",
                    message="Only administrators can delete invoices",
                )
            )

        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                    )
                )

            payments = await self.payment_repo.get_by_invoice_id(invoice.id)
            if payments:
                return Return.err(
                    Error(
                        code="INVOICE_HAS_PAYMENTS",
                        message=f"Invoice {invoice.invoice_number} has {len(payments)} recorded payment(s)",
                        reason="Cancel the invoice instead",
                    )
                )

            await self.invoice_line_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.warning(f"Invoice {invoice.invoice_number} deleted by {actor.user_id}")

            return Return.ok(
                DeleteInvoiceResponseDTO(id=invoice.id, invoice_number=invoice.invoice_number)
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
