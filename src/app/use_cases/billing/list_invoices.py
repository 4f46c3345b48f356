"""
List Invoices Use Case

Retrieves invoices with filtering and pagination.
"""
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.views import InvoiceFilters, filter_invoices, paginate
from src.domain.roles import Actor
from .dtos import ListInvoicesResponseDTO
from .mappers import to_invoice_dto


class ListInvoices:
    """
    Use case: List invoices

    Invoices are ordered by created_at DESC (most recent first).
    Patients only ever see their own invoices; other roles see all.
    Each row carries the derived is_overdue / days_overdue fields.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        filters: Optional[InvoiceFilters] = None,
        actor: Optional[Actor] = None,
        limit: int = 20,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> Result[ListInvoicesResponseDTO]:
        """
        List invoices visible to the caller.

        Args:
            filters: Optional InvoiceFilters
            actor: Caller; patients are scoped to their own invoices
            limit: Page size
            offset: Number of matching invoices to skip
            now: Reference time for overdue derivation

        Returns:
            Result[ListInvoicesResponseDTO]: Paginated invoice list
        """
        now = now or datetime.utcnow()
        patient_scope = actor.user_id if actor and actor.is_patient else None

        invoices = await self.invoice_repo.list_all(patient_id=patient_scope)
        matching = filter_invoices(invoices, filters, now)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[to_invoice_dto(invoice, now=now) for invoice in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
