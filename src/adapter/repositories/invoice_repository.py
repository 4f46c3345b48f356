"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.calculations.identifiers import format_invoice_number
from src.domain.invoice import Invoice, InvoiceStatus

UNPAID_STATUSES = (InvoiceStatus.PENDING, InvoiceStatus.PARTIALLY_PAID)


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        statement = select(Invoice).where(Invoice.id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_all(self, patient_id: Optional[str] = None) -> List[Invoice]:
        """
        Retrieve all invoices, optionally scoped to one patient

        Args:
            patient_id: Optional patient scope

        Returns:
            List of invoices, newest first
        """
        statement = select(Invoice)

        if patient_id:
            statement = statement.where(Invoice.patient_id == patient_id)

        statement = statement.order_by(Invoice.created_at.desc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_unpaid_due_before(self, cutoff: datetime) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.status.in_(UNPAID_STATUSES))
            .where(Invoice.due_date < cutoff)
            .order_by(Invoice.due_date.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()

    async def generate_invoice_number(self) -> str:
        """
        Generate a unique invoice number

        Format: INV-YYYY-NNNNNN (e.g., INV-2024-000001)

        Returns:
            Unique invoice number string
        """
        year = datetime.utcnow().year
        prefix = f"INV-{year}-"

        # Highest number issued this year
        statement = (
            select(func.max(Invoice.invoice_number))
            .where(Invoice.invoice_number.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        max_number = result.scalar_one_or_none()

        if max_number:
            sequence = int(max_number.split("-")[-1]) + 1
        else:
            sequence = 1

        return format_invoice_number(year, sequence)
