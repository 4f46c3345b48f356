"""SQLAlchemy Invoice Line Repository Implementation

Implements invoice line persistence using SQLAlchemy async session.
"""

from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.domain.invoice_line import InvoiceLine


class SqlAlchemyInvoiceLineRepository(InvoiceLineRepository):
    """SQLAlchemy implementation of InvoiceLineRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceLine]:
        statement = (
            select(InvoiceLine)
            .where(InvoiceLine.invoice_id == invoice_id)
            .order_by(InvoiceLine.position.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, invoice_line: InvoiceLine) -> InvoiceLine:
        self.session.add(invoice_line)
        await self.session.flush()
        await self.session.refresh(invoice_line)
        return invoice_line

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        lines = await self.get_by_invoice_id(invoice_id)
        for line in lines:
            await self.session.delete(line)
        await self.session.flush()
        return len(lines)
