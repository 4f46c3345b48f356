"""GetBillingSummary / GetPaymentSummary Use Cases

Dashboard cards for billing.
"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.views import BillingSummary, PaymentSummary, summarize_invoices, summarize_payments


class GetBillingSummary:
    """Aggregate counts and revenue over every invoice"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[BillingSummary]:
        invoices = await self.invoice_repo.list_all()
        return Return.ok(summarize_invoices(invoices, now))


class GetPaymentSummary:
    """Aggregate counts per payment method, today and this month"""

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[PaymentSummary]:
        payments = await self.payment_repo.list_all()
        return Return.ok(summarize_payments(payments, now))
