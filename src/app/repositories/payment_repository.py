"""Payment Repository Interface

Payments are append-only records applied to exactly one invoice.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.payment import Payment


class PaymentRepository(ABC):

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """Persist a payment record"""
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[Payment]:
        """
        Retrieve payments applied to an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            List of payments, newest first
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Payment]:
        pass
