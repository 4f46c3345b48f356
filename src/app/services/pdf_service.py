"""PDF Generation Service Interface

Defines the contract for rendering patient invoices.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_line import InvoiceLine


class PdfService(ABC):
    """Service interface for invoice documents"""

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        invoice_lines: List[InvoiceLine],
        hospital_name: str,
        hospital_address: str,
    ) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice with amounts already computed
            invoice_lines: Line items in display order
            hospital_name: Name printed in the header
            hospital_address: Address printed under the name

        Returns:
            PDF document as bytes
        """
        pass
