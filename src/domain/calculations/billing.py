"""Invoice arithmetic and status derivation

Pure functions. Money is Decimal throughout; int/float/str inputs are
converted through str() so 0.1 stays 0.1.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable, Optional

from src.domain.invoice import InvoiceStatus

ONE_DAY = timedelta(days=1)
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class InvoiceTotals:
    """Monetary breakdown of an invoice"""

    subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal


def calculate_line_total(quantity: Any, unit_price: Any) -> Decimal:
    return to_decimal(quantity) * to_decimal(unit_price)


def calculate_invoice_totals(
    items: Iterable[Any],
    discount_percentage: Any = 0,
    tax_percentage: Any = 0,
) -> InvoiceTotals:
    """
    Compute the authoritative breakdown for a set of line items

    Discount applies to the subtotal; tax applies to the discounted amount.
    Inputs are not validated here.

    Args:
        items: Objects exposing ``quantity`` and ``unit_price``
        discount_percentage: Discount in percent (0-100)
        tax_percentage: Tax in percent (0-100)

    Returns:
        InvoiceTotals
    """
    subtotal = sum(
        (calculate_line_total(item.quantity, item.unit_price) for item in items),
        Decimal("0"),
    )
    discount_amount = subtotal * to_decimal(discount_percentage) / HUNDRED
    taxable_amount = subtotal - discount_amount
    tax_amount = taxable_amount * to_decimal(tax_percentage) / HUNDRED
    total_amount = taxable_amount + tax_amount

    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )


def calculate_balance(total_amount: Any, paid_amount: Any) -> Decimal:
    return to_decimal(total_amount) - to_decimal(paid_amount)


def derive_payment_status(total_amount: Any, paid_amount: Any) -> InvoiceStatus:
    """Status implied by how much of the total has been paid"""
    total = to_decimal(total_amount)
    paid = to_decimal(paid_amount)
    if paid >= total:
        return InvoiceStatus.PAID
    if paid > 0:
        return InvoiceStatus.PARTIALLY_PAID
    return InvoiceStatus.PENDING


def is_invoice_overdue(invoice: Any, now: Optional[datetime] = None) -> bool:
    """
    True when an unpaid invoice is past its due date

    Independent of the stored status, except that paid invoices are never
    overdue. ``now == due_date`` is not overdue.
    """
    if _status_value(invoice.status) == InvoiceStatus.PAID.value:
        return False
    now = now or datetime.utcnow()
    return now > invoice.due_date


def days_overdue(due_date: datetime, now: Optional[datetime] = None) -> int:
    """Whole days past due, rounded up. Negative while not yet due."""
    now = now or datetime.utcnow()
    return math.ceil((now - due_date) / ONE_DAY)


def _status_value(status: Any) -> str:
    return status.value if hasattr(status, "value") else status
