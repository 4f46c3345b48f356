"""Entity -> DTO conversion for billing responses"""

from datetime import datetime
from typing import List, Optional, Sequence

from src.domain.calculations import calculate_line_total, days_overdue, is_invoice_overdue
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLine
from src.domain.payment import Payment
from .dtos import InvoiceLineResponseDTO, InvoiceResponseDTO, PaymentResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_line_dto(line: InvoiceLine) -> InvoiceLineResponseDTO:
    return InvoiceLineResponseDTO(
        id=line.id,
        position=line.position,
        description=line.description,
        category=_value(line.category),
        quantity=line.quantity,
        unit_price=line.unit_price,
        total_price=line.total_price,
    )


def to_invoice_dto(
    invoice: Invoice,
    lines: Optional[Sequence[InvoiceLine]] = None,
    now: Optional[datetime] = None,
) -> InvoiceResponseDTO:
    now = now or datetime.utcnow()
    overdue = _value(invoice.status) != InvoiceStatus.CANCELLED.value and is_invoice_overdue(invoice, now)

    return InvoiceResponseDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        patient_id=invoice.patient_id,
        patient_name=invoice.patient_name,
        visit_id=invoice.visit_id,
        visit_type=_value(invoice.visit_type),
        doctor_id=invoice.doctor_id,
        doctor_name=invoice.doctor_name,
        status=_value(invoice.status),
        items=[to_line_dto(line) for line in (lines or [])],
        subtotal=invoice.subtotal,
        discount_percentage=invoice.discount_percentage,
        discount_amount=invoice.discount_amount,
        tax_percentage=invoice.tax_percentage,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        paid_amount=invoice.paid_amount,
        balance_amount=invoice.balance_amount,
        currency=invoice.currency,
        payment_method=invoice.payment_method,
        payment_date=invoice.payment_date,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        is_overdue=overdue,
        days_overdue=max(0, days_overdue(invoice.due_date, now)) if overdue else 0,
        notes=invoice.notes,
        created_by=invoice.created_by,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_payment_dto(payment: Payment) -> PaymentResponseDTO:
    return PaymentResponseDTO(
        id=payment.id,
        payment_id=payment.payment_id,
        invoice_id=payment.invoice_id,
        patient_id=payment.patient_id,
        amount=payment.amount,
        payment_method=_value(payment.payment_method),
        status=_value(payment.status),
        transaction_id=payment.transaction_id,
        reference_number=payment.reference_number,
        cheque_number=payment.cheque_number,
        bank_name=payment.bank_name,
        processed_by=payment.processed_by,
        notes=payment.notes,
        payment_date=payment.payment_date,
        created_at=payment.created_at,
    )


def build_lines(invoice_id: str, items) -> List[InvoiceLine]:
    """InvoiceLine entities for validated line item DTOs, in input order"""
    return [
        InvoiceLine(
            invoice_id=invoice_id,
            position=position,
            description=item.description,
            category=item.category,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=calculate_line_total(item.quantity, item.unit_price),
        )
        for position, item in enumerate(items)
    ]
