"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.

Commands validate at the boundary (non-negative money, percentages in
[0, 100], positive quantities) so the calculators can assume valid input.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from src.domain.invoice import InvoiceStatus
from src.domain.invoice_line import LineItemCategory
from src.domain.payment import PaymentMethod
from src.domain.visit import VisitType

CREATABLE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.PENDING)
EDITABLE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.PENDING, InvoiceStatus.CANCELLED)


class InvoiceLineItemDTO(BaseModel):
    """One billed service or product"""

    description: str = Field(..., min_length=1, max_length=500)
    category: LineItemCategory = Field(default=LineItemCategory.OTHER)
    quantity: int = Field(..., gt=0, description="Positive integer quantity")
    unit_price: Decimal = Field(..., ge=0, description="Non-negative unit price")


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for raising an invoice

    Used as input to CreateInvoice use case.
    """

    patient_id: str = Field(..., min_length=1, description="Patient reference")
    patient_name: str = Field(..., min_length=1, description="Patient display name")
    visit_id: Optional[str] = Field(default=None)
    visit_type: Optional[VisitType] = Field(default=None)
    doctor_id: Optional[str] = Field(default=None)
    doctor_name: Optional[str] = Field(default=None)

    items: List[InvoiceLineItemDTO] = Field(..., min_length=1)

    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    tax_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)

    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        description="Initial status: draft or pending"
    )
    due_date: Optional[datetime] = Field(
        default=None,
        description="Defaults to invoice date + configured due days"
    )
    notes: Optional[str] = Field(default=None)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: InvoiceStatus) -> InvoiceStatus:
        if v not in CREATABLE_STATUSES:
            raise ValueError("New invoices must be draft or pending")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "patient_id": "PAT20240042",
                "patient_name": "Jane Doe",
                "visit_type": "opd",
                "doctor_id": "DOC001",
                "doctor_name": "Dr. Smith",
                "items": [
                    {"description": "Consultation", "category": "consultation", "quantity": 2, "unit_price": "500"},
                    {"description": "Blood panel", "category": "test", "quantity": 1, "unit_price": "1500"},
                ],
                "discount_percentage": "10",
                "tax_percentage": "5",
            }
        }


class UpdateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for editing an invoice

    Any field left as None is unchanged. Line items, discount and tax can only
    change while nothing has been paid and the invoice is not cancelled.
    """

    patient_name: Optional[str] = Field(default=None, min_length=1)
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    items: Optional[List[InvoiceLineItemDTO]] = Field(default=None, min_length=1)
    discount_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    tax_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100)
    status: Optional[InvoiceStatus] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[InvoiceStatus]) -> Optional[InvoiceStatus]:
        if v is not None and v not in EDITABLE_STATUSES:
            raise ValueError("Status can only be set to draft, pending or cancelled")
        return v

    def changes_amounts(self) -> bool:
        return (
            self.items is not None
            or self.discount_percentage is not None
            or self.tax_percentage is not None
        )


class InvoiceLineResponseDTO(BaseModel):
    id: str
    position: int
    description: str
    category: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for an invoice

    ``is_overdue`` and ``days_overdue`` are derived at read time and do not
    depend on the stored status. ``days_overdue`` is clamped to 0.
    """

    id: str
    invoice_number: str
    patient_id: str
    patient_name: str
    visit_id: Optional[str] = None
    visit_type: Optional[str] = None
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    status: str
    items: List[InvoiceLineResponseDTO] = Field(default_factory=list)
    subtotal: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    tax_percentage: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal
    currency: str
    payment_method: Optional[str] = None
    payment_date: Optional[datetime] = None
    invoice_date: datetime
    due_date: datetime
    is_overdue: bool
    days_overdue: int
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceResponseDTO]
    total: int = Field(..., description="Matching invoices before pagination")
    limit: int
    offset: int


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment against an invoice

    Used as input to RecordPayment use case.
    """

    amount: Decimal = Field(..., gt=0, description="Amount received (must be > 0)")
    payment_method: PaymentMethod = Field(..., description="cash, card, upi, net_banking, insurance, cheque")
    transaction_id: Optional[str] = None
    reference_number: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    notes: Optional[str] = None
    payment_date: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "1000.00",
                "payment_method": "card",
                "transaction_id": "TXN-88213",
            }
        }


class PaymentResponseDTO(BaseModel):
    id: str
    payment_id: str
    invoice_id: str
    patient_id: str
    amount: Decimal
    payment_method: str
    status: str
    transaction_id: Optional[str] = None
    reference_number: Optional[str] = None
    cheque_number: Optional[str] = None
    bank_name: Optional[str] = None
    processed_by: Optional[str] = None
    notes: Optional[str] = None
    payment_date: datetime
    created_at: datetime


class RecordPaymentResponseDTO(BaseModel):
    payment: PaymentResponseDTO
    invoice: InvoiceResponseDTO


class ListPaymentsResponseDTO(BaseModel):
    payments: List[PaymentResponseDTO]
    total: int
    limit: int
    offset: int


class InvoicePdfResponseDTO(BaseModel):
    invoice_id: str
    invoice_number: str
    file_name: str
    pdf_base64: str = Field(..., description="Base64-encoded PDF document")
    generated_at: datetime


class MarkOverdueResultDTO(BaseModel):
    """Result of one overdue scan"""

    checked: int = 0
    marked: int = 0
    invoice_numbers: List[str] = Field(default_factory=list)
    notified: int = 0
    notification_ids: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)


class DeleteInvoiceResponseDTO(BaseModel):
    id: str
    invoice_number: str
    deleted: bool = True


__all__ = [
    "InvoiceLineItemDTO",
    "CreateInvoiceCommandDTO",
    "UpdateInvoiceCommandDTO",
    "InvoiceLineResponseDTO",
    "InvoiceResponseDTO",
    "ListInvoicesResponseDTO",
    "RecordPaymentCommandDTO",
    "PaymentResponseDTO",
    "RecordPaymentResponseDTO",
    "ListPaymentsResponseDTO",
    "InvoicePdfResponseDTO",
    "MarkOverdueResultDTO",
    "DeleteInvoiceResponseDTO",
]
