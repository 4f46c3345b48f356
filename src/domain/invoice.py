"""Invoice Domain Entity

Tracks patient invoices, their monetary breakdown and payment status.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid
from src.domain.visit import VisitType


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    PARTIALLY_PAID = "partially_paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Invoice(BaseModel, table=True):
    """
    Invoice - Billable record grouping line items for a patient/visit

    Domain Rules:
    - invoice_number must be unique
    - total_amount = subtotal - discount_amount + tax_amount at creation time
    - balance_amount = total_amount - paid_amount (always)
    - status must agree with balance_amount and due_date
    - Line items are frozen once the invoice is paid, partially paid or cancelled
    - Hard delete only through admin override
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_patient_id', 'patient_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_created_at', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Unique display code (e.g., INV-2024-000001)"
    )

    patient_id: str = Field(description="Patient reference")

    patient_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Patient display name (denormalized for search)"
    )

    visit_id: Optional[str] = Field(default=None, description="Optional visit reference")

    visit_type: Optional[VisitType] = Field(default=None, description="Visit type (opd, ipd)")

    doctor_id: Optional[str] = Field(default=None, description="Attending doctor reference")

    doctor_name: Optional[str] = Field(default=None, description="Attending doctor display name")

    status: InvoiceStatus = Field(
        default=InvoiceStatus.PENDING,
        description="Invoice status (draft, pending, paid, partially_paid, overdue, cancelled)"
    )

    subtotal: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Sum of line totals"
    )

    discount_percentage: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Discount percentage (0-100)"
    )

    discount_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Discount amount derived from discount_percentage"
    )

    tax_percentage: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Tax percentage (0-100)"
    )

    tax_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Tax amount on the discounted subtotal"
    )

    total_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Total payable amount"
    )

    paid_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Accumulated payments"
    )

    balance_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Outstanding balance (total - paid)"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    payment_method: Optional[str] = Field(
        default=None,
        description="Method of the most recent payment"
    )

    payment_date: Optional[datetime] = Field(
        default=None,
        description="Timestamp of the most recent payment"
    )

    invoice_date: datetime = Field(
        default_factory=datetime.utcnow,
        description="Date the invoice was raised"
    )

    due_date: datetime = Field(description="Payment due date")

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form notes"
    )

    created_by: Optional[str] = Field(default=None, description="User who created the invoice")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "6f1c2b1e-2f7e-4a55-9d43-3d2f0f0c7a10",
                "invoice_number": "INV-2024-000001",
                "patient_id": "PAT20240042",
                "patient_name": "Jane Doe",
                "status": "pending",
                "subtotal": "2500.00",
                "discount_percentage": "10.00",
                "discount_amount": "250.00",
                "tax_percentage": "5.00",
                "tax_amount": "112.50",
                "total_amount": "2362.50",
                "paid_amount": "0.00",
                "balance_amount": "2362.50",
                "currency": "USD",
                "due_date": "2024-02-01T00:00:00Z",
            }
        }
