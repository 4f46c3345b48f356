"""Payment Domain Entity

Append-only record of money received against an invoice.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class PaymentMethod(str, Enum):
    """Accepted payment methods"""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    NET_BANKING = "net_banking"
    INSURANCE = "insurance"
    CHEQUE = "cheque"


class PaymentStatus(str, Enum):
    """Payment processing status"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Payment(BaseModel, table=True):
    """
    Payment - Money applied to exactly one invoice

    Domain Rules:
    - amount > 0 and never more than the invoice balance at recording time
    - Written in the same unit of work as the invoice balance update
    - Immutable once recorded
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_invoice_id', 'invoice_id'),
        Index('ix_payments_payment_date', 'payment_date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique payment identifier"
    )

    payment_id: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Display code (e.g., PAY-123456-042)"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    patient_id: str = Field(description="Patient reference (copied from invoice)")

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount received"
    )

    payment_method: PaymentMethod = Field(description="Payment method")

    status: PaymentStatus = Field(
        default=PaymentStatus.COMPLETED,
        description="Processing status"
    )

    transaction_id: Optional[str] = Field(default=None, description="Card/UPI transaction id")

    reference_number: Optional[str] = Field(default=None, description="Insurance or bank reference")

    cheque_number: Optional[str] = Field(default=None, description="Cheque number")

    bank_name: Optional[str] = Field(default=None, description="Issuing bank")

    processed_by: Optional[str] = Field(default=None, description="User who recorded the payment")

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form notes"
    )

    payment_date: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the payment was received"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Record creation timestamp"
    )
