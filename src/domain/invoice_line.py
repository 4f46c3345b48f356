"""Invoice Line Domain Entity

Tracks individual billed services/products within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class LineItemCategory(str, Enum):
    """Billed service categories"""
    CONSULTATION = "consultation"
    TEST = "test"
    BED_CHARGE = "bed_charge"
    PROCEDURE = "procedure"
    OTHER = "other"


class InvoiceLine(BaseModel, table=True):
    """
    Invoice Line - One billed service or product

    Domain Rules:
    - Each line item belongs to exactly one invoice
    - total_price = quantity * unit_price
    - position keeps the order the items were entered in
    - Immutable once the invoice is finalized
    """

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice line identifier"
    )

    invoice_id: str = Field(
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Order of the line within the invoice"
    )

    description: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Line item description (e.g., 'General Consultation')"
    )

    category: LineItemCategory = Field(
        default=LineItemCategory.OTHER,
        description="Service category"
    )

    quantity: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Quantity (units, days, sessions)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit"
    )

    total_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Total price (quantity * unit_price)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "invoice_id": "6f1c2b1e-2f7e-4a55-9d43-3d2f0f0c7a10",
                "position": 0,
                "description": "General Consultation",
                "category": "consultation",
                "quantity": 2,
                "unit_price": "500.00",
                "total_price": "1000.00",
            }
        }
