"""Medicine Domain Entity

Pharmacy inventory item. The stored status is a snapshot; the live status is
recomputed from quantity, threshold and expiry on every read.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class MedicineCategory(str, Enum):
    """Dosage form categories"""
    TABLET = "tablet"
    SYRUP = "syrup"
    INJECTION = "injection"
    CAPSULE = "capsule"
    OINTMENT = "ointment"
    DROPS = "drops"
    INHALER = "inhaler"
    OTHER = "other"


class MedicineStatus(str, Enum):
    """Derived stock status"""
    AVAILABLE = "available"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class Medicine(BaseModel, table=True):
    """
    Medicine - Stocked medicine batch

    Domain Rules:
    - quantity >= 0, min_threshold >= 0
    - total_value = quantity * unit_price (refreshed on every stock change)
    - status is derived (see calculate_medicine_status); the column is a cache
    - Stock changes (restock, dispense) are written with their movement record
      in one unit of work
    """

    __tablename__ = "medicines"
    __table_args__ = (
        Index('ix_medicines_category', 'category'),
        Index('ix_medicines_expiry_date', 'expiry_date'),
        Index('ix_medicines_created_at', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique medicine identifier"
    )

    medicine_id: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Display code (e.g., MED123456789)"
    )

    name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Brand or trade name"
    )

    generic_name: Optional[str] = Field(default=None, description="Generic/INN name")

    category: MedicineCategory = Field(description="Dosage form category")

    manufacturer: str = Field(
        default="",
        sa_column=Column(String(200), nullable=False, default=""),
        description="Manufacturer name"
    )

    batch_number: str = Field(
        default="",
        sa_column=Column(String(50), nullable=False, default=""),
        description="Current batch number"
    )

    quantity: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Units in stock"
    )

    min_threshold: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Reorder level; at or below this the item is low stock"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per unit"
    )

    total_value: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(14, 2), nullable=False, default=0),
        description="Stock value (quantity * unit_price)"
    )

    expiry_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Expiry date of the current batch"
    )

    purchase_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Purchase date of the current batch"
    )

    vendor_id: Optional[str] = Field(default=None, description="Supplying vendor reference")

    vendor_name: Optional[str] = Field(default=None, description="Supplying vendor display name")

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Notes or usage description"
    )

    status: MedicineStatus = Field(
        default=MedicineStatus.AVAILABLE,
        description="Status snapshot taken at last write"
    )

    created_by: Optional[str] = Field(default=None, description="User who added the medicine")

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "medicine_id": "MED482913057",
                "name": "Paracetamol 500mg",
                "category": "tablet",
                "manufacturer": "Acme Pharma",
                "batch_number": "B-2291",
                "quantity": 120,
                "min_threshold": 50,
                "unit_price": "2.50",
                "total_value": "300.00",
                "expiry_date": "2025-06-30",
                "status": "available",
            }
        }
