"""Stock Movement Domain Entities

Dispense and Restock are the two movement records that change a medicine's
quantity. Each is written in the same unit of work as the quantity update.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, Integer, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class Dispense(BaseModel, table=True):
    """Medicine handed out to a patient"""

    __tablename__ = "dispenses"
    __table_args__ = (
        Index('ix_dispenses_medicine_id', 'medicine_id'),
        Index('ix_dispenses_patient_id', 'patient_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    dispense_id: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Display code (e.g., DSP123456789)"
    )

    medicine_id: str = Field(
        sa_column=Column(String(36), ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False)
    )

    medicine_name: str = Field(description="Medicine display name")
    patient_id: str = Field(description="Patient reference")
    patient_name: str = Field(description="Patient display name")
    visit_id: Optional[str] = Field(default=None)
    prescription_id: Optional[str] = Field(default=None)

    quantity: int = Field(sa_column=Column(Integer, nullable=False))
    unit_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total_amount: Decimal = Field(sa_column=Column(Numeric(14, 2), nullable=False))

    dispensed_by: Optional[str] = Field(default=None)
    dispensed_date: datetime = Field(default_factory=datetime.utcnow)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Restock(BaseModel, table=True):
    """New batch received for a medicine"""

    __tablename__ = "restocks"
    __table_args__ = (
        Index('ix_restocks_medicine_id', 'medicine_id'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    medicine_id: str = Field(
        sa_column=Column(String(36), ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False)
    )

    quantity: int = Field(sa_column=Column(Integer, nullable=False))
    unit_price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    batch_number: str = Field(default="")
    expiry_date: date = Field(sa_column=Column(Date, nullable=False))
    vendor_id: Optional[str] = Field(default=None)
    vendor_name: Optional[str] = Field(default=None)
    restocked_by: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
