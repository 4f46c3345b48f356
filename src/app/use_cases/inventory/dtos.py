"""Data Transfer Objects for Inventory Use Cases

Quantities and prices are validated here; the stock calculators assume
non-negative input.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from src.domain.medicine import MedicineCategory


class AddMedicineCommandDTO(BaseModel):
    """
    Command DTO for adding a medicine to inventory

    Used as input to AddMedicine use case.
    """

    name: str = Field(..., min_length=1, max_length=200)
    generic_name: Optional[str] = None
    category: MedicineCategory = Field(..., description="Dosage form category")
    manufacturer: str = Field(default="", max_length=200)
    batch_number: str = Field(default="", max_length=50)
    quantity: int = Field(..., ge=0, description="Units in stock")
    min_threshold: int = Field(default=10, ge=0, description="Reorder level")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit")
    expiry_date: date
    purchase_date: Optional[date] = None
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    description: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Paracetamol 500mg",
                "category": "tablet",
                "manufacturer": "Acme Pharma",
                "batch_number": "B-2291",
                "quantity": 120,
                "min_threshold": 50,
                "unit_price": "2.50",
                "expiry_date": "2026-06-30",
            }
        }


class UpdateMedicineCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    generic_name: Optional[str] = None
    category: Optional[MedicineCategory] = None
    manufacturer: Optional[str] = Field(default=None, max_length=200)
    batch_number: Optional[str] = Field(default=None, max_length=50)
    quantity: Optional[int] = Field(default=None, ge=0)
    min_threshold: Optional[int] = Field(default=None, ge=0)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    expiry_date: Optional[date] = None
    purchase_date: Optional[date] = None
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    description: Optional[str] = None


class RestockCommandDTO(BaseModel):
    """A new batch received from a vendor"""

    quantity: int = Field(..., gt=0, description="Units received")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit of the new batch")
    batch_number: str = Field(default="", max_length=50)
    expiry_date: date = Field(..., description="Expiry date of the new batch")
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    notes: Optional[str] = None


class DispenseCommandDTO(BaseModel):
    """Units handed out to a patient"""

    quantity: int = Field(..., gt=0, description="Units dispensed")
    patient_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1)
    visit_id: Optional[str] = None
    prescription_id: Optional[str] = None
    notes: Optional[str] = None


class MedicineResponseDTO(BaseModel):
    """
    Response DTO for a medicine

    ``status`` and ``days_until_expiry`` are derived at read time.
    """

    id: str
    medicine_id: str
    name: str
    generic_name: Optional[str] = None
    category: str
    manufacturer: str
    batch_number: str
    quantity: int
    min_threshold: int
    unit_price: Decimal
    total_value: Decimal
    expiry_date: date
    purchase_date: Optional[date] = None
    days_until_expiry: int
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    description: Optional[str] = None
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListMedicinesResponseDTO(BaseModel):
    medicines: List[MedicineResponseDTO]
    total: int
    limit: int
    offset: int


class DispenseResponseDTO(BaseModel):
    id: str
    dispense_id: str
    medicine_id: str
    medicine_name: str
    patient_id: str
    patient_name: str
    visit_id: Optional[str] = None
    prescription_id: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_amount: Decimal
    dispensed_by: Optional[str] = None
    dispensed_date: datetime
    notes: Optional[str] = None


class RestockResponseDTO(BaseModel):
    id: str
    medicine_id: str
    quantity: int
    unit_price: Decimal
    batch_number: str
    expiry_date: date
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    restocked_by: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class DispenseMedicineResponseDTO(BaseModel):
    dispense: DispenseResponseDTO
    medicine: MedicineResponseDTO


class RestockMedicineResponseDTO(BaseModel):
    restock: RestockResponseDTO
    medicine: MedicineResponseDTO


class StockMovementsResponseDTO(BaseModel):
    medicine_id: str
    dispenses: List[DispenseResponseDTO]
    restocks: List[RestockResponseDTO]


class DeleteMedicineResponseDTO(BaseModel):
    id: str
    medicine_id: str
    deleted: bool = True


class StockAlertScanResultDTO(BaseModel):
    """Result of one stock alert scan"""

    checked: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    alerts_created: int = 0
    notification_ids: List[str] = Field(default_factory=list)
    skipped_duplicates: int = 0


__all__ = [
    "AddMedicineCommandDTO",
    "UpdateMedicineCommandDTO",
    "RestockCommandDTO",
    "DispenseCommandDTO",
    "MedicineResponseDTO",
    "ListMedicinesResponseDTO",
    "DispenseResponseDTO",
    "RestockResponseDTO",
    "DispenseMedicineResponseDTO",
    "RestockMedicineResponseDTO",
    "StockMovementsResponseDTO",
    "DeleteMedicineResponseDTO",
    "StockAlertScanResultDTO",
]
