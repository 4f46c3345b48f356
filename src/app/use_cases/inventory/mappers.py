"""Entity -> DTO conversion for inventory responses"""

from datetime import date
from typing import Optional

from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS, days_until_expiry, medicine_status
from src.domain.medicine import Medicine
from src.domain.stock_movement import Dispense, Restock
from .dtos import DispenseResponseDTO, MedicineResponseDTO, RestockResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_medicine_dto(
    medicine: Medicine,
    today: Optional[date] = None,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> MedicineResponseDTO:
    today = today or date.today()
    return MedicineResponseDTO(
        id=medicine.id,
        medicine_id=medicine.medicine_id,
        name=medicine.name,
        generic_name=medicine.generic_name,
        category=_value(medicine.category),
        manufacturer=medicine.manufacturer,
        batch_number=medicine.batch_number,
        quantity=medicine.quantity,
        min_threshold=medicine.min_threshold,
        unit_price=medicine.unit_price,
        total_value=medicine.total_value,
        expiry_date=medicine.expiry_date,
        purchase_date=medicine.purchase_date,
        days_until_expiry=days_until_expiry(medicine.expiry_date, today),
        vendor_id=medicine.vendor_id,
        vendor_name=medicine.vendor_name,
        description=medicine.description,
        status=medicine_status(medicine, today, expiring_soon_days).value,
        created_by=medicine.created_by,
        created_at=medicine.created_at,
        updated_at=medicine.updated_at,
    )


def to_dispense_dto(dispense: Dispense) -> DispenseResponseDTO:
    return DispenseResponseDTO(
        id=dispense.id,
        dispense_id=dispense.dispense_id,
        medicine_id=dispense.medicine_id,
        medicine_name=dispense.medicine_name,
        patient_id=dispense.patient_id,
        patient_name=dispense.patient_name,
        visit_id=dispense.visit_id,
        prescription_id=dispense.prescription_id,
        quantity=dispense.quantity,
        unit_price=dispense.unit_price,
        total_amount=dispense.total_amount,
        dispensed_by=dispense.dispensed_by,
        dispensed_date=dispense.dispensed_date,
        notes=dispense.notes,
    )


def to_restock_dto(restock: Restock) -> RestockResponseDTO:
    return RestockResponseDTO(
        id=restock.id,
        medicine_id=restock.medicine_id,
        quantity=restock.quantity,
        unit_price=restock.unit_price,
        batch_number=restock.batch_number,
        expiry_date=restock.expiry_date,
        vendor_id=restock.vendor_id,
        vendor_name=restock.vendor_name,
        restocked_by=restock.restocked_by,
        notes=restock.notes,
        created_at=restock.created_at,
    )
