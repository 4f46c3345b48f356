"""DispenseMedicine Use Case

Hands out medicine to a patient: the dispense record and the stock decrement
are written in one unit of work.
"""

import logging
from datetime import date, datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from src.app.repositories.stock_movement_repository import DispenseRepository
from src.domain.calculations import (
    DEFAULT_EXPIRING_SOON_DAYS,
    calculate_line_total,
    calculate_stock_value,
    is_expired,
    medicine_status,
)
from src.domain.calculations.identifiers import generate_dispense_id
from src.domain.roles import Actor
from src.domain.stock_movement import Dispense
from .dtos import DispenseCommandDTO, DispenseMedicineResponseDTO
from .mappers import to_dispense_dto, to_medicine_dto

logger = logging.getLogger(__name__)


class DispenseMedicine:
    """
    Use Case: Dispense medicine to a patient

    Business Rules:
    1. Medicine must exist and must not be expired
    2. Requested quantity must not exceed stock (insufficient stock is rejected)
    3. quantity -= dispensed quantity; total_value is recomputed
    4. Dispense record is priced at the current unit price
    5. Dispense record and stock update commit together

    Flow:
    1. Retrieve medicine and validate stock
    2. Create dispense record
    3. Decrement stock
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        medicine_repo: MedicineRepository,
        dispense_repo: DispenseRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.uow = uow
        self.medicine_repo = medicine_repo
        self.dispense_repo = dispense_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(
        self,
        medicine_id: str,
        command: DispenseCommandDTO,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[DispenseMedicineResponseDTO]:
        now = now or datetime.utcnow()
        today = now.date()

        try:
            # Step 1: Retrieve medicine and validate stock
            medicine = await self.medicine_repo.get_by_id(medicine_id)
            if not medicine:
                return Return.err(
                    Error(
                        code="MEDICINE_NOT_FOUND",
                        message=f"Medicine with ID {medicine_id} not found",
                    )
                )

            if is_expired(medicine.expiry_date, today):
                return Return.err(
                    Error(
                        code="MEDICINE_EXPIRED",
                        message=f"{medicine.name} expired on {medicine.expiry_date}",
                        reason="Expired stock cannot be dispensed",
                    )
                )

            if command.quantity > medicine.quantity:
                return Return.err(
                    Error(
                        code="INSUFFICIENT_STOCK",
                        message=f"Insufficient stock for {medicine.name}: "
                                f"requested {command.quantity}, available {medicine.quantity}",
                        reason="Dispensed quantity exceeds stock",
                    )
                )

            # Step 2: Dispense record
            dispense = await self.dispense_repo.create(
                Dispense(
                    dispense_id=generate_dispense_id(),
                    medicine_id=medicine.id,
                    medicine_name=medicine.name,
                    patient_id=command.patient_id,
                    patient_name=command.patient_name,
                    visit_id=command.visit_id,
                    prescription_id=command.prescription_id,
                    quantity=command.quantity,
                    unit_price=medicine.unit_price,
                    total_amount=calculate_line_total(command.quantity, medicine.unit_price),
                    dispensed_by=actor.user_id if actor else None,
                    dispensed_date=now,
                    notes=command.notes,
                )
            )

            # Step 3: Decrement stock
            medicine.quantity = medicine.quantity - command.quantity
            medicine.total_value = calculate_stock_value(medicine.quantity, medicine.unit_price)
            medicine.status = medicine_status(medicine, today, self.expiring_soon_days)
            updated = await self.medicine_repo.update(medicine)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Dispensed {command.quantity} x {updated.name} to patient {command.patient_id}, "
                f"{updated.quantity} remaining"
            )

            return Return.ok(
                DispenseMedicineResponseDTO(
                    dispense=to_dispense_dto(dispense),
                    medicine=to_medicine_dto(updated, today, self.expiring_soon_days),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to dispense medicine {medicine_id}: {e}")
            return Return.err(
                Error(
                    code="DISPENSE_MEDICINE_FAILED",
                    message="Failed to dispense medicine",
                    reason=str(e),
                )
            )
