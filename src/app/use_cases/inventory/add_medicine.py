"""AddMedicine Use Case"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS, calculate_stock_value, medicine_status
from src.domain.calculations.identifiers import generate_medicine_id
from src.domain.medicine import Medicine
from src.domain.roles import Actor
from .dtos import AddMedicineCommandDTO, MedicineResponseDTO
from .mappers import to_medicine_dto

logger = logging.getLogger(__name__)


class AddMedicine:
    """
    Use Case: Add a medicine to inventory

    Business Rules:
    1. medicine_id is generated (MED + 9 digits)
    2. total_value = quantity * unit_price
    3. Stored status snapshot is computed from quantity, threshold and expiry
    """

    def __init__(
        self,
        uow: UnitOfWork,
        medicine_repo: MedicineRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.uow = uow
        self.medicine_repo = medicine_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(
        self,
        command: AddMedicineCommandDTO,
        actor: Optional[Actor] = None,
        today: Optional[date] = None,
    ) -> Result[MedicineResponseDTO]:
        today = today or date.today()

        try:
            medicine = Medicine(
                medicine_id=generate_medicine_id(),
                name=command.name,
                generic_name=command.generic_name,
                category=command.category,
                manufacturer=command.manufacturer,
                batch_number=command.batch_number,
                quantity=command.quantity,
                min_threshold=command.min_threshold,
                unit_price=command.unit_price,
                total_value=calculate_stock_value(command.quantity, command.unit_price),
                expiry_date=command.expiry_date,
                purchase_date=command.purchase_date,
                vendor_id=command.vendor_id,
                vendor_name=command.vendor_name,
                description=command.description,
                created_by=actor.user_id if actor else None,
            )
            medicine.status = medicine_status(medicine, today, self.expiring_soon_days)

            created = await self.medicine_repo.create(medicine)
            await self.uow.commit()

            logger.info(f"Medicine {created.medicine_id} ({created.name}) added with quantity {created.quantity}")

            return Return.ok(to_medicine_dto(created, today, self.expiring_soon_days))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ADD_MEDICINE_FAILED",
                    message="Failed to add medicine",
                    reason=str(e),
                )
            )
