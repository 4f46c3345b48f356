"""UpdateMedicine Use Case"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS, calculate_stock_value, medicine_status
from .dtos import MedicineResponseDTO, UpdateMedicineCommandDTO
from .mappers import to_medicine_dto

logger = logging.getLogger(__name__)


class UpdateMedicine:
    """
    Use Case: Edit medicine details

    total_value and the status snapshot are refreshed after every edit.
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
        medicine_id: str,
        command: UpdateMedicineCommandDTO,
        today: Optional[date] = None,
    ) -> Result[MedicineResponseDTO]:
        today = today or date.today()

        try:
            medicine = await self.medicine_repo.get_by_id(medicine_id)
            if not medicine:
                return Return.err(
                    Error(
                        code="MEDICINE_NOT_FOUND",
                        message=f"Medicine with ID {medicine_id} not found",
                    )
                )

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(medicine, field, value)

            medicine.total_value = calculate_stock_value(medicine.quantity, medicine.unit_price)
            medicine.status = medicine_status(medicine, today, self.expiring_soon_days)

            updated = await self.medicine_repo.update(medicine)
            await self.uow.commit()

            logger.info(f"Medicine {updated.medicine_id} updated")

            return Return.ok(to_medicine_dto(updated, today, self.expiring_soon_days))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_MEDICINE_FAILED",
                    message="Failed to update medicine",
                    reason=str(e),
                )
            )
