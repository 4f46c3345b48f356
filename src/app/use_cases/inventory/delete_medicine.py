"""DeleteMedicine Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from .dtos import DeleteMedicineResponseDTO

logger = logging.getLogger(__name__)


class DeleteMedicine:
    """Use Case: Remove a medicine from inventory"""

    def __init__(self, uow: UnitOfWork, medicine_repo: MedicineRepository):
        self.uow = uow
        self.medicine_repo = medicine_repo

    async def execute(self, medicine_id: str) -> Result[DeleteMedicineResponseDTO]:
        try:
            medicine = await self.medicine_repo.get_by_id(medicine_id)
            if not medicine:
                return Return.err(
                    Error(
                        code="MEDICINE_NOT_FOUND",
                        message=f"Medicine with ID {medicine_id} not found",
                    )
                )

            await self.medicine_repo.delete(medicine)
            await self.uow.commit()

            logger.info(f"Medicine {medicine.medicine_id} deleted")

            return Return.ok(DeleteMedicineResponseDTO(id=medicine.id, medicine_id=medicine.medicine_id))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_MEDICINE_FAILED",
                    message="Failed to delete medicine",
                    reason=str(e),
                )
            )
