"""RestockMedicine Use Case

Receives a new batch: the restock record and the stock update are written in
one unit of work.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medicine_repository import MedicineRepository
from src.app.repositories.stock_movement_repository import RestockRepository
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS, calculate_stock_value, medicine_status
from src.domain.roles import Actor
from src.domain.stock_movement import Restock
from .dtos import RestockCommandDTO, RestockMedicineResponseDTO
from .mappers import to_medicine_dto, to_restock_dto

logger = logging.getLogger(__name__)


class RestockMedicine:
    """
    Use Case: Restock a medicine

    Business Rules:
    1. Medicine must exist
    2. quantity += restocked quantity
    3. unit_price, batch_number, expiry_date and vendor follow the new batch
    4. total_value is recomputed with the new price
    5. Restock record and medicine update commit together

    Flow:
    1. Retrieve medicine
    2. Create restock record
    3. Update stock, price, batch and expiry
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        medicine_repo: MedicineRepository,
        restock_repo: RestockRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.uow = uow
        self.medicine_repo = medicine_repo
        self.restock_repo = restock_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(
        self,
        medicine_id: str,
        command: RestockCommandDTO,
        actor: Optional[Actor] = None,
        today: Optional[date] = None,
    ) -> Result[RestockMedicineResponseDTO]:
        today = today or date.today()

        try:
            # Step 1: Retrieve medicine
            medicine = await self.medicine_repo.get_by_id(medicine_id)
            if not medicine:
                return Return.err(
                    Error(
                        code="MEDICINE_NOT_FOUND",
                        message=f"Medicine with ID {medicine_id} not found",
                    )
                )

            # Step 2: Restock record
            restock = await self.restock_repo.create(
                Restock(
                    medicine_id=medicine.id,
                    quantity=command.quantity,
                    unit_price=command.unit_price,
                    batch_number=command.batch_number,
                    expiry_date=command.expiry_date,
                    vendor_id=command.vendor_id,
                    vendor_name=command.vendor_name,
                    restocked_by=actor.user_id if actor else None,
                    notes=command.notes,
                )
            )

            # Step 3: Update stock
            medicine.quantity = medicine.quantity + command.quantity
            medicine.unit_price = command.unit_price
            medicine.expiry_date = command.expiry_date
            medicine.purchase_date = today
            if command.batch_number:
                medicine.batch_number = command.batch_number
            if command.vendor_id:
                medicine.vendor_id = command.vendor_id
            if command.vendor_name:
                medicine.vendor_name = command.vendor_name
            medicine.total_value = calculate_stock_value(medicine.quantity, medicine.unit_price)
            medicine.status = medicine_status(medicine, today, self.expiring_soon_days)

            updated = await self.medicine_repo.update(medicine)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Medicine {updated.medicine_id} restocked with {command.quantity} units, "
                f"now {updated.quantity}"
            )

            return Return.ok(
                RestockMedicineResponseDTO(
                    restock=to_restock_dto(restock),
                    medicine=to_medicine_dto(updated, today, self.expiring_soon_days),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to restock medicine {medicine_id}: {e}")
            return Return.err(
                Error(
                    code="RESTOCK_MEDICINE_FAILED",
                    message="Failed to restock medicine",
                    reason=str(e),
                )
            )
