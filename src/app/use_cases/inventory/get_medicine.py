"""GetMedicine / ListStockMovements Use Cases"""

from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.medicine_repository import MedicineRepository
from src.app.repositories.stock_movement_repository import DispenseRepository, RestockRepository
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS
from .dtos import MedicineResponseDTO, StockMovementsResponseDTO
from .mappers import to_dispense_dto, to_medicine_dto, to_restock_dto


class GetMedicine:
    def __init__(
        self,
        medicine_repo: MedicineRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.medicine_repo = medicine_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(self, medicine_id: str, today: Optional[date] = None) -> Result[MedicineResponseDTO]:
        medicine = await self.medicine_repo.get_by_id(medicine_id)
        if not medicine:
            return Return.err(
                Error(
                    code="MEDICINE_NOT_FOUND",
                    message=f"Medicine with ID {medicine_id} not found",
                )
            )
        return Return.ok(to_medicine_dto(medicine, today, self.expiring_soon_days))


class ListStockMovements:
    """Dispense and restock history of one medicine, newest first"""

    def __init__(
        self,
        medicine_repo: MedicineRepository,
        dispense_repo: DispenseRepository,
        restock_repo: RestockRepository,
    ):
        self.medicine_repo = medicine_repo
        self.dispense_repo = dispense_repo
        self.restock_repo = restock_repo

    async def execute(self, medicine_id: str) -> Result[StockMovementsResponseDTO]:
        medicine = await self.medicine_repo.get_by_id(medicine_id)
        if not medicine:
            return Return.err(
                Error(
                    code="MEDICINE_NOT_FOUND",
                    message=f"Medicine with ID {medicine_id} not found",
                )
            )

        dispenses = await self.dispense_repo.list_all(medicine_id=medicine.id)
        restocks = await self.restock_repo.list_all(medicine_id=medicine.id)

        return Return.ok(
            StockMovementsResponseDTO(
                medicine_id=medicine.id,
                dispenses=[to_dispense_dto(d) for d in dispenses],
                restocks=[to_restock_dto(r) for r in restocks],
            )
        )
