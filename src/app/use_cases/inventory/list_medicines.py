"""
List Medicines Use Case

Retrieves inventory with filtering and pagination. Stock status is
recomputed for every row.
"""
from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.medicine_repository import MedicineRepository
from src.app.views import InventorySummary, MedicineFilters, filter_medicines, paginate, summarize_medicines
from src.domain.calculations import DEFAULT_EXPIRING_SOON_DAYS
from .dtos import ListMedicinesResponseDTO
from .mappers import to_medicine_dto


class ListMedicines:
    """
    Use case: List medicines

    Medicines are ordered by created_at DESC (most recent first).
    """

    def __init__(
        self,
        medicine_repo: MedicineRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.medicine_repo = medicine_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(
        self,
        filters: Optional[MedicineFilters] = None,
        limit: int = 20,
        offset: int = 0,
        today: Optional[date] = None,
    ) -> Result[ListMedicinesResponseDTO]:
        today = today or date.today()

        medicines = await self.medicine_repo.list_all()
        matching = filter_medicines(medicines, filters, today, self.expiring_soon_days)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListMedicinesResponseDTO(
                medicines=[to_medicine_dto(m, today, self.expiring_soon_days) for m in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )


class GetInventorySummary:
    """Stock value and status counts over the whole inventory"""

    def __init__(
        self,
        medicine_repo: MedicineRepository,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
    ):
        self.medicine_repo = medicine_repo
        self.expiring_soon_days = expiring_soon_days

    async def execute(self, today: Optional[date] = None) -> Result[InventorySummary]:
        medicines = await self.medicine_repo.list_all()
        return Return.ok(summarize_medicines(medicines, today, self.expiring_soon_days))
