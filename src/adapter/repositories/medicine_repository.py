"""SQLAlchemy Medicine Repository Implementation

Implements medicine persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.medicine_repository import MedicineRepository
from src.domain.medicine import Medicine


class SqlAlchemyMedicineRepository(MedicineRepository):
    """
    SQLAlchemy implementation of MedicineRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, medicine: Medicine) -> Medicine:
        """
        Add a medicine to inventory

        Args:
            medicine: Medicine entity to persist

        Returns:
            Created Medicine
        """
        self.session.add(medicine)
        await self.session.flush()
        await self.session.refresh(medicine)
        return medicine

    async def get_by_id(self, medicine_id: str) -> Optional[Medicine]:
        statement = select(Medicine).where(Medicine.id == medicine_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Medicine]:
        statement = select(Medicine).order_by(Medicine.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, medicine: Medicine) -> Medicine:
        """
        Update an existing medicine

        Args:
            medicine: Medicine entity with updated values

        Returns:
            Updated Medicine
        """
        medicine.updated_at = datetime.utcnow()
        self.session.add(medicine)
        await self.session.flush()
        await self.session.refresh(medicine)
        return medicine

    async def delete(self, medicine: Medicine) -> None:
        await self.session.delete(medicine)
        await self.session.flush()
