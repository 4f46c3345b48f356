"""SQLAlchemy Stock Movement Repository Implementations"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.stock_movement_repository import DispenseRepository, RestockRepository
from src.domain.stock_movement import Dispense, Restock


class SqlAlchemyDispenseRepository(DispenseRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, dispense: Dispense) -> Dispense:
        self.session.add(dispense)
        await self.session.flush()
        await self.session.refresh(dispense)
        return dispense

    async def list_all(self, medicine_id: Optional[str] = None) -> List[Dispense]:
        statement = select(Dispense)
        if medicine_id:
            statement = statement.where(Dispense.medicine_id == medicine_id)
        statement = statement.order_by(Dispense.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())


class SqlAlchemyRestockRepository(RestockRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, restock: Restock) -> Restock:
        self.session.add(restock)
        await self.session.flush()
        await self.session.refresh(restock)
        return restock

    async def list_all(self, medicine_id: Optional[str] = None) -> List[Restock]:
        statement = select(Restock)
        if medicine_id:
            statement = statement.where(Restock.medicine_id == medicine_id)
        statement = statement.order_by(Restock.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())
