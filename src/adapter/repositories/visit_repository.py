"""SQLAlchemy Visit Repository Implementation"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.visit_repository import VisitRepository
from src.domain.visit import Visit


class SqlAlchemyVisitRepository(VisitRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, visit: Visit) -> Visit:
        self.session.add(visit)
        await self.session.flush()
        await self.session.refresh(visit)
        return visit

    async def get_by_id(self, visit_id: str) -> Optional[Visit]:
        statement = select(Visit).where(Visit.id == visit_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_all(
        self,
        patient_id: Optional[str] = None,
        doctor_id: Optional[str] = None,
    ) -> List[Visit]:
        statement = select(Visit)

        if patient_id:
            statement = statement.where(Visit.patient_id == patient_id)
        if doctor_id:
            statement = statement.where(Visit.doctor_id == doctor_id)

        statement = statement.order_by(Visit.created_at.desc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, visit: Visit) -> Visit:
        visit.updated_at = datetime.utcnow()
        self.session.add(visit)
        await self.session.flush()
        await self.session.refresh(visit)
        return visit

    async def delete(self, visit: Visit) -> None:
        await self.session.delete(visit)
        await self.session.flush()
