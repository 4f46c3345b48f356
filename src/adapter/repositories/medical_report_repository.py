"""SQLAlchemy Medical Report Repository Implementation"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.medical_report_repository import MedicalReportRepository
from src.domain.medical_report import MedicalReport


class SqlAlchemyMedicalReportRepository(MedicalReportRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, report: MedicalReport) -> MedicalReport:
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def get_by_id(self, report_id: str) -> Optional[MedicalReport]:
        statement = select(MedicalReport).where(MedicalReport.id == report_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_all(self, patient_id: Optional[str] = None) -> List[MedicalReport]:
        statement = select(MedicalReport)
        if patient_id:
            statement = statement.where(MedicalReport.patient_id == patient_id)
        statement = statement.order_by(MedicalReport.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, report: MedicalReport) -> MedicalReport:
        report.updated_at = datetime.utcnow()
        self.session.add(report)
        await self.session.flush()
        await self.session.refresh(report)
        return report

    async def delete(self, report: MedicalReport) -> None:
        await self.session.delete(report)
        await self.session.flush()
