"""SQLAlchemy Patient Repository Implementation

Implements patient persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.patient_repository import PatientRepository
from src.domain.patient import Patient


class SqlAlchemyPatientRepository(PatientRepository):
    """
    SQLAlchemy implementation of PatientRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, patient: Patient) -> Patient:
        self.session.add(patient)
        await self.session.flush()
        await self.session.refresh(patient)
        return patient

    async def get_by_id(self, patient_id: str) -> Optional[Patient]:
        statement = select(Patient).where(Patient.id == patient_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Patient]:
        statement = select(Patient).where(Patient.email == email)
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def list_all(self) -> List[Patient]:
        statement = select(Patient).order_by(Patient.created_at.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, patient: Patient) -> Patient:
        patient.updated_at = datetime.utcnow()
        self.session.add(patient)
        await self.session.flush()
        await self.session.refresh(patient)
        return patient

    async def delete(self, patient: Patient) -> None:
        await self.session.delete(patient)
        await self.session.flush()
