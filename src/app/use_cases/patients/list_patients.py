"""
List Patients Use Case

Retrieves patients with filtering and pagination.
"""
from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.patient_repository import PatientRepository
from src.app.views import PatientFilters, PatientSummary, filter_patients, paginate, summarize_patients
from .dtos import ListPatientsResponseDTO
from .mappers import to_patient_dto


class ListPatients:
    """
    Use case: List patients

    Patients are ordered by created_at DESC (most recent first).
    """

    def __init__(self, patient_repo: PatientRepository):
        self.patient_repo = patient_repo

    async def execute(
        self,
        filters: Optional[PatientFilters] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListPatientsResponseDTO]:
        patients = await self.patient_repo.list_all()
        matching = filter_patients(patients, filters)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListPatientsResponseDTO(
                patients=[to_patient_dto(p) for p in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )


class GetPatientSummary:
    """Gender split, activity and average age over all patients"""

    def __init__(self, patient_repo: PatientRepository):
        self.patient_repo = patient_repo

    async def execute(self, today: Optional[date] = None) -> Result[PatientSummary]:
        patients = await self.patient_repo.list_all()
        return Return.ok(summarize_patients(patients, today))
