"""GetPatient Use Case"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.patient_repository import PatientRepository
from src.domain.roles import Actor
from .dtos import PatientResponseDTO
from .mappers import to_patient_dto


class GetPatient:
    """Patients can only read their own record"""

    def __init__(self, patient_repo: PatientRepository):
        self.patient_repo = patient_repo

    async def execute(self, patient_id: str, actor: Optional[Actor] = None) -> Result[PatientResponseDTO]:
        patient = await self.patient_repo.get_by_id(patient_id)

        if not patient or (actor and actor.is_patient and actor.user_id not in (patient.id, patient.patient_id)):
            return Return.err(
                Error(
                    code="PATIENT_NOT_FOUND",
                    message=f"Patient with ID {patient_id} not found",
                )
            )

        return Return.ok(to_patient_dto(patient))
