"""DeletePatient Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.patient_repository import PatientRepository
from .dtos import DeletePatientResponseDTO

logger = logging.getLogger(__name__)


class DeletePatient:
    """Use Case: Remove a patient record"""

    def __init__(self, uow: UnitOfWork, patient_repo: PatientRepository):
        self.uow = uow
        self.patient_repo = patient_repo

    async def execute(self, patient_id: str) -> Result[DeletePatientResponseDTO]:
        try:
            patient = await self.patient_repo.get_by_id(patient_id)
            if not patient:
                return Return.err(
                    Error(
                        code="PATIENT_NOT_FOUND",
                        message=f"Patient with ID {patient_id} not found",
                    )
                )

            await self.patient_repo.delete(patient)
            await self.uow.commit()

            logger.info(f"Patient {patient.patient_id} deleted")

            return Return.ok(DeletePatientResponseDTO(id=patient.id, patient_id=patient.patient_id))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_PATIENT_FAILED",
                    message="Failed to delete patient",
                    reason=str(e),
                )
            )
