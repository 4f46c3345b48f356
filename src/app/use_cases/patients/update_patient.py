"""UpdatePatient Use Case"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.patient_repository import PatientRepository
from src.domain.calculations import calculate_age
from .dtos import PatientResponseDTO, UpdatePatientCommandDTO
from .mappers import to_patient_dto

logger = logging.getLogger(__name__)


class UpdatePatient:
    """
    Use Case: Edit patient details

    age is recomputed whenever date_of_birth changes.
    """

    def __init__(self, uow: UnitOfWork, patient_repo: PatientRepository):
        self.uow = uow
        self.patient_repo = patient_repo

    async def execute(
        self,
        patient_id: str,
        command: UpdatePatientCommandDTO,
        today: Optional[date] = None,
    ) -> Result[PatientResponseDTO]:
        today = today or date.today()

        try:
            patient = await self.patient_repo.get_by_id(patient_id)
            if not patient:
                return Return.err(
                    Error(
                        code="PATIENT_NOT_FOUND",
                        message=f"Patient with ID {patient_id} not found",
                    )
                )

            if command.email and command.email != patient.email:
                existing = await self.patient_repo.get_by_email(command.email)
                if existing and existing.id != patient.id:
                    return Return.err(
                        Error(
                            code="PATIENT_EMAIL_EXISTS",
                            message=f"A patient with email {command.email} already exists",
                        )
                    )

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(patient, field, value)

            if command.date_of_birth is not None:
                patient.age = calculate_age(command.date_of_birth, today)

            updated = await self.patient_repo.update(patient)
            await self.uow.commit()

            logger.info(f"Patient {updated.patient_id} updated")

            return Return.ok(to_patient_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PATIENT_FAILED",
                    message="Failed to update patient",
                    reason=str(e),
                )
            )
