"""AddPatient Use Case"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.patient_repository import PatientRepository
from src.domain.calculations import calculate_age
from src.domain.calculations.identifiers import generate_patient_id
from src.domain.patient import Patient, PatientStatus
from src.domain.roles import Actor
from .dtos import AddPatientCommandDTO, PatientResponseDTO
from .mappers import to_patient_dto

logger = logging.getLogger(__name__)


class AddPatient:
    """
    Use Case: Register a patient

    Business Rules:
    1. patient_id is generated (PAT + year + 4 digits)
    2. Email, when given, must not belong to another patient
    3. age is derived from date_of_birth
    4. New patients are active
    """

    def __init__(self, uow: UnitOfWork, patient_repo: PatientRepository):
        self.uow = uow
        self.patient_repo = patient_repo

    async def execute(
        self,
        command: AddPatientCommandDTO,
        actor: Optional[Actor] = None,
        today: Optional[date] = None,
    ) -> Result[PatientResponseDTO]:
        today = today or date.today()

        try:
            if command.email and await self.patient_repo.get_by_email(command.email):
                return Return.err(
                    Error(
                        code="PATIENT_EMAIL_EXISTS",
                        message=f"A patient with email {command.email} already exists",
                    )
                )

            patient = Patient(
                patient_id=generate_patient_id(),
                first_name=command.first_name,
                last_name=command.last_name,
                email=command.email,
                phone=command.phone,
                date_of_birth=command.date_of_birth,
                age=calculate_age(command.date_of_birth, today),
                gender=command.gender,
                blood_group=command.blood_group,
                address=command.address,
                emergency_contact_name=command.emergency_contact_name,
                emergency_contact_phone=command.emergency_contact_phone,
                allergies=command.allergies,
                status=PatientStatus.ACTIVE,
                created_by=actor.user_id if actor else None,
            )

            created = await self.patient_repo.create(patient)
            await self.uow.commit()

            logger.info(f"Patient {created.patient_id} registered")

            return Return.ok(to_patient_dto(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ADD_PATIENT_FAILED",
                    message="Failed to register patient",
                    reason=str(e),
                )
            )
