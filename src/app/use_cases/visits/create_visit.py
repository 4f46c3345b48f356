"""CreateVisit Use Case"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.visit_repository import VisitRepository
from src.domain.calculations.identifiers import generate_visit_id
from src.domain.roles import Actor
from src.domain.visit import Visit, VisitStatus, VisitType
from .dtos import CreateVisitCommandDTO, VisitResponseDTO
from .mappers import to_visit_dto

logger = logging.getLogger(__name__)


class CreateVisit:
    """
    Use Case: Open a patient visit

    Business Rules:
    1. visit_id is generated (VIS-<time>-<random>)
    2. New visits are active
    3. IPD visits are admitted on admission_date, defaulting to visit_date
    4. OPD visits carry no admission or bed
    """

    def __init__(self, uow: UnitOfWork, visit_repo: VisitRepository):
        self.uow = uow
        self.visit_repo = visit_repo

    async def execute(
        self,
        command: CreateVisitCommandDTO,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[VisitResponseDTO]:
        now = now or datetime.utcnow()
        visit_date = command.visit_date or now
        inpatient = command.visit_type == VisitType.IPD

        try:
            visit = Visit(
                visit_id=generate_visit_id(),
                patient_id=command.patient_id,
                patient_name=command.patient_name,
                doctor_id=command.doctor_id,
                doctor_name=command.doctor_name,
                visit_type=command.visit_type,
                status=VisitStatus.ACTIVE,
                visit_date=visit_date,
                chief_complaint=command.chief_complaint,
                diagnosis=command.diagnosis,
                treatment_plan=command.treatment_plan,
                notes=command.notes,
                bed_number=command.bed_number if inpatient else None,
                ward=command.ward if inpatient else None,
                admission_date=(command.admission_date or visit_date) if inpatient else None,
                vitals=dict(command.vitals),
                created_by=actor.user_id if actor else None,
            )

            created = await self.visit_repo.create(visit)
            await self.uow.commit()

            logger.info(
                f"Visit {created.visit_id} ({command.visit_type.value}) opened for patient {created.patient_id}"
            )

            return Return.ok(to_visit_dto(created, now))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_VISIT_FAILED",
                    message="Failed to create visit",
                    reason=str(e),
                )
            )
