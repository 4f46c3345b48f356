"""DischargeVisit Use Case

Closes an inpatient admission with a discharge summary.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.visit_repository import VisitRepository
from src.domain.calculations import calculate_length_of_stay
from src.domain.roles import Actor
from src.domain.visit import VisitStatus, VisitType
from .dtos import DischargeVisitCommandDTO, VisitResponseDTO
from .mappers import to_visit_dto

logger = logging.getLogger(__name__)


class DischargeVisit:
    """
    Use Case: Discharge an inpatient

    Business Rules:
    1. Only active IPD visits can be discharged
    2. discharge_date defaults to now and cannot precede admission
    3. Final diagnosis replaces the working diagnosis
    4. Length of stay is recorded in the discharge summary

    Flow:
    1. Retrieve visit and validate type and status
    2. Build discharge summary
    3. Set status discharged and discharge date
    4. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, visit_repo: VisitRepository):
        self.uow = uow
        self.visit_repo = visit_repo

    async def execute(
        self,
        visit_id: str,
        command: DischargeVisitCommandDTO,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[VisitResponseDTO]:
        now = now or datetime.utcnow()

        try:
            # Step 1: Retrieve and validate
            visit = await self.visit_repo.get_by_id(visit_id)
            if not visit:
                return Return.err(
                    Error(
                        code="VISIT_NOT_FOUND",
                        message=f"Visit with ID {visit_id} not found",
                    )
                )

            if visit.visit_type != VisitType.IPD:
                return Return.err(
                    Error(
                        code="INVALID_VISIT_TYPE",
                        message="Only inpatient (IPD) visits can be discharged",
                    )
                )

            if visit.status != VisitStatus.ACTIVE:
                return Return.err(
                    Error(
                        code="INVALID_VISIT_STATUS",
                        message=f"Visit {visit.visit_id} is {VisitStatus(visit.status).value}, not active",
                    )
                )

            admission_date = visit.admission_date or visit.visit_date
            discharge_date = command.discharge_date or now

            if discharge_date < admission_date:
                return Return.err(
                    Error(
                        code="INVALID_DISCHARGE_DATE",
                        message="Discharge date cannot be before admission date",
                    )
                )

            # Step 2: Discharge summary
            length_of_stay = calculate_length_of_stay(admission_date, discharge_date)
            visit.discharge_summary = {
                "finalDiagnosis": command.final_diagnosis,
                "treatmentGiven": command.treatment_given,
                "medicinesAtDischarge": list(command.medicines_at_discharge),
                "followUpInstructions": command.follow_up_instructions,
                "finalNotes": command.final_notes,
                "lengthOfStay": length_of_stay,
                "dischargedBy": actor.user_id if actor else None,
            }

            # Step 3: Close the admission
            visit.diagnosis = command.final_diagnosis
            visit.admission_date = admission_date
            visit.discharge_date = discharge_date
            visit.status = VisitStatus.DISCHARGED

            updated = await self.visit_repo.update(visit)

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Visit {updated.visit_id} discharged after {length_of_stay} day(s)"
            )

            return Return.ok(to_visit_dto(updated, now))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DISCHARGE_VISIT_FAILED",
                    message="Failed to discharge visit",
                    reason=str(e),
                )
            )
