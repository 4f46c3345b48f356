"""UpdateVisit Use Case"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.visit_repository import VisitRepository
from src.domain.visit import VisitStatus
from .dtos import UpdateVisitCommandDTO, VisitResponseDTO
from .mappers import to_visit_dto

logger = logging.getLogger(__name__)

CLOSED_STATUSES = (VisitStatus.DISCHARGED, VisitStatus.CANCELLED)


class UpdateVisit:
    """
    Use Case: Edit a visit

    Business Rules:
    1. Discharged and cancelled visits are read-only
    2. Vitals are merged into the latest reading
    """

    def __init__(self, uow: UnitOfWork, visit_repo: VisitRepository):
        self.uow = uow
        self.visit_repo = visit_repo

    async def execute(
        self,
        visit_id: str,
        command: UpdateVisitCommandDTO,
        now: Optional[datetime] = None,
    ) -> Result[VisitResponseDTO]:
        try:
            visit = await self.visit_repo.get_by_id(visit_id)
            if not visit:
                return Return.err(
                    Error(
                        code="VISIT_NOT_FOUND",
                        message=f"Visit with ID {visit_id} not found",
                    )
                )

            if visit.status in CLOSED_STATUSES:
                return Return.err(
                    Error(
                        code="VISIT_CLOSED",
                        message=f"Visit {visit.visit_id} is {VisitStatus(visit.status).value} and cannot be edited",
                    )
                )

            for field, value in command.model_dump(exclude_none=True, exclude={"vitals"}).items():
                setattr(visit, field, value)

            if command.vitals is not None:
                visit.vitals = {**(visit.vitals or {}), **command.vitals}

            updated = await self.visit_repo.update(visit)
            await self.uow.commit()

            logger.info(f"Visit {updated.visit_id} updated")

            return Return.ok(to_visit_dto(updated, now))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_VISIT_FAILED",
                    message="Failed to update visit",
                    reason=str(e),
                )
            )
