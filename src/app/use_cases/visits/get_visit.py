"""GetVisit Use Case"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.visit_repository import VisitRepository
from src.domain.roles import Actor
from .dtos import VisitResponseDTO
from .mappers import to_visit_dto


class GetVisit:
    """Patients can only read their own visits"""

    def __init__(self, visit_repo: VisitRepository):
        self.visit_repo = visit_repo

    async def execute(
        self,
        visit_id: str,
        actor: Optional[Actor] = None,
        now: Optional[datetime] = None,
    ) -> Result[VisitResponseDTO]:
        visit = await self.visit_repo.get_by_id(visit_id)

        if not visit or (actor and actor.is_patient and visit.patient_id != actor.user_id):
            return Return.err(
                Error(
                    code="VISIT_NOT_FOUND",
                    message=f"Visit with ID {visit_id} not found",
                )
            )

        return Return.ok(to_visit_dto(visit, now))
