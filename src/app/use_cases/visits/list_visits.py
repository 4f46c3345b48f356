"""
List Visits Use Case

Retrieves visits with filtering and pagination.
"""
from datetime import datetime
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.visit_repository import VisitRepository
from src.app.views import VisitFilters, VisitSummary, filter_visits, paginate, summarize_visits
from src.domain.roles import Actor
from .dtos import ListVisitsResponseDTO
from .mappers import to_visit_dto


class ListVisits:
    """
    Use case: List visits

    Visits are ordered by created_at DESC (most recent first).
    Patients only see their own visits.
    """

    def __init__(self, visit_repo: VisitRepository):
        self.visit_repo = visit_repo

    async def execute(
        self,
        filters: Optional[VisitFilters] = None,
        actor: Optional[Actor] = None,
        limit: int = 20,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> Result[ListVisitsResponseDTO]:
        now = now or datetime.utcnow()
        patient_scope = actor.user_id if actor and actor.is_patient else None

        visits = await self.visit_repo.list_all(patient_id=patient_scope)
        matching = filter_visits(visits, filters)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListVisitsResponseDTO(
                visits=[to_visit_dto(v, now) for v in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )


class GetVisitSummary:
    """OPD/IPD counts, active admissions and average length of stay"""

    def __init__(self, visit_repo: VisitRepository):
        self.visit_repo = visit_repo

    async def execute(self, now: Optional[datetime] = None) -> Result[VisitSummary]:
        visits = await self.visit_repo.list_all()
        return Return.ok(summarize_visits(visits, now))
