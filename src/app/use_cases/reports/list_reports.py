"""
List Reports Use Case

Retrieves the reports a caller may see, with filtering and pagination.
"""
from datetime import datetime
from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.medical_report_repository import MedicalReportRepository
from src.app.views import ReportFilters, ReportSummary, filter_reports, paginate, summarize_reports
from src.domain.calculations import can_user_access_report
from src.domain.medical_report import MedicalReport
from src.domain.roles import Actor
from .dtos import ListReportsResponseDTO, ReportResponseDTO
from .mappers import to_report_dto


async def _visible_reports(repo: MedicalReportRepository, actor: Actor) -> List[MedicalReport]:
    patient_scope = actor.user_id if actor.is_patient else None
    reports = await repo.list_all(patient_id=patient_scope)
    return [r for r in reports if can_user_access_report(actor.role, actor.user_id, r)]


class ListReports:
    """
    Use case: List reports

    Reports are ordered by created_at DESC (most recent first) and limited
    to those the caller's role may access.
    """

    def __init__(self, report_repo: MedicalReportRepository):
        self.report_repo = report_repo

    async def execute(
        self,
        actor: Actor,
        filters: Optional[ReportFilters] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListReportsResponseDTO]:
        reports = await _visible_reports(self.report_repo, actor)
        matching = filter_reports(reports, filters)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListReportsResponseDTO(
                reports=[to_report_dto(r) for r in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )


class GetReport:
    def __init__(self, report_repo: MedicalReportRepository):
        self.report_repo = report_repo

    async def execute(self, report_id: str, actor: Actor) -> Result[ReportResponseDTO]:
        report = await self.report_repo.get_by_id(report_id)

        if not report or not can_user_access_report(actor.role, actor.user_id, report):
            return Return.err(
                Error(
                    code="REPORT_NOT_FOUND",
                    message=f"Report with ID {report_id} not found",
                )
            )

        return Return.ok(to_report_dto(report))


class GetReportSummary:
    """Counts over the reports visible to the caller"""

    def __init__(self, report_repo: MedicalReportRepository):
        self.report_repo = report_repo

    async def execute(self, actor: Actor, now: Optional[datetime] = None) -> Result[ReportSummary]:
        reports = await _visible_reports(self.report_repo, actor)
        return Return.ok(summarize_reports(reports, now))
