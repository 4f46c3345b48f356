"""UpdateReport Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.medical_report_repository import MedicalReportRepository
from src.domain.calculations import can_user_access_report, can_user_delete_report
from src.domain.roles import Actor
from .dtos import ReportResponseDTO, UpdateReportCommandDTO
from .mappers import to_report_dto

logger = logging.getLogger(__name__)


class UpdateReport:
    """
    Use Case: Edit report metadata

    Only the uploader or an admin may edit. Callers who cannot see the report
    get REPORT_NOT_FOUND.
    """

    def __init__(self, uow: UnitOfWork, report_repo: MedicalReportRepository):
        self.uow = uow
        self.report_repo = report_repo

    async def execute(
        self,
        report_id: str,
        command: UpdateReportCommandDTO,
        actor: Actor,
    ) -> Result[ReportResponseDTO]:
        try:
            report = await self.report_repo.get_by_id(report_id)
            if not report or not can_user_access_report(actor.role, actor.user_id, report):
                return Return.err(
                    Error(
                        code="REPORT_NOT_FOUND",
                        message=f"Report with ID {report_id} not found",
                    )
                )

            if not can_user_delete_report(actor.role, actor.user_id, report):
                return Return.err(
                    Error(
                        code="PERMISSION_DENIED",
                        message="Only the uploader or an admin can edit this report",
                    )
                )

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(report, field, value)

            updated = await self.report_repo.update(report)
            await self.uow.commit()

            logger.info(f"Report {updated.report_id} updated by {actor.user_id}")

            return Return.ok(to_report_dto(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_REPORT_FAILED",
                    message="Failed to update report",
                    reason=str(e),
                )
            )
