"""DeleteReport Use Case

Removes the stored attachment, then the report record.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.storage_service import StorageService
from src.app.repositories.medical_report_repository import MedicalReportRepository
from src.domain.calculations import can_user_access_report, can_user_delete_report
from src.domain.roles import Actor
from .dtos import DeleteReportResponseDTO

logger = logging.getLogger(__name__)


class DeleteReport:
    """
    Use Case: Delete a medical report

    Business Rules:
    1. Only the uploader or an admin may delete
    2. File deletion is delegated to the storage host; a failed remote delete
       is logged and does not block removing the record
    """

    def __init__(
        self,
        uow: UnitOfWork,
        report_repo: MedicalReportRepository,
        storage_service: StorageService,
    ):
        self.uow = uow
        self.report_repo = report_repo
        self.storage_service = storage_service

    async def execute(self, report_id: str, actor: Actor) -> Result[DeleteReportResponseDTO]:
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
                        message="Only the uploader or an admin can delete this report",
                    )
                )

            file_deleted = False
            if report.file_url:
                file_deleted = await self.storage_service.delete(report.file_url, report.delete_url)
                if not file_deleted:
                    logger.warning(f"File for report {report.report_id} was not removed from storage")

            await self.report_repo.delete(report)
            await self.uow.commit()

            logger.info(f"Report {report.report_id} deleted by {actor.user_id}")

            return Return.ok(
                DeleteReportResponseDTO(
                    id=report.id,
                    report_id=report.report_id,
                    file_deleted=file_deleted,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_REPORT_FAILED",
                    message="Failed to delete report",
                    reason=str(e),
                )
            )
