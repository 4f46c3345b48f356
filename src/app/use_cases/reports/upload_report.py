"""UploadReport Use Case

Stores the attachment with the storage host, then records the report.
"""

import base64
import binascii
import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.storage_service import StorageService, StorageError, StoredFile
from src.app.repositories.medical_report_repository import MedicalReportRepository
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.calculations import (
    MAX_FILE_SIZE,
    can_user_upload_report,
    render_notification_template,
    validate_report_file,
)
from src.domain.calculations.identifiers import generate_notification_id, generate_report_id
from src.domain.medical_report import MedicalReport, ReportType
from src.domain.notification import Notification, NotificationPriority, NotificationType
from src.domain.roles import Actor
from .dtos import ReportResponseDTO, UploadReportCommandDTO
from .mappers import to_report_dto

logger = logging.getLogger(__name__)


class UploadReport:
    """
    Use Case: Upload a medical report

    Business Rules:
    1. Only admins, doctors and lab technicians can upload
    2. Attachments must be PDF, JPEG, PNG, GIF or WebP and at most
       max_upload_size bytes
    3. The file is stored before the record is written; if the record cannot
       be written the stored file is removed again
    4. The patient is notified that a report is available

    Flow:
    1. Check permission
    2. Decode and validate attachment
    3. Upload attachment
    4. Create report record and notification
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        report_repo: MedicalReportRepository,
        storage_service: StorageService,
        notification_repo: Optional[NotificationRepository] = None,
        max_upload_size: int = MAX_FILE_SIZE,
    ):
        self.uow = uow
        self.report_repo = report_repo
        self.storage_service = storage_service
        self.notification_repo = notification_repo
        self.max_upload_size = max_upload_size

    async def execute(
        self,
        command: UploadReportCommandDTO,
        actor: Actor,
        today: Optional[date] = None,
    ) -> Result[ReportResponseDTO]:
        # Step 1: Check permission
        if not can_user_upload_report(actor.role):
            return Return.err(
                Error(
                    code="PERMISSION_DENIED",
                    message="Only admins, doctors and lab technicians can upload reports",
                )
            )

        # Step 2: Decode and validate attachment
        content = None
        if command.file is not None:
            try:
                content = base64.b64decode(command.file.content_base64, validate=True)
            except (binascii.Error, ValueError):
                return Return.err(
                    Error(
                        code="INVALID_FILE_CONTENT",
                        message="Attachment is not valid base64",
                    )
                )

            problem = validate_report_file(command.file.content_type, len(content), self.max_upload_size)
            if problem:
                return Return.err(Error(code="INVALID_FILE", message=problem))

        # Step 3: Upload attachment
        stored: Optional[StoredFile] = None
        if content is not None:
            try:
                stored = await self.storage_service.upload(content, command.file.file_name)
            except StorageError as e:
                logger.error(f"Report attachment upload failed: {e}")
                return Return.err(
                    Error(
                        code="FILE_UPLOAD_FAILED",
                        message="Failed to upload report file",
                        reason=str(e),
                    )
                )

        try:
            # Step 4: Report record
            report = MedicalReport(
                report_id=generate_report_id(),
                title=command.title,
                description=command.description,
                report_type=command.report_type,
                patient_id=command.patient_id,
                patient_name=command.patient_name,
                doctor_id=command.doctor_id,
                doctor_name=command.doctor_name,
                uploaded_by=actor.user_id,
                report_date=command.report_date or today or date.today(),
                file_url=stored.url if stored else None,
                delete_url=stored.delete_url if stored else None,
                file_name=command.file.file_name if command.file else None,
                file_type=command.file.content_type if command.file else None,
                file_size=len(content) if content is not None else None,
                status=command.status,
                priority=command.priority,
                tags=list(command.tags),
                findings=command.findings,
            )
            created = await self.report_repo.create(report)

            if self.notification_repo is not None:
                data = {
                    "reportId": created.id,
                    "reportType": ReportType(created.report_type).value,
                    "patientName": created.patient_name,
                }
                title, message = render_notification_template(NotificationType.REPORT_UPLOADED, data)
                await self.notification_repo.create(
                    Notification(
                        notification_id=generate_notification_id(),
                        recipient_id=created.patient_id,
                        sender_id=actor.user_id,
                        type=NotificationType.REPORT_UPLOADED,
                        priority=NotificationPriority.MEDIUM,
                        title=title,
                        message=message,
                        data=data,
                    )
                )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(f"Report {created.report_id} uploaded for patient {created.patient_id}")

            return Return.ok(to_report_dto(created))

        except Exception as e:
            await self.uow.rollback()
            if stored is not None:
                removed = await self.storage_service.delete(stored.url, stored.delete_url)
                if not removed:
                    logger.warning(f"Orphaned report file left at {stored.url}")
            return Return.err(
                Error(
                    code="UPLOAD_REPORT_FAILED",
                    message="Failed to upload report",
                    reason=str(e),
                )
            )
