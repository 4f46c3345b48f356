"""Medical Report API Routes"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.storage_service import StorageService
from src.app.use_cases.reports import (
    DeleteReport,
    DeleteReportResponseDTO,
    GetReport,
    GetReportSummary,
    ListReports,
    ListReportsResponseDTO,
    ReportResponseDTO,
    UpdateReport,
    UpdateReportCommandDTO,
    UploadReport,
    UploadReportCommandDTO,
)
from src.app.views import ReportFilters, ReportSummary
from src.adapter.repositories.medical_report_repository import SqlAlchemyMedicalReportRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_config, get_current_actor, get_session, get_storage_service
from src.domain.roles import Actor
from src.api.error import raise_for_error

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.post(
    "",
    response_model=ReportResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Rejected attachment",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_FILE",
                            "message": "File type not allowed. Please upload PDF, JPEG, PNG, GIF, or WebP files."
                        }
                    }
                }
            }
        },
        403: {
            "description": "Role cannot upload reports",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PERMISSION_DENIED",
                            "message": "Only admins, doctors and lab technicians can upload reports"
                        }
                    }
                }
            }
        }
    }
)
async def upload_report(
    request: UploadReportCommandDTO,
    session: AsyncSession = Depends(get_session),
    storage_service: StorageService = Depends(get_storage_service),
    config=Depends(get_config),
    actor: Actor = Depends(get_current_actor),
):
    """
    Upload a medical report with an optional attachment.

    The attachment is sent base64-encoded and must be a PDF or an image
    (JPEG, PNG, GIF, WebP) of at most 10MB. It is stored on the external
    storage host and the record keeps the returned URL.

    **Returns:**
    - 201: Report uploaded
    - 400: Attachment rejected
    - 403: Caller may not upload reports
    - 500: Storage host rejected the upload
    """
    use_case = UploadReport(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicalReportRepository(session),
        storage_service,
        SqlAlchemyNotificationRepository(session),
        max_upload_size=config.MAX_UPLOAD_SIZE,
    )
    result = await use_case.execute(request, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListReportsResponseDTO)
async def list_reports(
    filters: Annotated[ReportFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    List the reports the caller may see, newest first.

    Patients see their own reports, doctors the ones they are assigned to or
    uploaded, lab technicians the ones they uploaded. Admins see everything.
    """
    result = await ListReports(SqlAlchemyMedicalReportRepository(session)).execute(actor, filters, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=ReportSummary)
async def get_report_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    result = await GetReportSummary(SqlAlchemyMedicalReportRepository(session)).execute(actor)
    return result.value


@router.get("/{report_id}", response_model=ReportResponseDTO)
async def get_report(
    report_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    result = await GetReport(SqlAlchemyMedicalReportRepository(session)).execute(report_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{report_id}", response_model=ReportResponseDTO)
async def update_report(
    report_id: str,
    request: UpdateReportCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    use_case = UpdateReport(SqlAlchemyUnitOfWork(session), SqlAlchemyMedicalReportRepository(session))
    result = await use_case.execute(report_id, request, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{report_id}", response_model=DeleteReportResponseDTO)
async def delete_report(
    report_id: str,
    session: AsyncSession = Depends(get_session),
    storage_service: StorageService = Depends(get_storage_service),
    actor: Actor = Depends(get_current_actor),
):
    """
    Delete a report and its stored attachment. Uploader or admin only.
    """
    use_case = DeleteReport(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicalReportRepository(session),
        storage_service,
    )
    result = await use_case.execute(report_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
