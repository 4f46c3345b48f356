"""Unit tests for report use cases

Tests cover:
- Upload permission and attachment validation
- Storage failures and cleanup of orphaned files
- Role-scoped reads
"""

import base64
import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.services.storage_service import StorageError, StoredFile
from src.app.use_cases.reports.dtos import ReportFileDTO, UploadReportCommandDTO
from src.app.use_cases.reports.list_reports import GetReport, ListReports
from src.app.use_cases.reports.upload_report import UploadReport
from src.domain.medical_report import MedicalReport, ReportType
from src.domain.notification import NotificationType
from src.domain.roles import Actor, UserRole

TODAY = date(2024, 2, 1)
DOCTOR = Actor("DOC001", UserRole.DOCTOR)
PDF_BYTES = b"%PDF-1.4 test report"


@pytest.fixture
def mock_report_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda report: report)
    return repo


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.upload = AsyncMock(
        return_value=StoredFile(url="https://files.example.com/cbc.pdf", delete_url="https://files.example.com/del/1")
    )
    storage.delete = AsyncMock(return_value=True)
    return storage


@pytest.fixture
def mock_notification_repo():
    repo = MagicMock()
    repo.create = AsyncMock(side_effect=lambda notification: notification)
    return repo


@pytest.fixture
def upload_use_case(mock_uow, mock_report_repo, mock_storage, mock_notification_repo):
    return UploadReport(
        uow=mock_uow,
        report_repo=mock_report_repo,
        storage_service=mock_storage,
        notification_repo=mock_notification_repo,
        max_upload_size=1024,
    )


def upload_command(content=PDF_BYTES, content_type="application/pdf", encoded=None):
    return UploadReportCommandDTO(
        title="Complete Blood Count",
        report_type=ReportType.LAB,
        patient_id="PAT20240042",
        patient_name="Jane Doe",
        doctor_id="DOC001",
        tags=["blood"],
        file=ReportFileDTO(
            file_name="cbc.pdf",
            content_type=content_type,
            content_base64=encoded or base64.b64encode(content).decode(),
        ),
    )


@pytest.mark.asyncio
class TestUploadReportSuccess:
    """Test successful uploads"""

    async def test_upload_stores_file_and_records_report(
        self, upload_use_case, mock_storage, mock_uow
    ):
        """
        Given: A doctor uploading a small PDF
        When: The report is uploaded
        Then: The file is stored and the report carries its URL and size
        """
        # Act
        result = await upload_use_case.execute(upload_command(), DOCTOR, TODAY)

        # Assert
        assert result.is_ok()
        report = result.value
        assert report.report_id.startswith("RPT-")
        assert report.file_url == "https://files.example.com/cbc.pdf"
        assert report.file_name == "cbc.pdf"
        assert report.file_size == len(PDF_BYTES)
        assert report.uploaded_by == "DOC001"
        assert report.report_date == TODAY
        mock_storage.upload.assert_called_once_with(PDF_BYTES, "cbc.pdf")
        mock_uow.commit.assert_called_once()

    async def test_patient_notified(self, upload_use_case, mock_notification_repo):
        # Act
        await upload_use_case.execute(upload_command(), DOCTOR, TODAY)

        # Assert
        notification = mock_notification_repo.create.call_args[0][0]
        assert notification.recipient_id == "PAT20240042"
        assert notification.type == NotificationType.REPORT_UPLOADED
        assert notification.data["reportType"] == "lab"

    async def test_report_without_attachment(self, upload_use_case, mock_storage):
        # Arrange
        command = upload_command()
        command.file = None

        # Act
        result = await upload_use_case.execute(command, Actor("LAB001", UserRole.LAB_TECHNICIAN), TODAY)

        # Assert
        assert result.is_ok()
        assert result.value.file_url is None
        mock_storage.upload.assert_not_called()


@pytest.mark.asyncio
class TestUploadReportValidation:
    """Test rejected uploads"""

    @pytest.mark.parametrize("role", [UserRole.NURSE, UserRole.RECEPTIONIST, UserRole.PATIENT])
    async def test_role_not_allowed(self, upload_use_case, mock_storage, role):
        result = await upload_use_case.execute(upload_command(), Actor("U1", role), TODAY)

        assert result.is_err()
        assert result.error.code == "PERMISSION_DENIED"
        mock_storage.upload.assert_not_called()

    async def test_invalid_base64(self, upload_use_case, mock_storage):
        result = await upload_use_case.execute(upload_command(encoded="not base64!!"), DOCTOR, TODAY)

        assert result.error.code == "INVALID_FILE_CONTENT"
        mock_storage.upload.assert_not_called()

    async def test_disallowed_type(self, upload_use_case):
        result = await upload_use_case.execute(
            upload_command(content_type="application/zip"), DOCTOR, TODAY
        )

        assert result.error.code == "INVALID_FILE"
        assert "File type not allowed" in result.error.message

    async def test_file_too_large(self, upload_use_case):
        result = await upload_use_case.execute(upload_command(content=b"x" * 2048), DOCTOR, TODAY)

        assert result.error.code == "INVALID_FILE"
        assert "File size too large" in result.error.message


@pytest.mark.asyncio
class TestUploadReportFailure:
    """Test storage and database failures"""

    async def test_storage_failure(self, upload_use_case, mock_storage, mock_report_repo):
        # Arrange
        mock_storage.upload = AsyncMock(side_effect=StorageError("host unavailable"))

        # Act
        result = await upload_use_case.execute(upload_command(), DOCTOR, TODAY)

        # Assert
        assert result.error.code == "FILE_UPLOAD_FAILED"
        mock_report_repo.create.assert_not_called()

    async def test_database_failure_removes_stored_file(
        self, upload_use_case, mock_storage, mock_report_repo, mock_uow
    ):
        """
        Given: The file uploads but the report insert fails
        When: The report is uploaded
        Then: The transaction is rolled back and the stored file is deleted
        """
        # Arrange
        mock_report_repo.create = AsyncMock(side_effect=Exception("Database error"))

        # Act
        result = await upload_use_case.execute(upload_command(), DOCTOR, TODAY)

        # Assert
        assert result.error.code == "UPLOAD_REPORT_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_storage.delete.assert_called_once_with(
            "https://files.example.com/cbc.pdf", "https://files.example.com/del/1"
        )


def make_report(id, uploaded_by, report_type=ReportType.LAB, doctor_id=None, patient_id="PAT20240042"):
    return MedicalReport(
        id=id,
        report_id=f"RPT-{id}",
        title="Report",
        report_type=report_type,
        patient_id=patient_id,
        patient_name="Jane Doe",
        doctor_id=doctor_id,
        uploaded_by=uploaded_by,
        report_date=TODAY,
    )


@pytest.mark.asyncio
class TestReportAccess:
    """Test role-scoped reads"""

    async def test_lab_technician_sees_own_lab_reports(self):
        # Arrange
        repo = MagicMock()
        repo.list_all = AsyncMock(
            return_value=[
                make_report("1", "LAB001"),
                make_report("2", "LAB001", ReportType.RADIOLOGY),
                make_report("3", "LAB002"),
            ]
        )

        # Act
        result = await ListReports(repo).execute(Actor("LAB001", UserRole.LAB_TECHNICIAN))

        # Assert
        assert [r.id for r in result.value.reports] == ["1"]
        assert result.value.total == 1

    async def test_patient_listing_is_scoped(self):
        repo = MagicMock()
        repo.list_all = AsyncMock(return_value=[make_report("1", "DOC001")])

        await ListReports(repo).execute(Actor("PAT20240042", UserRole.PATIENT))

        repo.list_all.assert_called_once_with(patient_id="PAT20240042")

    async def test_doctor_cannot_read_unrelated_report(self):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=make_report("1", "DOC002", doctor_id="DOC003"))

        result = await GetReport(repo).execute("1", DOCTOR)

        assert result.error.code == "REPORT_NOT_FOUND"

    async def test_assigned_doctor_reads_report(self):
        repo = MagicMock()
        repo.get_by_id = AsyncMock(return_value=make_report("1", "LAB001", doctor_id="DOC001"))

        result = await GetReport(repo).execute("1", DOCTOR)

        assert result.is_ok()
