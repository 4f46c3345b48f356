"""Medical report use cases"""
from .upload_report import UploadReport
from .update_report import UpdateReport
from .delete_report import DeleteReport
from .list_reports import ListReports, GetReport, GetReportSummary
from .dtos import (
    ReportFileDTO,
    UploadReportCommandDTO,
    UpdateReportCommandDTO,
    ReportResponseDTO,
    ListReportsResponseDTO,
    DeleteReportResponseDTO,
)

__all__ = [
    "UploadReport",
    "UpdateReport",
    "DeleteReport",
    "ListReports",
    "GetReport",
    "GetReportSummary",
    "ReportFileDTO",
    "UploadReportCommandDTO",
    "UpdateReportCommandDTO",
    "ReportResponseDTO",
    "ListReportsResponseDTO",
    "DeleteReportResponseDTO",
]
