"""Data Transfer Objects for Medical Report Use Cases

Attachments travel as base64 inside the JSON body.
"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.medical_report import ReportPriority, ReportStatus, ReportType


class ReportFileDTO(BaseModel):
    """Attachment payload"""

    file_name: str = Field(..., min_length=1, max_length=255)
    content_type: str = Field(..., description="MIME type (application/pdf, image/png, ...)")
    content_base64: str = Field(..., min_length=1, description="Base64-encoded file content")


class UploadReportCommandDTO(BaseModel):
    """
    Command DTO for uploading a medical report

    Used as input to UploadReport use case.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    report_type: ReportType = ReportType.OTHER
    patient_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1)
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    report_date: Optional[date] = None
    priority: ReportPriority = ReportPriority.NORMAL
    status: ReportStatus = ReportStatus.UPLOADED
    tags: List[str] = Field(default_factory=list)
    findings: Optional[str] = None
    file: Optional[ReportFileDTO] = None

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Complete Blood Count",
                "report_type": "lab",
                "patient_id": "PAT20240042",
                "patient_name": "Jane Doe",
                "priority": "normal",
                "tags": ["blood", "routine"],
                "file": {
                    "file_name": "cbc.pdf",
                    "content_type": "application/pdf",
                    "content_base64": "JVBERi0xLjQK...",
                },
            }
        }


class UpdateReportCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    report_type: Optional[ReportType] = None
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    report_date: Optional[date] = None
    priority: Optional[ReportPriority] = None
    status: Optional[ReportStatus] = None
    tags: Optional[List[str]] = None
    findings: Optional[str] = None


class ReportResponseDTO(BaseModel):
    id: str
    report_id: str
    title: str
    description: str
    report_type: str
    patient_id: str
    patient_name: str
    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    uploaded_by: str
    report_date: date
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    status: str
    priority: str
    tags: List[str] = Field(default_factory=list)
    findings: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListReportsResponseDTO(BaseModel):
    reports: List[ReportResponseDTO]
    total: int
    limit: int
    offset: int


class DeleteReportResponseDTO(BaseModel):
    id: str
    report_id: str
    deleted: bool = True
    file_deleted: bool = Field(..., description="Whether the storage host confirmed file deletion")


__all__ = [
    "ReportFileDTO",
    "UploadReportCommandDTO",
    "UpdateReportCommandDTO",
    "ReportResponseDTO",
    "ListReportsResponseDTO",
    "DeleteReportResponseDTO",
]
