"""Medical Report Domain Entity

Metadata for an uploaded report; the file itself lives with the image host.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Date, Integer, String, Text
from src.domain.base import BaseModel, generate_uuid


class ReportType(str, Enum):
    LAB = "lab"
    RADIOLOGY = "radiology"
    PRESCRIPTION = "prescription"
    DISCHARGE = "discharge"
    CONSULTATION = "consultation"
    OTHER = "other"


class ReportStatus(str, Enum):
    UPLOADED = "uploaded"
    PENDING_REVIEW = "pending_review"
    REVIEWED = "reviewed"
    ARCHIVED = "archived"


class ReportPriority(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    CRITICAL = "critical"


class MedicalReport(BaseModel, table=True):
    """
    Medical Report - Uploaded lab/radiology/etc. document

    Domain Rules:
    - file_url/delete_url come from the storage host
    - Visibility follows role rules (see can_user_access_report)
    """

    __tablename__ = "medical_reports"
    __table_args__ = (
        Index('ix_medical_reports_patient_id', 'patient_id'),
        Index('ix_medical_reports_created_at', 'created_at'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    report_id: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Display code (e.g., RPT-1704067200000-K3J9QZ)"
    )

    title: str = Field(sa_column=Column(String(255), nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    report_type: ReportType = Field(default=ReportType.OTHER)

    patient_id: str = Field(description="Patient reference")
    patient_name: str = Field(description="Patient display name")
    doctor_id: Optional[str] = Field(default=None)
    doctor_name: Optional[str] = Field(default=None)
    uploaded_by: str = Field(description="User who uploaded the report")

    report_date: date = Field(sa_column=Column(Date, nullable=False))

    file_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    delete_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    file_name: Optional[str] = Field(default=None)
    file_type: Optional[str] = Field(default=None)
    file_size: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))

    status: ReportStatus = Field(default=ReportStatus.UPLOADED)
    priority: ReportPriority = Field(default=ReportPriority.NORMAL)

    tags: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )

    findings: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
