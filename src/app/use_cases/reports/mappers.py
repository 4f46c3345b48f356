"""Entity -> DTO conversion for report responses"""

from src.domain.medical_report import MedicalReport
from .dtos import ReportResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_report_dto(report: MedicalReport) -> ReportResponseDTO:
    return ReportResponseDTO(
        id=report.id,
        report_id=report.report_id,
        title=report.title,
        description=report.description,
        report_type=_value(report.report_type),
        patient_id=report.patient_id,
        patient_name=report.patient_name,
        doctor_id=report.doctor_id,
        doctor_name=report.doctor_name,
        uploaded_by=report.uploaded_by,
        report_date=report.report_date,
        file_url=report.file_url,
        file_name=report.file_name,
        file_type=report.file_type,
        file_size=report.file_size,
        status=_value(report.status),
        priority=_value(report.priority),
        tags=list(report.tags or []),
        findings=report.findings,
        created_at=report.created_at,
        updated_at=report.updated_at,
    )
