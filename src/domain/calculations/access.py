"""Role-based access rules

Identity is established upstream; these checks only see the caller's role
string and user id.
"""

from typing import Any

from src.domain.roles import UserRole
from src.domain.medical_report import ReportType

REPORT_UPLOAD_ROLES = {UserRole.ADMIN.value, UserRole.DOCTOR.value, UserRole.LAB_TECHNICIAN.value}


def _value(item: Any) -> Any:
    return item.value if hasattr(item, "value") else item


def can_user_access_report(role: str, user_id: str, report: Any) -> bool:
    role = _value(role)

    if role == UserRole.ADMIN.value:
        return True
    if role == UserRole.DOCTOR.value:
        return report.uploaded_by == user_id or report.doctor_id == user_id
    if role == UserRole.LAB_TECHNICIAN.value:
        return report.uploaded_by == user_id and _value(report.report_type) == ReportType.LAB.value
    if role == UserRole.PATIENT.value:
        return report.patient_id == user_id
    # TODO: restrict nurses to patients on their assigned ward once ward assignments are stored
    if role == UserRole.NURSE.value:
        return True
    return False


def can_user_upload_report(role: str) -> bool:
    return _value(role) in REPORT_UPLOAD_ROLES


def can_user_delete_report(role: str, user_id: str, report: Any) -> bool:
    if _value(role) == UserRole.ADMIN.value:
        return True
    return report.uploaded_by == user_id


def can_delete_invoice(role: str) -> bool:
    """Invoices are only hard-deleted through the admin override"""
    return _value(role) == UserRole.ADMIN.value
