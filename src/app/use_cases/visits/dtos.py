"""Data Transfer Objects for Visit Use Cases"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.calculations import validate_vitals
from src.domain.visit import VisitStatus, VisitType

UPDATABLE_STATUSES = (VisitStatus.ACTIVE, VisitStatus.COMPLETED, VisitStatus.CANCELLED)


def _check_vitals(v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if v:
        errors = validate_vitals(v)
        if errors:
            raise ValueError("; ".join(errors.values()))
    return v


class CreateVisitCommandDTO(BaseModel):
    """
    Command DTO for opening a visit

    IPD visits are admitted at admission_date (defaults to visit_date).
    """

    patient_id: str = Field(..., min_length=1)
    patient_name: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)
    doctor_name: str = Field(..., min_length=1)
    visit_type: VisitType
    visit_date: Optional[datetime] = None
    chief_complaint: Optional[str] = None
    diagnosis: str = ""
    treatment_plan: Optional[str] = None
    notes: Optional[str] = None
    bed_number: Optional[str] = None
    ward: Optional[str] = None
    admission_date: Optional[datetime] = None
    vitals: Dict[str, Any] = Field(
        default_factory=dict,
        description="bloodPressure, temperature (F), heartRate, respiratoryRate, oxygenSaturation, weight, height"
    )

    @field_validator("vitals")
    @classmethod
    def validate_vitals_ranges(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        return _check_vitals(v)

    class Config:
        json_schema_extra = {
            "example": {
                "patient_id": "PAT20240042",
                "patient_name": "Jane Doe",
                "doctor_id": "DOC001",
                "doctor_name": "Dr. Smith",
                "visit_type": "ipd",
                "chief_complaint": "Chest pain",
                "ward": "Cardiology",
                "bed_number": "C-12",
                "vitals": {"bloodPressure": "130/85", "temperature": 98.6, "heartRate": 88},
            }
        }


class UpdateVisitCommandDTO(BaseModel):
    """Fields left as None are unchanged. Discharge goes through DischargeVisit."""

    doctor_id: Optional[str] = None
    doctor_name: Optional[str] = None
    chief_complaint: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    notes: Optional[str] = None
    bed_number: Optional[str] = None
    ward: Optional[str] = None
    status: Optional[VisitStatus] = None
    vitals: Optional[Dict[str, Any]] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: Optional[VisitStatus]) -> Optional[VisitStatus]:
        if v is not None and v not in UPDATABLE_STATUSES:
            raise ValueError("Use the discharge operation to discharge a patient")
        return v

    @field_validator("vitals")
    @classmethod
    def validate_vitals_ranges(cls, v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        return _check_vitals(v)


class DischargeVisitCommandDTO(BaseModel):
    """Discharge summary for an inpatient"""

    discharge_date: Optional[datetime] = None
    final_diagnosis: str = Field(..., min_length=1)
    treatment_given: str = ""
    medicines_at_discharge: List[str] = Field(default_factory=list)
    follow_up_instructions: str = ""
    final_notes: str = ""


class VisitResponseDTO(BaseModel):
    """
    Response DTO for a visit

    ``length_of_stay`` is derived for inpatient visits (to discharge, or to
    now while still admitted) and None for outpatient visits.
    """

    id: str
    visit_id: str
    patient_id: str
    patient_name: str
    doctor_id: str
    doctor_name: str
    visit_type: str
    status: str
    visit_date: datetime
    chief_complaint: Optional[str] = None
    diagnosis: str
    treatment_plan: Optional[str] = None
    notes: Optional[str] = None
    bed_number: Optional[str] = None
    ward: Optional[str] = None
    admission_date: Optional[datetime] = None
    discharge_date: Optional[datetime] = None
    length_of_stay: Optional[int] = None
    vitals: Dict[str, Any] = Field(default_factory=dict)
    discharge_summary: Dict[str, Any] = Field(default_factory=dict)
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListVisitsResponseDTO(BaseModel):
    visits: List[VisitResponseDTO]
    total: int
    limit: int
    offset: int


class DeleteVisitResponseDTO(BaseModel):
    id: str
    visit_id: str
    deleted: bool = True


__all__ = [
    "CreateVisitCommandDTO",
    "UpdateVisitCommandDTO",
    "DischargeVisitCommandDTO",
    "VisitResponseDTO",
    "ListVisitsResponseDTO",
    "DeleteVisitResponseDTO",
]
