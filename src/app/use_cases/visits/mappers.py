"""Entity -> DTO conversion for visit responses"""

from datetime import datetime
from typing import Optional

from src.domain.calculations import calculate_length_of_stay
from src.domain.visit import Visit
from .dtos import VisitResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_visit_dto(visit: Visit, now: Optional[datetime] = None) -> VisitResponseDTO:
    length_of_stay = None
    if visit.admission_date is not None:
        length_of_stay = calculate_length_of_stay(visit.admission_date, visit.discharge_date, now)

    return VisitResponseDTO(
        id=visit.id,
        visit_id=visit.visit_id,
        patient_id=visit.patient_id,
        patient_name=visit.patient_name,
        doctor_id=visit.doctor_id,
        doctor_name=visit.doctor_name,
        visit_type=_value(visit.visit_type),
        status=_value(visit.status),
        visit_date=visit.visit_date,
        chief_complaint=visit.chief_complaint,
        diagnosis=visit.diagnosis,
        treatment_plan=visit.treatment_plan,
        notes=visit.notes,
        bed_number=visit.bed_number,
        ward=visit.ward,
        admission_date=visit.admission_date,
        discharge_date=visit.discharge_date,
        length_of_stay=length_of_stay,
        vitals=visit.vitals or {},
        discharge_summary=visit.discharge_summary or {},
        created_by=visit.created_by,
        created_at=visit.created_at,
        updated_at=visit.updated_at,
    )
