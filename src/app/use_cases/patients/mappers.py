"""Entity -> DTO conversion for patient responses"""

from src.domain.patient import Patient
from .dtos import PatientResponseDTO


def _value(item):
    return item.value if hasattr(item, "value") else item


def to_patient_dto(patient: Patient) -> PatientResponseDTO:
    return PatientResponseDTO(
        id=patient.id,
        patient_id=patient.patient_id,
        first_name=patient.first_name,
        last_name=patient.last_name,
        full_name=patient.full_name,
        email=patient.email,
        phone=patient.phone,
        date_of_birth=patient.date_of_birth,
        age=patient.age,
        gender=_value(patient.gender),
        blood_group=patient.blood_group,
        address=patient.address,
        emergency_contact_name=patient.emergency_contact_name,
        emergency_contact_phone=patient.emergency_contact_phone,
        allergies=patient.allergies,
        status=_value(patient.status),
        created_by=patient.created_by,
        created_at=patient.created_at,
        updated_at=patient.updated_at,
    )
