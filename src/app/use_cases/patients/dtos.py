"""Data Transfer Objects for Patient Use Cases"""

import re
from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.patient import Gender, PatientStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _normalize_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if v and not re.match(EMAIL_PATTERN, v):
        raise ValueError("Invalid email address")
    return v.lower()


def _not_in_future(v: Optional[date]) -> Optional[date]:
    if v is not None and v > date.today():
        raise ValueError("Date of birth cannot be in the future")
    return v


class AddPatientCommandDTO(BaseModel):
    """
    Command DTO for registering a patient

    Used as input to AddPatient use case.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(default="", description="Contact email (optional)")
    phone: str = Field(default="", max_length=30)
    date_of_birth: date
    gender: Gender
    blood_group: Optional[str] = Field(default=None, max_length=5)
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    allergies: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date) -> date:
        return _not_in_future(v)

    class Config:
        json_schema_extra = {
            "example": {
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "jane.doe@example.com",
                "phone": "+1-555-0100",
                "date_of_birth": "1985-04-12",
                "gender": "female",
                "blood_group": "O+",
            }
        }


class UpdatePatientCommandDTO(BaseModel):
    """Fields left as None are unchanged"""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    blood_group: Optional[str] = Field(default=None, max_length=5)
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    allergies: Optional[str] = None
    status: Optional[PatientStatus] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: Optional[date]) -> Optional[date]:
        return _not_in_future(v)


class PatientResponseDTO(BaseModel):
    id: str
    patient_id: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    date_of_birth: date
    age: int
    gender: str
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    allergies: Optional[str] = None
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListPatientsResponseDTO(BaseModel):
    patients: List[PatientResponseDTO]
    total: int
    limit: int
    offset: int


class DeletePatientResponseDTO(BaseModel):
    id: str
    patient_id: str
    deleted: bool = True


__all__ = [
    "AddPatientCommandDTO",
    "UpdatePatientCommandDTO",
    "PatientResponseDTO",
    "ListPatientsResponseDTO",
    "DeletePatientResponseDTO",
]
