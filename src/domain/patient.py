"""Patient Domain Entity"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, String, Text
from src.domain.base import BaseModel, generate_uuid


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class PatientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Patient(BaseModel, table=True):
    """
    Patient - Registered patient record

    Domain Rules:
    - patient_id is a unique display code (PAT + year + 4 digits)
    - age is derived from date_of_birth on create/update
    """

    __tablename__ = "patients"
    __table_args__ = (
        Index('ix_patients_created_at', 'created_at'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    patient_id: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Display code (e.g., PAT20240042)"
    )

    first_name: str = Field(sa_column=Column(String(100), nullable=False))
    last_name: str = Field(sa_column=Column(String(100), nullable=False))
    email: str = Field(default="", sa_column=Column(String(255), nullable=False, default=""))
    phone: str = Field(default="", sa_column=Column(String(30), nullable=False, default=""))

    date_of_birth: date = Field(sa_column=Column(Date, nullable=False))
    age: int = Field(default=0, description="Age in whole years, derived from date_of_birth")
    gender: Gender = Field(description="male, female or other")
    blood_group: Optional[str] = Field(default=None, description="e.g., A+, O-")

    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    emergency_contact_name: Optional[str] = Field(default=None)
    emergency_contact_phone: Optional[str] = Field(default=None)
    allergies: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    status: PatientStatus = Field(default=PatientStatus.ACTIVE)

    created_by: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
