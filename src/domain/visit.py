"""Visit Domain Entity

Outpatient (OPD) and inpatient (IPD) encounters.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, String, Text
from src.domain.base import BaseModel, generate_uuid


class VisitType(str, Enum):
    """Visit types"""
    OPD = "opd"  # Outpatient
    IPD = "ipd"  # Inpatient


class VisitStatus(str, Enum):
    """Visit lifecycle status"""
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCHARGED = "discharged"
    CANCELLED = "cancelled"


class Visit(BaseModel, table=True):
    """
    Visit - A patient encounter with a doctor

    Domain Rules:
    - IPD visits carry admission_date and a bed; discharge sets discharge_date
    - Status transitions: active -> completed | discharged | cancelled
    """

    __tablename__ = "visits"
    __table_args__ = (
        Index('ix_visits_patient_id', 'patient_id'),
        Index('ix_visits_doctor_id', 'doctor_id'),
        Index('ix_visits_created_at', 'created_at'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    visit_id: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Display code (e.g., VIS-LQ2X7K-8H3D9A)"
    )

    patient_id: str = Field(description="Patient reference")
    patient_name: str = Field(description="Patient display name")
    doctor_id: str = Field(description="Doctor reference")
    doctor_name: str = Field(description="Doctor display name")

    visit_type: VisitType = Field(description="opd or ipd")
    status: VisitStatus = Field(default=VisitStatus.ACTIVE)
    visit_date: datetime = Field(default_factory=datetime.utcnow)

    chief_complaint: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    diagnosis: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    treatment_plan: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    bed_number: Optional[str] = Field(default=None)
    ward: Optional[str] = Field(default=None)
    admission_date: Optional[datetime] = Field(default=None)
    discharge_date: Optional[datetime] = Field(default=None)

    vitals: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False, default=dict),
        description="Latest vitals (bloodPressure, temperature, heartRate, ...)"
    )

    discharge_summary: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False, default=dict),
        description="Final diagnosis, treatment, medicines and follow-up recorded at discharge"
    )

    created_by: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
