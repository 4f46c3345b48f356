"""User roles issued by the identity provider"""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    NURSE = "nurse"
    RECEPTIONIST = "receptionist"
    PATIENT = "patient"
    LAB_TECHNICIAN = "lab_technician"


@dataclass(frozen=True)
class Actor:
    """Caller identity as asserted by the upstream identity provider"""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_patient(self) -> bool:
        return self.role == UserRole.PATIENT
