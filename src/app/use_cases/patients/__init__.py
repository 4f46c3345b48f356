"""Patient domain use cases"""
from .add_patient import AddPatient
from .update_patient import UpdatePatient
from .delete_patient import DeletePatient
from .get_patient import GetPatient
from .list_patients import ListPatients, GetPatientSummary
from .dtos import (
    AddPatientCommandDTO,
    UpdatePatientCommandDTO,
    PatientResponseDTO,
    ListPatientsResponseDTO,
    DeletePatientResponseDTO,
)

__all__ = [
    "AddPatient",
    "UpdatePatient",
    "DeletePatient",
    "GetPatient",
    "ListPatients",
    "GetPatientSummary",
    "AddPatientCommandDTO",
    "UpdatePatientCommandDTO",
    "PatientResponseDTO",
    "ListPatientsResponseDTO",
    "DeletePatientResponseDTO",
]
