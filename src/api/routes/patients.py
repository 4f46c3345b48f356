"""Patient API Routes"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.patients import (
    AddPatient,
    AddPatientCommandDTO,
    DeletePatient,
    DeletePatientResponseDTO,
    GetPatient,
    GetPatientSummary,
    ListPatients,
    ListPatientsResponseDTO,
    PatientResponseDTO,
    UpdatePatient,
    UpdatePatientCommandDTO,
)
from src.app.views import PatientFilters, PatientSummary
from src.adapter.repositories.patient_repository import SqlAlchemyPatientRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import STAFF_ROLES, get_current_actor, get_session, require_roles
from src.domain.roles import Actor, UserRole
from src.api.error import raise_for_error

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post(
    "",
    response_model=PatientResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PATIENT_EMAIL_EXISTS",
                            "message": "A patient with email jane.doe@example.com already exists"
                        }
                    }
                }
            }
        }
    }
)
async def add_patient(
    request: AddPatientCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Register a patient.

    The patient code (PAT + year + 4 digits) is generated and the age is
    derived from the date of birth.

    **Returns:**
    - 201: Patient registered
    - 400: Invalid request parameters
    - 409: Email already registered
    """
    use_case = AddPatient(SqlAlchemyUnitOfWork(session), SqlAlchemyPatientRepository(session))
    result = await use_case.execute(request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListPatientsResponseDTO)
async def list_patients(
    filters: Annotated[PatientFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """
    List patients, newest first.

    **Query parameters:** `search` (name, patient code, email), `gender`,
    `blood_group`, `status`, `min_age`, `max_age`, `limit`, `offset`.
    Any filter set to `all` or left empty matches every patient.
    """
    result = await ListPatients(SqlAlchemyPatientRepository(session)).execute(filters, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=PatientSummary)
async def get_patient_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    result = await GetPatientSummary(SqlAlchemyPatientRepository(session)).execute()
    return result.value


@router.get("/{patient_id}", response_model=PatientResponseDTO)
async def get_patient(
    patient_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    result = await GetPatient(SqlAlchemyPatientRepository(session)).execute(patient_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{patient_id}", response_model=PatientResponseDTO)
async def update_patient(
    patient_id: str,
    request: UpdatePatientCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """
    Update patient details. Age is recomputed when the date of birth changes.
    """
    use_case = UpdatePatient(SqlAlchemyUnitOfWork(session), SqlAlchemyPatientRepository(session))
    result = await use_case.execute(patient_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{patient_id}", response_model=DeletePatientResponseDTO)
async def delete_patient(
    patient_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN, UserRole.RECEPTIONIST)),
):
    use_case = DeletePatient(SqlAlchemyUnitOfWork(session), SqlAlchemyPatientRepository(session))
    result = await use_case.execute(patient_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
