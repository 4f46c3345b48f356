"""Visit API Routes

OPD/IPD encounters, vitals and discharge.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.visits import (
    CreateVisit,
    CreateVisitCommandDTO,
    DeleteVisit,
    DeleteVisitResponseDTO,
    DischargeVisit,
    DischargeVisitCommandDTO,
    GetVisit,
    GetVisitSummary,
    ListVisits,
    ListVisitsResponseDTO,
    UpdateVisit,
    UpdateVisitCommandDTO,
    VisitResponseDTO,
)
from src.app.views import VisitFilters, VisitSummary
from src.adapter.repositories.visit_repository import SqlAlchemyVisitRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import STAFF_ROLES, get_current_actor, get_session, require_roles
from src.domain.roles import Actor, UserRole
from src.api.error import raise_for_error

router = APIRouter(prefix="/visits", tags=["Visits"])

CLINICAL_ROLES = (UserRole.ADMIN, UserRole.DOCTOR, UserRole.NURSE, UserRole.RECEPTIONIST)


@router.post("", response_model=VisitResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_visit(
    request: CreateVisitCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*CLINICAL_ROLES)),
):
    """
    Open an OPD or IPD visit.

    Vitals are range-checked (temperature 90-110 F, heart rate 30-200 bpm,
    respiratory rate 8-40, SpO2 70-100%).

    **Returns:**
    - 201: Visit created
    - 400: Invalid request parameters or vitals out of range
    """
    use_case = CreateVisit(SqlAlchemyUnitOfWork(session), SqlAlchemyVisitRepository(session))
    result = await use_case.execute(request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListVisitsResponseDTO)
async def list_visits(
    filters: Annotated[VisitFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """List visits, newest first. Patients only see their own visits."""
    result = await ListVisits(SqlAlchemyVisitRepository(session)).execute(filters, actor, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=VisitSummary)
async def get_visit_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    result = await GetVisitSummary(SqlAlchemyVisitRepository(session)).execute()
    return result.value


@router.get("/{visit_id}", response_model=VisitResponseDTO)
async def get_visit(
    visit_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    result = await GetVisit(SqlAlchemyVisitRepository(session)).execute(visit_id, actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{visit_id}", response_model=VisitResponseDTO)
async def update_visit(
    visit_id: str,
    request: UpdateVisitCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*CLINICAL_ROLES)),
):
    use_case = UpdateVisit(SqlAlchemyUnitOfWork(session), SqlAlchemyVisitRepository(session))
    result = await use_case.execute(visit_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/{visit_id}/discharge", response_model=VisitResponseDTO)
async def discharge_visit(
    visit_id: str,
    request: DischargeVisitCommandDTO,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN, UserRole.DOCTOR)),
):
    """
    Discharge an inpatient with a discharge summary.

    **Returns:**
    - 200: Visit discharged, length of stay recorded
    - 400: Visit is not an active IPD visit, or discharge precedes admission
    - 404: Visit not found
    """
    use_case = DischargeVisit(SqlAlchemyUnitOfWork(session), SqlAlchemyVisitRepository(session))
    result = await use_case.execute(visit_id, request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{visit_id}", response_model=DeleteVisitResponseDTO)
async def delete_visit(
    visit_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN)),
):
    use_case = DeleteVisit(SqlAlchemyUnitOfWork(session), SqlAlchemyVisitRepository(session))
    result = await use_case.execute(visit_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
