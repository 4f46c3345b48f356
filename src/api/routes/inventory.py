"""Pharmacy Inventory API Routes

Medicines, stock levels, restocking and dispensing.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.inventory import (
    AddMedicine,
    AddMedicineCommandDTO,
    DeleteMedicine,
    DeleteMedicineResponseDTO,
    DispenseCommandDTO,
    DispenseMedicine,
    DispenseMedicineResponseDTO,
    GetInventorySummary,
    GetMedicine,
    ListMedicines,
    ListMedicinesResponseDTO,
    ListStockMovements,
    MedicineResponseDTO,
    RestockCommandDTO,
    RestockMedicine,
    RestockMedicineResponseDTO,
    StockMovementsResponseDTO,
    UpdateMedicine,
    UpdateMedicineCommandDTO,
)
from src.app.views import InventorySummary, MedicineFilters
from src.adapter.repositories.medicine_repository import SqlAlchemyMedicineRepository
from src.adapter.repositories.stock_movement_repository import (
    SqlAlchemyDispenseRepository,
    SqlAlchemyRestockRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import STAFF_ROLES, get_config, get_session, require_roles
from src.domain.roles import Actor, UserRole
from src.api.error import raise_for_error

router = APIRouter(prefix="/inventory/medicines", tags=["Inventory"])

PHARMACY_ROLES = (UserRole.ADMIN, UserRole.DOCTOR, UserRole.NURSE)


@router.post("", response_model=MedicineResponseDTO, status_code=status.HTTP_201_CREATED)
async def add_medicine(
    request: AddMedicineCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*PHARMACY_ROLES)),
):
    """
    Add a medicine to the inventory.

    Stock status (available, low_stock, out_of_stock, expiring_soon, expired)
    is derived from quantity, minimum threshold and expiry date.

    **Returns:**
    - 201: Medicine added
    - 400: Invalid request parameters
    """
    use_case = AddMedicine(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicineRepository(session),
        expiring_soon_days=config.EXPIRING_SOON_DAYS,
    )
    result = await use_case.execute(request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", response_model=ListMedicinesResponseDTO)
async def list_medicines(
    filters: Annotated[MedicineFilters, Query()],
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """
    List medicines, newest first.

    `status` filters on the derived stock status, so `expired` also matches
    medicines whose stored status has not been refreshed yet.
    """
    use_case = ListMedicines(SqlAlchemyMedicineRepository(session), expiring_soon_days=config.EXPIRING_SOON_DAYS)
    result = await use_case.execute(filters, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=InventorySummary)
async def get_inventory_summary(
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    use_case = GetInventorySummary(SqlAlchemyMedicineRepository(session), expiring_soon_days=config.EXPIRING_SOON_DAYS)
    result = await use_case.execute()
    return result.value


@router.get("/{medicine_id}", response_model=MedicineResponseDTO)
async def get_medicine(
    medicine_id: str,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    use_case = GetMedicine(SqlAlchemyMedicineRepository(session), expiring_soon_days=config.EXPIRING_SOON_DAYS)
    result = await use_case.execute(medicine_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/{medicine_id}", response_model=MedicineResponseDTO)
async def update_medicine(
    medicine_id: str,
    request: UpdateMedicineCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*PHARMACY_ROLES)),
):
    use_case = UpdateMedicine(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicineRepository(session),
        expiring_soon_days=config.EXPIRING_SOON_DAYS,
    )
    result = await use_case.execute(medicine_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{medicine_id}", response_model=DeleteMedicineResponseDTO)
async def delete_medicine(
    medicine_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN)),
):
    use_case = DeleteMedicine(SqlAlchemyUnitOfWork(session), SqlAlchemyMedicineRepository(session))
    result = await use_case.execute(medicine_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{medicine_id}/restock",
    response_model=RestockMedicineResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def restock_medicine(
    medicine_id: str,
    request: RestockCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*PHARMACY_ROLES)),
):
    """
    Receive a new batch of a medicine.

    Quantity is increased and the batch, unit price and expiry date are taken
    from the delivery. The restock record and the stock update are committed
    together.

    **Returns:**
    - 201: Stock updated, restock record included
    - 404: Medicine not found
    """
    use_case = RestockMedicine(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicineRepository(session),
        SqlAlchemyRestockRepository(session),
        expiring_soon_days=config.EXPIRING_SOON_DAYS,
    )
    result = await use_case.execute(medicine_id, request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{medicine_id}/dispense",
    response_model=DispenseMedicineResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Dispense rejected",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_STOCK",
                            "message": "Insufficient stock for Paracetamol 500mg: requested 10, available 5"
                        }
                    }
                }
            }
        }
    }
)
async def dispense_medicine(
    medicine_id: str,
    request: DispenseCommandDTO,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
    actor: Actor = Depends(require_roles(*PHARMACY_ROLES)),
):
    """
    Dispense a medicine to a patient.

    Expired medicines cannot be dispensed and the quantity may not exceed
    stock. The dispense record and the stock decrement are committed together.

    **Returns:**
    - 201: Medicine dispensed
    - 400: Medicine expired or insufficient stock
    - 404: Medicine not found
    """
    use_case = DispenseMedicine(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMedicineRepository(session),
        SqlAlchemyDispenseRepository(session),
        expiring_soon_days=config.EXPIRING_SOON_DAYS,
    )
    result = await use_case.execute(medicine_id, request, actor=actor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{medicine_id}/movements", response_model=StockMovementsResponseDTO)
async def list_stock_movements(
    medicine_id: str,
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
):
    """Dispense and restock history of one medicine, newest first."""
    use_case = ListStockMovements(
        SqlAlchemyMedicineRepository(session),
        SqlAlchemyDispenseRepository(session),
        SqlAlchemyRestockRepository(session),
    )
    result = await use_case.execute(medicine_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
