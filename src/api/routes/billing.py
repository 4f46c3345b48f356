"""Payment API Routes"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing import GetPaymentSummary, ListPayments, ListPaymentsResponseDTO
from src.app.views import PaymentFilters, PaymentSummary
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.depends import get_current_actor, get_session, require_roles
from src.domain.roles import Actor, UserRole

router = APIRouter(prefix="/billing/payments", tags=["Payments"])


@router.get("", response_model=ListPaymentsResponseDTO)
async def list_payments(
    filters: Annotated[PaymentFilters, Query()],
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(get_current_actor),
):
    """
    List payments, newest first.

    **Query parameters:** `invoice_id`, `patient_id`, `payment_method`,
    `start_date`, `end_date`, `limit`, `offset`. Patients only see their own payments.
    """
    result = await ListPayments(SqlAlchemyPaymentRepository(session)).execute(filters, actor, filters.limit, filters.offset)
    return result.value


@router.get("/summary", response_model=PaymentSummary)
async def get_payment_summary(
    session: AsyncSession = Depends(get_session),
    actor: Actor = Depends(require_roles(UserRole.ADMIN, UserRole.RECEPTIONIST)),
):
    """
    Payment counts by method plus today's and this month's collections.
    """
    result = await GetPaymentSummary(SqlAlchemyPaymentRepository(session)).execute()
    return result.value
