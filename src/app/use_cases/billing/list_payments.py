"""ListPayments Use Case"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.payment_repository import PaymentRepository
from src.app.views import PaymentFilters, filter_payments, paginate
from src.domain.roles import Actor
from .dtos import ListPaymentsResponseDTO
from .mappers import to_payment_dto


class ListPayments:
    """
    Use case: List payments, newest first

    Patients only see payments made against their own invoices.
    """

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    async def execute(
        self,
        filters: Optional[PaymentFilters] = None,
        actor: Optional[Actor] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListPaymentsResponseDTO]:
        payments = await self.payment_repo.list_all()

        if actor and actor.is_patient:
            payments = [p for p in payments if p.patient_id == actor.user_id]

        matching = filter_payments(payments, filters)
        page, total = paginate(matching, limit, offset)

        return Return.ok(
            ListPaymentsResponseDTO(
                payments=[to_payment_dto(p) for p in page],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
