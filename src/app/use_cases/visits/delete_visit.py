"""DeleteVisit Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.visit_repository import VisitRepository
from .dtos import DeleteVisitResponseDTO

logger = logging.getLogger(__name__)


class DeleteVisit:
    def __init__(self, uow: UnitOfWork, visit_repo: VisitRepository):
        self.uow = uow
        self.visit_repo = visit_repo

    async def execute(self, visit_id: str) -> Result[DeleteVisitResponseDTO]:
        try:
            visit = await self.visit_repo.get_by_id(visit_id)
            if not visit:
                return Return.err(
                    Error(
                        code="VISIT_NOT_FOUND",
                        message=f"Visit with ID {visit_id} not found",
                    )
                )

            await self.visit_repo.delete(visit)
            await self.uow.commit()

            logger.info(f"Visit {visit.visit_id} deleted")

            return Return.ok(DeleteVisitResponseDTO(id=visit.id, visit_id=visit.visit_id))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_VISIT_FAILED",
                    message="Failed to delete visit",
                    reason=str(e),
                )
            )
