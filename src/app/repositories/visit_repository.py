"""Visit Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.visit import Visit


class VisitRepository(ABC):
    """
    Repository interface for OPD/IPD visits

    Collections are returned newest first (created_at descending).
    """

    @abstractmethod
    async def create(self, visit: Visit) -> Visit:
        pass

    @abstractmethod
    async def get_by_id(self, visit_id: str) -> Optional[Visit]:
        pass

    @abstractmethod
    async def list_all(
        self,
        patient_id: Optional[str] = None,
        doctor_id: Optional[str] = None,
    ) -> List[Visit]:
        """
        Retrieve visits, optionally scoped to a patient and/or doctor

        Args:
            patient_id: Optional patient scope
            doctor_id: Optional doctor scope

        Returns:
            List of visits
        """
        pass

    @abstractmethod
    async def update(self, visit: Visit) -> Visit:
        pass

    @abstractmethod
    async def delete(self, visit: Visit) -> None:
        pass
