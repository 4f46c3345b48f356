"""Medicine Repository Interface

Defines the contract for medicine (inventory) persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.medicine import Medicine


class MedicineRepository(ABC):
    """
    Repository interface for Medicine persistence

    The stored ``status`` column is a snapshot; readers recompute the stock
    status from quantity, threshold and expiry date.
    """

    @abstractmethod
    async def create(self, medicine: Medicine) -> Medicine:
        """
        Add a medicine to inventory

        Args:
            medicine: Medicine entity to persist

        Returns:
            Created Medicine
        """
        pass

    @abstractmethod
    async def get_by_id(self, medicine_id: str) -> Optional[Medicine]:
        """
        Retrieve medicine by primary key

        Args:
            medicine_id: Medicine row ID (UUID)

        Returns:
            Medicine if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Medicine]:
        """All medicines, newest first"""
        pass

    @abstractmethod
    async def update(self, medicine: Medicine) -> Medicine:
        pass

    @abstractmethod
    async def delete(self, medicine: Medicine) -> None:
        pass
