"""Stock Movement Repository Interfaces

Append-only records of medicine leaving (dispense) and entering (restock)
inventory.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.stock_movement import Dispense, Restock


class DispenseRepository(ABC):

    @abstractmethod
    async def create(self, dispense: Dispense) -> Dispense:
        pass

    @abstractmethod
    async def list_all(self, medicine_id: Optional[str] = None) -> List[Dispense]:
        """
        Retrieve dispense records, newest first

        Args:
            medicine_id: Optional medicine scope

        Returns:
            List of dispense records
        """
        pass


class RestockRepository(ABC):

    @abstractmethod
    async def create(self, restock: Restock) -> Restock:
        pass

    @abstractmethod
    async def list_all(self, medicine_id: Optional[str] = None) -> List[Restock]:
        pass
