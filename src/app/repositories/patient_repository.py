"""Patient Repository Interface

Defines the contract for patient persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.patient import Patient


class PatientRepository(ABC):
    """
    Repository interface for Patient persistence

    Collections are returned newest first (created_at descending).
    """

    @abstractmethod
    async def create(self, patient: Patient) -> Patient:
        """
        Register a new patient

        Args:
            patient: Patient entity to persist

        Returns:
            Created Patient
        """
        pass

    @abstractmethod
    async def get_by_id(self, patient_id: str) -> Optional[Patient]:
        """
        Retrieve patient by primary key

        Args:
            patient_id: Patient row ID (UUID)

        Returns:
            Patient if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Patient]:
        """Retrieve patient by email (used for duplicate detection)"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Patient]:
        pass

    @abstractmethod
    async def update(self, patient: Patient) -> Patient:
        pass

    @abstractmethod
    async def delete(self, patient: Patient) -> None:
        pass
