"""Medical Report Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.medical_report import MedicalReport


class MedicalReportRepository(ABC):
    """
    Repository interface for MedicalReport persistence

    Only report metadata lives here; attachments are kept by the storage
    service and referenced through file_url/delete_url.
    """

    @abstractmethod
    async def create(self, report: MedicalReport) -> MedicalReport:
        pass

    @abstractmethod
    async def get_by_id(self, report_id: str) -> Optional[MedicalReport]:
        pass

    @abstractmethod
    async def list_all(self, patient_id: Optional[str] = None) -> List[MedicalReport]:
        """
        Retrieve reports, newest first

        Args:
            patient_id: Optional patient scope

        Returns:
            List of reports
        """
        pass

    @abstractmethod
    async def update(self, report: MedicalReport) -> MedicalReport:
        pass

    @abstractmethod
    async def delete(self, report: MedicalReport) -> None:
        pass
