"""File Storage Service Interface

Report attachments are kept by an external image/object host. The service
only ever sees the bytes on upload and the returned URLs afterwards.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class StorageError(Exception):
    """Raised when the storage backend rejects or fails a request"""


@dataclass(frozen=True)
class StoredFile:
    url: str
    delete_url: Optional[str] = None


class StorageService(ABC):

    @abstractmethod
    async def upload(self, content: bytes, file_name: str) -> StoredFile:
        """
        Upload a file

        Args:
            content: Raw file bytes
            file_name: Original file name

        Returns:
            StoredFile with the public URL and, when supported, a delete URL

        Raises:
            StorageError: If the backend rejects the upload
        """
        pass

    @abstractmethod
    async def delete(self, url: str, delete_url: Optional[str] = None) -> bool:
        """
        Delete a previously uploaded file

        Returns:
            True if the backend confirmed deletion, False otherwise
        """
        pass
