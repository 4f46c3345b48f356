"""ImgBB-compatible Storage Service

Uploads report attachments to an image host over HTTP.

Upload:  POST {api_url}?key={api_key}  form fields ``image`` (base64), ``name``
Result:  {"success": true, "data": {"url": ..., "delete_url": ...}}
"""

import base64
import logging
from typing import Optional
import httpx
from src.app.services.storage_service import StorageService, StorageError, StoredFile

logger = logging.getLogger(__name__)


class ImgBBStorageService(StorageService):
    """
    Storage service backed by the ImgBB upload API

    Files without a delete URL cannot be removed remotely; deletion then
    only drops our reference to them.
    """

    def __init__(self, api_url: str, api_key: str, timeout: float = 30.0):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    async def upload(self, content: bytes, file_name: str) -> StoredFile:
        if not self.api_key:
            raise StorageError("Storage API key is not configured")

        form = {
            "image": base64.b64encode(content).decode("ascii"),
            "name": file_name,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    params={"key": self.api_key},
                    data=form,
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Upload of {file_name} failed: {e}")
            raise StorageError(f"Failed to upload {file_name}") from e

        if not body.get("success"):
            raise StorageError(f"Storage backend rejected {file_name}")

        data = body.get("data") or {}
        logger.info(f"Uploaded {file_name} to {data.get('url')}")
        return StoredFile(url=data["url"], delete_url=data.get("delete_url"))

    async def delete(self, url: str, delete_url: Optional[str] = None) -> bool:
        if not delete_url:
            logger.info(f"No delete URL for {url}; file marked for deletion only")
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.delete(delete_url)
                response.raise_for_status()
                return True
        except httpx.HTTPError as e:
            logger.warning(f"Remote deletion of {url} failed: {e}")
            return False
