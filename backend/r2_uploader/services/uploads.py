from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from r2_uploader.services.storage import DEFAULT_CONTENT_TYPE, StorageService

logger = logging.getLogger(__name__)


class RelayUploadError(Exception):
    """Raised when the object store rejects a relayed PUT."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Upload to R2 failed with status: {status_code}")
        self.status_code = status_code


@dataclass(frozen=True)
class IssuedUpload:
    presigned_url: str
    public_url: str
    filename: str


@dataclass(frozen=True)
class IssuedDownload:
    presigned_url: str
    filename: str


@dataclass(frozen=True)
class RelayedUpload:
    public_url: str
    filename: str
    size: int
    content_type: str


class UploadService:
    """Presigned URL issuance and the server-side relay upload."""

    def __init__(self, storage: StorageService, http_client: httpx.AsyncClient) -> None:
        self.storage = storage
        self.http_client = http_client

    def issue_upload_url(self, filename: str, content_type: str | None = None) -> IssuedUpload:
        presigned_url = self.storage.create_presigned_put(
            filename, content_type or DEFAULT_CONTENT_TYPE
        )
        return IssuedUpload(
            presigned_url=presigned_url,
            public_url=self.storage.public_url(filename),
            filename=filename,
        )

    def issue_download_url(self, filename: str) -> IssuedDownload:
        # No existence check; a missing object only 404s when the URL is used.
        presigned_url = self.storage.create_presigned_get(filename)
        return IssuedDownload(presigned_url=presigned_url, filename=filename)

    async def relay_upload(
        self,
        filename: str,
        data: bytes,
        content_type: str | None = None,
    ) -> RelayedUpload:
        content_type = content_type or DEFAULT_CONTENT_TYPE
        presigned_url = self.storage.create_presigned_put(filename, content_type)

        response = await self.http_client.put(
            presigned_url,
            content=data,
            headers={"Content-Type": content_type},
        )
        if not response.is_success:
            raise RelayUploadError(response.status_code)

        logger.info("Relayed %s (%d bytes) to object storage", filename, len(data))
        return RelayedUpload(
            public_url=self.storage.public_url(filename),
            filename=filename,
            size=len(data),
            content_type=content_type,
        )
